"""
Pokedex Backend - Custom Exception Hierarchy
=============================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Each exception maps to one HTTP status code and a stable error code,
       and never carries internal details in its client-facing message.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services; caught by global handlers.

Exception Hierarchy:
    PokedexError (base)
    ├── ValidationError          → 400 Bad Request
    ├── DuplicateKeyError        → 400 Bad Request (unique name / no)
    ├── InvalidRequestError      → 400 Bad Request (delete matched nothing)
    ├── NotFoundError            → 404 Not Found
    ├── UpstreamServiceError     → 503 Service Unavailable
    └── DatabaseError            → 500 Internal Server Error
"""

import json
from typing import Any, Dict, Optional


class PokedexError(Exception):
    """
    Base exception for all Pokedex application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only where a handler opts in)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PokedexError):
    """
    Raised when client input fails a business-level check.

    When:    A delete request carries a string that is not a valid record id.
    HTTP:    400 Bad Request

    FastAPI still answers schema violations (missing name, negative offset)
    with its own 422; this exception covers checks made in the service layer.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class DuplicateKeyError(PokedexError):
    """
    Raised when a write collides with the unique `name` or `no` constraint.

    HTTP:    400 Bad Request

    Example response:
        {
            "error": "duplicate_key",
            "message": "Pokemon already exists in db {\"name\": \"pikachu\"}",
            "details": {"name": "pikachu"}
        }
    """

    def __init__(
        self,
        field: str,
        value: Any,
        context: Optional[Dict[str, Any]] = None,
    ):
        key_value = {field: value}
        message = f"Pokemon already exists in db {json.dumps(key_value, default=str)}"
        ctx = context or {}
        ctx.update(key_value)
        super().__init__(message=message, context=ctx)
        self.field = field
        self.value = value


class InvalidRequestError(PokedexError):
    """
    Raised when a request is well formed but cannot be applied.

    When:    DELETE /pokemon/{id} removed zero records.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "The request could not be applied",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(PokedexError):
    """
    Raised when no record matches the requested term.

    HTTP:    404 Not Found
    """

    def __init__(
        self,
        message: str = "The requested resource was not found",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class UpstreamServiceError(PokedexError):
    """
    Raised when the PokeAPI catalogue cannot be fetched during a seed.

    HTTP:    503 Service Unavailable
    """

    def __init__(
        self,
        message: str = "The Pokemon catalogue service is temporarily unavailable",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(PokedexError):
    """
    Raised when a store operation fails for a reason other than a duplicate key.

    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always generic.
        The original driver error is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
