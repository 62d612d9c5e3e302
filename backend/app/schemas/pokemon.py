"""
Pokedex Backend - Pydantic Request/Response Schemas
=====================================================

What:  Pydantic models defining the API contract for Pokemon records.
Why:   Input validation, serialization, and OpenAPI doc generation.
How:   Create/update bodies accept arbitrary extra fields (extra="allow");
       those extras are the record's opaque descriptive payload and are
       stored in the `attributes` document column untouched.

Reserved keys:
    `id` and `version` are owned by the store and may not appear as
    descriptive fields; sending them is a 422.
"""

import uuid
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, model_validator

RESERVED_FIELDS = frozenset({"id", "version"})


def _reject_reserved(extra: Optional[Dict[str, Any]]) -> None:
    reserved = RESERVED_FIELDS.intersection(extra or {})
    if reserved:
        raise ValueError(f"Reserved field(s) cannot be set: {sorted(reserved)}")


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class PokemonCreate(BaseModel):
    """Body of POST /pokemon. `name` is lowercased by the service, not here."""

    name: str = Field(min_length=1, description="Pokemon name (unique, case-insensitive)")
    no: Optional[int] = Field(default=None, ge=1, description="Catalogue number (unique)")

    model_config = {"extra": "allow"}

    @model_validator(mode="after")
    def check_reserved_fields(self) -> "PokemonCreate":
        _reject_reserved(self.model_extra)
        return self

    @property
    def extra_fields(self) -> Dict[str, Any]:
        """The descriptive fields beyond name/no."""
        return dict(self.model_extra or {})


class PokemonUpdate(BaseModel):
    """
    Body of PATCH /pokemon/{term}.

    Every field is optional; only the fields the client actually sent are
    merged onto the record (see `changed_fields`).
    """

    name: Optional[str] = Field(default=None, min_length=1)
    no: Optional[int] = Field(default=None, ge=1)

    model_config = {"extra": "allow"}

    @model_validator(mode="after")
    def check_fields(self) -> "PokemonUpdate":
        _reject_reserved(self.model_extra)
        if "name" in self.model_fields_set and self.name is None:
            raise ValueError("name cannot be null")
        return self

    @property
    def changed_fields(self) -> Dict[str, Any]:
        """name/no as sent by the client, omitting fields that were not sent."""
        return {
            key: getattr(self, key)
            for key in ("name", "no")
            if key in self.model_fields_set
        }

    @property
    def extra_fields(self) -> Dict[str, Any]:
        return dict(self.model_extra or {})


class PaginationParams(BaseModel):
    """
    Validated pagination for GET /pokemon.

    limit: None means "use the configured DEFAULT_LIMIT".
    offset: Number of records to skip, in `no` order.
    """

    limit: Optional[int] = Field(default=None, ge=1, description="Maximum records to return")
    offset: int = Field(default=0, ge=0, description="Records to skip")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class PokemonResponse(BaseModel):
    """
    Public representation of a record: {id, no, name, ...descriptive fields}.

    The internal `version` column never appears here.
    """

    id: uuid.UUID = Field(description="Object id assigned by the store")
    no: Optional[int] = Field(default=None, description="Catalogue number")
    name: str = Field(description="Lowercase name")

    model_config = {"extra": "allow"}

    @classmethod
    def from_record(cls, pokemon: Any) -> "PokemonResponse":
        return cls.model_validate(pokemon.to_document())


class SeedResponse(BaseModel):
    message: str = Field(default="Seed executed")
    inserted: int = Field(description="Number of records inserted")


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "Pokemon with id, name or no \"mew2\" not found",
            "details": null,
            "request_id": "1f0c9a2b"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
