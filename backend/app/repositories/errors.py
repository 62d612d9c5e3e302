"""
Store failure variants.

A store raises exactly one of these from a failed write, after rolling its
session back. They are internal: services translate them into the
client-facing exceptions in app.exceptions.
"""

from typing import Any


class StoreFailure(Exception):
    """Base class for failures raised by a store."""


class DuplicateConstraint(StoreFailure):
    """A write was rejected by the unique constraint on `field`."""

    def __init__(self, field: str, value: Any):
        self.field = field
        self.value = value
        super().__init__(f"duplicate value for {field}: {value!r}")


class StoreError(StoreFailure):
    """Any other persistence failure. `cause` holds the original exception."""

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"{type(cause).__name__}: {cause}")
