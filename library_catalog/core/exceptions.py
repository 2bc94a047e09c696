"""Domain errors raised by the catalog services.

Every error carries an explicit :class:`ErrorKind`; the resource layer maps
kinds to HTTP status codes in one place
(:mod:`library_catalog.api.http.resource_message`).
"""

from enum import StrEnum

from pydantic import ValidationError
from pydantic_core import ErrorDetails


class ErrorKind(StrEnum):
    FIELD_NOT_VALID = "field_not_valid"
    ALREADY_EXISTS = "already_exists"
    NOT_FOUND = "not_found"


class LibraryError(Exception):
    """Base class for recoverable catalog errors."""

    kind: ErrorKind


class FieldNotValidError(LibraryError):
    """A required field is missing or violates its constraints."""

    kind = ErrorKind.FIELD_NOT_VALID

    def __init__(self, field_name: str, message: str) -> None:
        super().__init__(f"{field_name}: {message}")
        self.field_name = field_name
        self.message = message

    @classmethod
    def from_validation_error(cls, error: ValidationError) -> "FieldNotValidError":
        """Build from the first error reported by pydantic."""
        return cls.from_error_details(error.errors()[0])

    @classmethod
    def from_error_details(cls, first: ErrorDetails) -> "FieldNotValidError":
        field_name = str(first["loc"][0]) if first["loc"] else "body"
        if first["type"] == "missing" or first.get("input") is None:
            message = "may not be null"
        else:
            message = first["msg"]
        return cls(field_name, message)


class AlreadyExistsError(LibraryError):
    """The natural key of an entity collides with another stored entity."""

    kind = ErrorKind.ALREADY_EXISTS

    def __init__(self, field_name: str) -> None:
        super().__init__(f"an entity with the same {field_name} already exists")
        self.field_name = field_name


class NotFoundError(LibraryError):
    """No entity is stored under the requested identifier."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, entity_name: str, entity_id: int | str | None = None) -> None:
        super().__init__(f"{entity_name} {entity_id} not found")
        self.entity_name = entity_name
        self.entity_id = entity_id
