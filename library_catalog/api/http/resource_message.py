"""Error envelopes returned by the resources.

Every resource answers a handled domain error with the same two-key body::

    {"errorIdentification": "category.name", "errorDescription": "may not be null"}
"""

from fastapi.responses import JSONResponse

from library_catalog.core.exceptions import (
    AlreadyExistsError,
    ErrorKind,
    FieldNotValidError,
    LibraryError,
)

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.FIELD_NOT_VALID: 400,
    ErrorKind.ALREADY_EXISTS: 400,
    ErrorKind.NOT_FOUND: 404,
}


class ResourceMessage:
    def __init__(self, resource: str) -> None:
        self.resource = resource

    def invalid_field(self, field_name: str, message: str) -> dict[str, str]:
        return {
            "errorIdentification": f"{self.resource}.{field_name}",
            "errorDescription": message,
        }

    def existent(self, field_name: str) -> dict[str, str]:
        return {
            "errorIdentification": f"{self.resource}.existent",
            "errorDescription": f"There is already a {self.resource} for the given {field_name}",
        }

    def not_found(self) -> dict[str, str]:
        return {
            "errorIdentification": f"{self.resource}.notfound",
            "errorDescription": f"{self.resource.capitalize()} not found",
        }

    def body_for(self, error: LibraryError) -> dict[str, str]:
        if isinstance(error, FieldNotValidError):
            return self.invalid_field(error.field_name, error.message)
        if isinstance(error, AlreadyExistsError):
            return self.existent(error.field_name)
        return self.not_found()

    def error_response(self, error: LibraryError) -> JSONResponse:
        """Render a domain error with the status mapped to its kind."""
        return JSONResponse(
            status_code=STATUS_BY_KIND[error.kind], content=self.body_for(error)
        )
