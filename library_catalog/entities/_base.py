from datetime import UTC, datetime

import sqlalchemy as sa
from pydantic import BaseModel, ValidationError
from pydantic import Field as PydanticField
from sqlmodel import Field, SQLModel

from library_catalog.core.exceptions import FieldNotValidError


class Entity(BaseModel):
    """Base domain entity with a store-assigned integer identifier."""

    id: int | None = PydanticField(
        default=None, description="Identifier assigned by the store"
    )

    @classmethod
    def from_payload(cls, **values):
        """Build an entity from request data without validating it.

        Validation is the service's job, so that it can report the offending
        field through :class:`FieldNotValidError`.
        """
        return cls.model_construct(**values)

    def validate_fields(self, exclude: set[str] | None = None) -> None:
        """Validate every constrained field, raising FieldNotValidError on the first failure."""
        values = {
            name: value
            for name, value in dict(self).items()
            if not exclude or name not in exclude
        }
        try:
            type(self).model_validate(values)
        except ValidationError as e:
            errors = [
                error for error in e.errors()
                if not exclude or str(error["loc"][0]) not in exclude
            ]
            if errors:
                raise FieldNotValidError.from_error_details(errors[0]) from e


class EntityTable(SQLModel, table=False):
    """Base table with an auto-incremented identifier and audit timestamps."""

    id: int | None = Field(
        default=None,
        primary_key=True,
        description="Identifier assigned by the store",
    )

    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        nullable=False,
        sa_column_kwargs={
            "server_default": sa.func.now(),
            "onupdate": sa.func.now(),
        },
    )
