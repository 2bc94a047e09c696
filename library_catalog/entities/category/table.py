"""Category database table model."""

from sqlmodel import Field

from library_catalog.entities._base import EntityTable


class CategoryTable(EntityTable, table=True):
    """Database persistence model for categories."""

    __tablename__ = "lib_category"

    name: str = Field(max_length=25, unique=True, index=True)
