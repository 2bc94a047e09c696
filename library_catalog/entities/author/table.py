"""Author database table model."""

from sqlmodel import Field

from library_catalog.entities._base import EntityTable


class AuthorTable(EntityTable, table=True):
    """Database persistence model for authors."""

    __tablename__ = "lib_author"

    name: str = Field(max_length=40, unique=True, index=True)
