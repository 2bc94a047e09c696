"""Book database table models."""

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from library_catalog.entities._base import EntityTable


class BookTable(EntityTable, table=True):
    """Database persistence model for books."""

    __tablename__ = "lib_book"

    title: str = Field(max_length=150, index=True)
    description: str = Field(sa_column=sa.Column(sa.Text, nullable=False))
    price: float
    category_id: int = Field(foreign_key="lib_category.id", index=True)


class BookAuthorTable(SQLModel, table=True):
    """Link between a book and one of its authors."""

    __tablename__ = "lib_book_author"

    book_id: int = Field(foreign_key="lib_book.id", primary_key=True)
    author_id: int = Field(foreign_key="lib_author.id", primary_key=True)
    position: int = Field(default=0)
