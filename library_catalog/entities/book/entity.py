"""Entity: Book."""

from pydantic import Field

from library_catalog.entities._base import Entity
from library_catalog.entities.author.entity import Author
from library_catalog.entities.category.entity import Category


class Book(Entity):
    """Book in the catalog, filed under one category and written by one or more authors.

    On input ``category`` and ``authors`` may carry identifiers only; the
    book service resolves them against the store before persisting.
    """

    title: str = Field(min_length=2, max_length=150, description="Title")
    description: str = Field(min_length=10, description="Description")
    price: float = Field(gt=0, description="Price")
    category: Category = Field(description="Category the book is filed under")
    authors: list[Author] = Field(min_length=1, description="Authors, in credit order")
