"""Entity package: Book."""

from .entity import Book
from .repository import BookRepository
from .table import BookAuthorTable, BookTable

__all__ = ["Book", "BookAuthorTable", "BookRepository", "BookTable"]
