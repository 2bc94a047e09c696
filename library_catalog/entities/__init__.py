"""Entities module with an entity-centric structure.

Each entity has its own package containing:
- entity.py: Domain model with its field constraints
- table.py: Database persistence model
- repository.py: Data access layer
"""

from .author import Author, AuthorRepository, AuthorTable
from .book import Book, BookAuthorTable, BookRepository, BookTable
from .category import Category, CategoryRepository, CategoryTable
from .user import Role, User, UserRepository, UserTable, UserType

__all__ = [
    "Author",
    "AuthorRepository",
    "AuthorTable",
    "Book",
    "BookAuthorTable",
    "BookRepository",
    "BookTable",
    "Category",
    "CategoryRepository",
    "CategoryTable",
    "Role",
    "User",
    "UserRepository",
    "UserTable",
    "UserType",
]
