"""Query and pagination models."""

from .filters import (
    AuthorFilter,
    BookFilter,
    GenericFilter,
    OrderMode,
    PaginatedData,
    PaginationData,
    UserFilter,
)

__all__ = [
    "AuthorFilter",
    "BookFilter",
    "GenericFilter",
    "OrderMode",
    "PaginatedData",
    "PaginationData",
    "UserFilter",
]
