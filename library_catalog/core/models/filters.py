"""Filter and pagination models shared by repositories and resources."""

from enum import StrEnum
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class OrderMode(StrEnum):
    ASCENDING = "asc"
    DESCENDING = "desc"


class PaginationData(BaseModel):
    """Slice and ordering of a listing."""

    first_result: int = Field(default=0, ge=0)
    max_results: int = Field(default=10, ge=1)
    order_field: str = Field(default="id")
    order_mode: OrderMode = Field(default=OrderMode.ASCENDING)

    def is_ascending(self) -> bool:
        return self.order_mode == OrderMode.ASCENDING


class GenericFilter(BaseModel):
    pagination: PaginationData = Field(default_factory=PaginationData)


class AuthorFilter(GenericFilter):
    name: str | None = None


class UserFilter(GenericFilter):
    name: str | None = None
    type: str | None = None


class BookFilter(GenericFilter):
    title: str | None = None
    category_id: int | None = None


class PaginatedData(BaseModel, Generic[T]):
    """One page of results plus the total number of rows matching the filter."""

    number_of_rows: int
    rows: list[T]

    def row(self, index: int) -> T:
        return self.rows[index]
