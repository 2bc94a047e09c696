"""Query-string parsing for the filtered listings."""

from fastapi import Query

from library_catalog.core.models import (
    AuthorFilter,
    BookFilter,
    OrderMode,
    PaginationData,
    UserFilter,
)
from library_catalog.entities._repository import MAX_ID
from library_catalog.runtime.context import get_config

# page * max_per_page must fit the signed 64-bit OFFSET of the query
MAX_PAGE = 2**31 - 1


def parse_pagination(
    page: int, per_page: int | None, sort: str | None, default_sort: str
) -> PaginationData:
    """Build the page slice and ordering of a listing.

    ``sort`` is a field name optionally prefixed with ``+`` (ascending) or
    ``-`` (descending). An unencoded ``+`` arrives as a space, so leading
    whitespace also means ascending.
    """
    limits = get_config().pagination
    max_results = min(per_page or limits.default_per_page, limits.max_per_page)

    order_field = (sort or "").strip() or default_sort
    order_mode = OrderMode.ASCENDING
    if order_field.startswith("-"):
        order_mode = OrderMode.DESCENDING
        order_field = order_field[1:]
    elif order_field.startswith("+"):
        order_field = order_field[1:]

    return PaginationData(
        first_result=page * max_results,
        max_results=max_results,
        order_field=order_field,
        order_mode=order_mode,
    )


def author_filter(
    name: str | None = None,
    page: int = Query(default=0, ge=0, le=MAX_PAGE),
    per_page: int | None = Query(default=None, ge=1),
    sort: str | None = None,
) -> AuthorFilter:
    return AuthorFilter(
        name=name, pagination=parse_pagination(page, per_page, sort, "name")
    )


def user_filter(
    name: str | None = None,
    type: str | None = None,
    page: int = Query(default=0, ge=0, le=MAX_PAGE),
    per_page: int | None = Query(default=None, ge=1),
    sort: str | None = None,
) -> UserFilter:
    return UserFilter(
        name=name, type=type, pagination=parse_pagination(page, per_page, sort, "name")
    )


def book_filter(
    title: str | None = None,
    category_id: int | None = Query(default=None, alias="categoryId", ge=1, le=MAX_ID),
    page: int = Query(default=0, ge=0, le=MAX_PAGE),
    per_page: int | None = Query(default=None, ge=1),
    sort: str | None = None,
) -> BookFilter:
    return BookFilter(
        title=title,
        category_id=category_id,
        pagination=parse_pagination(page, per_page, sort, "title"),
    )
