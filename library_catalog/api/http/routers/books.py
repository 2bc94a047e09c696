"""Book API router."""

from typing import Any

from fastapi import APIRouter, Body, Depends
from loguru import logger

from library_catalog.api.http.converters import (
    book_from_json,
    book_to_json,
    paginated_json,
)
from library_catalog.api.http.deps import (
    get_authenticated_user,
    get_book_service,
    require_role,
)
from library_catalog.api.http.filters import book_filter
from library_catalog.api.http.resource_message import ResourceMessage
from library_catalog.core.exceptions import LibraryError
from library_catalog.core.models import BookFilter
from library_catalog.core.services import BookService
from library_catalog.entities import Role

RESOURCE_MESSAGE = ResourceMessage("book")

router = APIRouter(prefix="/books", tags=["books"])


@router.post("", status_code=201, dependencies=[Depends(require_role(Role.EMPLOYEE))])
def add_book(
    payload: dict[str, Any] = Body(...),
    service: BookService = Depends(get_book_service),
):
    """Create a book from ``categoryId`` and ``authorsIds`` references."""
    logger.debug("Adding a new book with body {}", payload)
    try:
        book = service.add(book_from_json(payload))
    except LibraryError as e:
        logger.error("Book not added: {}", e)
        return RESOURCE_MESSAGE.error_response(e)
    return {"id": book.id}


@router.put("/{book_id}", dependencies=[Depends(require_role(Role.EMPLOYEE))])
def update_book(
    book_id: int,
    payload: dict[str, Any] = Body(...),
    service: BookService = Depends(get_book_service),
):
    logger.debug("Updating the book {} with body {}", book_id, payload)
    try:
        book = service.update(book_from_json(payload, book_id))
    except LibraryError as e:
        logger.error("Book {} not updated: {}", book_id, e)
        return RESOURCE_MESSAGE.error_response(e)
    return book_to_json(book)


@router.get("/{book_id}", dependencies=[Depends(get_authenticated_user)])
def find_book(
    book_id: int,
    service: BookService = Depends(get_book_service),
):
    logger.debug("Find book: {}", book_id)
    try:
        book = service.find_by_id(book_id)
    except LibraryError as e:
        logger.error("No book found for id {}", book_id)
        return RESOURCE_MESSAGE.error_response(e)
    return book_to_json(book)


@router.get("", dependencies=[Depends(get_authenticated_user)])
def find_books(
    filters: BookFilter = Depends(book_filter),
    service: BookService = Depends(get_book_service),
):
    logger.debug("Finding books using filter: {}", filters)
    try:
        books = service.find_by_filter(filters)
    except LibraryError as e:
        logger.error("Books not listed: {}", e)
        return RESOURCE_MESSAGE.error_response(e)
    logger.debug("Found {} books", books.number_of_rows)
    return paginated_json(books, book_to_json)
