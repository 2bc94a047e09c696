"""Author API router."""

from typing import Any

from fastapi import APIRouter, Body, Depends
from loguru import logger

from library_catalog.api.http.converters import (
    author_from_json,
    author_to_json,
    paginated_json,
)
from library_catalog.api.http.deps import (
    get_author_service,
    get_authenticated_user,
    require_role,
)
from library_catalog.api.http.filters import author_filter
from library_catalog.api.http.resource_message import ResourceMessage
from library_catalog.core.exceptions import LibraryError
from library_catalog.core.models import AuthorFilter
from library_catalog.core.services import AuthorService
from library_catalog.entities import Role

RESOURCE_MESSAGE = ResourceMessage("author")

router = APIRouter(prefix="/authors", tags=["authors"])


@router.post("", status_code=201, dependencies=[Depends(require_role(Role.EMPLOYEE))])
def add_author(
    payload: dict[str, Any] = Body(...),
    service: AuthorService = Depends(get_author_service),
):
    logger.debug("Adding a new author with body {}", payload)
    try:
        author = service.add(author_from_json(payload))
    except LibraryError as e:
        logger.error("One of the fields of the author is not valid: {}", e)
        return RESOURCE_MESSAGE.error_response(e)
    return {"id": author.id}


@router.put("/{author_id}", dependencies=[Depends(require_role(Role.EMPLOYEE))])
def update_author(
    author_id: int,
    payload: dict[str, Any] = Body(...),
    service: AuthorService = Depends(get_author_service),
):
    logger.debug("Updating the author {} with body {}", author_id, payload)
    try:
        author = service.update(author_from_json(payload, author_id))
    except LibraryError as e:
        logger.error("Author {} not updated: {}", author_id, e)
        return RESOURCE_MESSAGE.error_response(e)
    return author_to_json(author)


@router.get("/{author_id}", dependencies=[Depends(require_role(Role.EMPLOYEE))])
def find_author(
    author_id: int,
    service: AuthorService = Depends(get_author_service),
):
    logger.debug("Find author: {}", author_id)
    try:
        author = service.find_by_id(author_id)
    except LibraryError as e:
        logger.error("No author found for id {}", author_id)
        return RESOURCE_MESSAGE.error_response(e)
    return author_to_json(author)


@router.get("", dependencies=[Depends(get_authenticated_user)])
def find_authors(
    filters: AuthorFilter = Depends(author_filter),
    service: AuthorService = Depends(get_author_service),
):
    logger.debug("Finding authors using filter: {}", filters)
    try:
        authors = service.find_by_filter(filters)
    except LibraryError as e:
        logger.error("Authors not listed: {}", e)
        return RESOURCE_MESSAGE.error_response(e)
    logger.debug("Found {} authors", authors.number_of_rows)
    return paginated_json(authors, author_to_json)
