"""Category API router."""

from typing import Any

from fastapi import APIRouter, Body, Depends
from loguru import logger

from library_catalog.api.http.converters import (
    category_from_json,
    category_to_json,
    paginated_json,
)
from library_catalog.api.http.deps import (
    get_authenticated_user,
    get_category_service,
    require_role,
)
from library_catalog.api.http.resource_message import ResourceMessage
from library_catalog.core.exceptions import LibraryError
from library_catalog.core.services import CategoryService
from library_catalog.entities import Role

RESOURCE_MESSAGE = ResourceMessage("category")

router = APIRouter(prefix="/categories", tags=["categories"])


@router.post("", status_code=201, dependencies=[Depends(require_role(Role.ADMIN))])
def add_category(
    payload: dict[str, Any] = Body(...),
    service: CategoryService = Depends(get_category_service),
):
    """Create a category and answer with its id."""
    logger.debug("Adding a new category with body {}", payload)
    try:
        category = service.add(category_from_json(payload))
    except LibraryError as e:
        logger.error("Category not added: {}", e)
        return RESOURCE_MESSAGE.error_response(e)
    return {"id": category.id}


@router.put("/{category_id}", dependencies=[Depends(require_role(Role.ADMIN))])
def update_category(
    category_id: int,
    payload: dict[str, Any] = Body(...),
    service: CategoryService = Depends(get_category_service),
):
    logger.debug("Updating the category {} with body {}", category_id, payload)
    try:
        category = service.update(category_from_json(payload, category_id))
    except LibraryError as e:
        logger.error("Category {} not updated: {}", category_id, e)
        return RESOURCE_MESSAGE.error_response(e)
    return category_to_json(category)


@router.get("/{category_id}", dependencies=[Depends(require_role(Role.ADMIN))])
def find_category(
    category_id: int,
    service: CategoryService = Depends(get_category_service),
):
    logger.debug("Find category: {}", category_id)
    try:
        category = service.find_by_id(category_id)
    except LibraryError as e:
        logger.error("No category found for id {}", category_id)
        return RESOURCE_MESSAGE.error_response(e)
    return category_to_json(category)


@router.get("", dependencies=[Depends(get_authenticated_user)])
def find_all_categories(service: CategoryService = Depends(get_category_service)):
    """List every category; open to any authenticated user."""
    categories = service.find_all()
    logger.debug("Found {} categories", categories.number_of_rows)
    return paginated_json(categories, category_to_json)
