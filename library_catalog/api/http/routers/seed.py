"""Seeding endpoints used by black-box tests to put the store in a known state."""

from collections.abc import Callable

from fastapi import APIRouter, Depends, Response
from loguru import logger
from sqlmodel import Session

from library_catalog.api.http.deps import get_db_session, require_seed_endpoints
from library_catalog.api.http.resource_message import ResourceMessage
from library_catalog.core.exceptions import LibraryError
from library_catalog.core.services.database.db_seed import DbSeedService

RESOURCE_MESSAGE = ResourceMessage("seed")

router = APIRouter(
    prefix="/DB",
    tags=["seed"],
    dependencies=[Depends(require_seed_endpoints)],
    include_in_schema=False,
)


def get_seed_service(db: Session = Depends(get_db_session)) -> DbSeedService:
    return DbSeedService(db)


def _seed(group: str, step: Callable[[], object]):
    logger.debug("Seeding {}", group)
    try:
        step()
    except LibraryError as e:
        logger.error("{} not seeded: {}", group.capitalize(), e)
        return RESOURCE_MESSAGE.error_response(e)
    return Response(status_code=200)


@router.delete("")
def delete_all(service: DbSeedService = Depends(get_seed_service)):
    service.delete_all()
    return Response(status_code=200)


@router.post("/users")
def seed_users(service: DbSeedService = Depends(get_seed_service)):
    return _seed("users", service.seed_users)


@router.post("/categories")
def seed_categories(service: DbSeedService = Depends(get_seed_service)):
    return _seed("categories", service.seed_categories)


@router.post("/authors")
def seed_authors(service: DbSeedService = Depends(get_seed_service)):
    return _seed("authors", service.seed_authors)


@router.post("/books")
def seed_books(service: DbSeedService = Depends(get_seed_service)):
    """Needs the seed categories and authors to be stored already."""
    return _seed("books", service.seed_books)
