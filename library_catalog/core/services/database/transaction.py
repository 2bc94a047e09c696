"""Commit/rollback helper used by the catalog services."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from loguru import logger
from sqlalchemy.exc import IntegrityError

from library_catalog.core.exceptions import AlreadyExistsError
from library_catalog.entities._repository import EntityRepository


@contextmanager
def unit_of_work(
    repository: EntityRepository[Any, Any], conflict_field: str | None = None
) -> Iterator[None]:
    """Commit the writes made inside the block, roll back on any failure.

    A unique-constraint violation surfacing at flush or commit time is
    reported as :class:`AlreadyExistsError` on ``conflict_field``; this is how
    a natural-key race lost to a concurrent writer ends up.
    """
    try:
        yield
        repository.commit()
    except IntegrityError as e:
        repository.rollback()
        logger.warning(
            "Database transaction failed",
            error_type=type(e).__name__,
            error_message=str(e.orig),
        )
        if conflict_field is None:
            raise
        raise AlreadyExistsError(conflict_field) from e
    except Exception:
        repository.rollback()
        raise
