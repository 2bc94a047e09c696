from loguru import logger

from library_catalog.core.exceptions import (
    AlreadyExistsError,
    FieldNotValidError,
    NotFoundError,
)
from library_catalog.core.models import AuthorFilter, PaginatedData
from library_catalog.core.services.database.transaction import unit_of_work
from library_catalog.entities.author import Author, AuthorRepository


class AuthorService:
    def __init__(self, author_repository: AuthorRepository) -> None:
        self._authors = author_repository

    def add(self, author: Author) -> Author:
        author.validate_fields()
        self._check_name_is_free(author)

        with unit_of_work(self._authors, conflict_field="name"):
            created = self._authors.create(author)
        logger.info("Author {} added with id {}", created.name, created.id)
        return created

    def update(self, author: Author) -> Author:
        author.validate_fields()
        if author.id is None or not self._authors.exists(author.id):
            raise NotFoundError("author", author.id)
        self._check_name_is_free(author)

        with unit_of_work(self._authors, conflict_field="name"):
            updated = self._authors.update(author)
        return updated

    def find_by_id(self, author_id: int) -> Author:
        author = self._authors.get(author_id)
        if author is None:
            raise NotFoundError("author", author_id)
        return author

    def exists(self, author_id: int) -> bool:
        return self._authors.exists(author_id)

    def find_by_filter(self, author_filter: AuthorFilter) -> PaginatedData[Author]:
        if not self._authors.supports_sort(author_filter.pagination.order_field):
            raise FieldNotValidError("sort", "unknown sort field")
        return self._authors.find_by_filter(author_filter)

    def _check_name_is_free(self, author: Author) -> None:
        if self._authors.name_exists(author.name, exclude_id=author.id):
            raise AlreadyExistsError("name")
