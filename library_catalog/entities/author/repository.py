from sqlmodel import select

from library_catalog.core.models import AuthorFilter, PaginatedData
from library_catalog.entities._repository import EntityRepository
from library_catalog.entities.author.entity import Author
from library_catalog.entities.author.table import AuthorTable


class AuthorRepository(EntityRepository[Author, AuthorTable]):
    """Data-access layer for authors."""

    entity_type = Author
    table_type = AuthorTable
    sortable_fields = {"id": "id", "name": "name"}

    def name_exists(self, name: str, exclude_id: int | None = None) -> bool:
        return self.already_exists("name", name, exclude_id)

    def find_by_filter(self, author_filter: AuthorFilter) -> PaginatedData[Author]:
        statement = select(AuthorTable)
        if author_filter.name:
            statement = statement.where(self._contains(AuthorTable.name, author_filter.name))
        return self._paginate(statement, author_filter.pagination)
