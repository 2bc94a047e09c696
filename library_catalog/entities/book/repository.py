from typing import Any

from sqlmodel import col, select

from library_catalog.core.models import BookFilter, PaginatedData
from library_catalog.entities._repository import EntityRepository
from library_catalog.entities.author import Author, AuthorTable
from library_catalog.entities.book.entity import Book
from library_catalog.entities.book.table import BookAuthorTable, BookTable
from library_catalog.entities.category import Category, CategoryTable


class BookRepository(EntityRepository[Book, BookTable]):
    """Data-access layer for books and their author links."""

    entity_type = Book
    table_type = BookTable
    sortable_fields = {"id": "id", "title": "title", "price": "price"}

    def _to_entity(self, row: BookTable) -> Book:
        category_row = self._session.get(CategoryTable, row.category_id)
        author_rows = self._session.exec(
            select(AuthorTable)
            .join(BookAuthorTable, col(BookAuthorTable.author_id) == col(AuthorTable.id))
            .where(BookAuthorTable.book_id == row.id)
            .order_by(col(BookAuthorTable.position))
        ).all()
        return Book(
            id=row.id,
            title=row.title,
            description=row.description,
            price=row.price,
            category=Category.model_validate(category_row, from_attributes=True),
            authors=[
                Author.model_validate(author, from_attributes=True) for author in author_rows
            ],
        )

    def _row_values(self, entity: Book) -> dict[str, Any]:
        return {
            "title": entity.title,
            "description": entity.description,
            "price": entity.price,
            "category_id": entity.category.id,
        }

    def _replace_authors(self, book_id: int, authors: list[Author]) -> None:
        for link in self._session.exec(
            select(BookAuthorTable).where(BookAuthorTable.book_id == book_id)
        ).all():
            self._session.delete(link)
        self._session.flush()
        for position, author in enumerate(authors):
            self._session.add(
                BookAuthorTable(book_id=book_id, author_id=author.id, position=position)
            )
        self._session.flush()

    def create(self, entity: Book) -> Book:
        row = BookTable(**self._row_values(entity))
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        self._replace_authors(row.id, entity.authors)  # type: ignore[arg-type]
        return self._to_entity(row)

    def update(self, entity: Book) -> Book:
        row = self._session.get(BookTable, entity.id)
        if row is None:
            raise ValueError(f"BookTable {entity.id} not found")
        for name, value in self._row_values(entity).items():
            setattr(row, name, value)
        self._session.add(row)
        self._session.flush()
        self._replace_authors(row.id, entity.authors)  # type: ignore[arg-type]
        self._session.refresh(row)
        return self._to_entity(row)

    def delete_all(self) -> int:
        for link in self._session.exec(select(BookAuthorTable)).all():
            self._session.delete(link)
        self._session.flush()
        return super().delete_all()

    def find_by_filter(self, book_filter: BookFilter) -> PaginatedData[Book]:
        statement = select(BookTable)
        if book_filter.title:
            statement = statement.where(self._contains(BookTable.title, book_filter.title))
        if book_filter.category_id is not None:
            statement = statement.where(BookTable.category_id == book_filter.category_id)
        return self._paginate(statement, book_filter.pagination)
