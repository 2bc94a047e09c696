from loguru import logger

from library_catalog.core.exceptions import FieldNotValidError, NotFoundError
from library_catalog.core.models import BookFilter, PaginatedData
from library_catalog.core.services.database.transaction import unit_of_work
from library_catalog.entities.author import Author, AuthorRepository
from library_catalog.entities.book import Book, BookRepository
from library_catalog.entities.category import CategoryRepository


class BookService:
    """Books reference a stored category and stored authors.

    Incoming books only need the identifiers of those; they are replaced with
    the stored entities before the book is written.
    """

    def __init__(
        self,
        book_repository: BookRepository,
        category_repository: CategoryRepository,
        author_repository: AuthorRepository,
    ) -> None:
        self._books = book_repository
        self._categories = category_repository
        self._authors = author_repository

    def add(self, book: Book) -> Book:
        book.validate_fields()
        book = self._resolve_references(book)

        with unit_of_work(self._books):
            created = self._books.create(book)
        logger.info("Book {} added with id {}", created.title, created.id)
        return created

    def update(self, book: Book) -> Book:
        book.validate_fields()
        if book.id is None or not self._books.exists(book.id):
            raise NotFoundError("book", book.id)
        book = self._resolve_references(book)

        with unit_of_work(self._books):
            updated = self._books.update(book)
        return updated

    def find_by_id(self, book_id: int) -> Book:
        book = self._books.get(book_id)
        if book is None:
            raise NotFoundError("book", book_id)
        return book

    def find_by_filter(self, book_filter: BookFilter) -> PaginatedData[Book]:
        if not self._books.supports_sort(book_filter.pagination.order_field):
            raise FieldNotValidError("sort", "unknown sort field")
        return self._books.find_by_filter(book_filter)

    def _resolve_references(self, book: Book) -> Book:
        category = (
            self._categories.get(book.category.id) if book.category.id is not None else None
        )
        if category is None:
            raise FieldNotValidError("category", "category not found")

        authors: list[Author] = []
        for reference in book.authors:
            author = self._authors.get(reference.id) if reference.id is not None else None
            if author is None:
                raise FieldNotValidError("authors", "author not found")
            if any(known.id == author.id for known in authors):
                raise FieldNotValidError("authors", "duplicate author")
            authors.append(author)

        return book.model_copy(update={"category": category, "authors": authors})
