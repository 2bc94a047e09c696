"""Known catalog content used by the /DB endpoints and the ``seed`` command.

Everything goes through the catalog services, so seeded rows obey the same
validation, password hashing and role assignment as API writes.
"""

from loguru import logger
from sqlmodel import Session

from library_catalog.core.services.author.author_service import AuthorService
from library_catalog.core.services.book.book_service import BookService
from library_catalog.core.services.category.category_service import CategoryService
from library_catalog.core.services.user.user_service import UserService
from library_catalog.entities import (
    Author,
    AuthorRepository,
    Book,
    BookRepository,
    Category,
    CategoryRepository,
    User,
    UserRepository,
    UserType,
)

# (name, email, password, type, admin)
SEED_USERS = [
    ("Admin", "admin@domain.com", "654321", UserType.EMPLOYEE, True),
    ("John Doe", "john@domain.com", "123456", UserType.CUSTOMER, False),
    ("Mary", "mary@domain.com", "987654", UserType.CUSTOMER, False),
]

# Alphabetical, so insertion order and name order agree
SEED_CATEGORIES = ["Architecture", "Clean Code", "Java", "Networks"]

SEED_AUTHORS = [
    "Robert Martin",
    "James Gosling",
    "Martin Fowler",
    "Erich Gamma",
    "Richard Helm",
    "Ralph Johnson",
    "John Vlissides",
    "Kent Beck",
]

SEED_BOOKS = [
    {
        "title": "Design Patterns: Elements of Reusable Object-Oriented Software",
        "description": "Capturing a wealth of experience about the design of object-oriented "
        "software, four top-notch designers present a catalog of simple and succinct "
        "solutions to commonly occurring design problems.",
        "price": 48.94,
        "category": "Architecture",
        "authors": ["Erich Gamma", "Richard Helm", "Ralph Johnson", "John Vlissides"],
    },
    {
        "title": "Patterns of Enterprise Application Architecture",
        "description": "Developers of enterprise applications face the same problems again "
        "and again; this book collects the patterns that solve them.",
        "price": 52.5,
        "category": "Architecture",
        "authors": ["Martin Fowler"],
    },
    {
        "title": "Refactoring: Improving the Design of Existing Code",
        "description": "A catalog of refactorings that improve the structure of existing "
        "code without changing its behaviour.",
        "price": 31.5,
        "category": "Clean Code",
        "authors": ["Martin Fowler", "Kent Beck"],
    },
    {
        "title": "Clean Code: A Handbook of Agile Software Craftsmanship",
        "description": "Even bad code can function. But if code isn't clean, it can bring "
        "a development organization to its knees.",
        "price": 35.5,
        "category": "Clean Code",
        "authors": ["Robert Martin"],
    },
]


class DbSeedService:
    def __init__(self, session: Session):
        self._session = session
        self._categories = CategoryRepository(session)
        self._authors = AuthorRepository(session)
        self._users = UserRepository(session)
        self._books = BookRepository(session)

    def delete_all(self) -> None:
        """Delete every book, author, category and user."""
        deleted = {
            "books": self._books.delete_all(),
            "authors": self._authors.delete_all(),
            "categories": self._categories.delete_all(),
            "users": self._users.delete_all(),
        }
        self._session.commit()
        logger.warning("Catalog wiped", **deleted)

    def seed_users(self) -> list[User]:
        service = UserService(self._users)
        return [
            service.add(
                User.from_payload(name=name, email=email, password=password, type=user_type),
                admin=admin,
            )
            for name, email, password, user_type, admin in SEED_USERS
        ]

    def seed_categories(self) -> list[Category]:
        service = CategoryService(self._categories)
        return [service.add(Category.from_payload(name=name)) for name in SEED_CATEGORIES]

    def seed_authors(self) -> list[Author]:
        service = AuthorService(self._authors)
        return [service.add(Author.from_payload(name=name)) for name in SEED_AUTHORS]

    def seed_books(self) -> list[Book]:
        """Add the seed books; their categories and authors must already be stored."""
        categories = {category.name: category for category in self._categories.list_all()}
        authors = {author.name: author for author in self._authors.list_all()}
        service = BookService(self._books, self._categories, self._authors)

        books = []
        for seed in SEED_BOOKS:
            book = Book.from_payload(
                title=seed["title"],
                description=seed["description"],
                price=seed["price"],
                category=categories.get(seed["category"], Category.from_payload(id=None)),
                authors=[
                    authors.get(name, Author.from_payload(id=None)) for name in seed["authors"]
                ],
            )
            books.append(service.add(book))
        return books

    def seed_all(self) -> None:
        self.seed_users()
        self.seed_categories()
        self.seed_authors()
        self.seed_books()
