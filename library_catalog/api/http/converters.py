"""Conversion between the JSON wire format and the domain entities.

Incoming payloads are turned into entities without validation; the services
validate them and report the offending field. Outgoing JSON uses camelCase
keys and never carries a password.
"""

from typing import Any

from library_catalog.core.models import PaginatedData
from library_catalog.entities.author import Author
from library_catalog.entities.book import Book
from library_catalog.entities.category import Category
from library_catalog.entities.user import User


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value)
    return None


def category_from_json(payload: dict[str, Any], category_id: int | None = None) -> Category:
    return Category.from_payload(id=category_id, name=payload.get("name"))


def category_to_json(category: Category) -> dict[str, Any]:
    return {"id": category.id, "name": category.name}


def author_from_json(payload: dict[str, Any], author_id: int | None = None) -> Author:
    return Author.from_payload(id=author_id, name=payload.get("name"))


def author_to_json(author: Author) -> dict[str, Any]:
    return {"id": author.id, "name": author.name}


def user_from_json(payload: dict[str, Any], user_id: int | None = None) -> User:
    return User.from_payload(
        id=user_id,
        name=payload.get("name"),
        email=payload.get("email"),
        password=payload.get("password"),
        type=payload.get("type"),
        roles=[],
        created_at=None,
    )


def user_to_json(user: User) -> dict[str, Any]:
    return {
        "id": user.id,
        "createdAt": user.created_at.isoformat() if user.created_at else None,
        "name": user.name,
        "email": user.email,
        "type": str(user.type),
        "roles": [str(role) for role in user.roles],
    }


def book_from_json(payload: dict[str, Any], book_id: int | None = None) -> Book:
    """Build a book whose category and authors carry identifiers only."""
    category_id = payload.get("categoryId")
    authors_ids = payload.get("authorsIds")
    return Book.from_payload(
        id=book_id,
        title=payload.get("title"),
        description=payload.get("description"),
        price=payload.get("price"),
        category=None
        if category_id is None
        else Category.from_payload(id=_as_int(category_id)),
        authors=None
        if not isinstance(authors_ids, list)
        else [Author.from_payload(id=_as_int(author_id)) for author_id in authors_ids],
    )


def book_to_json(book: Book) -> dict[str, Any]:
    return {
        "id": book.id,
        "title": book.title,
        "description": book.description,
        "price": book.price,
        "category": category_to_json(book.category),
        "authors": [author_to_json(author) for author in book.authors],
    }


def paginated_json(data: PaginatedData, to_json) -> dict[str, Any]:
    """Wrap one page of entities with the paging envelope."""
    return {
        "paging": {"totalRecords": data.number_of_rows},
        "entries": [to_json(row) for row in data.rows],
    }
