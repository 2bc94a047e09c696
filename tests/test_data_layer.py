"""Data layer tests.

Repositories run against an in-memory SQLite database, so the queries,
constraints and pagination are exercised for real.
"""

import pytest
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from library_catalog.core.models import (
    AuthorFilter,
    BookFilter,
    OrderMode,
    PaginationData,
    UserFilter,
)
from library_catalog.entities import (
    Author,
    AuthorRepository,
    Book,
    BookAuthorTable,
    BookRepository,
    Category,
    CategoryRepository,
    CategoryTable,
    Role,
    User,
    UserRepository,
    UserType,
)
from library_catalog.entities.user.entity import roles_for_type


class TestEntities:
    def test_category_equality(self):
        """Should compare categories by id and name."""
        assert Category(id=1, name="Java") == Category(id=1, name="Java")
        assert Category(id=1, name="Java") != Category(id=2, name="Java")
        assert len({Category(id=1, name="Java"), Category(id=1, name="Java")}) == 1

    def test_roles_for_type(self):
        assert roles_for_type(UserType.CUSTOMER) == [Role.CUSTOMER]
        assert roles_for_type(UserType.EMPLOYEE) == [Role.EMPLOYEE]
        assert roles_for_type(UserType.EMPLOYEE, admin=True) == [Role.EMPLOYEE, Role.ADMIN]
        # Customers never become administrators
        assert roles_for_type(UserType.CUSTOMER, admin=True) == [Role.CUSTOMER]

    def test_user_roles(self):
        user = User(
            name="Admin",
            email="admin@domain.com",
            type=UserType.EMPLOYEE,
            roles=[Role.EMPLOYEE, Role.ADMIN],
        )

        assert user.is_admin()
        assert user.has_role("EMPLOYEE")
        assert not user.has_role(Role.CUSTOMER)


class TestCategoryRepository:
    def test_create_and_get(self, session: Session):
        repository = CategoryRepository(session)

        created = repository.create(Category(name="Java"))
        repository.commit()

        assert created.id is not None
        assert repository.get(created.id) == created
        assert repository.exists(created.id)
        assert repository.get(999) is None
        assert not repository.exists(999)

    def test_ids_outside_storable_range_are_missing(self, session: Session):
        repository = CategoryRepository(session)
        repository.create(Category(name="Java"))

        for entity_id in (2**63, 2**70, 0, -2**70):
            assert repository.get(entity_id) is None
            assert not repository.exists(entity_id)

    def test_update(self, session: Session):
        repository = CategoryRepository(session)
        created = repository.create(Category(name="Java"))

        updated = repository.update(Category(id=created.id, name="Java EE"))

        assert updated == Category(id=created.id, name="Java EE")
        assert repository.count() == 1

    def test_update_unknown_id_raises(self, session: Session):
        with pytest.raises(ValueError):
            CategoryRepository(session).update(Category(id=999, name="Java"))

    def test_name_exists(self, session: Session):
        repository = CategoryRepository(session)
        java = repository.create(Category(name="Java"))

        assert repository.name_exists("Java")
        assert not repository.name_exists("Networks")
        # A category never collides with itself
        assert not repository.name_exists("Java", exclude_id=java.id)

    def test_unique_name_constraint(self, session: Session):
        repository = CategoryRepository(session)
        repository.create(Category(name="Java"))

        with pytest.raises(IntegrityError):
            repository.create(Category(name="Java"))

    def test_list_all_in_insertion_order(self, session: Session):
        repository = CategoryRepository(session)
        for name in ("Networks", "Architecture", "Java"):
            repository.create(Category(name=name))

        assert [c.name for c in repository.list_all()] == ["Networks", "Architecture", "Java"]
        assert [c.name for c in repository.list_all(order_field="name")] == [
            "Architecture",
            "Java",
            "Networks",
        ]

    def test_delete_all(self, session: Session):
        repository = CategoryRepository(session)
        repository.create(Category(name="Java"))
        repository.create(Category(name="Networks"))

        assert repository.delete_all() == 2
        assert repository.count() == 0
        assert session.exec(select(CategoryTable)).all() == []

    def test_rollback_discards_pending_rows(self, session: Session):
        repository = CategoryRepository(session)
        repository.create(Category(name="Java"))

        repository.rollback()

        assert repository.count() == 0


class TestAuthorRepository:
    def test_find_by_filter_name_substring(self, session: Session, seeded_authors):
        result = AuthorRepository(session).find_by_filter(
            AuthorFilter(name="MARTIN", pagination=PaginationData(order_field="name"))
        )

        assert result.number_of_rows == 2
        assert [a.name for a in result.rows] == ["Martin Fowler", "Robert Martin"]

    @pytest.mark.parametrize("name", ["%", "_", "Martin%", "R_bert"])
    def test_find_by_filter_wildcards_are_literal(
        self, session: Session, seeded_authors, name
    ):
        result = AuthorRepository(session).find_by_filter(AuthorFilter(name=name))

        assert result.number_of_rows == 0

    def test_find_by_filter_paginates(self, session: Session, seeded_authors):
        repository = AuthorRepository(session)
        pagination = PaginationData(first_result=2, max_results=3, order_field="name")

        result = repository.find_by_filter(AuthorFilter(pagination=pagination))

        assert result.number_of_rows == 8
        assert [a.name for a in result.rows] == [
            "John Vlissides",
            "Kent Beck",
            "Martin Fowler",
        ]

    def test_find_by_filter_descending(self, session: Session, seeded_authors):
        pagination = PaginationData(
            max_results=2, order_field="name", order_mode=OrderMode.DESCENDING
        )

        result = AuthorRepository(session).find_by_filter(AuthorFilter(pagination=pagination))

        assert [a.name for a in result.rows] == ["Robert Martin", "Richard Helm"]

    def test_supports_sort(self, session: Session):
        repository = AuthorRepository(session)

        assert repository.supports_sort("name")
        assert repository.supports_sort("id")
        assert not repository.supports_sort("password")


class TestUserRepository:
    def test_create_keeps_password_hash_out_of_entity(self, session: Session):
        repository = UserRepository(session)
        user = User(
            name="John Doe",
            email="john@domain.com",
            type=UserType.CUSTOMER,
            roles=[Role.CUSTOMER],
        )

        created = repository.create(user, password_hash="hashed")

        assert created.id is not None
        assert created.created_at is not None
        assert created.password is None
        assert created.roles == [Role.CUSTOMER]
        assert repository.get_password_hash("john@domain.com") == "hashed"

    def test_update_leaves_type_and_roles(self, session: Session, seeded_users):
        repository = UserRepository(session)
        admin = repository.find_by_email("admin@domain.com")
        assert admin is not None

        updated = repository.update(
            admin.model_copy(
                update={"name": "Administrator", "type": UserType.CUSTOMER, "roles": []}
            )
        )

        assert updated.name == "Administrator"
        assert updated.type == UserType.EMPLOYEE
        assert updated.roles == [Role.EMPLOYEE, Role.ADMIN]

    def test_update_password(self, session: Session, seeded_users):
        repository = UserRepository(session)
        john = repository.find_by_email("john@domain.com")
        assert john is not None

        repository.update_password(john.id, "new-hash")

        assert repository.get_password_hash("john@domain.com") == "new-hash"

    def test_unknown_email(self, session: Session):
        repository = UserRepository(session)

        assert repository.find_by_email("nobody@domain.com") is None
        assert repository.get_password_hash("nobody@domain.com") is None

    def test_find_by_filter_type(self, session: Session, seeded_users):
        result = UserRepository(session).find_by_filter(
            UserFilter(type="CUSTOMER", pagination=PaginationData(order_field="name"))
        )

        assert result.number_of_rows == 2
        assert [u.name for u in result.rows] == ["John Doe", "Mary"]

    def test_sort_by_created_at(self, session: Session):
        assert UserRepository(session).supports_sort("createdAt")


class TestBookRepository:
    def test_create_links_authors_in_order(self, session: Session, seeded_categories):
        authors = AuthorRepository(session)
        fowler = authors.create(Author(name="Martin Fowler"))
        beck = authors.create(Author(name="Kent Beck"))
        repository = BookRepository(session)

        created = repository.create(
            Book(
                title="Refactoring",
                description="Improving the design of existing code",
                price=31.5,
                category=seeded_categories[1],
                authors=[fowler, beck],
            )
        )

        assert created.id is not None
        assert created.category == seeded_categories[1]
        assert [a.name for a in created.authors] == ["Martin Fowler", "Kent Beck"]

    def test_update_replaces_authors(self, session: Session, seeded_books, seeded_authors):
        repository = BookRepository(session)
        book = seeded_books[0]

        updated = repository.update(book.model_copy(update={"authors": [seeded_authors[-1]]}))

        assert [a.name for a in updated.authors] == ["Kent Beck"]
        links = session.exec(
            select(BookAuthorTable).where(BookAuthorTable.book_id == book.id)
        ).all()
        assert len(links) == 1

    def test_find_by_filter(self, session: Session, seeded_books, seeded_categories):
        repository = BookRepository(session)
        architecture = seeded_categories[0]

        by_category = repository.find_by_filter(
            BookFilter(category_id=architecture.id, pagination=PaginationData(order_field="title"))
        )
        by_title = repository.find_by_filter(
            BookFilter(title="clean", pagination=PaginationData(order_field="title"))
        )

        assert by_category.number_of_rows == 2
        assert all(book.category == architecture for book in by_category.rows)
        assert [book.title for book in by_title.rows] == [
            "Clean Code: A Handbook of Agile Software Craftsmanship"
        ]

    def test_find_by_filter_title_wildcards_are_literal(self, session: Session, seeded_books):
        repository = BookRepository(session)

        for title in ("Design_Patterns", "Clean%Code", "%"):
            assert repository.find_by_filter(BookFilter(title=title)).number_of_rows == 0
        assert repository.find_by_filter(BookFilter(title="Code:")).number_of_rows == 1

    def test_sort_by_price(self, session: Session, seeded_books):
        pagination = PaginationData(order_field="price", order_mode=OrderMode.DESCENDING)

        result = BookRepository(session).find_by_filter(BookFilter(pagination=pagination))

        prices = [book.price for book in result.rows]
        assert prices == sorted(prices, reverse=True)

    def test_delete_all_removes_links(self, session: Session, seeded_books):
        assert BookRepository(session).delete_all() == 4
        assert session.exec(select(BookAuthorTable)).all() == []
