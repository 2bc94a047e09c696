"""HTTP client and credential fixtures."""

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from library_catalog.api.http.app import app
from library_catalog.api.http.deps import get_db_session
from library_catalog.core.services import UserService
from library_catalog.entities import User, UserRepository, UserType
from tests.utils import ADMIN, EMPLOYEE, JOHN, MARY, basic_auth


@pytest.fixture
def client(session: Session) -> Generator[TestClient]:
    """Test client whose requests all share the test's database session."""

    def _session_override() -> Generator[Session]:
        yield session

    app.dependency_overrides[get_db_session] = _session_override
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def employee(session: Session, seeded_users) -> User:
    """An employee without the ADMIN role."""
    email, password = EMPLOYEE
    return UserService(UserRepository(session)).add(
        User.from_payload(
            name="Jane Employee", email=email, password=password, type=UserType.EMPLOYEE
        )
    )


@pytest.fixture
def admin_auth(seeded_users) -> dict[str, str]:
    return basic_auth(*ADMIN)


@pytest.fixture
def customer_auth(seeded_users) -> dict[str, str]:
    return basic_auth(*JOHN)


@pytest.fixture
def other_customer_auth(seeded_users) -> dict[str, str]:
    return basic_auth(*MARY)


@pytest.fixture
def employee_auth(employee: User) -> dict[str, str]:
    return basic_auth(*EMPLOYEE)
