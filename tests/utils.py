"""Helpers shared by the test modules."""

import base64

ADMIN = ("admin@domain.com", "654321")
JOHN = ("john@domain.com", "123456")
MARY = ("mary@domain.com", "987654")
EMPLOYEE = ("jane@domain.com", "456789")


def basic_auth(email: str, password: str) -> dict[str, str]:
    """Authorization header for HTTP Basic credentials."""
    encoded = base64.b64encode(f"{email}:{password}".encode()).decode("ascii")
    return {"Authorization": f"Basic {encoded}"}


def bearer_auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def assert_error(response, status_code: int, identification: str, description: str | None = None):
    """Check a resource error envelope."""
    assert response.status_code == status_code
    body = response.json()
    assert body["errorIdentification"] == identification
    if description is not None:
        assert body["errorDescription"] == description
