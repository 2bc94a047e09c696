"""Black-box tests of the /users resource and authentication."""

import pytest
from fastapi.testclient import TestClient

from library_catalog.core.services import JwtGeneratorService
from tests.utils import ADMIN, JOHN, MARY, assert_error, basic_auth, bearer_auth

pytestmark = pytest.mark.integration

PATH = "/users"


def customer_payload(**overrides):
    payload = {
        "name": "Peter Parker",
        "email": "peter@domain.com",
        "password": "spider1",
        "type": "CUSTOMER",
    }
    payload.update(overrides)
    return payload


def user_id(client: TestClient, credentials) -> int:
    response = client.post(
        f"{PATH}/authenticate", json={"email": credentials[0], "password": credentials[1]}
    )
    assert response.status_code == 200
    return response.json()["id"]


class TestUserRegistration:
    def test_anonymous_customer_registration(self, client: TestClient, admin_auth):
        response = client.post(PATH, json=customer_payload())
        assert response.status_code == 201
        new_id = response.json()["id"]

        response = client.get(f"{PATH}/{new_id}", headers=admin_auth)

        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Peter Parker"
        assert body["type"] == "CUSTOMER"
        assert body["roles"] == ["CUSTOMER"]
        assert body["createdAt"]
        assert "password" not in body

    def test_anonymous_employee_registration_is_forbidden(self, client: TestClient):
        response = client.post(PATH, json=customer_payload(type="EMPLOYEE"))

        assert response.status_code == 403

    def test_customer_cannot_create_employee(self, client: TestClient, customer_auth):
        response = client.post(PATH, json=customer_payload(type="EMPLOYEE"), headers=customer_auth)

        assert response.status_code == 403

    def test_admin_creates_employee(self, client: TestClient, admin_auth):
        response = client.post(PATH, json=customer_payload(type="EMPLOYEE"), headers=admin_auth)
        assert response.status_code == 201

        body = client.get(f"{PATH}/{response.json()['id']}", headers=admin_auth).json()

        assert body["type"] == "EMPLOYEE"
        assert body["roles"] == ["EMPLOYEE"]

    def test_duplicate_email(self, client: TestClient, seeded_users):
        response = client.post(PATH, json=customer_payload(email=JOHN[0]))

        assert_error(
            response, 400, "user.existent", "There is already a user for the given email"
        )

    def test_invalid_email(self, client: TestClient):
        response = client.post(PATH, json=customer_payload(email="peter"))

        assert_error(response, 400, "user.email")

    def test_missing_password(self, client: TestClient):
        payload = customer_payload()
        del payload["password"]

        assert_error(client.post(PATH, json=payload), 400, "user.password", "may not be null")

    def test_unknown_type(self, client: TestClient):
        assert_error(client.post(PATH, json=customer_payload(type="MANAGER")), 400, "user.type")


class TestAuthentication:
    def test_authenticate_returns_user_and_token(self, client: TestClient, seeded_users):
        response = client.post(
            f"{PATH}/authenticate", json={"email": ADMIN[0], "password": ADMIN[1]}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["email"] == ADMIN[0]
        assert body["roles"] == ["EMPLOYEE", "ADMIN"]
        assert body["token"]

    def test_token_grants_access(self, client: TestClient, seeded_users):
        token = client.post(
            f"{PATH}/authenticate", json={"email": ADMIN[0], "password": ADMIN[1]}
        ).json()["token"]

        response = client.get(PATH, headers=bearer_auth(token))

        assert response.status_code == 200

    def test_wrong_password(self, client: TestClient, seeded_users):
        response = client.post(
            f"{PATH}/authenticate", json={"email": ADMIN[0], "password": "wrong!"}
        )

        assert response.status_code == 401

    def test_unknown_email(self, client: TestClient, seeded_users):
        response = client.post(
            f"{PATH}/authenticate", json={"email": "nobody@domain.com", "password": "123456"}
        )

        assert response.status_code == 401

    def test_missing_credentials(self, client: TestClient):
        assert client.post(f"{PATH}/authenticate", json={}).status_code == 401

    def test_wrong_basic_credentials(self, client: TestClient, seeded_users):
        response = client.get("/categories", headers=basic_auth(ADMIN[0], "wrong!"))

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"].startswith("Basic")

    def test_forged_token(self, client: TestClient, seeded_users):
        response = client.get("/categories", headers=bearer_auth("a.b.c"))

        assert response.status_code == 401

    def test_token_subject_beyond_storable_range(self, client: TestClient, seeded_users):
        token = JwtGeneratorService().generate_access_token(user_id=2**70)

        response = client.get("/categories", headers=bearer_auth(token))

        assert response.status_code == 401

    def test_malformed_basic_credentials(self, client: TestClient, seeded_users):
        response = client.get("/categories", headers={"Authorization": "Basic !!!not-base64!!!"})

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == 'Basic realm="library-catalog"'

    def test_unsupported_scheme(self, client: TestClient, seeded_users):
        response = client.get("/categories", headers={"Authorization": "Token abc"})

        assert response.status_code == 401

    def test_password_may_contain_colons(self, client: TestClient):
        client.post(PATH, json=customer_payload(password="pa:ss:wd"))

        response = client.get("/categories", headers=basic_auth("peter@domain.com", "pa:ss:wd"))

        assert response.status_code == 200


class TestUserUpdate:
    def test_user_updates_itself(self, client: TestClient, customer_auth):
        john_id = user_id(client, JOHN)

        response = client.put(
            f"{PATH}/{john_id}",
            json={"name": "John Smith", "email": JOHN[0], "type": "CUSTOMER"},
            headers=customer_auth,
        )

        assert response.status_code == 200
        assert response.json()["name"] == "John Smith"

    def test_user_cannot_update_other_user(
        self, client: TestClient, customer_auth, other_customer_auth
    ):
        mary_id = user_id(client, MARY)

        response = client.put(
            f"{PATH}/{mary_id}",
            json={"name": "Mary Jane", "email": MARY[0], "type": "CUSTOMER"},
            headers=customer_auth,
        )

        assert response.status_code == 403

    def test_admin_updates_other_user(self, client: TestClient, admin_auth):
        mary_id = user_id(client, MARY)

        response = client.put(
            f"{PATH}/{mary_id}",
            json={"name": "Mary Jane", "email": "maryjane@domain.com", "type": "CUSTOMER"},
            headers=admin_auth,
        )

        assert response.status_code == 200
        assert response.json()["email"] == "maryjane@domain.com"

    def test_update_to_existing_email(self, client: TestClient, customer_auth):
        john_id = user_id(client, JOHN)

        response = client.put(
            f"{PATH}/{john_id}",
            json={"name": "John Doe", "email": MARY[0], "type": "CUSTOMER"},
            headers=customer_auth,
        )

        assert_error(response, 400, "user.existent")

    def test_update_unknown_user(self, client: TestClient, admin_auth):
        response = client.put(
            f"{PATH}/999",
            json={"name": "Nobody Here", "email": "nobody@domain.com", "type": "CUSTOMER"},
            headers=admin_auth,
        )

        assert_error(response, 404, "user.notfound", "User not found")

    def test_update_password(self, client: TestClient, customer_auth):
        john_id = user_id(client, JOHN)

        response = client.put(
            f"{PATH}/{john_id}/password", json={"password": "brand-new"}, headers=customer_auth
        )

        assert response.status_code == 200
        assert client.get("/categories", headers=customer_auth).status_code == 401
        assert (
            client.get("/categories", headers=basic_auth(JOHN[0], "brand-new")).status_code
            == 200
        )

    def test_update_password_of_other_user(
        self, client: TestClient, customer_auth, other_customer_auth
    ):
        mary_id = user_id(client, MARY)

        response = client.put(
            f"{PATH}/{mary_id}/password", json={"password": "brand-new"}, headers=customer_auth
        )

        assert response.status_code == 403

    def test_update_password_too_short(self, client: TestClient, customer_auth):
        john_id = user_id(client, JOHN)

        response = client.put(
            f"{PATH}/{john_id}/password", json={"password": "123"}, headers=customer_auth
        )

        assert_error(response, 400, "user.password")


class TestUserListing:
    def test_admin_lists_users(self, client: TestClient, admin_auth):
        response = client.get(PATH, headers=admin_auth)

        assert response.status_code == 200
        body = response.json()
        assert body["paging"]["totalRecords"] == 3
        assert [entry["name"] for entry in body["entries"]] == ["Admin", "John Doe", "Mary"]
        assert all("password" not in entry for entry in body["entries"])

    def test_filter_by_type(self, client: TestClient, admin_auth):
        response = client.get(PATH, params={"type": "EMPLOYEE"}, headers=admin_auth)

        assert [entry["email"] for entry in response.json()["entries"]] == [ADMIN[0]]

    def test_sort_by_email_descending(self, client: TestClient, admin_auth):
        response = client.get(PATH, params={"sort": "-email"}, headers=admin_auth)

        assert [entry["email"] for entry in response.json()["entries"]] == [
            MARY[0],
            JOHN[0],
            ADMIN[0],
        ]

    def test_customer_cannot_list(self, client: TestClient, customer_auth):
        assert client.get(PATH, headers=customer_auth).status_code == 403

    def test_customer_cannot_find_by_id(self, client: TestClient, customer_auth):
        john_id = user_id(client, JOHN)

        assert client.get(f"{PATH}/{john_id}", headers=customer_auth).status_code == 403
