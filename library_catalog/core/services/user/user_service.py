"""User registration, profile maintenance and authentication."""

from loguru import logger

from library_catalog.core.exceptions import (
    AlreadyExistsError,
    FieldNotValidError,
    NotFoundError,
)
from library_catalog.core.models import PaginatedData, UserFilter
from library_catalog.core.security import hash_password, verify_password
from library_catalog.core.services.database.transaction import unit_of_work
from library_catalog.entities.user import User, UserRepository
from library_catalog.entities.user.entity import roles_for_type

# Fields the store assigns or derives, never taken from a request
_DERIVED_FIELDS = {"created_at", "roles"}

_PASSWORD_MIN_LENGTH = 6
_PASSWORD_MAX_LENGTH = 128


class UserService:
    def __init__(self, user_repository: UserRepository) -> None:
        self._users = user_repository

    def add(self, user: User, admin: bool = False) -> User:
        """Register a user; ``admin`` grants ADMIN on top of the EMPLOYEE role."""
        user.validate_fields(exclude=_DERIVED_FIELDS)
        self._check_password(user.password)
        self._check_email_is_free(user)

        user = user.model_copy(update={"roles": roles_for_type(user.type, admin=admin)})
        with unit_of_work(self._users, conflict_field="email"):
            created = self._users.create(user, password_hash=hash_password(user.password))  # type: ignore[arg-type]
        logger.info("User {} registered as {}", created.email, created.type)
        return created

    def update(self, user: User) -> User:
        """Change name and email; type, roles and password are kept."""
        user.validate_fields(exclude=_DERIVED_FIELDS | {"password", "type"})
        if user.id is None or not self._users.exists(user.id):
            raise NotFoundError("user", user.id)
        self._check_email_is_free(user)

        with unit_of_work(self._users, conflict_field="email"):
            updated = self._users.update(user)
        return updated

    def update_password(self, user_id: int, password: str | None) -> None:
        self._check_password(password)
        if not self._users.exists(user_id):
            raise NotFoundError("user", user_id)

        with unit_of_work(self._users):
            self._users.update_password(user_id, hash_password(password))  # type: ignore[arg-type]
        logger.info("Password changed for user {}", user_id)

    def find_by_id(self, user_id: int) -> User:
        user = self._users.get(user_id)
        if user is None:
            raise NotFoundError("user", user_id)
        return user

    def find_by_email(self, email: str) -> User:
        user = self._users.find_by_email(email)
        if user is None:
            raise NotFoundError("user", email)
        return user

    def find_by_email_and_password(self, email: str, password: str) -> User:
        """Authenticate a user; unknown email and wrong password look the same."""
        password_hash = self._users.get_password_hash(email)
        if password_hash is None or not verify_password(password, password_hash):
            raise NotFoundError("user", email)
        return self.find_by_email(email)

    def find_by_filter(self, user_filter: UserFilter) -> PaginatedData[User]:
        if not self._users.supports_sort(user_filter.pagination.order_field):
            raise FieldNotValidError("sort", "unknown sort field")
        return self._users.find_by_filter(user_filter)

    def _check_password(self, password: str | None) -> None:
        if not password:
            raise FieldNotValidError("password", "may not be null")
        if not _PASSWORD_MIN_LENGTH <= len(password) <= _PASSWORD_MAX_LENGTH:
            raise FieldNotValidError(
                "password",
                f"size must be between {_PASSWORD_MIN_LENGTH} and {_PASSWORD_MAX_LENGTH}",
            )

    def _check_email_is_free(self, user: User) -> None:
        if self._users.email_exists(user.email, exclude_id=user.id):
            raise AlreadyExistsError("email")
