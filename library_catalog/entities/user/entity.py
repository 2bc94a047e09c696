"""User domain entity."""

from datetime import datetime
from enum import StrEnum

from pydantic import Field

from library_catalog.entities._base import Entity

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UserType(StrEnum):
    CUSTOMER = "CUSTOMER"
    EMPLOYEE = "EMPLOYEE"


class Role(StrEnum):
    CUSTOMER = "CUSTOMER"
    EMPLOYEE = "EMPLOYEE"
    ADMIN = "ADMIN"


def roles_for_type(user_type: UserType, admin: bool = False) -> list[Role]:
    """Roles granted to a new user of the given type."""
    if user_type == UserType.CUSTOMER:
        return [Role.CUSTOMER]
    roles = [Role.EMPLOYEE]
    if admin:
        roles.append(Role.ADMIN)
    return roles


class User(Entity):
    """User entity representing a library customer or employee.

    ``password`` only ever holds a clear-text password received from a
    client; it is never loaded back from the store.
    """

    created_at: datetime | None = Field(default=None, description="Registration time")
    name: str = Field(min_length=3, max_length=40, description="User's full name")
    email: str = Field(max_length=70, pattern=EMAIL_PATTERN, description="Login email")
    password: str | None = Field(
        default=None, min_length=6, max_length=128, description="Clear-text password"
    )
    type: UserType = Field(description="Customer or employee")
    roles: list[Role] = Field(default_factory=list, description="Granted roles")

    def has_role(self, role: Role | str) -> bool:
        return Role(role) in self.roles

    def is_admin(self) -> bool:
        return self.has_role(Role.ADMIN)
