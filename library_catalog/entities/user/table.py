"""User database table model."""

from sqlmodel import Field

from library_catalog.entities._base import EntityTable


class UserTable(EntityTable, table=True):
    """Database persistence model for users.

    Roles are stored as a comma separated list.
    """

    __tablename__ = "lib_user"

    name: str = Field(max_length=40)
    email: str = Field(max_length=70, unique=True, index=True)
    password_hash: str
    type: str = Field(max_length=20)
    roles: str = Field(default="", max_length=100)
