from typing import Any

from sqlmodel import select

from library_catalog.core.models import PaginatedData, UserFilter
from library_catalog.entities._repository import EntityRepository
from library_catalog.entities.user.entity import User
from library_catalog.entities.user.table import UserTable


class UserRepository(EntityRepository[User, UserTable]):
    """Data-access layer for users.

    Password hashes stay in this layer: they are written through
    :meth:`create` / :meth:`update_password` and read through
    :meth:`get_password_hash` only.
    """

    entity_type = User
    table_type = UserTable
    sortable_fields = {
        "id": "id",
        "name": "name",
        "email": "email",
        "createdAt": "created_at",
    }

    def _to_entity(self, row: UserTable) -> User:
        return User.model_validate(
            {
                "id": row.id,
                "created_at": row.created_at,
                "name": row.name,
                "email": row.email,
                "type": row.type,
                "roles": [role for role in row.roles.split(",") if role],
            }
        )

    def _row_values(self, entity: User) -> dict[str, Any]:
        return {
            "name": entity.name,
            "email": entity.email,
            "type": str(entity.type),
            "roles": ",".join(str(role) for role in entity.roles),
        }

    def create(self, entity: User, password_hash: str = "") -> User:
        return self._insert(
            UserTable(**self._row_values(entity), password_hash=password_hash)
        )

    def update(self, entity: User) -> User:
        """Update name and email; type, roles and password are left untouched."""
        row = self._session.get(UserTable, entity.id)
        if row is None:
            raise ValueError(f"UserTable {entity.id} not found")
        row.name = entity.name
        row.email = entity.email
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return self._to_entity(row)

    def update_password(self, user_id: int, password_hash: str) -> None:
        row = self._session.get(UserTable, user_id)
        if row is None:
            raise ValueError(f"UserTable {user_id} not found")
        row.password_hash = password_hash
        self._session.add(row)
        self._session.flush()

    def email_exists(self, email: str, exclude_id: int | None = None) -> bool:
        return self.already_exists("email", email, exclude_id)

    def find_by_email(self, email: str) -> User | None:
        row = self._session.exec(select(UserTable).where(UserTable.email == email)).first()
        if row is None:
            return None
        return self._to_entity(row)

    def get_password_hash(self, email: str) -> str | None:
        row = self._session.exec(select(UserTable).where(UserTable.email == email)).first()
        if row is None:
            return None
        return row.password_hash

    def find_by_filter(self, user_filter: UserFilter) -> PaginatedData[User]:
        statement = select(UserTable)
        if user_filter.name:
            statement = statement.where(self._contains(UserTable.name, user_filter.name))
        if user_filter.type:
            statement = statement.where(UserTable.type == user_filter.type)
        return self._paginate(statement, user_filter.pagination)
