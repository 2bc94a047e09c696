"""Shared data-access behaviour for the catalog entities."""

from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import func
from sqlmodel import Session, col, select
from sqlmodel.sql.expression import SelectOfScalar

from library_catalog.core.models import PaginatedData, PaginationData
from library_catalog.entities._base import Entity, EntityTable

EntityT = TypeVar("EntityT", bound=Entity)
TableT = TypeVar("TableT", bound=EntityTable)

# Identifiers are stored as signed 64-bit integers
MAX_ID = 2**63 - 1


class EntityRepository(Generic[EntityT, TableT]):
    """Data-access layer mapping one table to one domain entity.

    Repositories never commit on their own; the service owning the unit of
    work calls :meth:`commit` once the whole operation succeeded.
    """

    entity_type: ClassVar[type[Entity]]
    table_type: ClassVar[type[EntityTable]]
    # Wire name of a sort field -> table attribute
    sortable_fields: ClassVar[dict[str, str]] = {"id": "id"}

    def __init__(self, session: Session) -> None:
        self._session = session

    def _to_entity(self, row: TableT) -> EntityT:
        return self.entity_type.model_validate(row, from_attributes=True)  # type: ignore[return-value]

    def _row_values(self, entity: EntityT) -> dict[str, Any]:
        return entity.model_dump(exclude={"id"})

    def create(self, entity: EntityT) -> EntityT:
        return self._insert(self.table_type(**self._row_values(entity)))

    def _insert(self, row: EntityTable) -> EntityT:
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return self._to_entity(row)  # type: ignore[arg-type]

    def update(self, entity: EntityT) -> EntityT:
        row = self._session.get(self.table_type, entity.id)
        if row is None:
            raise ValueError(f"{self.table_type.__name__} {entity.id} not found")
        for name, value in self._row_values(entity).items():
            setattr(row, name, value)
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return self._to_entity(row)  # type: ignore[arg-type]

    def get(self, entity_id: int) -> EntityT | None:
        if not 0 < entity_id <= MAX_ID:
            return None
        row = self._session.get(self.table_type, entity_id)
        if row is None:
            return None
        return self._to_entity(row)  # type: ignore[arg-type]

    def exists(self, entity_id: int) -> bool:
        if not 0 < entity_id <= MAX_ID:
            return False
        return self._session.get(self.table_type, entity_id) is not None

    def already_exists(
        self, field_name: str, value: Any, exclude_id: int | None = None
    ) -> bool:
        """Tell whether another row already holds ``value`` in ``field_name``."""
        statement = (
            select(func.count())
            .select_from(self.table_type)
            .where(getattr(self.table_type, field_name) == value)
        )
        if exclude_id is not None:
            statement = statement.where(col(self.table_type.id) != exclude_id)
        return self._session.exec(statement).one() > 0

    def list_all(self, order_field: str = "id") -> list[EntityT]:
        statement = select(self.table_type).order_by(
            getattr(self.table_type, order_field), col(self.table_type.id)
        )
        return [self._to_entity(row) for row in self._session.exec(statement).all()]  # type: ignore[arg-type]

    def count(self) -> int:
        return self._session.exec(select(func.count()).select_from(self.table_type)).one()

    def delete_all(self) -> int:
        rows = self._session.exec(select(self.table_type)).all()
        for row in rows:
            self._session.delete(row)
        self._session.flush()
        return len(rows)

    @staticmethod
    def _contains(column: Any, text: str) -> Any:
        """Case-insensitive substring match; ``%`` and ``_`` in ``text`` match themselves."""
        escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        return col(column).ilike(f"%{escaped}%", escape="\\")

    def supports_sort(self, order_field: str) -> bool:
        return order_field in self.sortable_fields

    def commit(self) -> None:
        self._session.commit()

    def rollback(self) -> None:
        self._session.rollback()

    def _paginate(
        self, statement: SelectOfScalar, pagination: PaginationData
    ) -> PaginatedData[EntityT]:
        """Count the rows matched by ``statement`` then fetch the requested page."""
        total = self._session.exec(
            select(func.count()).select_from(statement.subquery())
        ).one()

        order_column = col(
            getattr(self.table_type, self.sortable_fields[pagination.order_field])
        )
        ordering = order_column.asc() if pagination.is_ascending() else order_column.desc()
        page = (
            statement.order_by(ordering, col(self.table_type.id))
            .offset(pagination.first_result)
            .limit(pagination.max_results)
        )
        rows = [self._to_entity(row) for row in self._session.exec(page).all()]  # type: ignore[arg-type]
        return PaginatedData(number_of_rows=total, rows=rows)
