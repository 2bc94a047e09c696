from library_catalog.entities._repository import EntityRepository
from library_catalog.entities.category.entity import Category
from library_catalog.entities.category.table import CategoryTable


class CategoryRepository(EntityRepository[Category, CategoryTable]):
    """Data-access layer for categories."""

    entity_type = Category
    table_type = CategoryTable
    sortable_fields = {"id": "id", "name": "name"}

    def name_exists(self, name: str, exclude_id: int | None = None) -> bool:
        return self.already_exists("name", name, exclude_id)
