from loguru import logger

from library_catalog.core.exceptions import AlreadyExistsError, NotFoundError
from library_catalog.core.models import PaginatedData
from library_catalog.core.services.database.transaction import unit_of_work
from library_catalog.entities.category import Category, CategoryRepository


class CategoryService:
    def __init__(self, category_repository: CategoryRepository) -> None:
        self._categories = category_repository

    def add(self, category: Category) -> Category:
        self._validate(category)

        with unit_of_work(self._categories, conflict_field="name"):
            created = self._categories.create(category)
        logger.info("Category {} added with id {}", created.name, created.id)
        return created

    def update(self, category: Category) -> Category:
        category.validate_fields()
        if category.id is None or not self._categories.exists(category.id):
            raise NotFoundError("category", category.id)
        self._check_name_is_free(category)

        with unit_of_work(self._categories, conflict_field="name"):
            updated = self._categories.update(category)
        return updated

    def find_by_id(self, category_id: int) -> Category:
        category = self._categories.get(category_id)
        if category is None:
            raise NotFoundError("category", category_id)
        return category

    def find_all(self) -> PaginatedData[Category]:
        """Every category, in insertion order."""
        categories = self._categories.list_all(order_field="id")
        return PaginatedData(number_of_rows=len(categories), rows=categories)

    def _validate(self, category: Category) -> None:
        category.validate_fields()
        self._check_name_is_free(category)

    def _check_name_is_free(self, category: Category) -> None:
        if self._categories.name_exists(category.name, exclude_id=category.id):
            raise AlreadyExistsError("name")
