"""Entity package: Category."""

from .entity import Category
from .repository import CategoryRepository
from .table import CategoryTable

__all__ = ["Category", "CategoryRepository", "CategoryTable"]
