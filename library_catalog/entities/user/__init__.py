"""User entity module.

This module contains all User-related classes organized by responsibility:
- User: Domain entity with its roles and field constraints
- UserTable: Database persistence model
- UserRepository: Data access layer
"""

from .entity import Role, User, UserType, roles_for_type
from .repository import UserRepository
from .table import UserTable

__all__ = ["Role", "User", "UserRepository", "UserTable", "UserType", "roles_for_type"]
