"""Shared helpers for the CLI commands."""

from rich.console import Console

from library_catalog.core.services import DbManageService, DbSessionService
from library_catalog.runtime.context import get_config

console = Console()


def open_database() -> DbSessionService:
    """Connect to the configured database, creating missing tables."""
    database_service = DbSessionService()
    if get_config().database.create_tables:
        DbManageService(database_service.engine).create_all()
    return database_service
