"""Database CLI commands."""

import typer
from rich.table import Table

from library_catalog.core.exceptions import LibraryError
from library_catalog.core.services import DbManageService, DbSessionService
from library_catalog.core.services.database.db_seed import DbSeedService

from .utils import console, open_database

SEED_GROUPS = ("users", "categories", "authors", "books")


def init_db(
    drop: bool = typer.Option(
        False, "--drop", help="Drop every catalog table before creating them"
    ),
) -> None:
    """Create the catalog tables in the configured database."""
    database_service = DbSessionService()
    manager = DbManageService(database_service.engine)
    if drop:
        if not typer.confirm("This deletes the whole catalog. Continue?"):
            console.print("[yellow]Cancelled[/yellow]")
            raise typer.Exit()
        manager.drop_all()
    manager.create_all()
    console.print("[green]✅ Database tables created[/green]")


def seed(
    only: list[str] = typer.Option(
        [], "--only", "-o", help=f"Seed only these groups: {', '.join(SEED_GROUPS)}"
    ),
    wipe: bool = typer.Option(False, "--wipe", help="Delete the whole catalog first"),
) -> None:
    """Load the known seed users, categories, authors and books."""
    unknown = [group for group in only if group not in SEED_GROUPS]
    if unknown:
        console.print(f"[red]❌ Unknown seed groups: {', '.join(unknown)}[/red]")
        raise typer.Exit(code=1)

    groups = [group for group in SEED_GROUPS if not only or group in only]
    database_service = open_database()

    table = Table(title="Seeded catalog data")
    table.add_column("Group", style="cyan")
    table.add_column("Rows", style="green", justify="right")

    try:
        with database_service.session_scope() as session:
            seeder = DbSeedService(session)
            if wipe:
                seeder.delete_all()
            for group in groups:
                rows = getattr(seeder, f"seed_{group}")()
                table.add_row(group, str(len(rows)))
    except LibraryError as e:
        console.print(f"[red]❌ Seeding failed: {e}[/red]")
        raise typer.Exit(code=1) from e

    console.print(table)
