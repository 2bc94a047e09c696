"""Main CLI application module."""

import typer

from .db_commands import init_db, seed
from .server_commands import serve
from .user_commands import create_user

# Create the main CLI application
app = typer.Typer(
    help="📚 Library Catalog CLI - server and database management",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command(name="serve")(serve)
app.command(name="init-db")(init_db)
app.command(name="seed")(seed)
app.command(name="create-user")(create_user)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
