"""User management CLI commands."""

import typer

from library_catalog.core.exceptions import LibraryError
from library_catalog.core.services import UserService
from library_catalog.entities import User, UserRepository, UserType

from .utils import console, open_database


def create_user(
    name: str = typer.Argument(..., help="Full name of the new user"),
    email: str = typer.Option(..., "--email", "-e", help="Email address"),
    password: str = typer.Option(
        ..., "--password", "-p", prompt=True, hide_input=True, help="Password"
    ),
    user_type: UserType = typer.Option(
        UserType.CUSTOMER, "--type", "-t", help="CUSTOMER or EMPLOYEE"
    ),
    admin: bool = typer.Option(
        False, "--admin", help="Grant the ADMIN role (employees only)"
    ),
) -> None:
    """Add a user to the catalog, including administrators."""
    if admin and user_type != UserType.EMPLOYEE:
        console.print("[red]❌ Only employees can be administrators[/red]")
        raise typer.Exit(code=1)

    database_service = open_database()
    try:
        with database_service.session_scope() as session:
            user = UserService(UserRepository(session)).add(
                User.from_payload(name=name, email=email, password=password, type=user_type),
                admin=admin,
            )
    except LibraryError as e:
        console.print(f"[red]❌ Failed to create user: {e}[/red]")
        raise typer.Exit(code=1) from e

    roles = ", ".join(str(role) for role in user.roles)
    console.print(
        f"[green]✅ Created user '{user.email}' with id {user.id} ({roles})[/green]"
    )
