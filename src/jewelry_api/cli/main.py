import asyncio
import logging
import typer
from tortoise.exceptions import IntegrityError

from jewelry_api.core.config import DATABASE_URL
from jewelry_api.core.store import RecordStore
from jewelry_api.features.auth.security import get_password_hash
from jewelry_api.features.auth.models import User as AuthUser
from jewelry_api.features.rates import service as rates_service

logger = logging.getLogger(__name__)

VALID_ROLES = ("admin", "superadmin", "worker")

app = typer.Typer(name="jewelry-cli", help="CLI for managing Jewelry Inventory application data.")


def _store() -> RecordStore:
    # The CLI may run before the API ever started, so it creates missing tables
    return RecordStore(DATABASE_URL, generate_schemas=True)


# User management commands
user_app = typer.Typer(name="users", help="Manage staff accounts.")
app.add_typer(user_app)

rates_app = typer.Typer(name="rates", help="Inspect metal rates.")
app.add_typer(rates_app)


@user_app.command("create-admin")
def create_admin_user_command(
    email: str = typer.Option(..., prompt=True, help="Email for the new admin."),
    name: str = typer.Option(..., prompt=True, help="Display name for the new admin."),
    password: str = typer.Option(..., prompt=True, hide_input=True, confirmation_prompt=True, help="Password for the new admin.")
):
    """Creates a new admin user, e.g. to bootstrap a fresh installation."""
    asyncio.run(_create_admin_user(email, name, password))


async def _create_admin_user(email: str, name: str, password: str):
    """Async implementation for creating an admin user."""
    async with _store():
        typer.echo(f"Attempting to create admin user: {name} ({email})...")
        if await AuthUser.filter(email=email).exists():
            typer.secho(f"Error: User with email '{email}' already exists.", fg=typer.colors.RED)
            raise typer.Exit(code=1)
        try:
            admin_user = await AuthUser.create(
                email=email,
                name=name,
                hashed_password=get_password_hash(password),
                role="admin",
            )
        except IntegrityError as e:
            typer.secho(f"Error creating admin user: {e}", fg=typer.colors.RED)
            raise typer.Exit(code=1)
        typer.secho(f"Admin user '{admin_user.email}' created successfully with ID: {admin_user.public_id}", fg=typer.colors.GREEN)


@user_app.command("set-role")
def set_user_role_command(
    email: str = typer.Argument(..., help="Email of the user to change."),
    role: str = typer.Argument(..., help="New role: admin, superadmin or worker."),
):
    """Changes the stored role of an existing user."""
    if role not in VALID_ROLES:
        typer.secho(f"Error: role must be one of {', '.join(VALID_ROLES)}.", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    asyncio.run(_set_user_role(email, role))


async def _set_user_role(email: str, role: str):
    async with _store():
        user = await AuthUser.get_or_none(email=email)
        if not user:
            typer.secho(f"Error: User with email '{email}' not found.", fg=typer.colors.RED)
            raise typer.Exit(code=1)
        if user.role == role:
            typer.secho(f"User '{email}' already has role '{role}'.", fg=typer.colors.YELLOW)
            raise typer.Exit(code=0)
        user.role = role
        await user.save()
        typer.secho(f"User '{email}' now has role '{role}'.", fg=typer.colors.GREEN)


@rates_app.command("show")
def show_rates_command():
    """Prints the current gold and silver rates, seeding defaults if none exist."""
    asyncio.run(_show_rates())


async def _show_rates():
    async with _store():
        rates = (await rates_service.get_rates()).rates
        typer.echo(f"gold:   {rates.gold.price:.2f} (updated {rates.gold.last_updated.isoformat()})")
        typer.echo(f"silver: {rates.silver.price:.2f} (updated {rates.silver.last_updated.isoformat()})")


@app.command("test-db-connection")
def test_db_connection_command_sync():
    """Tests the database connection and counts user accounts."""
    asyncio.run(test_db_connection_command())


async def test_db_connection_command():
    async with _store() as store:
        if not await store.ping():
            typer.secho("Could not reach the database.", fg=typer.colors.RED)
            raise typer.Exit(code=1)
        typer.echo("Successfully connected to the database.")
        user_count = await AuthUser.all().count()
        typer.echo(f"Found {user_count} user(s) in the database.")


if __name__ == "__main__":
    app()
