"""CLI tools for AgentCRM administration."""

import click
from pydantic import ValidationError as PydanticValidationError

from agentcrm.core.config import settings
from agentcrm.core.errors import CRMError
from agentcrm.core.migrations import MigrationError, run_migrations
from agentcrm.core.security import generate_api_key
from agentcrm.db.base import Base
from agentcrm.db.enums import Role
from agentcrm.db.session import build_session_factory, create_db_engine
from agentcrm.schemas.principal import PrincipalCreate
from agentcrm.services import principal_service

import agentcrm.db.models  # noqa: F401  (registers every table on Base.metadata)


@click.group()
@click.option(
    "--database-url",
    default=lambda: settings.DATABASE_URL,
    show_default="DATABASE_URL",
    help="Database to operate on",
)
@click.pass_context
def cli(ctx: click.Context, database_url: str):
    """AgentCRM CLI tools."""
    ctx.obj = create_db_engine(database_url)


@cli.command("init-db")
@click.pass_obj
def init_db(engine):
    """
    Create any missing tables straight from the model metadata.

    Handy for local development; use `migrate` for managed databases.
    """
    Base.metadata.create_all(engine)
    click.echo(f"✓ Tables ready ({len(Base.metadata.tables)} total)")


@cli.command()
@click.pass_obj
def migrate(engine):
    """Upgrade the database schema to the latest alembic revision."""
    try:
        status = run_migrations(engine)
    except MigrationError as e:
        click.echo(f"❌ {e}")
        raise SystemExit(1)
    click.echo(f"✓ Database at revision {', '.join(status.current_heads)}")


@cli.command("create-principal")
@click.option("--name", required=True, help="Display name")
@click.option("--email", required=True, help="Email address (unique)")
@click.option(
    "--role",
    type=click.Choice([r.value for r in Role]),
    default=Role.ADMIN.value,
    show_default=True,
    help="Principal role",
)
@click.option("--api-key", default=None, help="API key to use (generated when omitted)")
@click.pass_obj
def create_principal(engine, name: str, email: str, role: str, api_key: str | None):
    """
    Register a principal and print its API key.

    This is the bootstrap command for a fresh install.

    Example:
        python -m agentcrm.cli create-principal --name "Ops" --email ops@example.com
    """
    try:
        data = PrincipalCreate(
            name=name,
            email=email,
            role=role,
            api_key=api_key or generate_api_key(),
        )
    except PydanticValidationError as e:
        click.echo(f"❌ Invalid principal: {e.errors()[0]['msg']}")
        raise SystemExit(1)
    db = build_session_factory(engine)()
    try:
        principal = principal_service.register_principal(
            db,
            name=data.name,
            email=data.email,
            role=data.role,
            api_key=data.api_key,
        )
    except CRMError as e:
        click.echo(f"❌ {e.message}")
        raise SystemExit(1)
    finally:
        db.close()

    click.echo(f"✓ Created principal {principal.id} ({principal.role})")
    click.echo(f"  API key: {data.api_key}")


@cli.command("list-principals")
@click.pass_obj
def list_principals(engine):
    """List registered principals (keys are not shown)."""
    db = build_session_factory(engine)()
    try:
        principals = principal_service.list_principals(db)
    finally:
        db.close()

    if not principals:
        click.echo("No principals registered")
        return
    for principal in principals:
        click.echo(f"{principal.id}\t{principal.role}\t{principal.email}\t{principal.name}")


if __name__ == "__main__":
    cli()
