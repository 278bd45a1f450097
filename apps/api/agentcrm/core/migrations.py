"""Database migration utilities for the CLI and startup checks."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy import inspect
from sqlalchemy.engine import Connection, Engine

ALEMBIC_VERSION_TABLE = "alembic_version"


@dataclass(frozen=True)
class MigrationStatus:
    current_heads: tuple[str, ...]
    head_revisions: tuple[str, ...]
    is_up_to_date: bool


class MigrationError(RuntimeError):
    """Raised when migrations fail to reach head."""


def get_alembic_config(database_url: str) -> Config:
    api_root = Path(__file__).resolve().parents[2]
    alembic_ini = api_root / "alembic.ini"
    if not alembic_ini.is_file():
        raise FileNotFoundError(f"Alembic config not found at {alembic_ini}")
    config = Config(str(alembic_ini))
    config.set_main_option("script_location", str(api_root / "alembic"))
    config.set_main_option("sqlalchemy.url", database_url)
    # Keep the application's logging setup when run in-process
    config.attributes["configure_logger"] = False
    return config


def _tuple_or_empty(values: Iterable[str] | None) -> tuple[str, ...]:
    if not values:
        return ()
    return tuple(values)


def _current_heads(connection: Connection) -> tuple[str, ...]:
    inspector = inspect(connection)
    if ALEMBIC_VERSION_TABLE not in inspector.get_table_names():
        return ()

    context = MigrationContext.configure(connection)
    return _tuple_or_empty(context.get_current_heads())


def get_migration_status(engine: Engine) -> MigrationStatus:
    config = get_alembic_config(engine.url.render_as_string(hide_password=False))
    script = ScriptDirectory.from_config(config)
    head_revisions = _tuple_or_empty(script.get_heads())

    with engine.connect() as connection:
        current_heads = _current_heads(connection)

    is_up_to_date = set(current_heads) == set(head_revisions)
    return MigrationStatus(
        current_heads=current_heads,
        head_revisions=head_revisions,
        is_up_to_date=is_up_to_date,
    )


def run_migrations(engine: Engine) -> MigrationStatus:
    """Upgrade the database behind engine to head and return the new status."""
    config = get_alembic_config(engine.url.render_as_string(hide_password=False))
    with engine.connect() as connection:
        config.attributes["connection"] = connection
        command.upgrade(config, "head")
        if connection.in_transaction():
            connection.commit()

    status = get_migration_status(engine)
    if not status.is_up_to_date:
        raise MigrationError("Database migrations did not reach head after upgrade.")
    return status
