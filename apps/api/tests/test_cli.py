"""Tests for the administration CLI and schema migrations."""
import pytest
from click.testing import CliRunner
from sqlalchemy import inspect

from agentcrm.cli import cli
from agentcrm.core.migrations import get_migration_status, run_migrations
from agentcrm.db.base import Base
from agentcrm.db.session import create_db_engine


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'cli.sqlite'}"


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def invoke(runner: CliRunner, database_url: str, *args: str):
    return runner.invoke(cli, ["--database-url", database_url, *args])


# =============================================================================
# Migrations
# =============================================================================

def test_migrations_reach_head(database_url):
    engine = create_db_engine(database_url)
    try:
        assert not get_migration_status(engine).is_up_to_date

        status = run_migrations(engine)
        assert status.is_up_to_date
        assert status.current_heads == ("0001_initial_schema",)

        tables = set(inspect(engine).get_table_names())
        assert set(Base.metadata.tables) <= tables
    finally:
        engine.dispose()


def test_migrate_command(runner, database_url):
    result = invoke(runner, database_url, "migrate")
    assert result.exit_code == 0, result.output
    assert "0001_initial_schema" in result.output

    # Running again is a no-op
    result = invoke(runner, database_url, "migrate")
    assert result.exit_code == 0


# =============================================================================
# Principals
# =============================================================================

def test_init_db_then_create_principal(runner, database_url):
    result = invoke(runner, database_url, "init-db")
    assert result.exit_code == 0
    assert "Tables ready" in result.output

    result = invoke(
        runner, database_url,
        "create-principal", "--name", "Ops", "--email", "Ops@Example.com",
        "--role", "agent", "--api-key", "ops-key",
    )
    assert result.exit_code == 0, result.output
    assert "(agent)" in result.output
    assert "API key: ops-key" in result.output

    result = invoke(runner, database_url, "list-principals")
    assert result.exit_code == 0
    assert "agent\tops@example.com\tOps" in result.output
    assert "ops-key" not in result.output


def test_create_principal_generates_key(runner, database_url):
    invoke(runner, database_url, "init-db")
    result = invoke(runner, database_url, "create-principal", "--name", "Ops", "--email", "ops@example.com")
    assert result.exit_code == 0
    key_line = [line for line in result.output.splitlines() if "API key:" in line][0]
    assert len(key_line.split("API key: ")[1]) >= 32


def test_create_principal_duplicate_fails(runner, database_url):
    invoke(runner, database_url, "init-db")
    args = ("create-principal", "--name", "Ops", "--email", "ops@example.com", "--api-key", "k1")
    assert invoke(runner, database_url, *args).exit_code == 0

    result = invoke(runner, database_url, *args)
    assert result.exit_code == 1
    assert "already exists" in result.output


def test_create_principal_invalid_email(runner, database_url):
    invoke(runner, database_url, "init-db")
    result = invoke(runner, database_url, "create-principal", "--name", "Ops", "--email", "not-an-email")
    assert result.exit_code == 1
    assert "Invalid principal" in result.output


def test_list_principals_empty(runner, database_url):
    invoke(runner, database_url, "init-db")
    result = invoke(runner, database_url, "list-principals")
    assert result.output.strip() == "No principals registered"
