from pathlib import Path

import pytest
from psycopg import sql

from account_activation.infrastructure.db import migrate
from account_activation.infrastructure.db.pool import with_connect_timeout
from account_activation.settings import Settings


def test_new_migration_creates_stub(tmp_path):
    path = migrate.new_migration("add_index", directory=tmp_path / "migrations")

    assert path.parent == tmp_path / "migrations"
    assert path.name.endswith("_add_index.sql")
    assert path.read_text(encoding="utf-8").startswith("--")


def test_cli_usage_errors(capsys):
    assert migrate.main(["migrate"]) == 2
    assert migrate.main(["migrate", "new"]) == 2
    assert migrate.main(["migrate", "down"]) == 2
    assert "unknown command: down" in capsys.readouterr().err


def test_connect_timeout_is_appended_once():
    assert (
        with_connect_timeout("postgresql://db/app", 3)
        == "postgresql://db/app?connect_timeout=3"
    )
    assert (
        with_connect_timeout("postgresql://db/app?sslmode=off", 3)
        == "postgresql://db/app?sslmode=off&connect_timeout=3"
    )
    dsn = "postgresql://db/app?connect_timeout=10"
    assert with_connect_timeout(dsn, 3) == dsn


MIGRATIONS = Path(__file__).resolve().parents[2] / "migrations"


@pytest.mark.parametrize(
    "path", sorted(MIGRATIONS.glob("*.sql")), ids=lambda p: p.name
)
def test_shipped_migrations_render(path):
    assert isinstance(migrate.render(path, Settings(_env_file=None)), sql.Composed)


def test_render_uses_configured_column_names():
    settings = Settings(_env_file=None, activation_token_column="act_token")

    rendered = migrate.render(MIGRATIONS / "0001_create_accounts.sql", settings)

    names = {repr(part) for part in rendered if isinstance(part, sql.Identifier)}
    assert "Identifier('act_token')" in names
    assert "Identifier('accounts_act_token_key')" in names
    assert "Identifier('activation_token')" not in names


def test_unknown_placeholder_is_reported(tmp_path):
    path = tmp_path / "0002_bad.sql"
    path.write_text("ALTER TABLE accounts ADD COLUMN {nope} text;", encoding="utf-8")

    with pytest.raises(ValueError, match="nope"):
        migrate.render(path, Settings(_env_file=None))
