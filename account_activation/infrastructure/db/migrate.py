"""
Plain-SQL migrations.

Files in MIGRATIONS_DIR are applied in name order, once each, tracked in
``schema_migrations``. The activation columns are configurable, so
migration files refer to them as ``{activation_state}``,
``{activation_token}`` and ``{activation_token_expires_at}``; they are
rendered as quoted identifiers from settings before execution. Literal
braces must be doubled.

    python -m account_activation.infrastructure.db.migrate up|status|new <name>
"""

from __future__ import annotations

import os
import sys
from datetime import datetime, timezone
from pathlib import Path

import psycopg
from psycopg import sql

from account_activation.settings import Settings, get_settings

MIGRATIONS_DIR = Path(os.environ.get("MIGRATIONS_DIR", "migrations"))
SCHEMA_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS schema_migrations (
  version    text PRIMARY KEY,
  applied_at timestamptz NOT NULL DEFAULT now()
);
"""


def render(path: Path, settings: Settings) -> sql.Composed:
    names = {
        "activation_state": settings.activation_state_column,
        "activation_token": settings.activation_token_column,
        "activation_token_expires_at": settings.activation_token_expires_at_column,
    }
    identifiers = {key: sql.Identifier(value) for key, value in names.items()}
    # index names derive from the token column so renamed schemas stay unique
    identifiers["activation_token_index"] = sql.Identifier(
        f"accounts_{settings.activation_token_column}_key"
    )
    try:
        return sql.SQL(path.read_text(encoding="utf-8")).format(**identifiers)
    except KeyError as e:
        raise ValueError(f"{path.name}: unknown placeholder {e}") from e


def applied_versions(conn: psycopg.Connection) -> set[str]:
    with conn.cursor() as cur:
        cur.execute(SCHEMA_TABLE_SQL)
        cur.execute("SELECT version FROM schema_migrations;")
        return {row[0] for row in cur.fetchall()}


def apply_migrations(
    conn: psycopg.Connection,
    *,
    directory: Path = MIGRATIONS_DIR,
    settings: Settings | None = None,
) -> list[str]:
    """Apply pending migrations, one transaction each. Returns applied versions."""
    settings = settings or get_settings()
    if not directory.is_dir():
        raise FileNotFoundError(f"migrations dir not found: {directory}")

    done = applied_versions(conn)
    conn.commit()

    applied: list[str] = []
    for path in sorted(directory.glob("*.sql")):
        if path.stem in done:
            continue
        with conn.transaction():
            conn.execute(render(path, settings))
            conn.execute(
                "INSERT INTO schema_migrations (version) VALUES (%s);", (path.stem,)
            )
        applied.append(path.stem)
    return applied


def new_migration(name: str, directory: Path = MIGRATIONS_DIR) -> Path:
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M")
    path = directory / f"{stamp}_{name}.sql"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("-- write your SQL here\n", encoding="utf-8")
    return path


def _status(conn: psycopg.Connection) -> None:
    done = applied_versions(conn)
    print("=== Applied ===")
    for version in sorted(done):
        print(version)
    print("=== Pending ===")
    for path in sorted(MIGRATIONS_DIR.glob("*.sql")):
        if path.stem not in done:
            print(path.stem)


def main(argv: list[str]) -> int:
    usage = "usage: python -m account_activation.infrastructure.db.migrate [up|status|new <name>]"
    if len(argv) < 2:
        print(usage, file=sys.stderr)
        return 2

    cmd = argv[1]
    if cmd == "new":
        if len(argv) < 3:
            print("usage: ... new <name>", file=sys.stderr)
            return 2
        print(new_migration(argv[2]))
        return 0
    if cmd not in ("up", "status"):
        print(f"unknown command: {cmd}", file=sys.stderr)
        return 2

    try:
        with psycopg.connect(get_settings().database_url) as conn:
            if cmd == "status":
                _status(conn)
                return 0
            applied = apply_migrations(conn)
    except (psycopg.Error, FileNotFoundError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    for version in applied:
        print(f"applied {version}")
    if not applied:
        print("No pending migrations.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv))
