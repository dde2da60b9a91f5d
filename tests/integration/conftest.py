# tests/integration/conftest.py
from pathlib import Path

import psycopg
import pytest
import pytest_asyncio

from account_activation.infrastructure.db.migrate import apply_migrations
from account_activation.infrastructure.redis_cache.pool import create_redis
from account_activation.settings import get_settings

MIGRATIONS = Path(__file__).resolve().parents[2] / "migrations"


@pytest.fixture(scope="session")
def migrated_db() -> str:
    settings = get_settings()
    with psycopg.connect(settings.database_url) as conn:
        apply_migrations(conn, directory=MIGRATIONS, settings=settings)
    return settings.database_url


@pytest_asyncio.fixture
async def redis_client():
    r = create_redis(get_settings())
    try:
        yield r
    finally:
        await r.aclose()


@pytest_asyncio.fixture
async def pg_conn(migrated_db):
    """
    A connection on an empty accounts table.
    The test controls its own transactions.
    """
    conn = await psycopg.AsyncConnection.connect(migrated_db)
    try:
        await conn.execute("TRUNCATE accounts;")
        await conn.commit()
        yield conn
    finally:
        await conn.rollback()
        await conn.close()
