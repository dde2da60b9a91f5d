from psycopg_pool import AsyncConnectionPool

from account_activation.settings import Settings


def with_connect_timeout(dsn: str, seconds: int) -> str:
    if "connect_timeout=" in dsn:
        return dsn
    return f"{dsn}{'&' if '?' in dsn else '?'}connect_timeout={seconds}"


def create_pool(settings: Settings) -> AsyncConnectionPool:
    """Build the application pool, closed. The lifespan opens it."""
    return AsyncConnectionPool(
        with_connect_timeout(settings.database_url, settings.db_connect_timeout_seconds),
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
        timeout=settings.db_pool_timeout_seconds,
        open=False,
    )
