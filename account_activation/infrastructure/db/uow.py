from __future__ import annotations

import logging
from types import TracebackType

import psycopg
from psycopg_pool import AsyncConnectionPool

from account_activation.domain.errors import PersistenceError
from account_activation.domain.ports.unit_of_work import UnitOfWorkPort
from account_activation.infrastructure.db.accounts_repo import (
    ActivationColumns,
    PgAccountRepository,
)

logger = logging.getLogger(__name__)


class PgUnitOfWork(UnitOfWorkPort):
    """
    Checks a connection out of the pool for each `async with` block.

    Anything not committed when the block ends is rolled back, so a
    workflow that raises between its reads and its commit leaves no trace.
    The same instance may be entered again later for a new transaction.
    """

    def __init__(
        self,
        pool: AsyncConnectionPool,
        *,
        columns: ActivationColumns | None = None,
    ) -> None:
        self._pool = pool
        self._columns = columns or ActivationColumns()
        self._conn: psycopg.AsyncConnection | None = None
        self._dirty = False
        self.accounts: PgAccountRepository

    async def __aenter__(self) -> PgUnitOfWork:
        self._conn = await self._pool.getconn()
        self._dirty = True
        self.accounts = PgAccountRepository(self._conn, columns=self._columns)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        conn, self._conn = self._conn, None
        if conn is None:
            return
        try:
            if self._dirty:
                await conn.rollback()
        except psycopg.Error:
            # putconn() discards a broken connection
            logger.warning("rollback on release failed", exc_info=True)
        finally:
            self._dirty = False
            await self._pool.putconn(conn)

    def _connection(self) -> psycopg.AsyncConnection:
        if self._conn is None:
            raise RuntimeError("unit of work used outside `async with`")
        return self._conn

    async def commit(self) -> None:
        try:
            await self._connection().commit()
        except psycopg.Error as e:
            raise PersistenceError(f"commit failed: {e}") from e
        self._dirty = False

    async def rollback(self) -> None:
        await self._connection().rollback()
        self._dirty = False
