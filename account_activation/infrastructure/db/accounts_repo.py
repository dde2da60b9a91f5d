from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import psycopg
from psycopg import sql

from account_activation.domain.entities import Account
from account_activation.domain.errors import AccountAlreadyExists, PersistenceError
from account_activation.domain.ports.account_repository import (
    AccountField,
    AccountRepositoryPort,
)

EMAIL_UNIQUE_CONSTRAINT = "accounts_email_key"


@dataclass(frozen=True)
class ActivationColumns:
    """Physical column names of the three activation fields."""

    state: str = "activation_state"
    token: str = "activation_token"
    expires_at: str = "activation_token_expires_at"

    @classmethod
    def from_settings(cls, settings) -> "ActivationColumns":
        return cls(
            state=settings.activation_state_column,
            token=settings.activation_token_column,
            expires_at=settings.activation_token_expires_at_column,
        )

    def column_for(self, field: AccountField) -> str:
        columns = {
            "id": "id",
            "email": "email",
            "activation_state": self.state,
            "activation_token": self.token,
            "activation_token_expires_at": self.expires_at,
        }
        try:
            return columns[field]
        except KeyError:
            raise ValueError(f"unknown account field: {field!r}") from None


class PgAccountRepository(AccountRepositoryPort):
    """
    Postgres implementation of AccountRepositoryPort.

    NOTE:
    - This repo is constructed with an *active async connection* supplied by the UoW.
    - It does not commit; the UnitOfWork controls the transaction boundary.
    - Driver errors are re-raised as PersistenceError.
    """

    def __init__(
        self,
        conn: psycopg.AsyncConnection,
        *,
        columns: ActivationColumns | None = None,
    ) -> None:
        self._conn = conn
        self._columns = columns or ActivationColumns()

    def _activation_identifiers(self) -> dict[str, sql.Identifier]:
        return {
            "state": sql.Identifier(self._columns.state),
            "token": sql.Identifier(self._columns.token),
            "expires_at": sql.Identifier(self._columns.expires_at),
        }

    def _select(self) -> sql.Composed:
        return sql.SQL(
            "SELECT id, email, password_hash, auth_provider, "
            "{state}, {token}, {expires_at} FROM accounts"
        ).format(**self._activation_identifiers())

    async def save(self, account: Account, *, validate: bool = True) -> Account:
        if validate:
            account.validate()

        state = account.activation_state.value if account.activation_state else None
        values = (
            account.email,
            account.password_hash,
            account.auth_provider,
            state,
            account.activation_token,
            account.activation_token_expires_at,
        )
        try:
            async with self._conn.cursor() as cur:
                if account.id is None:
                    query = sql.SQL(
                        """
                        INSERT INTO accounts
                            (email, password_hash, auth_provider,
                             {state}, {token}, {expires_at})
                        VALUES (%s, %s, %s, %s, %s, %s)
                        RETURNING id
                        """
                    ).format(**self._activation_identifiers())
                    await cur.execute(query, values)
                    row = await cur.fetchone()
                    if not row:
                        raise PersistenceError("insert returned no row")
                    account.id = str(row[0])
                else:
                    query = sql.SQL(
                        """
                        UPDATE accounts
                        SET email = %s,
                            password_hash = %s,
                            auth_provider = %s,
                            {state} = %s,
                            {token} = %s,
                            {expires_at} = %s,
                            updated_at = now()
                        WHERE id = %s
                        """
                    ).format(**self._activation_identifiers())
                    await cur.execute(query, (*values, account.id))
                    if cur.rowcount != 1:
                        raise PersistenceError(f"account {account.id} not found")
        except psycopg.errors.UniqueViolation as e:
            if e.diag.constraint_name == EMAIL_UNIQUE_CONSTRAINT:
                raise AccountAlreadyExists(account.email) from e
            raise PersistenceError(str(e)) from e
        except psycopg.Error as e:
            raise PersistenceError(str(e)) from e
        return account

    async def find_by_exact_field(
        self, field: AccountField, value: Any, *, for_update: bool = False
    ) -> Optional[Account]:
        column = sql.Identifier(self._columns.column_for(field))
        query = self._select() + sql.SQL(" WHERE {} = %s").format(column)
        if for_update:
            query += sql.SQL(" FOR UPDATE")
        try:
            async with self._conn.cursor() as cur:
                await cur.execute(query, (value,))
                row = await cur.fetchone()
        except psycopg.Error as e:
            raise PersistenceError(str(e)) from e
        return _to_account(row) if row else None

    async def find_by_activation_token(self, token: str) -> Optional[Account]:
        if not token:
            return None
        return await self.find_by_exact_field(
            "activation_token", token, for_update=True
        )

    async def get_by_email(self, email: str) -> Optional[Account]:
        return await self.find_by_exact_field("email", email.strip().lower())

    async def get_by_id(self, account_id: str) -> Optional[Account]:
        return await self.find_by_exact_field("id", account_id)


def _to_account(row: tuple) -> Account:
    (
        id_,
        db_email,
        db_password_hash,
        db_auth_provider,
        db_state,
        db_token,
        db_expires_at,
    ) = row
    return Account(
        id=str(id_),
        email=str(db_email),
        password_hash=db_password_hash,
        auth_provider=db_auth_provider,
        activation_state=db_state,
        activation_token=db_token,
        activation_token_expires_at=db_expires_at,
    )
