from __future__ import annotations

from typing import Any, Literal, Optional, Protocol

from account_activation.domain.entities import Account

# Logical account fields; storage adapters map them to their own columns.
AccountField = Literal[
    "id",
    "email",
    "activation_state",
    "activation_token",
    "activation_token_expires_at",
]


class AccountRepositoryPort(Protocol):
    async def save(self, account: Account, *, validate: bool = True) -> Account:
        """
        Insert the account when it has no id yet, update it otherwise.
        Returns the same instance, with its id assigned on insert.
        With validate=True, run Account.validate() first.
        Raise PersistenceError when the write fails (never fail silently),
        AccountAlreadyExists on a duplicate email.
        """

    async def find_by_exact_field(
        self, field: AccountField, value: Any, *, for_update: bool = False
    ) -> Optional[Account]:
        """
        Exact, case-sensitive equality lookup on one logical field.
        With `for_update` the row stays locked until the transaction ends.
        """

    async def find_by_activation_token(self, token: str) -> Optional[Account]:
        """
        Fetch the account carrying `token` and lock the row for update
        (transaction-scoped), so a concurrent activation waits and then
        no longer matches once the token is cleared.
        """

    async def get_by_email(self, email: str) -> Optional[Account]:
        """Return None if not found."""

    async def get_by_id(self, account_id: str) -> Optional[Account]:
        """Return None if not found."""
