from __future__ import annotations

from types import TracebackType
from typing import Protocol

from account_activation.domain.ports.account_repository import AccountRepositoryPort


class UnitOfWorkPort(Protocol):
    """
    One transaction per `async with` block; `accounts` is only usable inside.

        async with uow:
            account = await uow.accounts.find_by_activation_token(token)
            await uow.accounts.save(account, validate=False)
            await uow.commit()

    Whatever was not committed when the block exits is rolled back.
    """

    accounts: AccountRepositoryPort

    async def __aenter__(self) -> UnitOfWorkPort: ...

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...
