from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from account_activation.domain.entities import Account


class ActivationMailerPort(Protocol):
    def supports(self, method: str) -> bool:
        """True if this mailer knows how to build the `method` email."""

    async def send(self, method: str, account: "Account") -> None:
        """Deliver the `method` email to the account. Fire-and-forget for callers."""
