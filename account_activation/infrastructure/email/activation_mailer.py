from __future__ import annotations

from dataclasses import dataclass

from account_activation.domain.config import (
    ACTIVATION_NEEDED_EMAIL,
    ACTIVATION_SUCCESS_EMAIL,
)
from account_activation.domain.entities import Account
from account_activation.domain.ports.activation_mailer import ActivationMailerPort
from account_activation.domain.ports.email_port import EmailPort


@dataclass(frozen=True)
class EmailTemplate:
    subject: str
    body: str

    def render(self, account: Account) -> tuple[str, str]:
        context = {
            "email": account.email,
            "token": account.activation_token or "",
        }
        return self.subject.format(**context), self.body.format(**context)


DEFAULT_TEMPLATES: dict[str, EmailTemplate] = {
    ACTIVATION_NEEDED_EMAIL: EmailTemplate(
        subject="Activate your account",
        body="Welcome {email}! Your activation token is {token}",
    ),
    ACTIVATION_SUCCESS_EMAIL: EmailTemplate(
        subject="Your account is active",
        body="Hi {email}, your account has been activated.",
    ),
}


class EmailActivationMailer(ActivationMailerPort):
    """
    Turns an activation email method name into a rendered email and hands
    it to the EmailPort.
    """

    def __init__(
        self,
        email: EmailPort,
        *,
        templates: dict[str, EmailTemplate] | None = None,
    ) -> None:
        self._email = email
        self._templates = dict(DEFAULT_TEMPLATES if templates is None else templates)

    def supports(self, method: str) -> bool:
        return method in self._templates

    async def send(self, method: str, account: Account) -> None:
        try:
            template = self._templates[method]
        except KeyError:
            raise ValueError(f"no email template for {method!r}") from None
        subject, body = template.render(account)
        # the relay drops duplicates, e.g. two racing activations of one token
        key = f"{method}:{account.id}:{account.activation_token or 'done'}"
        await self._email.send(
            to=account.email, subject=subject, body=body, idempotency_key=key
        )

    async def aclose(self) -> None:
        await self._email.aclose()
