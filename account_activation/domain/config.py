from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from account_activation.domain.errors import MailerMisconfigured
from account_activation.domain.ports.activation_mailer import ActivationMailerPort

ACTIVATION_NEEDED_EMAIL = "activation_needed_email"
ACTIVATION_SUCCESS_EMAIL = "activation_success_email"


@dataclass(frozen=True)
class ActivationConfig:
    """
    Process-wide activation settings. Built once at startup and passed
    explicitly into every operation; instances are immutable.

    A ``None`` email method disables that single email even when the
    mailer is enabled.
    """

    expiration_period: timedelta | None = None
    mailer_disabled: bool = False
    prevent_non_active_login: bool = True
    activation_needed_email_method: str | None = ACTIVATION_NEEDED_EMAIL
    activation_success_email_method: str | None = ACTIVATION_SUCCESS_EMAIL

    def __post_init__(self):
        if self.expiration_period is not None and self.expiration_period <= timedelta(
            0
        ):
            raise ValueError("expiration_period must be positive or None")

    def enabled_email_methods(self) -> tuple[str, ...]:
        if self.mailer_disabled:
            return ()
        methods = (
            self.activation_needed_email_method,
            self.activation_success_email_method,
        )
        return tuple(m for m in methods if m)


def ensure_mailer_configured(
    config: ActivationConfig, mailer: ActivationMailerPort | None
) -> None:
    """
    Fail fast when emails are enabled but nothing can send them.
    """
    if config.mailer_disabled:
        return
    if mailer is None:
        raise MailerMisconfigured(
            "activation emails are enabled but no mailer is configured "
            "(set ACTIVATION_MAILER_DISABLED=true to handle emails manually)"
        )
    for method in config.enabled_email_methods():
        if not mailer.supports(method):
            raise MailerMisconfigured(f"mailer cannot send {method!r}")
