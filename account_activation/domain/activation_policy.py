"""
Activation rules over an Account and the ActivationConfig.

Everything here is pure: functions only read the config and mutate the
account object they are given. Persistence and emails belong to
ActivationWorkflow.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

import account_activation.domain.services as domain_services
from account_activation.domain.config import ActivationConfig
from account_activation.domain.entities import Account, ActivationState
from account_activation.domain.errors import DenialReason


class TokenValidation(Enum):
    VALID = "valid"
    EXPIRED = "expired"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class LoginCheck:
    allowed: bool
    reason: DenialReason | None = None

    @classmethod
    def allow(cls) -> "LoginCheck":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: DenialReason) -> "LoginCheck":
        return cls(allowed=False, reason=reason)


def issue_token(
    account: Account, config: ActivationConfig, *, now: datetime | None = None
) -> str:
    """
    Attach a fresh token and put the account in the pending state.

    The expiry is fixed here, from the period configured at issuance.
    """
    token = domain_services.generate_activation_token()
    account.activation_token = token
    account.activation_state = ActivationState.PENDING
    if config.expiration_period is not None:
        issued_at = now or domain_services.utcnow()
        account.activation_token_expires_at = issued_at + config.expiration_period
    else:
        account.activation_token_expires_at = None
    return token


def validate_token(
    token: str,
    account: Account,
    config: ActivationConfig,
    *,
    now: datetime | None = None,
) -> TokenValidation:
    # the expiry stored at issuance is authoritative; config is not consulted
    if not token or not account.activation_token:
        return TokenValidation.NOT_FOUND
    if not domain_services.secure_compare(account.activation_token, token):
        return TokenValidation.NOT_FOUND

    expires_at = account.activation_token_expires_at
    if expires_at is not None and expires_at < (now or domain_services.utcnow()):
        return TokenValidation.EXPIRED
    return TokenValidation.VALID


def mark_active(account: Account) -> None:
    account.activation_token = None
    account.activation_state = ActivationState.ACTIVE


def should_send_activation_needed_email(
    account: Account, config: ActivationConfig, *, external: bool
) -> bool:
    return (
        not external
        and not config.mailer_disabled
        and config.activation_needed_email_method is not None
        and not account.skip_activation_needed_email
    )


def should_send_activation_success_email(
    account: Account, config: ActivationConfig, *, external: bool
) -> bool:
    return (
        not external
        and not config.mailer_disabled
        and config.activation_success_email_method is not None
        and not account.skip_activation_success_email
    )


def login_check(
    account: Account, config: ActivationConfig, *, external: bool
) -> LoginCheck:
    """
    Pre-authentication gate. Says nothing about credential correctness.

    Externally authenticated accounts never go through activation and
    are let through.
    """
    if not config.prevent_non_active_login:
        return LoginCheck.allow()
    if account.is_active:
        return LoginCheck.allow()
    if external and account.activation_state is None:
        return LoginCheck.allow()
    return LoginCheck.deny(DenialReason.INACTIVE)
