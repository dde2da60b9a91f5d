from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

import account_activation.domain.activation_policy as policy
from account_activation.domain import credentials
from account_activation.domain.activation_policy import LoginCheck, TokenValidation
from account_activation.domain.config import ActivationConfig, ensure_mailer_configured
from account_activation.domain.entities import Account
from account_activation.domain.errors import (
    AccountAlreadyActive,
    PersistenceError,
    TokenExpired,
    TokenNotFound,
)
from account_activation.domain.ports.activation_mailer import ActivationMailerPort
from account_activation.domain.ports.unit_of_work import UnitOfWorkPort

logger = logging.getLogger(__name__)

CredentialCheck = Callable[[Account], bool]


class ActivationWorkflow:
    """
    Runs the activation policy at account creation, activation and login,
    persisting through the unit of work and emailing through the mailer.

    Emails are only sent once the state change is committed. A failing
    mailer is logged and never undoes the state change.

    Race-freedom of activate() depends on the repository: its
    find_by_activation_token must lock the row so that a second caller
    presenting the same token no longer finds it after the first commit.
    """

    def __init__(
        self,
        uow: UnitOfWorkPort,
        config: ActivationConfig,
        mailer: ActivationMailerPort | None = None,
        *,
        has_local_credential: CredentialCheck = credentials.has_local_credential,
        is_externally_authenticated: CredentialCheck = (
            credentials.is_externally_authenticated
        ),
    ) -> None:
        ensure_mailer_configured(config, mailer)
        self._uow = uow
        self._config = config
        self._mailer = mailer
        self._has_local_credential = has_local_credential
        self._is_external = is_externally_authenticated

    @property
    def config(self) -> ActivationConfig:
        return self._config

    async def on_account_create(self, account: Account) -> Account:
        """
        Creation hook: issue the token and save the new account, then ask
        for activation by email. Accounts without a local password (created
        through an external provider) are returned untouched.
        """
        if self._is_external(account) or not self._has_local_credential(account):
            logger.debug(
                "activation skipped, no local credential",
                extra={"provider": account.auth_provider},
            )
            return account

        policy.issue_token(account, self._config)
        async with self._uow as transaction:
            account = await transaction.accounts.save(account)
            await transaction.commit()

        logger.info(
            "activation token issued",
            extra={
                "account_id": account.id,
                "expires_at": _isoformat(account.activation_token_expires_at),
            },
        )
        if policy.should_send_activation_needed_email(
            account, self._config, external=False
        ):
            await self._notify(self._config.activation_needed_email_method, account)
        return account

    async def activate(
        self, token: str, *, skip_success_email: bool = False
    ) -> Account:
        """
        Consume `token` and make its account active.

        Raises TokenNotFound or TokenExpired; an expired token is left in
        place. PersistenceError from the save propagates and the
        transaction is rolled back.
        """
        async with self._uow as transaction:
            account = await transaction.accounts.find_by_activation_token(token)
            if account is None:
                logger.info("activation rejected", extra={"reason": "not_found"})
                raise TokenNotFound()

            result = policy.validate_token(token, account, self._config)
            if result is TokenValidation.NOT_FOUND:
                logger.info("activation rejected", extra={"reason": "not_found"})
                raise TokenNotFound()
            if result is TokenValidation.EXPIRED:
                logger.info(
                    "activation rejected",
                    extra={"reason": "expired", "account_id": account.id},
                )
                raise TokenExpired()

            account.skip_activation_success_email = skip_success_email
            policy.mark_active(account)
            account = await transaction.accounts.save(account, validate=False)
            await transaction.commit()

        logger.info("account activated", extra={"account_id": account.id})
        if policy.should_send_activation_success_email(
            account, self._config, external=self._is_external(account)
        ):
            await self._notify(self._config.activation_success_email_method, account)
        return account

    async def load_from_activation_token(self, token: str) -> Account | None:
        """Return the account for a valid, unexpired token; never modifies it."""
        async with self._uow as transaction:
            account = await transaction.accounts.find_by_exact_field(
                "activation_token", token
            )
        if account is None:
            return None
        result = policy.validate_token(token, account, self._config)
        return account if result is TokenValidation.VALID else None

    async def reissue_token(self, account: Account) -> Account:
        """
        Replace the token of a pending account (new expiry) and send the
        activation email again.

        `account` may be stale: the row is re-read under a lock and checked
        again, so an activation committed in the meantime is never undone.
        """
        if not self._reissuable(account):
            raise AccountAlreadyActive()

        async with self._uow as transaction:
            current = await transaction.accounts.find_by_exact_field(
                "id", account.id, for_update=True
            )
            if current is None:
                raise PersistenceError(f"account {account.id} not found")
            if not self._reissuable(current):
                raise AccountAlreadyActive()

            current.skip_activation_needed_email = account.skip_activation_needed_email
            policy.issue_token(current, self._config)
            account = await transaction.accounts.save(current)
            await transaction.commit()

        logger.info(
            "activation token reissued",
            extra={
                "account_id": account.id,
                "expires_at": _isoformat(account.activation_token_expires_at),
            },
        )
        if policy.should_send_activation_needed_email(
            account, self._config, external=False
        ):
            await self._notify(self._config.activation_needed_email_method, account)
        return account

    def _reissuable(self, account: Account) -> bool:
        return not (
            account.is_active
            or self._is_external(account)
            or not self._has_local_credential(account)
        )

    def check_login_allowed(self, account: Account) -> LoginCheck:
        check = policy.login_check(
            account, self._config, external=self._is_external(account)
        )
        if not check.allowed:
            logger.info(
                "login denied",
                extra={"account_id": account.id, "reason": check.reason.value},
            )
        return check

    async def _notify(self, method: str | None, account: Account) -> None:
        if method is None or self._mailer is None:
            return
        try:
            await self._mailer.send(method, account)
        except Exception:  # noqa: BLE001
            logger.exception(
                "activation email failed",
                extra={"method": method, "account_id": account.id},
            )


def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None
