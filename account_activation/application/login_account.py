from typing import Callable

from account_activation.application.activation_workflow import ActivationWorkflow
from account_activation.domain.errors import AccountNotActive, InvalidCredentials
from account_activation.domain.ports.session_store import SessionStorePort
from account_activation.domain.ports.unit_of_work import UnitOfWorkPort


async def login_account(
    uow: UnitOfWorkPort,
    workflow: ActivationWorkflow,
    sessions: SessionStorePort,
    email: str,
    password: str,
    verify_password: Callable[[str, str], bool],
) -> str:
    """
    Password login. The activation gate runs before the password check so
    that unactivated accounts are refused whatever the credentials.
    """
    normalized_email = email.strip().lower()

    async with uow as transaction:
        account = await transaction.accounts.get_by_email(normalized_email)
    if account is None:
        raise InvalidCredentials()

    check = workflow.check_login_allowed(account)
    if not check.allowed:
        raise AccountNotActive(check.reason)

    if not account.password_hash or not verify_password(
        password, account.password_hash
    ):
        raise InvalidCredentials()
    return await sessions.create(account.id)
