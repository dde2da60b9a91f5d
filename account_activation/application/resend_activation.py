import logging

from account_activation.application.activation_workflow import ActivationWorkflow
from account_activation.domain.entities import Account
from account_activation.domain.errors import AccountAlreadyActive
from account_activation.domain.ports.unit_of_work import UnitOfWorkPort

logger = logging.getLogger(__name__)


async def resend_activation(
    uow: UnitOfWorkPort,
    workflow: ActivationWorkflow,
    email: str,
) -> Account | None:
    """
    Issue a new activation token for a pending account and email it.
    Unknown or already active accounts are ignored so callers cannot probe
    which emails are registered.
    """
    normalized_email = email.strip().lower()

    async with uow as transaction:
        account = await transaction.accounts.get_by_email(normalized_email)
    if account is None:
        logger.info("activation resend for unknown email ignored")
        return None

    try:
        return await workflow.reissue_token(account)
    except AccountAlreadyActive:
        logger.info(
            "activation resend for active account ignored",
            extra={"account_id": account.id},
        )
        return None
