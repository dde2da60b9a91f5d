from typing import Callable

from account_activation.application.activation_workflow import ActivationWorkflow
from account_activation.domain.entities import Account


async def register_account(
    workflow: ActivationWorkflow,
    email: str,
    password: str,
    hash_password: Callable[..., str],
) -> Account:
    account = Account(email=email, password_hash=hash_password(password))
    account.validate()
    return await workflow.on_account_create(account)
