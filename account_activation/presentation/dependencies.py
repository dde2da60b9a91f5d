from typing import Annotated, Callable

from fastapi import Depends, Request

from account_activation.application.activation_workflow import ActivationWorkflow
from account_activation.domain.config import ActivationConfig
from account_activation.domain.ports.activation_mailer import ActivationMailerPort
from account_activation.domain.ports.session_store import SessionStorePort
from account_activation.domain.ports.unit_of_work import UnitOfWorkPort
from account_activation.infrastructure.db.accounts_repo import ActivationColumns
from account_activation.infrastructure.db.uow import PgUnitOfWork
from account_activation.infrastructure.redis_cache.sessions import RedisSessionStore
from account_activation.infrastructure.security.password import (
    hash_password,
    verify_password,
)
from account_activation.settings import get_activation_config, get_settings


def get_uow(request: Request) -> UnitOfWorkPort:
    # pool is opened by the lifespan
    return PgUnitOfWork(
        request.app.state.db_pool,
        columns=ActivationColumns.from_settings(get_settings()),
    )


def get_config() -> ActivationConfig:
    return get_activation_config()


def get_activation_mailer(request: Request) -> ActivationMailerPort | None:
    # This is set in create_app()
    return request.app.state.activation_mailer


def get_activation_workflow(
    uow: Annotated[UnitOfWorkPort, Depends(get_uow)],
    config: Annotated[ActivationConfig, Depends(get_config)],
    mailer: Annotated[ActivationMailerPort | None, Depends(get_activation_mailer)],
) -> ActivationWorkflow:
    return ActivationWorkflow(uow, config, mailer)


def get_hash_password() -> Callable[..., str]:
    return hash_password


def get_verify_password() -> Callable[[str, str], bool]:
    return verify_password


def get_sessions(request: Request) -> SessionStorePort:
    return RedisSessionStore(
        request.app.state.redis, ttl_seconds=get_settings().session_ttl_seconds
    )
