from datetime import timedelta

import pytest

from account_activation.application.activation_workflow import ActivationWorkflow
from account_activation.domain.config import ActivationConfig
from tests.fakes import FakeActivationMailer, FakeUoW


@pytest.fixture()
def uow():
    return FakeUoW()


@pytest.fixture()
def mailer():
    return FakeActivationMailer()


@pytest.fixture()
def config():
    return ActivationConfig(expiration_period=timedelta(hours=24))


@pytest.fixture()
def workflow(uow, config, mailer):
    return ActivationWorkflow(uow, config, mailer)


@pytest.fixture()
def hash_password_stub():
    return lambda p: "hashed-" + p


@pytest.fixture()
def fixed_token(monkeypatch):
    """
    Make the activation token deterministic.
    Only for tests that need to know the token up front.
    """
    from account_activation.domain import services as domain_services

    monkeypatch.setattr(domain_services, "generate_activation_token", lambda: "tok-1234")
    yield "tok-1234"
