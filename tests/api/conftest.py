import base64
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from account_activation.domain.config import ActivationConfig
from account_activation.main import create_app
from account_activation.presentation.dependencies import (
    get_activation_mailer,
    get_config,
    get_hash_password,
    get_sessions,
    get_uow,
    get_verify_password,
)
from tests.fakes import FakeActivationMailer, FakeSessions, FakeUoW


@pytest.fixture()
def app_and_deps():
    app = create_app()
    uow = FakeUoW()
    mailer = FakeActivationMailer()
    sessions = FakeSessions()
    config = ActivationConfig(
        expiration_period=timedelta(hours=24), prevent_non_active_login=True
    )

    app.dependency_overrides[get_uow] = lambda: uow
    app.dependency_overrides[get_config] = lambda: config
    app.dependency_overrides[get_activation_mailer] = lambda: mailer
    app.dependency_overrides[get_sessions] = lambda: sessions
    app.dependency_overrides[get_hash_password] = lambda: (
        lambda plain: "hashed-" + plain
    )
    app.dependency_overrides[get_verify_password] = lambda: (
        lambda plain, hashed: hashed == "hashed-" + plain
    )

    try:
        yield app, uow, mailer
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def client(app_and_deps):
    app, _, _ = app_and_deps
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture()
def basic_auth():
    def _header(email: str, password: str) -> dict[str, str]:
        token = base64.b64encode(f"{email}:{password}".encode()).decode()
        return {"Authorization": f"Basic {token}"}

    return _header


@pytest.fixture()
def registered(client, app_and_deps):
    """Register jeremy@example.com / s3cret and return the pending account."""
    _, uow, _ = app_and_deps
    response = client.post(
        "/v1/accounts/",
        json={"email": "jeremy@example.com", "password": "s3cret"},
    )
    assert response.status_code == 202, response.text
    [account] = uow.accounts.by_id.values()
    return account
