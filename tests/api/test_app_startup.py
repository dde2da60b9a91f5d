import pytest

from account_activation.domain.errors import MailerMisconfigured
from account_activation.main import create_app
from account_activation.settings import get_activation_config, get_settings


@pytest.fixture()
def fresh_settings():
    get_settings.cache_clear()
    get_activation_config.cache_clear()
    yield
    get_settings.cache_clear()
    get_activation_config.cache_clear()


def test_unknown_email_method_fails_at_startup(monkeypatch, fresh_settings):
    monkeypatch.setenv("ACTIVATION_NEEDED_EMAIL_METHOD", "welcome_email")
    with pytest.raises(MailerMisconfigured):
        create_app()


def test_disabled_mailer_starts_without_mailer(monkeypatch, fresh_settings):
    monkeypatch.setenv("ACTIVATION_MAILER_DISABLED", "true")
    app = create_app()
    assert app.state.activation_mailer is None
    assert app.state.activation_config.mailer_disabled is True
