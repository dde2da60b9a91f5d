from datetime import timedelta

from account_activation.settings import (
    Settings,
    build_activation_config,
    get_activation_config,
    get_settings,
)


def test_get_settings_is_cached():
    get_settings.cache_clear()
    s1 = get_settings()
    s2 = get_settings()
    assert s1 is s2  # lru_cache returns the same instance


def test_env_overrides_and_cache_clear(monkeypatch):
    monkeypatch.setenv("ACTIVATION_TOKEN_EXPIRATION_SECONDS", "123")
    get_settings.cache_clear()
    s = get_settings()
    assert s.activation_token_expiration_seconds == 123

    monkeypatch.delenv("ACTIVATION_TOKEN_EXPIRATION_SECONDS", raising=False)
    get_settings.cache_clear()
    s2 = get_settings()
    assert s2.activation_token_expiration_seconds != 123


def test_activation_defaults():
    config = build_activation_config(Settings(_env_file=None))
    assert config.expiration_period is None
    assert config.mailer_disabled is False
    assert config.prevent_non_active_login is True
    assert config.activation_needed_email_method == "activation_needed_email"
    assert config.activation_success_email_method == "activation_success_email"


def test_activation_config_from_settings():
    settings = Settings(
        _env_file=None,
        activation_token_expiration_seconds=86400,
        activation_mailer_disabled=True,
        prevent_non_active_users_to_login=False,
        activation_success_email_method="",
    )
    config = build_activation_config(settings)
    assert config.expiration_period == timedelta(hours=24)
    assert config.mailer_disabled is True
    assert config.prevent_non_active_login is False
    # empty selector disables the email
    assert config.activation_success_email_method is None


def test_activation_config_is_built_once(monkeypatch):
    get_settings.cache_clear()
    get_activation_config.cache_clear()
    try:
        first = get_activation_config()
        monkeypatch.setenv("PREVENT_NON_ACTIVE_USERS_TO_LOGIN", "false")
        get_settings.cache_clear()
        assert get_activation_config() is first
    finally:
        get_settings.cache_clear()
        get_activation_config.cache_clear()
