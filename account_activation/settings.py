from datetime import timedelta
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from account_activation.domain.config import (
    ACTIVATION_NEEDED_EMAIL,
    ACTIVATION_SUCCESS_EMAIL,
    ActivationConfig,
)


class Settings(BaseSettings):
    # App
    app_env: str = "dev"
    log_level: str = "INFO"

    # Infra
    database_url: str = "postgresql://app:app@db:5432/app"
    redis_url: str = "redis://redis:6379/0"
    smtp_base_url: str = "http://smtp-mock:8025"
    smtp_timeout_seconds: float = 5.0
    smtp_retries: int = 1
    mail_from: str | None = None
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10
    db_pool_timeout_seconds: float = 5.0
    db_connect_timeout_seconds: int = 3

    # Security / policies
    bcrypt_rounds: int = 12
    session_ttl_seconds: int = 86400

    # Activation (None -> tokens never expire)
    activation_token_expiration_seconds: int | None = None
    activation_mailer_disabled: bool = False
    activation_needed_email_method: str | None = ACTIVATION_NEEDED_EMAIL
    activation_success_email_method: str | None = ACTIVATION_SUCCESS_EMAIL
    prevent_non_active_users_to_login: bool = True

    # Storage columns for the activation fields
    activation_state_column: str = "activation_state"
    activation_token_column: str = "activation_token"
    activation_token_expires_at_column: str = "activation_token_expires_at"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


def build_activation_config(settings: Settings) -> ActivationConfig:
    seconds = settings.activation_token_expiration_seconds
    return ActivationConfig(
        expiration_period=timedelta(seconds=seconds) if seconds else None,
        mailer_disabled=settings.activation_mailer_disabled,
        prevent_non_active_login=settings.prevent_non_active_users_to_login,
        activation_needed_email_method=settings.activation_needed_email_method
        or None,
        activation_success_email_method=settings.activation_success_email_method
        or None,
    )


@lru_cache(maxsize=1)
def get_activation_config() -> ActivationConfig:
    """The process-wide activation config, frozen after the first call."""
    return build_activation_config(get_settings())
