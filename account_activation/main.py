from contextlib import asynccontextmanager

from fastapi import FastAPI

from account_activation.domain.config import ensure_mailer_configured
from account_activation.infrastructure.db.pool import create_pool
from account_activation.infrastructure.email.activation_mailer import (
    EmailActivationMailer,
)
from account_activation.infrastructure.email.http_smtp_adapter import (
    HttpSmtpEmailAdapter,
)
from account_activation.infrastructure.redis_cache.pool import create_redis
from account_activation.logging import setup_logging
from account_activation.presentation.api import api
from account_activation.settings import get_activation_config, get_settings


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = app.state.settings
    app.state.db_pool = create_pool(settings)
    await app.state.db_pool.open()
    app.state.redis = create_redis(settings)

    try:
        yield
    finally:
        mailer = app.state.activation_mailer
        if mailer is not None:
            await mailer.aclose()
        await app.state.redis.aclose()
        await app.state.db_pool.close()


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level)

    config = get_activation_config()
    mailer = None
    if not config.mailer_disabled:
        mailer = EmailActivationMailer(
            HttpSmtpEmailAdapter(
                settings.smtp_base_url,
                sender=settings.mail_from,
                timeout=settings.smtp_timeout_seconds,
                retries=settings.smtp_retries,
            )
        )
    # refuse to start rather than fail on the first registration
    ensure_mailer_configured(config, mailer)

    app = FastAPI(title="Account Activation API", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.activation_config = config
    app.state.activation_mailer = mailer
    app.include_router(api)
    return app


app = create_app()
