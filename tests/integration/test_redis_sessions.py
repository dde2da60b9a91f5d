import asyncio

import pytest

from account_activation.infrastructure.redis_cache.sessions import RedisSessionStore

pytestmark = pytest.mark.integration


async def _flush_prefix(redis, prefix: str) -> None:
    keys = await redis.keys(f"{prefix}*")
    if keys:
        await redis.delete(*keys)


@pytest.mark.asyncio
async def test_create_get_revoke_session(redis_client):
    prefix = "session:test:cgr:"
    await _flush_prefix(redis_client, prefix)
    sessions = RedisSessionStore(redis_client, key_prefix=prefix, ttl_seconds=30)

    token = await sessions.create("account-123")
    assert token and isinstance(token, str)
    assert await sessions.get(token) == "account-123"

    await sessions.revoke(token)
    assert await sessions.get(token) is None


@pytest.mark.asyncio
async def test_session_expires_by_ttl(redis_client):
    prefix = "session:test:exp:"
    await _flush_prefix(redis_client, prefix)
    sessions = RedisSessionStore(redis_client, key_prefix=prefix, ttl_seconds=1)

    token = await sessions.create("account-xyz")
    assert await redis_client.ttl(f"{prefix}{token}") in (1, 2)

    await asyncio.sleep(1.5)
    assert await sessions.get(token) is None


@pytest.mark.asyncio
async def test_empty_token_is_never_a_session(redis_client):
    sessions = RedisSessionStore(redis_client, key_prefix="session:test:empty:")
    assert await sessions.get("") is None
