from redis.asyncio import Redis

from account_activation.settings import Settings


def create_redis(settings: Settings) -> Redis:
    # str in, str out
    return Redis.from_url(settings.redis_url, encoding="utf-8", decode_responses=True)
