# config/cache.py
import logging
from typing import Optional
from urllib.parse import urlsplit
from redis.asyncio import Redis, from_url
from redis.exceptions import RedisError
from config.settings import settings

logger = logging.getLogger(__name__)

_client: Optional[Redis] = None


def redacted_url(url: str) -> str:
    """Drop credentials from a redis:// URL for logging."""
    parts = urlsplit(url)
    if parts.password is None and parts.username is None:
        return url
    host = parts.hostname or ""
    if parts.port:
        host = f"{host}:{parts.port}"
    return parts._replace(netloc=f"***@{host}").geturl()


async def get_redis() -> Redis:
    global _client
    if _client is None:
        client = from_url(
            settings.REDIS_URL,
            encoding="utf-8",
            decode_responses=True,  # namespace values and keys are text
            socket_keepalive=True,
            health_check_interval=30,
        )
        try:
            await client.ping()
        except RedisError:
            # Not cached, so the next call retries the connection.
            logger.error("redis.connect.failed url=%s", redacted_url(settings.REDIS_URL))
            await client.aclose()
            raise
        logger.info("redis.connect.ok url=%s", redacted_url(settings.REDIS_URL))
        _client = client
    return _client


async def close_redis() -> None:
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
        logger.info("redis.closed")
