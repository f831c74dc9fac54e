"""
Object cache connectivity - clients for the platform's Redis backend.

The platform core talks to Redis itself; these helpers only let the
bootstrapper describe and probe the backend it publishes.
"""
from __future__ import annotations

import asyncio
from typing import Optional
from urllib.parse import quote, urlencode

from redis import asyncio as aioredis
from redis.exceptions import RedisError

from core.logging_config import get_logger
from domain.common.exceptions import ConnectionCheckError
from domain.site_config import ObjectCacheConfig

logger = get_logger(__name__)

REDACTED = "***"


def build_redis_url(config: ObjectCacheConfig, *, redact: bool = False) -> str:
    """Build a redis-py URL for ``config``.

    Unix sockets carry the password and database in the query string;
    TCP schemes use the usual ``scheme://:password@host/db`` form.
    """
    password = REDACTED if redact else config.password
    if config.scheme == "unix":
        query = urlencode({"db": config.database, "password": password}, safe="*")
        return f"unix://{config.path}?{query}"
    return f"{config.scheme}://:{quote(password, safe='*')}@{config.path}/{config.database}"


def create_redis_client(config: ObjectCacheConfig, **kwargs) -> aioredis.Redis:
    """
    Create a standalone asyncio Redis client (no pooling beyond redis-py's own)

    Args:
        config: object cache connection parameters
        **kwargs: extra Redis connection arguments

    Returns:
        redis.asyncio.Redis instance
    """
    if config.scheme == "unix":
        return aioredis.Redis(
            unix_socket_path=config.path,
            password=config.password,
            db=config.database,
            encoding="utf-8",
            decode_responses=True,
            **kwargs,
        )
    return aioredis.from_url(
        build_redis_url(config),
        encoding="utf-8",
        decode_responses=True,
        **kwargs,
    )


async def ping_cache(config: ObjectCacheConfig, timeout: Optional[float] = 5.0) -> bool:
    """PING the object cache.

    Raises:
        ConnectionCheckError: the cache is unreachable or refused the password.
    """
    client = create_redis_client(config, socket_timeout=timeout, socket_connect_timeout=timeout)
    try:
        await asyncio.wait_for(client.ping(), timeout=timeout)
    except (RedisError, OSError, asyncio.TimeoutError) as exc:
        logger.error("cache_ping_failed", url=build_redis_url(config, redact=True), error=str(exc))
        raise ConnectionCheckError("cache", str(exc) or type(exc).__name__) from exc
    finally:
        await client.aclose()
    logger.info("cache_ping_ok", url=build_redis_url(config, redact=True))
    return True
