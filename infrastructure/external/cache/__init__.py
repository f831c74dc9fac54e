"""Object cache helpers exposed to the rest of the project"""
from .redis_client import (
    build_redis_url,
    create_redis_client,
    ping_cache,
)


__all__ = [
    "build_redis_url",
    "create_redis_client",
    "ping_cache",
]
