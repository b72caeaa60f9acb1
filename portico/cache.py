"""
Portico Backend — Redis Connection
====================================

What:  Shared async Redis client (connection pool) and FastAPI dependency.
How:   The client is created lazily on first use and closed in the app
       lifespan, mirroring the database engine handling.
Who:   TokenRevocationStore (logout bookkeeping) and the health route.
"""

from typing import Optional

import redis.asyncio as aioredis

from portico.config import settings

_client: Optional[aioredis.Redis] = None


def get_redis() -> aioredis.Redis:
    """Returns the process-wide client. Usable directly or via Depends(get_redis)."""
    global _client
    if _client is None:
        _client = aioredis.from_url(
            settings.redis_url,
            decode_responses=True,
            socket_timeout=3,
        )
    return _client


async def close_redis() -> None:
    """Closes the pool. Called during application shutdown."""
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
