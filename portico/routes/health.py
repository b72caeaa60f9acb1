"""
Portico Backend — Health Check Route
======================================

What:  Liveness/readiness probe for load balancers and container health checks.
How:   Runs `SELECT 1` against the database and `PING` against Redis. The
       service reports UP only when both respond; otherwise DOWN, still
       inside a 200 success envelope so probes can read the details.
"""

import logging

from fastapi import APIRouter
from sqlalchemy import text

from portico import __version__
from portico.cache import get_redis
from portico.database import engine
from portico.lifecycle import LifecycleRoute
from portico.schemas.user import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Health"], route_class=LifecycleRoute)


async def check_database() -> bool:
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.warning("Health check: database unreachable: %s", str(e))
        return False


async def check_redis() -> bool:
    try:
        return bool(await get_redis().ping())
    except Exception as e:
        logger.warning("Health check: redis unreachable: %s", str(e))
        return False


@router.get("/health", summary="Service health check")
async def health_check() -> HealthResponse:
    db_ok = await check_database()
    redis_ok = await check_redis()
    return HealthResponse(
        status="UP" if db_ok and redis_ok else "DOWN",
        version=__version__,
        database="connected" if db_ok else "disconnected",
        redis="connected" if redis_ok else "disconnected",
    )
