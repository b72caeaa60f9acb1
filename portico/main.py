"""
Portico Backend — FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn portico.main:app).

Application Architecture:
    ┌──────────────────────────────────────────────────────┐
    │                    FastAPI App                       │
    │                                                      │
    │  Middleware Chain (outermost first):                 │
    │  CORS → Request ID → Access Log → Request Lifecycle  │
    │                                                      │
    │  Routes (all LifecycleRoute):                        │
    │  /api/health  /api/auth/*  /api/user/secure/*        │
    │  /api/test/secure/*                                  │
    │                                                      │
    │  Exception Handlers → error_classifier.classify      │
    └──────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging setup, configuration check, startup log
    Shutdown: dispose database engine, close Redis pool
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from portico import __version__
from portico.cache import close_redis
from portico.config import settings
from portico.database import dispose_engine
from portico.error_classifier import register_exception_handlers
from portico.lifecycle import RequestLifecycleMiddleware
from portico.middleware.logging import RequestLoggingMiddleware
from portico.middleware.request_id import RequestIDMiddleware
from portico.routes import auth, health, roles, user

logger = logging.getLogger(__name__)

CORS_ALLOWED_HEADERS = [
    "X-Requested-With",
    "Content-Type",
    "Accept",
    "Accept-Language",
    "Origin",
    "Authorization",
    "X-Request-ID",
]
CORS_ALLOWED_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS", "HEAD"]


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during startup, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: logging + config check. Shutdown: release DB and Redis pools."""
    setup_logging()
    logger.info("Portico Backend %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Keep serving; development setups run with the default secret
        logger.error("Configuration error: %s", str(e))

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("Portico Backend shutting down...")
    await dispose_engine()
    await close_redis()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Portico API",
        description="Web backend with JWT authentication, role checks and uniform JSON envelopes.",
        version=__version__,
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition: the last one added
    # is the outermost.

    # Innermost: pre-hook and failure fallback around routing
    app.add_middleware(RequestLifecycleMiddleware)

    app.add_middleware(RequestLoggingMiddleware)

    app.add_middleware(RequestIDMiddleware)

    # Outermost, so error envelopes carry CORS headers too
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=CORS_ALLOWED_METHODS,
        allow_headers=CORS_ALLOWED_HEADERS,
        expose_headers=["X-Request-ID"],
        max_age=settings.cors_max_age,
    )

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(user.router)
    app.include_router(roles.router)

    return app


# uvicorn expects `portico.main:app` to be importable
app = create_app()
