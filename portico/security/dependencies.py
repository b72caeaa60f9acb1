"""
Portico Backend — Authentication Dependencies
===============================================

What:  FastAPI dependencies guarding the `/secure/` routes.
How:   Reads `Authorization: Bearer <token>`, verifies it, rejects revoked
       tokens and publishes the identity to the request context store.

    no / malformed Authorization header  → AuthorizationException (401)
    invalid, expired or revoked token    → AuthenticationException (400)
"""

import logging

import redis.asyncio as aioredis
from fastapi import Depends, Request

from portico.cache import get_redis
from portico.context import UserProfile, set_current_user
from portico.exceptions import AuthenticationException, AuthorizationException
from portico.security.tokens import TokenRevocationStore, TokenService

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "


def get_token_service() -> TokenService:
    return TokenService()


def get_revocation_store(redis: aioredis.Redis = Depends(get_redis)) -> TokenRevocationStore:
    return TokenRevocationStore(redis)


def extract_bearer_token(request: Request) -> str:
    header = request.headers.get("Authorization", "")
    if not header.lower().startswith(BEARER_PREFIX):
        raise AuthorizationException()
    token = header[len(BEARER_PREFIX):].strip()
    if not token:
        raise AuthorizationException()
    return token


async def require_user(
    request: Request,
    tokens: TokenService = Depends(get_token_service),
    revocations: TokenRevocationStore = Depends(get_revocation_store),
) -> UserProfile:
    """
    Resolves the caller's identity or fails.

    Must stay async: it runs on the request's own task, so the profile it
    stores in the context store is visible to the endpoint.
    """
    token = extract_bearer_token(request)
    profile = tokens.decode(token)
    if profile.token_id and await revocations.is_revoked(profile.token_id):
        logger.info("Rejected revoked token for user id=%s", profile.id)
        raise AuthenticationException("Access token has been revoked")
    set_current_user(profile)
    return profile
