"""
Portico Backend — Access Tokens
=================================

What:  Issues and verifies HS256 JWT access tokens, and tracks revoked ones.
How:   PyJWT for signing/verification; Redis keys `<prefix><jti>` for
       revocation, expiring together with the token they revoke.

Claims:
    sub       user id (string, as required by RFC 7519)
    username  login name
    roles     list of role names
    jti       random token id, used for logout
    iat/exp   issue and expiry time (seconds since epoch)
"""

import logging
import time
import uuid
from typing import Any, Dict, Optional

import jwt
import redis.asyncio as aioredis

from portico.config import settings
from portico.context import UserProfile
from portico.exceptions import AuthenticationException
from portico.models.user import User

logger = logging.getLogger(__name__)


class TokenService:
    """Signs and verifies access tokens with the configured shared secret."""

    def __init__(
        self,
        secret: Optional[str] = None,
        algorithm: Optional[str] = None,
        expiration_minutes: Optional[int] = None,
        extended_expiration_minutes: Optional[int] = None,
    ):
        self.secret = secret or settings.jwt_secret
        self.algorithm = algorithm or settings.jwt_algorithm
        self.expiration_minutes = expiration_minutes or settings.jwt_expiration_minutes
        self.extended_expiration_minutes = (
            extended_expiration_minutes or settings.jwt_extended_expiration_minutes
        )

    def issue(self, user: User, increase_expired: bool = False) -> str:
        """Returns a signed token for `user`; `increase_expired` selects the long lifetime."""
        minutes = self.extended_expiration_minutes if increase_expired else self.expiration_minutes
        now = int(time.time())
        claims: Dict[str, Any] = {
            "sub": str(user.id),
            "username": user.username,
            "roles": sorted(user.roles or []),
            "jti": uuid.uuid4().hex,
            "iat": now,
            "exp": now + minutes * 60,
        }
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def decode(self, token: str) -> UserProfile:
        """
        Verifies signature and expiry and returns the embedded identity.

        Raises:
            AuthenticationException: expired, tampered, malformed, or
                missing required claims.
        """
        try:
            claims = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp", "jti"]},
            )
        except jwt.ExpiredSignatureError:
            raise AuthenticationException("Access token has expired")
        except jwt.InvalidTokenError as exc:
            logger.debug("Rejected access token: %s", exc)
            raise AuthenticationException("Access token is invalid")

        try:
            user_id = int(claims["sub"])
        except (TypeError, ValueError):
            raise AuthenticationException("Access token is invalid")

        return UserProfile(
            id=user_id,
            username=claims.get("username", ""),
            roles=frozenset(claims.get("roles") or ()),
            token_id=claims["jti"],
            expires_at=claims["exp"],
        )


class TokenRevocationStore:
    """Remembers revoked token ids in Redis until the token would expire anyway."""

    def __init__(self, redis: aioredis.Redis, prefix: Optional[str] = None):
        self.redis = redis
        self.prefix = prefix or settings.redis_key_prefix

    def _key(self, token_id: str) -> str:
        return f"{self.prefix}{token_id}"

    async def revoke(self, token_id: str, expires_at: Optional[int]) -> None:
        ttl = (expires_at or 0) - int(time.time())
        # Already-expired tokens are rejected by signature checks; keep a short marker anyway
        await self.redis.set(self._key(token_id), "1", ex=max(ttl, 1))

    async def is_revoked(self, token_id: str) -> bool:
        return bool(await self.redis.exists(self._key(token_id)))
