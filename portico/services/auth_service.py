"""
Portico Backend — Authentication Service
==========================================

What:  Sign-in (token issue), registration and logout.
How:   Composes UserRepository, TokenService and TokenRevocationStore. The
       service never catches the failures it raises; they travel to the
       error classifier unchanged.

    generate_token  unknown user / wrong password → AuthenticationException
                    deactivated account           → ForbiddenAccessException
    register        username or email taken       → LogicException
    logout          revokes the current token until it would have expired
"""

import logging

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from portico.context import get_current_user
from portico.database import get_db_session
from portico.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ForbiddenAccessException,
    LogicException,
)
from portico.models.user import STATUS_ACTIVATED, User
from portico.repositories.user import UserRepository
from portico.schemas.user import RegisterRequest, UserInfo
from portico.security.dependencies import get_revocation_store, get_token_service
from portico.security.passwords import hash_password, verify_password
from portico.security.tokens import TokenRevocationStore, TokenService

logger = logging.getLogger(__name__)

DEFAULT_ROLES = ["USER"]
BAD_CREDENTIALS = "Invalid username or password"


class AuthenticationService:
    def __init__(
        self,
        users: UserRepository,
        tokens: TokenService,
        revocations: TokenRevocationStore,
    ):
        self.users = users
        self.tokens = tokens
        self.revocations = revocations

    async def generate_token(
        self, username: str, password: str, increase_expired: bool = False
    ) -> str:
        user = await self.users.find_by_username_or_email(username)
        if user is None or not verify_password(password, user.password):
            logger.info("Failed sign-in attempt for %s", username)
            raise AuthenticationException(BAD_CREDENTIALS)
        if not user.is_activated:
            raise ForbiddenAccessException()

        logger.info("Issued token for user id=%s (extended=%s)", user.id, increase_expired)
        return self.tokens.issue(user, increase_expired=increase_expired)

    async def register(self, request: RegisterRequest) -> UserInfo:
        if await self.users.exists_by_username_or_email(request.username, request.email):
            raise LogicException(
                "app.user.exception.exists",
                {"username": request.username, "email": request.email},
            )

        user = User(
            username=request.username,
            email=request.email.lower(),
            password=hash_password(request.password),
            full_name=request.full_name,
            status=STATUS_ACTIVATED,
            roles=list(DEFAULT_ROLES),
        )
        await self.users.add(user)
        return UserInfo.model_validate(user)

    async def logout(self) -> None:
        profile = get_current_user()
        if profile is None or not profile.token_id:
            raise AuthorizationException()
        await self.revocations.revoke(profile.token_id, profile.expires_at)
        logger.info("Revoked token for user id=%s", profile.id)


def get_authentication_service(
    db: AsyncSession = Depends(get_db_session),
    tokens: TokenService = Depends(get_token_service),
    revocations: TokenRevocationStore = Depends(get_revocation_store),
) -> AuthenticationService:
    return AuthenticationService(UserRepository(db), tokens, revocations)
