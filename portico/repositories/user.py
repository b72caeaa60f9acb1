"""
Portico Backend — User Repository
===================================

What:  Query helpers for the `users` table.
How:   Thin wrapper over an AsyncSession; one repository per request session.
       Lookups return None when nothing matches; `get_activated_user_info`
       raises SQLAlchemy's NoResultFound instead, which the error classifier
       renders as the "no data" failure.
"""

import logging
from typing import Optional

from sqlalchemy import exists, func, or_, select
from sqlalchemy.exc import NoResultFound
from sqlalchemy.ext.asyncio import AsyncSession

from portico.models.user import STATUS_ACTIVATED, User
from portico.schemas.user import UserInfo

logger = logging.getLogger(__name__)


class UserRepository:
    """Data access for User rows."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_username_or_email(self, username: str) -> Optional[User]:
        """Case-insensitive match on either the username or the email column."""
        value = username.strip().lower()
        stmt = select(User).where(
            or_(func.lower(User.username) == value, func.lower(User.email) == value)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def find_activated_user_by_id(self, user_id: int) -> Optional[User]:
        stmt = select(User).where(User.id == user_id, User.status == STATUS_ACTIVATED)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def exists_by_username_or_email(
        self, username: Optional[str], email: Optional[str]
    ) -> bool:
        conditions = []
        if username:
            conditions.append(func.lower(User.username) == username.lower())
        if email:
            conditions.append(func.lower(User.email) == email.lower())
        if not conditions:
            return False
        result = await self.session.execute(select(exists().where(or_(*conditions))))
        return bool(result.scalar())

    async def find_user_info(self, user_id: int) -> Optional[UserInfo]:
        """Projection of an activated user, or None."""
        user = await self.find_activated_user_by_id(user_id)
        if user is None:
            return None
        return UserInfo.model_validate(user)

    async def get_activated_user_info(self, user_id: int) -> UserInfo:
        info = await self.find_user_info(user_id)
        if info is None:
            raise NoResultFound(f"No activated user with id {user_id}")
        return info

    async def add(self, user: User) -> User:
        """Stages a new user and flushes so the generated id is available."""
        self.session.add(user)
        await self.session.flush()
        logger.info("Created user id=%s username=%s", user.id, user.username)
        return user
