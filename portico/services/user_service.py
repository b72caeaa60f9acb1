"""
Portico Backend — User Service
================================

What:  Read-side operations on the current user.
Who:   Called by GET /api/user/secure/info.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from portico.context import get_current_user_id
from portico.database import get_db_session
from portico.repositories.user import UserRepository
from portico.schemas.user import UserInfo


class UserService:
    def __init__(self, users: UserRepository):
        self.users = users

    async def get_current_user_info(self) -> UserInfo:
        """
        Profile of the authenticated caller.

        Raises:
            NoResultFound: the token is valid but the account is gone or
                deactivated (rendered as the "no data" failure).
        """
        return await self.users.get_activated_user_info(get_current_user_id())


def get_user_service(db: AsyncSession = Depends(get_db_session)) -> UserService:
    return UserService(UserRepository(db))
