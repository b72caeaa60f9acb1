"""
Portico Backend — User Routes
===============================

    GET /api/user/secure/info   profile of the authenticated caller
"""

from fastapi import APIRouter, Depends

from portico.lifecycle import LifecycleRoute
from portico.schemas.user import UserInfo
from portico.security.dependencies import require_user
from portico.services.user_service import UserService, get_user_service

router = APIRouter(
    prefix="/api/user/secure",
    tags=["User"],
    route_class=LifecycleRoute,
    dependencies=[Depends(require_user)],
)


@router.get("/info", summary="Current user profile")
async def info(service: UserService = Depends(get_user_service)) -> UserInfo:
    return await service.get_current_user_info()
