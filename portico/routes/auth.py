"""
Portico Backend — Authentication Routes
=========================================

    POST /api/auth/register        create an account
    POST /api/auth/token           exchange credentials for an access token
    POST /api/auth/secure/logout   revoke the caller's token
"""

from http import HTTPStatus

from fastapi import APIRouter, Depends

from portico.lifecycle import LifecycleRoute
from portico.schemas.user import RegisterRequest, TokenRequest, TokenResponse, UserInfo
from portico.security.dependencies import require_user
from portico.services.auth_service import AuthenticationService, get_authentication_service

router = APIRouter(prefix="/api/auth", tags=["Auth"], route_class=LifecycleRoute)


@router.post("/register", summary="Register a new account")
async def register(
    body: RegisterRequest,
    service: AuthenticationService = Depends(get_authentication_service),
) -> UserInfo:
    return await service.register(body)


@router.post("/token", summary="Issue an access token")
async def generate_token(
    body: TokenRequest,
    service: AuthenticationService = Depends(get_authentication_service),
) -> TokenResponse:
    token = await service.generate_token(
        body.username, body.password, increase_expired=body.remember_me
    )
    return TokenResponse(token=token)


@router.post(
    "/secure/logout",
    summary="Revoke the current access token",
    dependencies=[Depends(require_user)],
)
async def logout(
    service: AuthenticationService = Depends(get_authentication_service),
) -> HTTPStatus:
    await service.logout()
    return HTTPStatus.OK
