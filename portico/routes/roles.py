"""
Portico Backend — Role Check Routes
=====================================

    GET /api/test/secure/admin   "ok" for callers holding the ADMIN role
"""

from fastapi import APIRouter, Depends

from portico.lifecycle import LifecycleRoute
from portico.security.dependencies import require_user
from portico.services.access_verifier import AccessVerifier, get_access_verifier

ROLE_ADMIN = "ADMIN"
ROLE_USER = "USER"

router = APIRouter(
    prefix="/api/test/secure",
    tags=["Roles"],
    route_class=LifecycleRoute,
    dependencies=[Depends(require_user)],
)


@router.get("/admin", summary="Succeeds only for administrators")
async def test_admin(verifier: AccessVerifier = Depends(get_access_verifier)) -> str:
    verifier.require_role(ROLE_ADMIN)
    return "ok"
