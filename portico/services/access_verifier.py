"""Role checks against the current request's authenticated user."""

import logging

from portico.context import get_current_user_id, get_current_user_roles
from portico.exceptions import AuthorizationException

logger = logging.getLogger(__name__)


class AccessVerifier:
    """Fails closed: a role is granted only when the current user holds it."""

    def require_role(self, role: str) -> None:
        if role not in get_current_user_roles():
            logger.info("User id=%s lacks required role %s", get_current_user_id(), role)
            raise AuthorizationException()


def get_access_verifier() -> AccessVerifier:
    return AccessVerifier()
