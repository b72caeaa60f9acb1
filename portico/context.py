"""
Portico Backend — Request Context Store
=========================================

What:  Per-request slots for the resolved language and the authenticated user.
How:   ContextVar storage. Each request runs in its own asyncio task, and
       ContextVar values are task-local, so two concurrent requests never
       see each other's slots (threadpool endpoints receive a copy of the
       calling context).
Who:   Written by the request lifecycle pre-hook and by the authentication
       dependency; read by services, the access verifier and error handling.
"""

from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Set

DEFAULT_LANGUAGE = "en"


@dataclass(frozen=True)
class UserProfile:
    """Identity resolved from a verified access token."""

    id: int
    username: str
    roles: FrozenSet[str] = field(default_factory=frozenset)
    token_id: Optional[str] = None
    expires_at: Optional[int] = None


_language_var: ContextVar[Optional[str]] = ContextVar("portico_language", default=None)
_user_var: ContextVar[Optional[UserProfile]] = ContextVar("portico_user", default=None)


# ── Language ──────────────────────────────────────────────────────────────

def set_language(language: Optional[str]) -> None:
    """Stores the raw Accept-Language value, or the default when absent/blank."""
    if language is None or not language.strip():
        language = DEFAULT_LANGUAGE
    _language_var.set(language)


def get_language() -> str:
    return _language_var.get() or DEFAULT_LANGUAGE


# ── Current user ──────────────────────────────────────────────────────────

def set_current_user(profile: Optional[UserProfile]) -> None:
    _user_var.set(profile)


def get_current_user() -> Optional[UserProfile]:
    return _user_var.get()


def get_current_user_id() -> int:
    """Returns the authenticated user's id, or 0 when nobody is authenticated."""
    profile = _user_var.get()
    return profile.id if profile is not None else 0


def get_current_user_roles() -> Set[str]:
    """Returns the authenticated user's roles; empty when nobody is authenticated."""
    profile = _user_var.get()
    if profile is None or not profile.roles:
        return set()
    return set(profile.roles)
