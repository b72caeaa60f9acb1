"""
Portico Backend — Custom Exception Hierarchy
==============================================

What:  Typed failures raised by services, repositories and security code.
How:   Components raise these and never catch them locally. The error
       classifier (portico.error_classifier) is the single place that turns
       a failure into an HTTP status code and a response envelope.

Exception Hierarchy:
    PorticoError (base)                      → 500 server-error
    ├── LogicException                       → 400 (message key + variables)
    ├── ValidationException                  → 412 (field → error mapping)
    ├── NotFoundException                    → 404
    ├── AuthenticationException              → 400 (own message text)
    ├── AuthorizationException               → 401
    └── ForbiddenAccessException             → 403

The "no data" failure is SQLAlchemy's own `NoResultFound`; it is not
wrapped here.
"""

from typing import Any, Dict, Optional


class PorticoError(Exception):
    """
    Base exception for all Portico application errors.

    Attributes:
        message:  Localization key or literal text safe to return to clients
    """

    def __init__(self, message: str = "app.common.exception.server-error"):
        self.message = message
        super().__init__(self.message)


class LogicException(PorticoError):
    """
    A business rule was violated.

    `message` is a localization key; `variables` carries the interpolation
    data the client needs to render it, e.g.

        LogicException("app.user.exception.exists", {"username": "alice"})
    """

    def __init__(
        self,
        message: str,
        variables: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.variables = variables or {}


class ValidationException(PorticoError):
    """
    Field-level validation failed.

    `data` maps a field name to its error message and is returned to the
    client as the envelope payload.
    """

    def __init__(
        self,
        data: Optional[Dict[str, Any]] = None,
        message: str = "app.common.exception.validation",
    ):
        super().__init__(message)
        self.data = data or {}


class NotFoundException(PorticoError):
    """The requested resource does not exist."""

    def __init__(self, message: str = "app.common.exception.notfound"):
        super().__init__(message)


class AuthenticationException(PorticoError):
    """Bad credentials or an unusable token. The message is shown verbatim."""

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message)


class AuthorizationException(PorticoError):
    """The caller is not authenticated, or lacks a required role."""

    def __init__(self, message: str = "app.common.exception.AuthorizationException"):
        super().__init__(message)


class ForbiddenAccessException(PorticoError):
    """The caller is known but not allowed to perform the action."""

    def __init__(self, message: str = "app.common.exception.forbidden"):
        super().__init__(message)
