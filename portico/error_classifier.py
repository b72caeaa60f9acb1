"""
Portico Backend — Error Classifier
====================================

What:  Maps any raised failure to an HTTP status code and a response envelope.
How:   A single ordered chain of type checks; the first match wins, so more
       specific kinds must stay above the generic fallbacks.
Who:   Called by the exception handlers registered on the app and by the
       request lifecycle middleware for failures nothing else handled.

Mapping (in priority order):
    LogicException                     → 400  message key + variables
    ValidationException / request body → 412  payload = field errors
    NotFoundException / router 404     → 404  app.common.exception.notfound
    AuthenticationException            → 400  exception's own message
    AuthorizationException / router 401→ 401  app.common.exception.AuthorizationException
    ForbiddenAccessException           → 403  app.common.exception.forbidden
    sqlalchemy NoResultFound           → 400  app.common.exception.no-data
    any other Exception                → 500  app.common.exception.server-error
    anything else                      → 500  app.common.exception.unknown-error

Every failure is logged at ERROR with its traceback before it is mapped.
Clients only ever see the envelope.
"""

import logging
from http import HTTPStatus
from typing import Any, Dict, Sequence, Tuple

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import NoResultFound
from starlette.exceptions import HTTPException as StarletteHTTPException

from portico.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ForbiddenAccessException,
    LogicException,
    NotFoundException,
    PorticoError,
    ValidationException,
)
from portico.middleware.request_id import request_id_var
from portico.schemas.envelope import Envelope

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "app.common.exception.notfound"
AUTHORIZATION_MESSAGE = "app.common.exception.AuthorizationException"
FORBIDDEN_MESSAGE = "app.common.exception.forbidden"
NO_DATA_MESSAGE = "app.common.exception.no-data"
SERVER_ERROR_MESSAGE = "app.common.exception.server-error"
UNKNOWN_ERROR_MESSAGE = "app.common.exception.unknown-error"


def _is_router_signal(error: BaseException, status: HTTPStatus) -> bool:
    return isinstance(error, StarletteHTTPException) and error.status_code == status


def field_errors(errors: Sequence[Dict[str, Any]]) -> Dict[str, str]:
    """
    Flattens pydantic error dicts into a field → message mapping.

    The location prefix ("body", "query", ...) is dropped, nested locations
    are dotted: ("body", "address", "zip") → "address.zip". The first error
    reported for a field wins.
    """
    result: Dict[str, str] = {}
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        if len(loc) > 1 and loc[0] in {"body", "query", "path", "header", "cookie"}:
            loc = loc[1:]
        name = ".".join(loc) or "__root__"
        result.setdefault(name, error.get("msg", "invalid"))
    return result


def classify(error: BaseException) -> Tuple[int, Envelope]:
    """Returns (http_status, envelope) for any failure. Never raises."""
    logger.error(
        "Something went wrong, detail: %s: %s",
        type(error).__name__,
        error,
        exc_info=(type(error), error, error.__traceback__),
    )

    if isinstance(error, LogicException):
        code = HTTPStatus.BAD_REQUEST
        return code, Envelope.fail(code, error.message, variables=error.variables)

    if isinstance(error, ValidationException):
        code = HTTPStatus.PRECONDITION_FAILED
        return code, Envelope.fail(code, payload=error.data)

    if isinstance(error, RequestValidationError):
        code = HTTPStatus.PRECONDITION_FAILED
        return code, Envelope.fail(code, payload=field_errors(error.errors()))

    if isinstance(error, NotFoundException) or _is_router_signal(error, HTTPStatus.NOT_FOUND):
        code = HTTPStatus.NOT_FOUND
        return code, Envelope.fail(code, NOT_FOUND_MESSAGE)

    if isinstance(error, AuthenticationException):
        code = HTTPStatus.BAD_REQUEST
        return code, Envelope.fail(code, error.message)

    if isinstance(error, AuthorizationException) or _is_router_signal(
        error, HTTPStatus.UNAUTHORIZED
    ):
        code = HTTPStatus.UNAUTHORIZED
        return code, Envelope.fail(code, AUTHORIZATION_MESSAGE)

    if isinstance(error, ForbiddenAccessException):
        code = HTTPStatus.FORBIDDEN
        return code, Envelope.fail(code, FORBIDDEN_MESSAGE)

    if isinstance(error, NoResultFound):
        code = HTTPStatus.BAD_REQUEST
        return code, Envelope.fail(code, NO_DATA_MESSAGE)

    code = HTTPStatus.INTERNAL_SERVER_ERROR
    if isinstance(error, Exception):
        return code, Envelope.fail(code, SERVER_ERROR_MESSAGE)
    return code, Envelope.fail(code, UNKNOWN_ERROR_MESSAGE)


def render_failure(error: BaseException) -> JSONResponse:
    """Classifies `error` and renders the envelope with the computed status."""
    code, envelope = classify(error)
    headers = {}
    rid = request_id_var.get("")
    if rid:
        headers["X-Request-ID"] = rid
    return JSONResponse(status_code=int(code), content=envelope.render(), headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Routes every typed failure to the classifier.

    Registered for the application's own hierarchy, the router's
    HTTPException (404 for unmatched paths, 405, ...), request validation
    errors and SQLAlchemy's NoResultFound. Anything else escapes to
    RequestLifecycleMiddleware, which classifies it the same way, so each
    failure is rendered exactly once.
    """

    async def handle_failure(request: Request, exc: Exception) -> JSONResponse:
        return render_failure(exc)

    for exc_class in (
        PorticoError,
        StarletteHTTPException,
        RequestValidationError,
        NoResultFound,
    ):
        app.add_exception_handler(exc_class, handle_failure)
