"""
Portico Backend — Request Lifecycle
=====================================

What:  The decorator chain every request passes through:

           pre-hook ──▶ handler ──┬──▶ success: normalize result into an Envelope
                                  └──▶ failure: classify error into (status, Envelope)

How:
    RequestLifecycleMiddleware  runs the pre-hook once per request before
                                dispatch (language from Accept-Language, user
                                slot cleared) and classifies any failure that
                                no exception handler rendered.
    LifecycleRoute              APIRoute subclass that wraps each endpoint so
                                its return value leaves as an Envelope.
    register_exception_handlers (portico.error_classifier) renders typed
                                failures raised inside routing.

Exactly one of the success path or the failure path produces the response:
a handler that raises never reaches normalize(), and a handler that
returns never reaches the classifier.
"""

import functools
import inspect
from http import HTTPStatus
from typing import Any, Callable

from fastapi.datastructures import DefaultPlaceholder
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from portico.context import set_current_user, set_language
from portico.error_classifier import render_failure
from portico.schemas.envelope import Envelope


# ══════════════════════════════════════════════════════════════════════════
# Pre-hook
# ══════════════════════════════════════════════════════════════════════════

def before_request(request: Request) -> None:
    """Seeds the context store for a new request."""
    # Raw header value, no negotiation; absent/blank falls back to "en"
    set_language(request.headers.get("Accept-Language"))
    set_current_user(None)


# ══════════════════════════════════════════════════════════════════════════
# Success path
# ══════════════════════════════════════════════════════════════════════════

def normalize(result: Any) -> Envelope:
    """
    Wraps a handler's return value in a success envelope.

    - an Envelope is returned unchanged (the handler chose its own shape)
    - an HTTPStatus marker becomes an empty success envelope
    - anything else becomes the payload
    """
    if isinstance(result, Envelope):
        return result
    if isinstance(result, HTTPStatus):
        return Envelope.ok()
    return Envelope.ok(result)


def render_success(result: Any) -> Response:
    # A raw Response means the handler has already taken over the transport
    if isinstance(result, Response):
        return result
    envelope = normalize(result)
    return JSONResponse(status_code=envelope.code, content=envelope.render())


def envelope_endpoint(endpoint: Callable[..., Any]) -> Callable[..., Any]:
    """
    Decorates a FastAPI endpoint so its result is rendered as an Envelope.

    functools.wraps keeps the original signature visible to FastAPI, so
    parameters and dependencies are resolved exactly as before. The wrapper
    keeps the endpoint's sync/async nature, so sync endpoints still run in
    the threadpool.
    """
    # include_router() rebuilds routes from already wrapped endpoints
    if getattr(endpoint, "__envelope_endpoint__", False):
        return endpoint

    if inspect.iscoroutinefunction(endpoint):

        @functools.wraps(endpoint)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Response:
            return render_success(await endpoint(*args, **kwargs))

        async_wrapper.__envelope_endpoint__ = True
        return async_wrapper

    @functools.wraps(endpoint)
    def wrapper(*args: Any, **kwargs: Any) -> Response:
        return render_success(endpoint(*args, **kwargs))

    wrapper.__envelope_endpoint__ = True
    return wrapper


class LifecycleRoute(APIRoute):
    """
    Route class applying the success path to every endpoint of a router.

    Usage:
        router = APIRouter(prefix="/api", route_class=LifecycleRoute)

    Routes without an explicit response_model are documented as Envelope.
    """

    def __init__(self, path: str, endpoint: Callable[..., Any], **kwargs: Any) -> None:
        if isinstance(kwargs.get("response_model", DefaultPlaceholder(None)), DefaultPlaceholder):
            kwargs["response_model"] = Envelope
        super().__init__(path, envelope_endpoint(endpoint), **kwargs)


# ══════════════════════════════════════════════════════════════════════════
# Pre-hook + failure fallback
# ══════════════════════════════════════════════════════════════════════════

class RequestLifecycleMiddleware(BaseHTTPMiddleware):
    """
    Runs the pre-hook, then dispatches.

    Failures raised inside routing are normally rendered by the registered
    exception handlers; whatever escapes them (unexpected errors) is
    classified here, so clients never receive a framework error page.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        before_request(request)
        try:
            return await call_next(request)
        except Exception as exc:
            return render_failure(exc)
