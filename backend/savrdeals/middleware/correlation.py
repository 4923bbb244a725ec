"""Request tracing: correlation ids and per-request log context.

Every response carries an X-Request-ID header. While a request is served,
its method and path are bound into structlog's context so service and
integration logs can be traced back to the route that caused them.
"""

import uuid

import structlog
from asgi_correlation_id import CorrelationIdMiddleware
from asgi_correlation_id.context import correlation_id
from fastapi import FastAPI

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware:
    """Pure ASGI middleware binding method and path for the life of a request."""

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        with structlog.contextvars.bound_contextvars(method=scope["method"], path=scope["path"]):
            await self.app(scope, receive, send)


def setup_correlation_middleware(app: FastAPI) -> None:
    """Install request tracing on the app.

    A client-supplied X-Request-ID is echoed back unchanged; otherwise a
    UUID4 is generated. The id middleware is added last so it wraps the
    context middleware and the id is set before anything logs.
    """
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CorrelationIdMiddleware,
        header_name=REQUEST_ID_HEADER,
        generator=lambda: str(uuid.uuid4()),
        validator=None,
        transformer=lambda a: a,
    )


def get_correlation_id() -> str | None:
    """Current request's id, or None outside a request."""
    return correlation_id.get(None)


__all__ = [
    "REQUEST_ID_HEADER",
    "RequestContextMiddleware",
    "setup_correlation_middleware",
    "get_correlation_id",
]
