"""Unhandled error middleware — last-resort 500 inside the middleware stack.

Learn: A FastAPI handler registered for plain Exception is served by
Starlette's ServerErrorMiddleware, the outermost layer. Its response skips
the headers every other middleware adds, and the exception is re-raised
afterwards. Catching here, innermost, keeps the 500 on the same path as
every other response.
"""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from tasktrack.api.errors import handle_unexpected_error


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """Turn any uncaught exception into a 500 INTERNAL_ERROR body."""

    async def dispatch(self, request: Request, call_next) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            return await handle_unexpected_error(request, exc)
