"""Error translation — the one place that maps ErrorKind to HTTP status.

Learn: Services raise ServiceError subclasses tagged with an ErrorKind.
These handlers turn them into a uniform JSON body:

    {"timestamp": ..., "status": 404, "error": "PROJECT_NOT_FOUND",
     "message": "Project not found with id: 7", "path": "/api/v1/projects/7"}

Request validation failures become 400 VALIDATION_ERROR. Anything
unexpected becomes 500 INTERNAL_ERROR with a generic message (the real
exception is logged, never returned); that response is built by
UnhandledErrorMiddleware so the response still passes through the rest of
the middleware stack.
"""

from datetime import datetime, timezone

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from tasktrack.errors import ErrorKind, ServiceError
from tasktrack.schemas.common import ErrorResponse

logger = structlog.get_logger()

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.AUTHENTICATION_FAILED: 401,
    ErrorKind.ACCESS_DENIED: 403,
    ErrorKind.PROJECT_NOT_FOUND: 404,
    ErrorKind.TASK_NOT_FOUND: 404,
    ErrorKind.VALIDATION_ERROR: 400,
    ErrorKind.CONFLICT: 409,
    ErrorKind.INTERNAL_ERROR: 500,
}


def error_response(request: Request, kind: ErrorKind, message: str) -> JSONResponse:
    status = STATUS_BY_KIND[kind]
    body = ErrorResponse(
        timestamp=datetime.now(timezone.utc),
        status=status,
        error=kind.value,
        message=message,
        path=request.url.path,
    )
    return JSONResponse(status_code=status, content=body.model_dump(mode="json"))


async def handle_service_error(request: Request, exc: ServiceError) -> JSONResponse:
    return error_response(request, exc.kind, exc.message)


async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    message = "Validation error"
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    return error_response(request, ErrorKind.VALIDATION_ERROR, message)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("request.unhandled_error", path=request.url.path)
    return error_response(
        request, ErrorKind.INTERNAL_ERROR, "Unexpected error occurred"
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, handle_service_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
