"""
Error Handler Middleware

- register_exception_handlers(): translates service failures
  (cookbook_api.core.exceptions) and request validation failures
  into JSON responses. This is the only place where a failure kind
  becomes an HTTP status code.
- ErrorHandlerMiddleware: catches everything else and logs it using
  the error logging service.
"""

from typing import Callable

from fastapi import FastAPI, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from cookbook_api.core.exceptions import ServiceError, ValidationError
from cookbook_api.services.error_logging import error_logger


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Map a ServiceError to its status code and a {"detail": ...} body."""
    if exc.status_code >= 500:
        # Upstream failures - log as error
        error_logger.log_error(
            exc,
            request=request,
            user=getattr(request.state, 'user', None),
            severity="error",
            context={"status_code": exc.status_code, "details": exc.details}
        )

    content = {"detail": exc.message}
    if exc.details:
        content["details"] = exc.details
    return JSONResponse(status_code=exc.status_code, content=content)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies and query strings as 400."""
    error = ValidationError("Validation failed", details=jsonable_encoder(exc.errors()))
    return JSONResponse(
        status_code=error.status_code,
        content={"detail": error.message, "errors": error.details}
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers above on the application."""
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Last line of defence: any exception no handler claimed becomes a 500.

    The body carries the id of the stored ErrorLog row (when database
    logging is configured) so users can quote it in a bug report.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            error_id = error_logger.log_error(
                exc,
                request=request,
                user=getattr(request.state, "user", None),
                severity="critical",
                context={"unhandled": True}
            )
            return JSONResponse(
                status_code=500,
                content={
                    "detail": "Internal server error",
                    "error_id": str(error_id) if error_id else None,
                }
            )
