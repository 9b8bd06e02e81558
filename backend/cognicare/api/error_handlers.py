"""Error Handlers — global exception handlers for the CogniCare API.

Invariants:
    - CogniCareError → its http_status with {"success": false, "message", "error"}
    - RequestValidationError → 400 with the first message and field-level `errors`
    - Unknown route (404/405 from the router) → {"message": "Ruta no encontrada: METHOD path"}
    - Exception (catch-all) → 500, never leaks internal details outside development
    - 4xx logged as warning, 5xx as error

Design Decisions:
    - Four-layer handler: domain, validation, routing, catch-all
    - Database driver text only shown when settings.environment is development
"""

import logging
import traceback

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from cognicare.config import get_settings
from cognicare.core.errors import (
    CogniCareError, DatabaseError, ErrorCategory, ErrorSeverity,
)

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Error interno del servidor."


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:
    """Register CogniCare domain/infrastructure error handler."""

    @app.exception_handler(CogniCareError)
    async def cognicare_error_handler(request: Request, exc: CogniCareError):
        """Handle all CogniCare domain/infrastructure errors."""
        extra = {
            "error_code": exc.code,
            "path": request.url.path,
            "method": request.method,
            "status_code": exc.http_status,
        }
        content = exc.to_response()
        if exc.http_status < 500:
            logger.warning(f"Client error ({exc.http_status}): {exc.message}", extra=extra)
        else:
            logger.error(f"Server error ({exc.http_status}): {exc.message}", extra=extra)
            if isinstance(exc, DatabaseError):
                if get_settings().is_development:
                    content["error"]["detail"] = exc.detail
                else:
                    content["message"] = INTERNAL_ERROR_MESSAGE
        return JSONResponse(status_code=exc.http_status, content=content)


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"path": request.url.path, "method": request.method},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_http_error_handler(app: FastAPI) -> None:
    """Register router-level HTTP errors (unknown path or method)."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            message = f"Ruta no encontrada: {request.method} {request.url.path}"
            logger.warning(message, extra={"path": request.url.path, "method": request.method})
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND, content={"message": message},
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path, "method": request.method},
        )
        content = {
            "success": False,
            "message": INTERNAL_ERROR_MESSAGE,
            "error": {
                "code": "INTERNAL_ERROR",
                "category": ErrorCategory.INTERNAL.value,
                "severity": ErrorSeverity.CRITICAL.value,
            },
        }
        if get_settings().is_development:
            content["stack"] = "".join(
                traceback.format_exception(type(exc), exc, exc.__traceback__),
            )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content,
        )


def _clean_message(msg: str) -> str:
    """Pydantic prefixes ValueError messages raised in validators with 'Value error, '."""
    prefix = "Value error, "
    return msg[len(prefix):] if msg.startswith(prefix) else msg


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    errors = [
        {
            "field": ".".join(str(loc) for loc in e["loc"] if loc != "body"),
            "message": _clean_message(e["msg"]),
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    return {
        "success": False,
        "message": errors[0]["message"] if errors else "Datos de entrada inválidos.",
        "errors": errors,
    }
