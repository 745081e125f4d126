"""Error Handlers — global exception handlers for the scouting API.

Invariants:
    - ScoutingError → {status: "error", message, error{code, category, severity}}
    - RequestValidationError → 400 with field-level details
    - Starlette HTTPException (unknown route, 405) → same envelope, path + method
    - Exception (catch-all) → 500 "Something went wrong"; the caught message is
      included only when settings.expose_internal_errors is set
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from scouting.config import get_settings
from scouting.core.errors import ScoutingError, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_scouting_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_scouting_error_handler(app: FastAPI) -> None:

    @app.exception_handler(ScoutingError)
    async def scouting_error_handler(request: Request, exc: ScoutingError):
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"ScoutingError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        message = (
            "Route not found" if exc.status_code == status.HTTP_404_NOT_FOUND
            else str(exc.detail)
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "status": "error",
                "message": message,
                "error": {
                    "code": f"HTTP_{exc.status_code}",
                    "path": request.url.path,
                    "method": request.method,
                },
            },
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        error = {
            "code": "INTERNAL_ERROR",
            "category": "internal",
            "severity": ErrorSeverity.CRITICAL.value,
        }
        if get_settings().expose_internal_errors:
            error["detail"] = str(exc) or exc.__class__.__name__
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "status": "error",
                "message": "Something went wrong",
                "error": error,
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    return {
        "status": "error",
        "message": "Validation failed",
        "error": {
            "code": "VALIDATION_ERROR",
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
