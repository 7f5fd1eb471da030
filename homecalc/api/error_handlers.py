"""Error Handlers: global exception handlers for the HomeCalc AI API.

Invariants:
    - HomeCalcError -> structured JSON with code, generic message, severity
    - Body validation (Pydantic) -> field-level error details
    - Exception (catch-all) -> never leaks internal details
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError as BodyValidationError
from fastapi.responses import JSONResponse

from homecalc.core.errors import GENERIC_FAILURE_MESSAGE, ErrorSeverity, HomeCalcError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_homecalc_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_homecalc_error_handler(app: FastAPI) -> None:

    @app.exception_handler(HomeCalcError)
    async def homecalc_error_handler(request: Request, exc: HomeCalcError):
        logger.error(
            f"HomeCalcError: {exc.message}",
            extra={**exc.log_fields(), "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(BodyValidationError)
    async def validation_error_handler(
        request: Request, exc: BodyValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {len(exc.errors())} error(s)",
            extra={"error_code": "REQUEST_VALIDATION_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": GENERIC_FAILURE_MESSAGE,
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _build_validation_error_response(exc: BodyValidationError) -> dict:
    return {
        "error": {
            "code": "REQUEST_VALIDATION_ERROR",
            "message": GENERIC_FAILURE_MESSAGE,
            "category": "validation",
            "severity": ErrorSeverity.WARNING.value,
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
