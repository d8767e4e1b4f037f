"""Error Handlers — map exceptions onto the API error envelope.

Invariants:
    - Every error response has the shape {"error": {code, message, category, severity, ...}}
    - ClauseValidationError and RequestValidationError → HTTP 400 with the caller's problem spelled out
    - Critical errors (ContractViolationError, anything unhandled) → HTTP 500 with a
      generic message; the internal message only reaches the log
    - Handlers never raise

Design Decisions:
    - One handler per layer: domain (RuliadError), request validation, catch-all
    - _envelope builds every body so the three layers cannot drift apart
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ruliad.core.errors import ErrorCategory, ErrorSeverity, RuliadError

logger = logging.getLogger(__name__)

GENERIC_MESSAGE = "An unexpected error occurred"


def register_error_handlers(app: FastAPI) -> None:
    """Attach the domain, validation and catch-all handlers to app."""
    app.add_exception_handler(RuliadError, _handle_ruliad_error)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
    app.add_exception_handler(Exception, _handle_unexpected_error)


def _envelope(code: str, message: str, category: str, severity: ErrorSeverity, **extra) -> dict:
    body = {
        "code": code,
        "message": message,
        "category": category,
        "severity": severity.value,
    }
    body.update(extra)
    return {"error": body}


async def _handle_ruliad_error(request: Request, exc: RuliadError) -> JSONResponse:
    extra = {"error_code": exc.code, "path": request.url.path}
    if exc.severity is ErrorSeverity.CRITICAL:
        logger.error(f"{exc.code} on {request.url.path}: {exc.message}", extra=extra)
        content = _envelope(exc.code, GENERIC_MESSAGE, exc.category.value, exc.severity)
    else:
        logger.warning(f"{exc.code} on {request.url.path}: {exc.message}", extra=extra)
        content = exc.to_response()
    return JSONResponse(status_code=exc.http_status, content=content)


async def _handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    logger.warning(
        f"Rejected request to {request.url.path}: {len(errors)} invalid field(s)",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    details = [
        {
            "field": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in errors
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope(
            "VALIDATION_ERROR", "Invalid request data",
            ErrorCategory.VALIDATION.value, ErrorSeverity.ERROR, details=details,
        ),
    )


async def _handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.url.path}: {exc}",
        exc_info=True,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(
            "INTERNAL_ERROR", GENERIC_MESSAGE,
            ErrorCategory.INTERNAL.value, ErrorSeverity.CRITICAL,
        ),
    )
