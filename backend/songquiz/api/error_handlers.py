"""Error Handlers — every failure leaves the API as the same JSON envelope.

Invariants:
    - SongQuizError -> its own http_status and to_response() body
    - RequestValidationError -> 400 VALIDATION_ERROR with one entry per field
    - Anything else -> 500 INTERNAL_ERROR, message never includes exception text
    - Rejections (4xx) log at WARNING, failures (5xx) at ERROR

Design Decisions:
    - Handlers are module-level coroutines registered with add_exception_handler,
      so tests can call them directly
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from songquiz.core.errors import ErrorCategory, ErrorSeverity, SongQuizError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SongQuizError, handle_quiz_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)


async def handle_quiz_error(request: Request, exc: SongQuizError) -> JSONResponse:
    level = logging.ERROR if exc.http_status >= 500 else logging.WARNING
    logger.log(
        level,
        f"{exc.code.value}: {exc.message}",
        extra={
            "error_code": exc.code.value,
            "path": request.url.path,
            "status": exc.http_status,
            "quiz_id": exc.context.quiz_id,
            "user_id": exc.context.user_id,
            "submission_id": exc.context.submission_id,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def handle_validation_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors()
    ]
    logger.warning(
        f"Rejected request body: {[d['field'] for d in details]}",
        extra={"path": request.url.path, "status": status.HTTP_400_BAD_REQUEST},
    )
    return _envelope(
        status.HTTP_400_BAD_REQUEST,
        "VALIDATION_ERROR",
        "Invalid request data",
        ErrorCategory.VALIDATION,
        ErrorSeverity.ERROR,
        details=details,
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__}",
        exc_info=exc,
        extra={"path": request.url.path, "status": 500},
    )
    return _envelope(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_ERROR",
        "An unexpected error occurred",
        ErrorCategory.INTERNAL,
        ErrorSeverity.CRITICAL,
    )


def _envelope(
    http_status: int,
    code: str,
    message: str,
    category: ErrorCategory,
    severity: ErrorSeverity,
    **extra,
) -> JSONResponse:
    body = {
        "code": code,
        "message": message,
        "category": category.value,
        "severity": severity.value,
        **extra,
    }
    return JSONResponse(status_code=http_status, content={"error": body})
