"""Exception handlers mapping errors to JSON responses."""
import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.errors import (
    InvalidOptionIndexError,
    QuestionSetEmptyError,
    QuizSessionError,
    SessionAlreadyCompletedError,
)

logger = logging.getLogger(__name__)

SESSION_ERROR_STATUS = {
    InvalidOptionIndexError: status.HTTP_400_BAD_REQUEST,
    QuestionSetEmptyError: status.HTTP_400_BAD_REQUEST,
    SessionAlreadyCompletedError: status.HTTP_409_CONFLICT,
}


def _session_error_status(exc: QuizSessionError) -> int:
    for error_type, status_code in SESSION_ERROR_STATUS.items():
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


async def quiz_session_error_handler(request: Request, exc: QuizSessionError) -> JSONResponse:
    """Reject a session event; the session itself is left unchanged."""
    status_code = _session_error_status(exc)
    logger.info(f"Rejected {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status_code,
        content={"message": str(exc), "error": exc.code},
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report schema validation failures as 400."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "message": "Validation error",
            "errors": jsonable_encoder(exc.errors()),
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(QuizSessionError, quiz_session_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
