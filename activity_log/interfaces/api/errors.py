"""Translate pipeline errors into HTTP responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from activity_log.domain.errors import (
    DuplicateEventError,
    PersistenceError,
    PublishError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str, **extra) -> JSONResponse:
    body = {"status": "error", "message": message, **extra}
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


async def _validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    errors = [{"field": error.get("field"), "message": error.get("message")} for error in exc.errors]
    return _error_response(
        status.HTTP_400_BAD_REQUEST, "Validation Error", detail=exc.message, errors=errors
    )


async def _duplicate_event_handler(request: Request, exc: DuplicateEventError) -> JSONResponse:
    return _error_response(status.HTTP_409_CONFLICT, str(exc))


async def _persistence_error_handler(request: Request, exc: PersistenceError) -> JSONResponse:
    logger.error("Persistence failure on %s %s: %s", request.method, request.url.path, exc)
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error")


async def _publish_error_handler(request: Request, exc: PublishError) -> JSONResponse:
    logger.error("Publish failure on %s %s: %s", request.method, request.url.path, exc)
    return _error_response(
        status.HTTP_503_SERVICE_UNAVAILABLE, "Failed to send event to Kafka"
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the pipeline error handlers to ``app``."""

    app.add_exception_handler(ValidationError, _validation_error_handler)
    app.add_exception_handler(DuplicateEventError, _duplicate_event_handler)
    app.add_exception_handler(PersistenceError, _persistence_error_handler)
    app.add_exception_handler(PublishError, _publish_error_handler)


__all__ = ["register_exception_handlers"]
