"""Map domain errors onto HTTP responses.

Bodies carry no details; those go to the log.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final

from fastapi import status
from fastapi.responses import JSONResponse

from pokesync.api.schemas import ErrorResponse
from pokesync.domain.errors import InvalidArgument, PokesyncError, SyncAlreadyRunning

if TYPE_CHECKING:
    from fastapi import FastAPI, Request

log = logging.getLogger(__name__)

INVALID_PARAMETER: Final[str] = "Invalid parameter"
SYNC_ALREADY_RUNNING: Final[str] = "Synchronization already running"
INTERNAL_SERVER_ERROR: Final[str] = "Internal server error"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


async def invalid_argument_handler(request: Request, exc: Exception) -> JSONResponse:
    log.info("Rejected %s %s: %s", request.method, request.url.path, exc)
    return error_response(status.HTTP_400_BAD_REQUEST, INVALID_PARAMETER)


async def sync_already_running_handler(request: Request, exc: Exception) -> JSONResponse:
    _ = exc
    log.warning("Rejected %s %s: sync already running", request.method, request.url.path)
    return error_response(status.HTTP_503_SERVICE_UNAVAILABLE, SYNC_ALREADY_RUNNING)


async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.error(
        "Request %s %s failed",
        request.method,
        request.url.path,
        exc_info=(type(exc), exc, exc.__traceback__),
    )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_SERVER_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InvalidArgument, invalid_argument_handler)
    app.add_exception_handler(SyncAlreadyRunning, sync_already_running_handler)
    app.add_exception_handler(PokesyncError, internal_error_handler)
    app.add_exception_handler(Exception, internal_error_handler)
