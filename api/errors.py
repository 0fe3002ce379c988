"""
Maps domain exceptions to HTTP responses.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from exceptions import (
    AlreadyExistsError,
    AuthError,
    InternalError,
    InvalidCredentialsError,
    NotFoundError,
    NotFoundOrForbiddenError,
    TaskManagerError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Checked in order; subclasses map through their base.
EXCEPTION_STATUS_MAP = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    AlreadyExistsError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_400_BAD_REQUEST,
    AuthError: status.HTTP_401_UNAUTHORIZED,
    InvalidCredentialsError: status.HTTP_401_UNAUTHORIZED,
    NotFoundOrForbiddenError: status.HTTP_404_NOT_FOUND,
    InternalError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(exc: TaskManagerError) -> int:
    for exc_type, code in EXCEPTION_STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


@contextmanager
def internal_error(message: str) -> Iterator[None]:
    """
    Turn unexpected exceptions into ``InternalError(message)``.

    Domain errors pass through untouched so the handlers below can map
    them to their own status codes.
    """
    try:
        yield
    except TaskManagerError:
        raise
    except Exception as exc:
        logger.exception(message)
        raise InternalError(message) from exc


async def task_manager_error_handler(request: Request, exc: TaskManagerError) -> JSONResponse:
    code = status_for(exc)
    headers = {"WWW-Authenticate": "Bearer"} if code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(status_code=code, content=exc.to_dict(), headers=headers)


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "message": err.get("msg", "Invalid value"),
        }
        for err in exc.errors()
    ]
    logger.debug("%s %s rejected: %s", request.method, request.url.path, errors)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"errors": errors})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TaskManagerError, task_manager_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
