"""
Request tagging and access logging.

Every response carries ``X-Request-ID`` (echoed from the client when sent,
generated otherwise) and ``X-Process-Time``; 5xx responses are logged at
WARNING so they stand out next to the handler's traceback.
"""

from __future__ import annotations

import logging
import time
import uuid

from fastapi import FastAPI, Request

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
_MAX_REQUEST_ID_LEN = 64


def _request_id(request: Request) -> str:
    incoming = request.headers.get(REQUEST_ID_HEADER, "").strip()
    if incoming and len(incoming) <= _MAX_REQUEST_ID_LEN:
        return incoming
    return uuid.uuid4().hex


def register_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def access_log(request: Request, call_next):
        request_id = _request_id(request)
        request.state.request_id = request_id

        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"

        level = logging.WARNING if response.status_code >= 500 else logging.DEBUG
        logger.log(
            level,
            "[%s] %s %s -> %d (%.3fs)",
            request_id,
            request.method,
            request.url.path,
            response.status_code,
            elapsed,
        )
        return response
