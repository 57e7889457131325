"""
Request logging middleware.

Assigns each request an id (reusing an incoming X-Request-ID), makes it
available to log records for the duration of the request, and logs one
line per request with status and latency.
"""

import logging
import time
import uuid

from fastapi import FastAPI, Request

from shared.logging_config import request_id_var

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def register_middleware(app: FastAPI) -> None:
    """Attach the request logging middleware."""

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        token = request_id_var.set(request_id)
        start = time.perf_counter()
        try:
            response = await call_next(request)
            elapsed = time.perf_counter() - start
            response.headers[REQUEST_ID_HEADER] = request_id
            response.headers["X-Process-Time"] = f"{elapsed:.4f}"
            logger.info(
                "%s %s %d %.3fs",
                request.method,
                request.url.path,
                response.status_code,
                elapsed,
            )
            return response
        finally:
            request_id_var.reset(token)
