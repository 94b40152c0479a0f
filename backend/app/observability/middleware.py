from __future__ import annotations

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from ..core.clock import iso_timestamp

logger = logging.getLogger("request")


def client_address(request: Request) -> str:
    return request.client.host if request.client else "-"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs every request before it is dispatched, then its outcome.

    Observes only: the request and response pass through untouched.
    """

    async def dispatch(self, request: Request, call_next) -> Response:  # type: ignore[override]
        client = client_address(request)
        logger.info(
            "[%s] %s %s - %s",
            iso_timestamp(),
            request.method,
            request.url.path,
            client,
            extra={
                "path": request.url.path,
                "method": request.method,
                "client": client,
            },
        )
        start = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "Completed request",
            extra={
                "path": request.url.path,
                "method": request.method,
                "status_code": response.status_code,
                "duration_ms": round((time.perf_counter() - start) * 1000, 2),
            },
        )
        return response
