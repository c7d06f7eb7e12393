"""
Request Logging Middleware

Logs method, path, status and duration of each API request.
"""

import logging
import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    SKIP_PATHS = ("/health", "/docs", "/openapi.json")

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path in self.SKIP_PATHS:
            return await call_next(request)

        start_time = time.time()
        response = await call_next(request)
        duration_ms = int((time.time() - start_time) * 1000)

        client_ip = request.client.host if request.client else "-"
        logger.info(
            f"{request.method} {request.url.path} {response.status_code} "
            f"{duration_ms}ms ip={client_ip}"
        )
        return response
