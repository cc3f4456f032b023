# libs/app/logging_middleware.py
import logging
import time
import uuid
from typing import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from libs.utils.logging_setup import app_logger as logger

REQUEST_ID_HEADER = "x-request-id"


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Сквозное логирование HTTP-запросов в JSON.
    Пробрасывает X-Request-ID (или генерирует новый) и пишет latency.
    Health-пробы логируются на уровне DEBUG.
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or f"req_{uuid.uuid4().hex}"
        started = time.monotonic()

        response = await call_next(request)

        latency_ms = round((time.monotonic() - started) * 1000, 2)
        path = request.url.path
        level = logging.DEBUG if path.startswith("/health") else logging.INFO
        if response.status_code >= 500:
            level = logging.ERROR

        logger.log(
            level,
            f"HTTP {request.method} {path} - {response.status_code}",
            extra={
                "req_id": request_id,
                "path": path,
                "method": request.method,
                "status": response.status_code,
                "latency_ms": latency_ms,
            },
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
