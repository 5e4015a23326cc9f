"""Request logging middleware"""
import time
import traceback
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from ..utils.logging_config import RequestLogger, request_logger

SKIP_PATHS = ("/health", "/docs", "/redoc", "/openapi.json", "/favicon.ico")


def _client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status, duration and client ip for each request"""

    def __init__(self, app, logger: RequestLogger | None = None):
        super().__init__(app)
        self.request_logger = logger or request_logger

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        method = request.method
        path = request.url.path
        client_ip = _client_ip(request)
        should_log = not path.startswith(SKIP_PATHS)

        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        if should_log:
            self.request_logger.log_response(method, path, response.status_code, duration_ms, ip=client_ip)
        response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"
        return response


class ErrorLoggingMiddleware(BaseHTTPMiddleware):
    """Logs unhandled exceptions before they reach the server error handler"""

    def __init__(self, app, logger: RequestLogger | None = None):
        super().__init__(app)
        self.request_logger = logger or request_logger

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            self.request_logger.log_error(
                request.method,
                request.url.path,
                f"{type(e).__name__}: {e}",
                traceback=traceback.format_exc(),
            )
            raise
