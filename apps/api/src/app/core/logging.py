"""
Logging Configuration

Root logger setup and the per-request access log middleware.
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from app.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

request_logger = logging.getLogger("app.requests")


def configure_logging() -> None:
    """Install the root handler at the configured level."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format=LOG_FORMAT,
        force=True,
    )
    if not settings.database_echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and duration for every request."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000

        message = (
            f"{request.method} {request.url.path} {response.status_code} {duration_ms:.1f}ms"
        )
        if response.status_code >= 500:
            request_logger.error(message)
        elif response.status_code >= 400:
            request_logger.warning(message)
        else:
            request_logger.info(message)

        return response
