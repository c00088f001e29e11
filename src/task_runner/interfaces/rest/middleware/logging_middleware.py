"""
Request logging middleware.

Binds request_id, method and path to every log event emitted while the
request is being handled.
"""

import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from task_runner.infrastructure.logging import bind_context, clear_context, get_logger

logger = get_logger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware that adds request context to all logs.

    Reuses an incoming X-Request-ID header when the caller supplies one,
    and reports it back together with X-Process-Time.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        bind_context(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        logger.debug(
            "Request started",
            client=request.client.host if request.client else None,
        )

        start_time = time.time()

        try:
            response = await call_next(request)

            process_time = time.time() - start_time
            response.headers["X-Request-ID"] = request_id
            response.headers["X-Process-Time"] = f"{process_time:.3f}"

            logger.info(
                "Request completed",
                status_code=response.status_code,
                process_time=f"{process_time:.3f}s",
            )
            return response

        except Exception as e:
            process_time = time.time() - start_time
            logger.exception(
                "Request failed",
                error=str(e),
                process_time=f"{process_time:.3f}s",
            )
            raise

        finally:
            clear_context()
