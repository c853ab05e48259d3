from __future__ import annotations

import time
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.logging import clear_request_context, get_logger, set_request_id


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Tags every request with an X-Request-ID and logs start/end with latency."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        clear_request_context()
        rid = set_request_id(request.headers.get("X-Request-ID"))

        log = get_logger().bind(
            path=request.url.path,
            method=request.method,
            query=str(request.url.query) or None,
        )
        log.info("request.start")

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            # traceback is logged by the 500 handler in app.core.errors
            log.bind(
                status_code=500, duration_ms=self._elapsed_ms(started)
            ).error("request.end")
            raise

        response.headers["X-Request-ID"] = rid

        log.bind(
            status_code=response.status_code, duration_ms=self._elapsed_ms(started)
        ).info("request.end")
        return response

    @staticmethod
    def _elapsed_ms(started: float) -> float:
        return round((time.perf_counter() - started) * 1000.0, 2)
