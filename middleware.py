from __future__ import annotations
import logging
import time
import uuid
from typing import Callable, List
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

# caller trace headers kept on request.state for the access log
TRACE_HEADERS = (
    ("X-Correlation-ID", "correlation_id"),
    ("X-Transaction-ID", "transaction_id"),
)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tag every request with an id and echo it back on the response.

    The id is the caller's X-Request-ID, else its X-Correlation-ID, else a
    fresh uuid4.
    """

    def __init__(self, app, header_name: str = "X-Request-ID"):
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: Callable):
        for header, attr in TRACE_HEADERS:
            setattr(request.state, attr, request.headers.get(header) or "-")
        req_id = (
            request.headers.get(self.header_name)
            or request.headers.get("X-Correlation-ID")
            or str(uuid.uuid4())
        )
        request.state.request_id = req_id
        response = await call_next(request)
        response.headers[self.header_name] = req_id
        return response


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class LoggingMiddleware(BaseHTTPMiddleware):
    """One access-log line per request; the level follows the status class."""

    MODES = ("off", "basic", "full")

    def __init__(self, app, mode: str = "basic"):
        super().__init__(app)
        if mode not in self.MODES:
            logger.warning("Unknown REQUEST_LOGGING mode %r, using 'basic'", mode)
            mode = "basic"
        self.mode = mode

    async def dispatch(self, request: Request, call_next: Callable):
        if self.mode == "off":
            return await call_next(request)
        start = time.perf_counter()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            self._log(request, status, (time.perf_counter() - start) * 1000.0)

    def _log(self, request: Request, status: int, dur_ms: float) -> None:
        state = request.state
        parts: List[str] = [
            f"{request.method} {request.url.path} => {status} [{dur_ms:.1f}ms]",
            f"rid={getattr(state, 'request_id', '-')}",
        ]
        if self.mode == "full":
            parts.extend([
                f"cid={getattr(state, 'correlation_id', '-')}",
                f"txn={getattr(state, 'transaction_id', '-')}",
                f"qs={request.url.query or '-'}",
                f"ua={request.headers.get('user-agent', '-')}",
            ])
        logger.log(_level_for(status), " ".join(parts))
