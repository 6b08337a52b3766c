"""
Correlation ID middleware for request tracing.

Accepts X-Correlation-ID from the client or generates a UUID4, keeps it in a
contextvar, and stamps it (with the caller's user-id header) on every log
record emitted while the request is handled.
"""
import contextvars
import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from app.utils.logger import logger

correlation_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("correlation_id", default="")
request_user_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("request_user_id", default="")


class CorrelationIdFilter(logging.Filter):
    """Copy the current request's correlation id and user id onto log records"""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "correlation_id", None):
            record.correlation_id = correlation_id_var.get("")
        if not getattr(record, "user_id", None):
            record.user_id = request_user_id_var.get("")
        return True


class CorrelationMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next) -> Response:
        cid = request.headers.get("x-correlation-id") or str(uuid.uuid4())
        cid_token = correlation_id_var.set(cid)
        user_token = request_user_id_var.set(request.headers.get("user-id", ""))

        start = time.monotonic()
        try:
            logger.info(
                f"{request.method} {request.url.path}",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "client_ip": request.client.host if request.client else "",
                },
            )
            response = await call_next(request)

            duration_ms = round((time.monotonic() - start) * 1000)
            log_fn = logger.warning if response.status_code >= 400 else logger.info
            log_fn(
                f"Response: {response.status_code} ({duration_ms}ms)",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status": response.status_code,
                    "duration_ms": duration_ms,
                },
            )
            response.headers["X-Correlation-ID"] = cid
            return response
        finally:
            correlation_id_var.reset(cid_token)
            request_user_id_var.reset(user_token)
