"""Request logging middleware — one log line per state-changing request.

Compliance events themselves are written to ``audit_logs`` by the services in
the same transaction as the change; this only records the HTTP side.
"""


import logging
import time
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("vendorcomply.requests")

# Methods that mutate state
_WRITE_METHODS = {"POST", "PUT", "PATCH", "DELETE"}


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start = time.monotonic()
        response = await call_next(request)
        duration_ms = round((time.monotonic() - start) * 1000)

        level = logging.INFO if request.method in _WRITE_METHODS else logging.DEBUG
        logger.log(
            level,
            "%s %s -> %d (%dms) user=%s client=%s",
            request.method,
            _redact_portal_token(request.url.path),
            response.status_code,
            duration_ms,
            request.headers.get("x-user-id", "-"),
            request.client.host if request.client else "-",
        )
        return response


def _redact_portal_token(path: str) -> str:
    """Portal tokens are bearer credentials; keep them out of the logs."""
    parts = path.split("/")
    if "portal" in parts:
        idx = parts.index("portal")
        if idx + 1 < len(parts) and parts[idx + 1]:
            parts[idx + 1] = "***"
    return "/".join(parts)
