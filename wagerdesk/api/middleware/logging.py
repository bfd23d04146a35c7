"""
Access log middleware.

Admin listings are audit-relevant, so every denied admin request is logged
at WARNING in addition to the regular completion line.
"""

import time
import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from .request_id import get_request_id

logger = logging.getLogger(__name__)

ADMIN_PATH_PREFIX = "/api/admin"


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Log one line per request, plus a warning for denied admin calls."""

    async def dispatch(self, request: Request, call_next) -> Response:
        start_time = time.perf_counter()

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        details = {
            "request_id": get_request_id(),
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": round(duration_ms, 2),
            "client_ip": request.client.host if request.client else None,
        }

        if request.url.path.startswith(ADMIN_PATH_PREFIX) and response.status_code == 403:
            logger.warning("Admin access denied", extra=details)

        logger.info("Request completed", extra=details)
        return response
