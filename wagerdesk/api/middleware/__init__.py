"""Middleware package."""

from wagerdesk.api.middleware.request_id import RequestIdMiddleware, get_request_id
from wagerdesk.api.middleware.logging import AccessLogMiddleware

__all__ = [
    "RequestIdMiddleware",
    "get_request_id",
    "AccessLogMiddleware",
]
