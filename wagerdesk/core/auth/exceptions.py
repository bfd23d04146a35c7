"""
Admin scoping errors.

NotAuthorizedError is fatal to the request (403 upstream) and is never
downgraded to unrestricted access. StoreUnavailableError means the user
lookup behind a scope failed; it is propagated as-is (503), no retries.
"""


class ScopeError(Exception):
    """Base class for admin scoping failures."""

    status_code: int = 500
    error_code: str = "scope_error"
    default_message: str = "Scope could not be resolved"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class NotAuthorizedError(ScopeError):
    """Requester is missing or is not an admin."""

    status_code = 403
    error_code = "not_authorized"
    default_message = "Access denied. Admin role required."


class StoreUnavailableError(ScopeError):
    """The lookup of users created by the requester failed."""

    status_code = 503
    error_code = "store_unavailable"
    default_message = "User store unavailable"
