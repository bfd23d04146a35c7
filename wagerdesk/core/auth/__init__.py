"""
Admin data scoping.

Decides whose bets and transactions an admin may list:

    from wagerdesk.core.auth import ScopeResolver, ScopeResult

    resolver = ScopeResolver(UserRepository(db), privileged_emails=settings.auth.privileged_emails)
    scope = await resolver.resolve_scope(requester)    # may raise NotAuthorizedError
    query = resolver.apply_to_query(select(Transaction), scope, Transaction)

Route handlers use the dependencies in ``wagerdesk.core.auth.dependencies``
(AdminScope, Resolver, OptionalUser) instead of wiring this by hand.
"""

from .exceptions import ScopeError, NotAuthorizedError, StoreUnavailableError
from .interfaces import ScopeLevel, ScopeResult, UserDirectory
from .scope import ScopeResolver, ADMIN_ROLE

__all__ = [
    # Errors
    "ScopeError",
    "NotAuthorizedError",
    "StoreUnavailableError",
    # Interfaces
    "ScopeLevel",
    "ScopeResult",
    "UserDirectory",
    # Resolver
    "ScopeResolver",
    "ADMIN_ROLE",
]
