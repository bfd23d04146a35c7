"""
Admin scope resolver.

Decides which users' bets and transactions an admin may list:

- Super admins (is_super_admin flag) see everything.
- Requesters whose email is in the privileged allow-list are treated as
  super admins too. This path is deprecated and logs a warning each time.
- Every other admin sees only records owned by users they created.
- Missing or non-admin requesters are rejected with NotAuthorizedError.

Usage:
    resolver = ScopeResolver(UserRepository(db), privileged_emails=["ops@example.com"])
    scope = await resolver.resolve_scope(current_user)
    query = resolver.apply_to_query(select(Bet), scope, Bet)
"""

from typing import Any, Iterable

import structlog
from sqlalchemy import Select, false

from .exceptions import NotAuthorizedError
from .interfaces import ScopeResult, UserDirectory

logger = structlog.get_logger()

ADMIN_ROLE = "admin"


class ScopeResolver:
    """
    Resolves the data scope of an admin requester.

    Configuration:
        directory: Source of "users created by" lookups
        privileged_emails: Deprecated super admin allow-list (default: empty)
        owner_field: Column on scoped models holding the owner ID (default: "user_id")
    """

    def __init__(
        self,
        directory: UserDirectory,
        privileged_emails: Iterable[str] = (),
        owner_field: str = "user_id",
    ):
        self.directory = directory
        self.privileged_emails = frozenset(privileged_emails)
        self.owner_field = owner_field

    def is_privileged(self, requester: Any | None) -> bool:
        """Check if requester is exempt from ownership restriction."""
        if requester is None:
            return False

        if getattr(requester, "is_super_admin", False) is True:
            return True

        email = getattr(requester, "email", None)
        if email is not None and email in self.privileged_emails:
            logger.warning(
                "legacy_privileged_email_match",
                requester_id=str(getattr(requester, "id", None)),
                email=email,
            )
            return True

        return False

    async def resolve_scope(self, requester: Any | None) -> ScopeResult:
        """
        Compute the scope for an admin listing request.

        Raises:
            NotAuthorizedError: Requester absent or not an admin
            StoreUnavailableError: The created-by lookup failed
        """
        if requester is None:
            raise NotAuthorizedError("Access denied. No authenticated requester.")

        if getattr(requester, "role", None) != ADMIN_ROLE:
            raise NotAuthorizedError()

        if self.is_privileged(requester):
            logger.debug("admin_scope_resolved", scope="unrestricted")
            return ScopeResult.unrestricted()

        users = await self.directory.find_users_created_by(requester.id)
        scope = ScopeResult.restricted_to(user.id for user in users)

        logger.debug(
            "admin_scope_resolved",
            scope="restricted",
            requester_id=str(requester.id),
            user_count=len(scope.user_ids),
        )
        return scope

    def apply_to_query(
        self,
        query: Select,
        scope: ScopeResult,
        model: type,
        field: str | None = None,
    ) -> Select:
        """
        Apply a scope to a SQLAlchemy query on an owned model.

        Unrestricted leaves the query unchanged. An empty restriction
        matches no rows.

        Args:
            field: Owner column name, defaults to owner_field ("id" for User itself)
        """
        if scope.is_unrestricted:
            return query

        if not scope.user_ids:
            return query.where(false())

        column = getattr(model, field or self.owner_field)
        return query.where(column.in_(list(scope.user_ids)))
