"""
User repository - the SQL-backed user directory for admin scoping.
"""

from typing import Any, Sequence
from uuid import UUID

import structlog
from sqlalchemy.exc import SQLAlchemyError

from wagerdesk.core.auth.exceptions import StoreUnavailableError
from wagerdesk.core.auth.interfaces import UserDirectory
from wagerdesk.models.user import User

from .base import SoftDeleteRepository

logger = structlog.get_logger()


class UserRepository(SoftDeleteRepository[User], UserDirectory):
    """Users, excluding soft-deleted accounts."""

    model = User

    async def find_users_created_by(self, requester_id: Any) -> Sequence[User]:
        """List live users created by the given admin."""
        if isinstance(requester_id, str):
            requester_id = UUID(requester_id)

        stmt = self._base_query().where(User.created_by == requester_id)
        try:
            result = await self.db.execute(stmt)
        except SQLAlchemyError as exc:
            logger.error(
                "user_directory_lookup_failed",
                requester_id=str(requester_id),
                error=str(exc),
            )
            raise StoreUnavailableError(
                "Could not list users created by requester"
            ) from exc

        return list(result.scalars().all())
