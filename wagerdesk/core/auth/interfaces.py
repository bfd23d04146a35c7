"""
Admin scoping interfaces - Core abstractions.

The resolver depends only on these; the SQLAlchemy user repository is one
implementation of UserDirectory, test fakes are another.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Sequence


# ============================================================
# SCOPE RESULT
# ============================================================

class ScopeLevel(str, Enum):
    """Kind of data scope."""
    UNRESTRICTED = "unrestricted"
    RESTRICTED = "restricted"


@dataclass(frozen=True)
class ScopeResult:
    """
    What a requester may see when listing user-owned records.

    Examples:
        ScopeResult.unrestricted()             # Super admin, no owner filter
        ScopeResult.restricted_to({u2, u3})    # owner_id IN (u2, u3)
        ScopeResult.restricted_to(set())       # Sees nothing

    An empty restriction means "no owned records", never "everything".
    """
    level: ScopeLevel
    user_ids: frozenset[Any] = field(default_factory=frozenset)

    @classmethod
    def unrestricted(cls) -> "ScopeResult":
        """No owner filter."""
        return cls(level=ScopeLevel.UNRESTRICTED)

    @classmethod
    def restricted_to(cls, user_ids: Iterable[Any]) -> "ScopeResult":
        """Restrict to records owned by the given users."""
        return cls(level=ScopeLevel.RESTRICTED, user_ids=frozenset(user_ids))

    @property
    def is_unrestricted(self) -> bool:
        return self.level is ScopeLevel.UNRESTRICTED

    def allows(self, user_id: Any) -> bool:
        """Check whether records owned by user_id are visible."""
        return self.is_unrestricted or user_id in self.user_ids


# ============================================================
# USER DIRECTORY
# ============================================================

class UserDirectory(ABC):
    """
    Read-only lookup of users by the admin that created them.

    Implementations:
    - UserRepository: SQLAlchemy-backed (excludes soft-deleted users)
    """

    @abstractmethod
    async def find_users_created_by(self, requester_id: Any) -> Sequence[Any]:
        """
        List users whose created_by equals requester_id.

        Returns:
            Records exposing an ``id`` attribute. Order is irrelevant.

        Raises:
            StoreUnavailableError: If the lookup fails
        """
        pass
