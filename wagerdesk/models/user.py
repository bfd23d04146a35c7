"""
User model.
"""

from enum import Enum
from typing import Optional
from uuid import UUID
from sqlalchemy import String, Boolean, Float, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin, SoftDeleteMixin, UUIDMixin


class UserRole(str, Enum):
    """Account role."""
    ADMIN = "admin"
    USER = "user"


class User(Base, UUIDMixin, TimestampMixin, SoftDeleteMixin):
    """
    Player or admin account.

    created_by links a player to the admin that created it; non-super
    admins only see bets and transactions of users they created.
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(
        String(20),
        default=UserRole.USER.value,
        nullable=False,
    )

    # Status
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    is_super_admin: Mapped[bool] = mapped_column(Boolean, default=False)

    balance: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)

    # Ownership
    created_by: Mapped[Optional[UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    def __repr__(self) -> str:
        return f"<User {self.email}>"
