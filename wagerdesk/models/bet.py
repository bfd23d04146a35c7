"""
Bet model.
"""

from datetime import datetime
from enum import Enum
from uuid import UUID
from sqlalchemy import String, Float, Boolean, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin, UUIDMixin


class BetStatus(str, Enum):
    """Settlement status of a bet."""
    PENDING = "pending"
    WON = "won"
    LOST = "lost"
    CANCELED = "canceled"


class Bet(Base, UUIDMixin, TimestampMixin):
    """A player's wager. The stake is deducted from balance when placed."""

    __tablename__ = "bets"

    user_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    selection: Mapped[str] = mapped_column(String(255), nullable=False)
    stake: Mapped[float] = mapped_column(Float, nullable=False)
    odds: Mapped[float] = mapped_column(Float, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20),
        default=BetStatus.PENDING.value,
        nullable=False,
        index=True,
    )
    payout: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)

    # Settlement details
    result_reason: Mapped[str | None] = mapped_column(String(500), nullable=True)
    admin_override: Mapped[bool] = mapped_column(Boolean, default=False)
    processed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Bet {self.id} {self.status}>"
