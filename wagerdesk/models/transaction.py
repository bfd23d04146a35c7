"""
Finance transaction model.
"""

from enum import Enum
from typing import Optional, TYPE_CHECKING
from uuid import UUID
from sqlalchemy import String, Float, ForeignKey, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from .user import User


class TransactionType(str, Enum):
    """Direction of a balance movement."""
    DEPOSIT = "deposit"
    WITHDRAW = "withdraw"


class Transaction(Base, UUIDMixin, TimestampMixin):
    """Deposit or withdrawal on a user's balance, usually entered by an admin."""

    __tablename__ = "transactions"
    __table_args__ = (
        Index("ix_transactions_user_created", "user_id", "created_at"),
        Index("ix_transactions_type_created", "type", "created_at"),
    )

    user_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    description: Mapped[str] = mapped_column(String(500), nullable=False)

    # Admin who processed the transaction
    processed_by: Mapped[Optional[UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    balance_after_transaction: Mapped[Optional[float]] = mapped_column(
        Float,
        nullable=True,
    )

    user: Mapped["User"] = relationship(foreign_keys=[user_id], lazy="selectin")
    processor: Mapped[Optional["User"]] = relationship(
        foreign_keys=[processed_by],
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Transaction {self.type} {self.amount}>"
