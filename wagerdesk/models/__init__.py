"""
Database models.
"""

from .base import Base
from .user import User, UserRole
from .bet import Bet, BetStatus
from .transaction import Transaction, TransactionType

__all__ = [
    "Base",
    "User",
    "UserRole",
    "Bet",
    "BetStatus",
    "Transaction",
    "TransactionType",
]
