"""
Repository layer for data access.
"""

from .base import BaseRepository, SoftDeleteRepository
from .user import UserRepository

__all__ = [
    "BaseRepository",
    "SoftDeleteRepository",
    "UserRepository",
]
