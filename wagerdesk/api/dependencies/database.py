"""
Per-request database session.
"""

from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import AsyncSession

from wagerdesk.models.database import async_session_factory


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    One session per request, shared by scope resolution and the handler.

    Balance updates and their transaction rows commit together, or not at all.
    """
    session = async_session_factory()
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()
