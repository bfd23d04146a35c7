"""
Async engine and session factory.
"""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from wagerdesk.core.config import settings

_db = settings.database

engine = create_async_engine(
    str(_db.url),
    echo=_db.echo,
    pool_size=_db.pool_size,
    max_overflow=_db.pool_overflow,
    pool_timeout=_db.pool_timeout,
    pool_pre_ping=True,
)

# expire_on_commit=False: routes serialize ORM rows after get_db commits
async_session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_db() -> None:
    """Create missing tables. Used for local development only."""
    from .base import Base
    from . import bet, transaction, user  # noqa: F401  register mappers

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    await engine.dispose()
