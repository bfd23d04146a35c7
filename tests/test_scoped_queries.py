"""
Tests for the SQL user directory and scoped queries.
"""

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from wagerdesk.core.auth import ScopeResolver, ScopeResult, StoreUnavailableError
from wagerdesk.models.bet import Bet
from wagerdesk.repositories.user import UserRepository


class BrokenSession:
    """Session stand-in whose database connection is gone."""

    async def execute(self, *args, **kwargs):
        raise OperationalError("SELECT users", {}, Exception("connection refused"))


@pytest.mark.asyncio
async def test_find_users_created_by(db, user_factory, scoped_admin, other_admin):
    """Test the directory returns only the admin's live users."""
    mine = await user_factory.create(created_by=scoped_admin)
    await user_factory.create(created_by=scoped_admin, deleted=True)
    await user_factory.create(created_by=other_admin)
    await user_factory.create()

    users = await UserRepository(db).find_users_created_by(scoped_admin.id)

    assert [u.id for u in users] == [mine.id]


@pytest.mark.asyncio
async def test_find_users_created_by_accepts_string_id(db, user_factory, scoped_admin):
    """Test string requester IDs are accepted."""
    mine = await user_factory.create(created_by=scoped_admin)

    users = await UserRepository(db).find_users_created_by(str(scoped_admin.id))

    assert {u.id for u in users} == {mine.id}


@pytest.mark.asyncio
async def test_find_users_created_by_store_failure(scoped_admin):
    """Test database errors surface as StoreUnavailableError."""
    repo = UserRepository(BrokenSession())

    with pytest.raises(StoreUnavailableError) as exc_info:
        await repo.find_users_created_by(scoped_admin.id)

    assert isinstance(exc_info.value.__cause__, OperationalError)


@pytest.mark.asyncio
async def test_resolver_with_repository(db, user_factory, scoped_admin, other_admin):
    """Test resolving scope end to end against the database."""
    first = await user_factory.create(created_by=scoped_admin)
    second = await user_factory.create(created_by=scoped_admin)
    await user_factory.create(created_by=other_admin)

    resolver = ScopeResolver(UserRepository(db))
    scope = await resolver.resolve_scope(scoped_admin)

    assert scope == ScopeResult.restricted_to({first.id, second.id})


@pytest.mark.asyncio
async def test_apply_to_query_restricted(db, user_factory, bet_factory, scoped_admin):
    """Test a restriction keeps only bets of the listed owners."""
    mine = await user_factory.create(created_by=scoped_admin)
    theirs = await user_factory.create()
    my_bet = await bet_factory.create(mine)
    await bet_factory.create(theirs)

    resolver = ScopeResolver(UserRepository(db))
    stmt = resolver.apply_to_query(select(Bet), ScopeResult.restricted_to({mine.id}), Bet)
    bets = (await db.execute(stmt)).scalars().all()

    assert [b.id for b in bets] == [my_bet.id]


@pytest.mark.asyncio
async def test_apply_to_query_empty_restriction_returns_nothing(
    db, user_factory, bet_factory, scoped_admin
):
    """Test an admin with no users sees zero bets, not all of them."""
    await bet_factory.create(await user_factory.create())
    await bet_factory.create(await user_factory.create())

    resolver = ScopeResolver(UserRepository(db))
    scope = await resolver.resolve_scope(scoped_admin)
    bets = (await db.execute(resolver.apply_to_query(select(Bet), scope, Bet))).scalars().all()

    assert scope == ScopeResult.restricted_to(set())
    assert bets == []


@pytest.mark.asyncio
async def test_apply_to_query_unrestricted(db, user_factory, bet_factory, super_admin):
    """Test super admins see every bet."""
    await bet_factory.create(await user_factory.create())
    await bet_factory.create(await user_factory.create())

    resolver = ScopeResolver(UserRepository(db))
    scope = await resolver.resolve_scope(super_admin)
    bets = (await db.execute(resolver.apply_to_query(select(Bet), scope, Bet))).scalars().all()

    assert len(bets) == 2
