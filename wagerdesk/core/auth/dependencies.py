"""
FastAPI dependencies for admin scoping.

Usage:
    from wagerdesk.core.auth.dependencies import AdminScope, OptionalUser, Resolver

    @router.get("/bets")
    async def list_bets(scope: AdminScope, resolver: Resolver, db: AsyncSession = Depends(get_db)):
        query = resolver.apply_to_query(select(Bet), scope, Bet)
        ...

AdminScope raises NotAuthorizedError before the handler body runs, so a
rejected requester never reaches the listing query.
"""

from typing import Annotated

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from wagerdesk.api.dependencies.database import get_db
from wagerdesk.core.config import settings
from wagerdesk.models.user import User
from wagerdesk.repositories.user import UserRepository
from wagerdesk.services.auth import AuthService

from .interfaces import ScopeResult
from .scope import ScopeResolver


oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


# ============================================================
# REQUESTER
# ============================================================

async def get_current_user_optional(
    token: str | None = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db),
) -> User | None:
    """
    Get the requester from the bearer token.

    Returns None for a missing or invalid token, or a deleted or inactive
    account. The scope resolver rejects a None requester.
    """
    if not token:
        return None

    user_id = AuthService().decode_access_token(token)
    if not user_id:
        return None

    try:
        user = await UserRepository(db).get_by_id(user_id)
    except ValueError:
        return None

    if user is None or not user.is_active:
        return None
    return user


# ============================================================
# SCOPE
# ============================================================

async def get_scope_resolver(
    db: AsyncSession = Depends(get_db),
) -> ScopeResolver:
    """Scope resolver backed by the request's database session."""
    return ScopeResolver(
        UserRepository(db),
        privileged_emails=settings.auth.privileged_emails,
        owner_field=settings.auth.owner_field,
    )


async def get_admin_scope(
    requester: User | None = Depends(get_current_user_optional),
    resolver: ScopeResolver = Depends(get_scope_resolver),
) -> ScopeResult:
    """
    Resolve the requester's admin scope.

    Raises:
        NotAuthorizedError: Requester missing or not an admin (403)
        StoreUnavailableError: User lookup failed (503)
    """
    return await resolver.resolve_scope(requester)


# ============================================================
# TYPE ALIASES FOR CLEAN SIGNATURES
# ============================================================

OptionalUser = Annotated[User | None, Depends(get_current_user_optional)]

Resolver = Annotated[ScopeResolver, Depends(get_scope_resolver)]

AdminScope = Annotated[ScopeResult, Depends(get_admin_scope)]
