"""
Admin back office routes.

Every handler depends on AdminScope, so the requester's scope is resolved
(or the request rejected with 403) before any bet or finance query runs.
"""

from datetime import datetime
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from wagerdesk.api.dependencies.database import get_db
from wagerdesk.core.auth.dependencies import AdminScope, OptionalUser, Resolver
from wagerdesk.models.bet import BetStatus
from wagerdesk.models.transaction import TransactionType
from wagerdesk.schemas.bet import BetResponse, BetStatusUpdate, BetStatusUpdateResponse
from wagerdesk.schemas.transaction import (
    FinanceSummary,
    TransactionCreate,
    TransactionResponse,
)
from wagerdesk.services.bet import BetService
from wagerdesk.services.finance import FinanceService
from wagerdesk.utils.pagination import OffsetPage, PageRequest, get_page_request

router = APIRouter()


# ============================================================
# BETS
# ============================================================

@router.get("/bets", response_model=OffsetPage[BetResponse])
async def list_bets(
    scope: AdminScope,
    resolver: Resolver,
    pagination: PageRequest = Depends(get_page_request),
    status_filter: BetStatus | None = Query(None, alias="status"),
    user_id: UUID | None = None,
    db: AsyncSession = Depends(get_db),
):
    """List bets of users visible to the admin."""
    page = await BetService(db, resolver).list_bets(
        scope,
        page=pagination.page,
        per_page=pagination.per_page,
        status_filter=status_filter,
        user_id=user_id,
    )
    return OffsetPage[BetResponse].create(
        items=[BetResponse.model_validate(b) for b in page.items],
        total=page.total,
        page=page.page,
        per_page=page.per_page,
    )


@router.put("/bets/{bet_id}/status", response_model=BetStatusUpdateResponse)
async def update_bet_status(
    bet_id: UUID,
    data: BetStatusUpdate,
    scope: AdminScope,
    resolver: Resolver,
    db: AsyncSession = Depends(get_db),
):
    """Override a bet's settlement and correct the player's balance."""
    bet, change = await BetService(db, resolver).update_status(
        scope,
        bet_id,
        data.status,
        reason=data.reason,
    )
    return BetStatusUpdateResponse(
        bet=BetResponse.model_validate(bet),
        balance_change=change.balance_change,
        new_payout=change.new_payout,
    )


# ============================================================
# FINANCE
# ============================================================

@router.get("/transactions", response_model=OffsetPage[TransactionResponse])
async def list_transactions(
    scope: AdminScope,
    resolver: Resolver,
    page: int = Query(1, ge=1),
    per_page: int = Query(10, ge=1, le=100),
    type: TransactionType | None = None,
    user_id: UUID | None = None,
    date_from: datetime | None = None,
    date_to: datetime | None = None,
    search: str | None = Query(None, max_length=100),
    sort_by: str = Query("created_at"),
    sort_order: str = Query("desc", pattern="^(asc|desc)$"),
    db: AsyncSession = Depends(get_db),
):
    """List deposits and withdrawals of users visible to the admin."""
    result = await FinanceService(db, resolver).list_transactions(
        scope,
        page=page,
        per_page=per_page,
        type=type,
        user_id=user_id,
        date_from=date_from,
        date_to=date_to,
        search=search,
        sort_by=sort_by,
        descending=sort_order == "desc",
    )
    return OffsetPage[TransactionResponse].create(
        items=[TransactionResponse.model_validate(t) for t in result.items],
        total=result.total,
        page=result.page,
        per_page=result.per_page,
    )


@router.get("/transactions/{transaction_id}", response_model=TransactionResponse)
async def get_transaction(
    transaction_id: UUID,
    scope: AdminScope,
    resolver: Resolver,
    db: AsyncSession = Depends(get_db),
):
    """Get a single transaction owned by a user visible to the admin."""
    transaction = await FinanceService(db, resolver).get_transaction(scope, transaction_id)
    return TransactionResponse.model_validate(transaction)


@router.post(
    "/transactions",
    response_model=TransactionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_transaction(
    data: TransactionCreate,
    scope: AdminScope,
    resolver: Resolver,
    requester: OptionalUser,
    db: AsyncSession = Depends(get_db),
):
    """Record a deposit or withdrawal for a user visible to the admin."""
    transaction = await FinanceService(db, resolver).create_transaction(
        scope,
        user_id=data.user_id,
        type=data.type,
        amount=data.amount,
        description=data.description,
        processed_by=requester,
    )
    return TransactionResponse.model_validate(transaction)


@router.get("/finance/summary", response_model=FinanceSummary)
async def get_finance_summary(
    scope: AdminScope,
    resolver: Resolver,
    db: AsyncSession = Depends(get_db),
):
    """Deposit, withdrawal and balance totals over the admin's users."""
    return await FinanceService(db, resolver).get_summary(scope)
