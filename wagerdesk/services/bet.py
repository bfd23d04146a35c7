"""Bet service: admin-scoped listing and settlement overrides."""

from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import UUID

import structlog
from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from wagerdesk.core.auth.interfaces import ScopeResult
from wagerdesk.core.auth.scope import ScopeResolver
from wagerdesk.models.bet import Bet, BetStatus
from wagerdesk.models.user import User
from wagerdesk.utils.pagination import OffsetPage, paginate

logger = structlog.get_logger()


@dataclass
class BalanceChange:
    """Payout before/after a status change and the resulting balance delta."""
    old_payout: float
    new_payout: float
    balance_change: float


def payout_for(status_value: str, stake: float, odds: float) -> float:
    """Amount credited to the player for a bet in the given status."""
    if status_value == BetStatus.WON.value:
        return stake * odds
    if status_value == BetStatus.CANCELED.value:
        return stake
    return 0.0


def calculate_balance_change(
    stake: float,
    odds: float,
    old_payout: float,
    old_status: str,
    new_status: str,
) -> BalanceChange:
    """
    Work out the balance correction for a settlement override.

    The stake was deducted when the bet was placed, so the player currently
    holds whatever the old status credited: the old payout if won, the
    refunded stake if canceled, nothing if pending or lost. The delta takes
    that credit back and pays the new one.

    Examples:
        won -> lost:       -old_payout
        lost -> won:       +stake * odds
        canceled -> lost:  -stake
        pending -> lost:   0
    """
    new_payout = payout_for(new_status, stake, odds)

    if old_status == BetStatus.WON.value:
        credited = old_payout
    elif old_status == BetStatus.CANCELED.value:
        credited = stake
    else:
        credited = 0.0

    return BalanceChange(
        old_payout=old_payout,
        new_payout=new_payout,
        balance_change=new_payout - credited,
    )


class BetService:
    """Bets visible to an admin."""

    def __init__(self, db: AsyncSession, resolver: ScopeResolver):
        self.db = db
        self.resolver = resolver

    async def list_bets(
        self,
        scope: ScopeResult,
        *,
        page: int = 1,
        per_page: int = 20,
        status_filter: BetStatus | None = None,
        user_id: UUID | None = None,
    ) -> OffsetPage:
        """List bets within scope, newest first."""
        stmt = select(Bet)
        stmt = self.resolver.apply_to_query(stmt, scope, Bet)

        if status_filter is not None:
            stmt = stmt.where(Bet.status == BetStatus(status_filter).value)
        if user_id is not None:
            stmt = stmt.where(Bet.user_id == user_id)

        stmt = stmt.order_by(Bet.created_at.desc(), Bet.id)
        return await paginate(self.db, stmt, page=page, per_page=per_page)

    async def update_status(
        self,
        scope: ScopeResult,
        bet_id: UUID,
        new_status: str,
        reason: str | None = None,
    ) -> tuple[Bet, BalanceChange]:
        """
        Override a bet's settlement and correct the owner's balance.

        Raises:
            HTTPException 400: Unknown status
            HTTPException 404: Bet missing or owned by a user outside scope
        """
        valid = {s.value for s in BetStatus}
        if new_status not in valid:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid status",
            )

        bet = await self.db.get(Bet, bet_id)
        if bet is None or not scope.allows(bet.user_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Bet not found",
            )

        old_status = bet.status
        change = calculate_balance_change(
            stake=bet.stake,
            odds=bet.odds,
            old_payout=bet.payout or 0.0,
            old_status=old_status,
            new_status=new_status,
        )

        bet.status = new_status
        bet.payout = change.new_payout
        bet.admin_override = True
        bet.processed_at = datetime.now(timezone.utc)
        if reason:
            bet.result_reason = reason

        if change.balance_change != 0:
            owner = await self.db.get(User, bet.user_id)
            if owner is None:
                raise HTTPException(
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    detail="Failed to update user balance",
                )
            owner.balance += change.balance_change

        await self.db.flush()
        await self.db.refresh(bet)

        logger.info(
            "bet_status_overridden",
            bet_id=str(bet.id),
            old_status=old_status,
            new_status=new_status,
            balance_change=change.balance_change,
        )
        return bet, change
