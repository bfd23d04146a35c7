"""Finance service: admin-scoped transactions and summaries."""

from datetime import datetime
from uuid import UUID

import structlog
from fastapi import HTTPException, status
from sqlalchemy import select, func, or_
from sqlalchemy.ext.asyncio import AsyncSession

from wagerdesk.core.auth.interfaces import ScopeResult
from wagerdesk.core.auth.scope import ScopeResolver
from wagerdesk.models.transaction import Transaction, TransactionType
from wagerdesk.models.user import User
from wagerdesk.repositories.user import UserRepository
from wagerdesk.schemas.transaction import FinanceSummary
from wagerdesk.utils.pagination import OffsetPage, paginate

logger = structlog.get_logger()

SORTABLE_FIELDS = {"created_at", "amount", "type"}

LIKE_ESCAPE = "\\"


def escape_like(term: str) -> str:
    """Make LIKE wildcards in user input match literally."""
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


class FinanceService:
    """Transactions visible to an admin, plus deposits and withdrawals."""

    def __init__(self, db: AsyncSession, resolver: ScopeResolver):
        self.db = db
        self.resolver = resolver

    async def list_transactions(
        self,
        scope: ScopeResult,
        *,
        page: int = 1,
        per_page: int = 10,
        type: TransactionType | None = None,
        user_id: UUID | None = None,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
        search: str | None = None,
        sort_by: str = "created_at",
        descending: bool = True,
    ) -> OffsetPage:
        """
        List transactions within scope.

        Args:
            scope: Resolved admin scope
            type: Only deposits or only withdrawals
            user_id: Only this user's transactions (still bounded by scope)
            date_from, date_to: Inclusive created_at range
            search: Case-insensitive match on description, user name or email
            sort_by: created_at, amount or type
        """
        stmt = select(Transaction)
        stmt = self.resolver.apply_to_query(stmt, scope, Transaction)

        if type is not None:
            stmt = stmt.where(Transaction.type == TransactionType(type).value)
        if user_id is not None:
            stmt = stmt.where(Transaction.user_id == user_id)
        if date_from is not None:
            stmt = stmt.where(Transaction.created_at >= date_from)
        if date_to is not None:
            stmt = stmt.where(Transaction.created_at <= date_to)

        if search:
            pattern = f"%{escape_like(search)}%"
            stmt = stmt.join(User, User.id == Transaction.user_id).where(
                or_(
                    Transaction.description.ilike(pattern, escape=LIKE_ESCAPE),
                    User.name.ilike(pattern, escape=LIKE_ESCAPE),
                    User.email.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )

        if sort_by not in SORTABLE_FIELDS:
            sort_by = "created_at"
        column = getattr(Transaction, sort_by)
        stmt = stmt.order_by(column.desc() if descending else column, Transaction.id)

        return await paginate(self.db, stmt, page=page, per_page=per_page)

    async def get_summary(self, scope: ScopeResult) -> FinanceSummary:
        """
        Deposit/withdrawal totals and the current balance of in-scope users.

        Soft-deleted users are left out of both the transaction totals and the
        balance, so profits only reflect live accounts.
        """
        totals_stmt = (
            select(
                Transaction.type,
                func.coalesce(func.sum(Transaction.amount), 0.0),
                func.count(Transaction.id),
            )
            .join(User, User.id == Transaction.user_id)
            .where(User.deleted_at.is_(None))
            .group_by(Transaction.type)
        )
        totals_stmt = self.resolver.apply_to_query(totals_stmt, scope, Transaction)

        totals = {
            tx_type: (float(amount), count)
            for tx_type, amount, count in (await self.db.execute(totals_stmt)).all()
        }
        deposits, deposits_count = totals.get(TransactionType.DEPOSIT.value, (0.0, 0))
        withdrawals, withdrawals_count = totals.get(TransactionType.WITHDRAW.value, (0.0, 0))

        balance_stmt = select(func.coalesce(func.sum(User.balance), 0.0)).where(
            User.deleted_at.is_(None)
        )
        balance_stmt = self.resolver.apply_to_query(balance_stmt, scope, User, field="id")
        current_balance = float(await self.db.scalar(balance_stmt) or 0.0)

        return FinanceSummary(
            total_deposits=deposits,
            total_withdrawals=withdrawals,
            current_balance=current_balance,
            profits=deposits - current_balance - withdrawals,
            deposits_count=deposits_count,
            withdrawals_count=withdrawals_count,
            total_transactions=deposits_count + withdrawals_count,
        )

    async def get_transaction(self, scope: ScopeResult, transaction_id: UUID) -> Transaction:
        """
        Fetch one transaction with its owner and processor.

        Raises:
            HTTPException 404: Transaction missing or owned by a user outside scope
        """
        transaction = await self.db.scalar(
            select(Transaction).where(Transaction.id == transaction_id)
        )
        if transaction is None or not scope.allows(transaction.user_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Transaction not found",
            )
        return transaction

    async def create_transaction(
        self,
        scope: ScopeResult,
        *,
        user_id: UUID,
        type: TransactionType,
        amount: float,
        description: str,
        processed_by: User | None = None,
    ) -> Transaction:
        """
        Record a deposit or withdrawal and update the user's balance.

        Raises:
            HTTPException 404: User missing or outside the admin's scope
            HTTPException 400: Non-positive amount or insufficient balance
        """
        if amount <= 0:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Amount must be greater than 0",
            )

        user = await UserRepository(self.db).get_by_id(user_id)
        if user is None or not scope.allows(user.id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found",
            )

        tx_type = TransactionType(type)
        if tx_type is TransactionType.DEPOSIT:
            new_balance = user.balance + amount
        else:
            if user.balance < amount:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Insufficient balance",
                )
            new_balance = user.balance - amount

        transaction = Transaction(
            user=user,
            user_id=user.id,
            type=tx_type.value,
            amount=amount,
            description=description,
            processed_by=processed_by.id if processed_by is not None else None,
            balance_after_transaction=new_balance,
        )
        user.balance = new_balance

        self.db.add(transaction)
        await self.db.flush()
        await self.db.refresh(transaction)

        logger.info(
            "transaction_created",
            transaction_id=str(transaction.id),
            user_id=str(user.id),
            type=tx_type.value,
            amount=amount,
            processed_by=str(transaction.processed_by) if transaction.processed_by else None,
        )
        return transaction
