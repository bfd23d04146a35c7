"""
Finance schemas.
"""

from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field

from wagerdesk.models.transaction import TransactionType


class UserSummary(BaseModel):
    """Owner or processor shown alongside a transaction."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    # stored addresses are not re-validated on output
    email: str


class TransactionCreate(BaseModel):
    """Admin-entered deposit or withdrawal."""
    user_id: UUID
    type: TransactionType
    amount: float = Field(..., gt=0)
    description: str = Field(..., min_length=1, max_length=500)


class TransactionResponse(BaseModel):
    """Transaction response schema."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    type: TransactionType
    amount: float
    description: str
    balance_after_transaction: float | None = None
    created_at: datetime
    user: UserSummary | None = None
    processor: UserSummary | None = None


class FinanceSummary(BaseModel):
    """Totals over the transactions and balances visible to the admin."""
    total_deposits: float
    total_withdrawals: float
    current_balance: float
    profits: float
    deposits_count: int
    withdrawals_count: int
    total_transactions: int
