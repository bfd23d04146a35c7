"""
Bet schemas.
"""

from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field


class BetResponse(BaseModel):
    """Bet response schema."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    selection: str
    stake: float
    odds: float
    status: str
    payout: float
    result_reason: str | None = None
    admin_override: bool = False
    processed_at: datetime | None = None
    created_at: datetime


class BetStatusUpdate(BaseModel):
    """Admin settlement override."""
    status: str = Field(..., min_length=1, max_length=20)
    reason: str | None = Field(None, max_length=500)


class BetStatusUpdateResponse(BaseModel):
    """Result of a settlement override."""
    bet: BetResponse
    balance_change: float
    new_payout: float
