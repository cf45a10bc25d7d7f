"""
Pydantic models for bids placed by buyers and middlemen.

``amount`` is the offered price per unit of the product and
``quantity`` how many units the bidder wants.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from ..core.transitions import BidStatus


class BidCreate(BaseModel):
    product_id: int
    amount: float = Field(..., gt=0, description="Bid amount must be positive")
    quantity: float = Field(..., gt=0, description="Quantity must be positive")
    message: Optional[str] = None


class BidStatusUpdate(BaseModel):
    # ``pending`` is the initial state only and cannot be requested.
    status: Literal["accepted", "rejected", "countered"]


class BidRead(BaseModel):
    id: int
    product_id: int
    buyer_id: int
    amount: float
    quantity: float
    message: Optional[str] = None
    status: BidStatus = BidStatus.PENDING
    created_at: datetime

    model_config = {
        "from_attributes": True,
    }
