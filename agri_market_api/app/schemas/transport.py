"""
Pydantic models for transport requests.

A request is created by a farmer, buyer or middleman for a product and
is later claimed by a transporter, who is then recorded in
``transporter_id``.
"""

from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ..core.transitions import TransportStatus


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so they compare with aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class TransportRequestCreate(BaseModel):
    product_id: int
    pickup_location: str = Field(..., min_length=1)
    delivery_location: str = Field(..., min_length=1)
    quantity: float = Field(..., gt=0, description="Quantity must be positive")
    date: datetime = Field(..., description="Pickup date; must be in the future")

    @field_validator("date")
    @classmethod
    def date_in_future(cls, v: datetime) -> datetime:
        v = as_utc(v)
        if v <= datetime.now(timezone.utc):
            raise ValueError("Date must be in the future")
        return v


class TransportStatusUpdate(BaseModel):
    status: Literal["accepted", "in_transit", "delivered"]


class TransportRequestRead(BaseModel):
    id: int
    product_id: int
    requester_id: int
    transporter_id: Optional[int] = None
    pickup_location: str
    delivery_location: str
    quantity: float
    date: datetime
    status: TransportStatus = TransportStatus.PENDING
    created_at: datetime

    model_config = {
        "from_attributes": True,
    }
