"""
Bid endpoints for API v1.

Buyers and middlemen place bids; the farmer owning the product accepts,
rejects or counters them.  Accepting a bid marks the product sold.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from agri_market_api.app.core.security import get_current_user, require_roles
from agri_market_api.app.schemas.bid import BidCreate, BidRead, BidStatusUpdate
from agri_market_api.app.schemas.user import Role
from agri_market_api.app.services.bid_service import BidService


router = APIRouter()


@router.post("/bids", response_model=BidRead, status_code=status.HTTP_201_CREATED)
async def create_bid(
    bid: BidCreate,
    current_user: dict = Depends(require_roles(Role.BUYER, Role.MIDDLEMAN)),
) -> BidRead:
    """Place a bid on an active product."""
    return await BidService.create_bid(bid, current_user)


@router.get("/products/{product_id}/bids", response_model=List[BidRead])
async def list_product_bids(product_id: int) -> List[BidRead]:
    return await BidService.list_product_bids(product_id)


@router.get("/user/bids", response_model=List[BidRead])
async def list_my_bids(current_user: dict = Depends(get_current_user)) -> List[BidRead]:
    return await BidService.list_user_bids(current_user["user_id"])


@router.patch("/bids/{bid_id}/status", response_model=BidRead)
async def update_bid_status(
    bid_id: int,
    body: BidStatusUpdate,
    current_user: dict = Depends(get_current_user),
) -> BidRead:
    """Accept, reject or counter a pending bid.

    Only the farmer owning the bid's product may answer it.
    """
    return await BidService.update_bid_status(bid_id, body.status, current_user)
