"""
Business logic for bids.

Buyers and middlemen bid on active products; the farmer owning the
product answers each bid.  Accepting a bid is a composite transition:
the bid moves to ``accepted`` and the product to ``sold`` under the
store lock, after every check has passed, so either both records change
or neither does.  Because the product must still be ``active`` for the
acceptance to go through, a product is sold at most once.

Whether the other pending bids on a sold product should be rejected
automatically is an open product decision.  By default they stay
``pending``; setting ``REJECT_SIBLING_BIDS_ON_ACCEPT`` rejects them as
part of the acceptance.
"""

import logging
from typing import Any, Dict, List

from ..core.config import settings
from ..core.errors import ForbiddenError, NotFoundError, ValidationError
from ..core.store import get_store
from ..core.transitions import (
    BidStatus,
    ProductStatus,
    check_bid_transition,
    check_product_transition,
)
from ..schemas.bid import BidCreate, BidRead


logger = logging.getLogger(__name__)


class BidService:
    """Service for placing and answering bids."""

    @classmethod
    async def create_bid(cls, data: BidCreate, current_user: Dict[str, Any]) -> BidRead:
        """Place a bid on an active product.

        Raises ``NotFoundError`` if the product does not exist and
        ``ValidationError`` if it is not active or the requested
        quantity exceeds what is listed.
        """
        store = get_store()
        with store.lock:
            product = store.get_product_by_id(data.product_id)
            if product is None:
                raise NotFoundError("Product not found")
            if product.status != ProductStatus.ACTIVE:
                raise ValidationError("Product is not available for bidding")
            if data.quantity > product.quantity:
                raise ValidationError.for_field(
                    "quantity",
                    f"Quantity cannot exceed the listed {product.quantity:g} {product.unit.value}",
                )
            bid = store.create_bid(data.model_dump(), buyer_id=current_user["user_id"])
        logger.info(
            "%s %s bid %s x %s on product #%s (bid #%s)",
            current_user["role"], current_user["sub"], bid.amount, bid.quantity, product.id, bid.id,
        )
        return bid

    @classmethod
    async def list_product_bids(cls, product_id: int) -> List[BidRead]:
        store = get_store()
        if store.get_product_by_id(product_id) is None:
            raise NotFoundError("Product not found")
        return store.get_bids_by_product_id(product_id)

    @classmethod
    async def list_user_bids(cls, user_id: int) -> List[BidRead]:
        return get_store().get_bids_by_buyer_id(user_id)

    @classmethod
    async def update_bid_status(
        cls, bid_id: int, status: BidStatus, current_user: Dict[str, Any]
    ) -> BidRead:
        """Answer a bid as the farmer owning its product."""
        store = get_store()
        target = BidStatus(status)
        with store.lock:
            bid = store.get_bid_by_id(bid_id)
            if bid is None:
                raise NotFoundError("Bid not found")
            product = store.get_product_by_id(bid.product_id)
            if product is None or product.farmer_id != current_user["user_id"]:
                logger.warning("User %s may not answer bid #%s", current_user["sub"], bid_id)
                raise ForbiddenError("You don't have permission to update this bid")
            check_bid_transition(bid.status, target)
            if target == BidStatus.ACCEPTED:
                if product.status != ProductStatus.ACTIVE:
                    raise ValidationError("Product is no longer available")
                check_product_transition(product.status, ProductStatus.SOLD)

            updated = store.update_bid_status(bid_id, target)
            if target == BidStatus.ACCEPTED:
                store.update_product(product.id, {"status": ProductStatus.SOLD})
                if settings.reject_sibling_bids_on_accept:
                    cls._reject_siblings(product.id, bid_id)
        logger.info("Bid #%s on product #%s is now %s", bid_id, product.id, target.value)
        return updated

    @classmethod
    def _reject_siblings(cls, product_id: int, accepted_bid_id: int) -> None:
        store = get_store()
        for sibling in store.get_bids_by_product_id(product_id):
            if sibling.id != accepted_bid_id and sibling.status == BidStatus.PENDING:
                store.update_bid_status(sibling.id, BidStatus.REJECTED)
                logger.info("Bid #%s rejected because bid #%s was accepted", sibling.id, accepted_bid_id)
