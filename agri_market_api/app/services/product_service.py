"""
Business logic for product listings.

Farmers create and edit their own products.  Status changes requested
through an edit go through the product state machine; the transition
to ``sold`` is reserved for bid acceptance (see ``BidService``) so that
every sold product has an accepted bid behind it.
"""

import logging
from typing import Any, Dict, List, Optional

from ..core.errors import ForbiddenError, NotFoundError, ValidationError
from ..core.store import get_store
from ..core.transitions import ProductStatus, check_product_transition
from ..schemas.product import Category, ProductCreate, ProductRead, ProductUpdate


class ProductService:
    """Service for creating, listing and editing products."""

    @classmethod
    async def create_product(cls, data: ProductCreate, current_user: Dict[str, Any]) -> ProductRead:
        logger = logging.getLogger(__name__)
        product = get_store().create_product(data.model_dump(), farmer_id=current_user["user_id"])
        logger.info("Farmer %s listed product #%s '%s'", current_user["sub"], product.id, product.name)
        return product

    @classmethod
    async def list_products(
        cls,
        category: Optional[Category] = None,
        status: Optional[ProductStatus] = None,
    ) -> List[ProductRead]:
        """Return all products, optionally filtered by category and status."""
        products = get_store().get_products()
        if category is not None:
            products = [p for p in products if p.category == category]
        if status is not None:
            products = [p for p in products if p.status == status]
        return products

    @classmethod
    async def list_farmer_products(cls, farmer_id: int) -> List[ProductRead]:
        return get_store().get_products_by_farmer_id(farmer_id)

    @classmethod
    async def get_product(cls, product_id: int) -> ProductRead:
        product = get_store().get_product_by_id(product_id)
        if product is None:
            raise NotFoundError("Product not found")
        return product

    @classmethod
    async def update_product(
        cls, product_id: int, updates: ProductUpdate, current_user: Dict[str, Any]
    ) -> ProductRead:
        """Apply a partial edit from the owning farmer.

        Unset fields are left untouched.  A requested ``status`` must be
        a legal transition from the current one and may not be ``sold``.
        """
        logger = logging.getLogger(__name__)
        store = get_store()
        # ``description`` is the only field that may be cleared with null.
        changes = {
            k: v for k, v in updates.model_dump(exclude_unset=True).items()
            if v is not None or k == "description"
        }
        with store.lock:
            product = store.get_product_by_id(product_id)
            if product is None:
                raise NotFoundError("Product not found")
            if product.farmer_id != current_user["user_id"]:
                logger.warning(
                    "User %s tried to edit product #%s owned by farmer %s",
                    current_user["sub"], product_id, product.farmer_id,
                )
                raise ForbiddenError("You don't have permission to update this product")
            target = changes.get("status")
            if target is not None and target != product.status:
                if target == ProductStatus.SOLD:
                    raise ValidationError.for_field(
                        "status", "Products are marked sold by accepting a bid"
                    )
                check_product_transition(product.status, target)
            updated = store.update_product(product_id, changes)
        logger.info("Product #%s updated by %s: %s", product_id, current_user["sub"], sorted(changes))
        return updated
