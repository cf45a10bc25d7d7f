"""
Product endpoints for API v1.

Anyone may browse products.  Only farmers may list new products, and
only the owning farmer may edit one.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from agri_market_api.app.core.security import get_current_user, require_roles
from agri_market_api.app.core.transitions import ProductStatus
from agri_market_api.app.schemas.product import Category, ProductCreate, ProductRead, ProductUpdate
from agri_market_api.app.schemas.user import Role
from agri_market_api.app.services.product_service import ProductService


router = APIRouter()


@router.get("/products", response_model=List[ProductRead])
async def list_products(
    category: Optional[Category] = Query(None),
    status: Optional[ProductStatus] = Query(None),
) -> List[ProductRead]:
    """List products, optionally filtered by ``category`` and ``status``."""
    return await ProductService.list_products(category=category, status=status)


@router.get("/products/{product_id}", response_model=ProductRead)
async def get_product(product_id: int) -> ProductRead:
    return await ProductService.get_product(product_id)


@router.post("/products", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
async def create_product(
    product: ProductCreate,
    current_user: dict = Depends(require_roles(Role.FARMER)),
) -> ProductRead:
    """List a new product owned by the calling farmer."""
    return await ProductService.create_product(product, current_user)


@router.patch("/products/{product_id}", response_model=ProductRead)
async def update_product(
    product_id: int,
    updates: ProductUpdate,
    current_user: dict = Depends(get_current_user),
) -> ProductRead:
    """Edit a product.

    Only the owning farmer may edit.  Setting ``status`` to ``expired``
    withdraws an active product; ``sold`` can only be reached by
    accepting a bid.
    """
    return await ProductService.update_product(product_id, updates, current_user)


@router.get("/user/products", response_model=List[ProductRead])
async def list_my_products(current_user: dict = Depends(get_current_user)) -> List[ProductRead]:
    return await ProductService.list_farmer_products(current_user["user_id"])
