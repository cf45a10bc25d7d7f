"""
Top‑level router for version 1 of the API.

Aggregates the domain routers.  Routers whose paths span several
resources (auth, products, bids) declare full paths themselves and are
included without a prefix.
"""

from fastapi import APIRouter

from .endpoints import admin, auth, bids, farmer, messages, products, transport

router = APIRouter()

router.include_router(auth.router, tags=["auth"])
router.include_router(products.router, tags=["products"])
router.include_router(bids.router, tags=["bids"])
router.include_router(transport.router, prefix="/transport", tags=["transport"])
router.include_router(messages.router, prefix="/messages", tags=["messages"])
router.include_router(farmer.router, prefix="/farmer", tags=["farmer"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
