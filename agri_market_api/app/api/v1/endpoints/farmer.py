"""
Farmer profile endpoints for API v1.

All routes act on the calling farmer's own account.
"""

from fastapi import APIRouter, Depends

from agri_market_api.app.core.security import require_roles
from agri_market_api.app.schemas.user import (
    CertificationUpdate,
    FarmerProfileUpdate,
    Role,
    UserRead,
    VerificationSubmit,
)
from agri_market_api.app.services.farmer_service import FarmerService


router = APIRouter()

farmer_only = require_roles(Role.FARMER)


@router.patch("/profile", response_model=UserRead)
async def update_profile(body: FarmerProfileUpdate, current_user: dict = Depends(farmer_only)) -> UserRead:
    return await FarmerService.update_profile(body, current_user)


@router.post("/verification", response_model=UserRead)
async def submit_verification(body: VerificationSubmit, current_user: dict = Depends(farmer_only)) -> UserRead:
    """Submit (or resubmit after rejection) an ID for verification."""
    return await FarmerService.submit_verification(body.verification_id, current_user)


@router.patch("/certifications", response_model=UserRead)
async def update_certifications(body: CertificationUpdate, current_user: dict = Depends(farmer_only)) -> UserRead:
    return await FarmerService.update_certifications(body, current_user)
