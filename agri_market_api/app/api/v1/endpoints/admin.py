"""
Administration endpoints for API v1.

Administrators review the verification submissions of farmers.
"""

from typing import List

from fastapi import APIRouter, Depends

from agri_market_api.app.core.security import require_roles
from agri_market_api.app.schemas.user import Role, UserRead, VerificationReview
from agri_market_api.app.services.farmer_service import FarmerService


router = APIRouter()


@router.get("/verifications", response_model=List[UserRead])
async def list_pending_verifications(
    current_user: dict = Depends(require_roles(Role.ADMIN)),
) -> List[UserRead]:
    """Farmers waiting for their verification ID to be reviewed."""
    return await FarmerService.list_pending_verifications()


@router.patch("/verifications/{user_id}", response_model=UserRead)
async def review_verification(
    user_id: int,
    body: VerificationReview,
    current_user: dict = Depends(require_roles(Role.ADMIN)),
) -> UserRead:
    return await FarmerService.review_verification(user_id, body.status, current_user)
