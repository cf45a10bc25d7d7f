"""
Business logic for farmer profiles and verification.

Farmers maintain a public profile and a list of certifications, and
submit an identification number (government ID or farm association ID)
for verification.  Administrators review pending submissions and mark
them ``verified`` or ``rejected``.  A rejected farmer may resubmit; a
verified one may not.
"""

import logging
from typing import Any, Dict, List

from ..core.errors import NotFoundError, ValidationError
from ..core.store import get_store
from ..schemas.user import (
    CertificationUpdate,
    FarmerProfileUpdate,
    Role,
    UserRead,
    VerificationStatus,
)


logger = logging.getLogger(__name__)


class FarmerService:
    """Service for farmer profiles, certifications and verification review."""

    @classmethod
    def _load_farmer(cls, user_id: int):
        user = get_store().get_user(user_id)
        if user is None or user.role != Role.FARMER:
            raise NotFoundError("Farmer not found")
        return user

    @classmethod
    async def update_profile(cls, data: FarmerProfileUpdate, current_user: Dict[str, Any]) -> UserRead:
        changes = data.model_dump(exclude_unset=True)
        store = get_store()
        with store.lock:
            cls._load_farmer(current_user["user_id"])
            updated = store.update_user(current_user["user_id"], changes)
        logger.info("Farmer %s updated profile fields %s", current_user["sub"], sorted(changes))
        return updated.public()

    @classmethod
    async def submit_verification(cls, verification_id: str, current_user: Dict[str, Any]) -> UserRead:
        store = get_store()
        with store.lock:
            farmer = cls._load_farmer(current_user["user_id"])
            if farmer.verification_status == VerificationStatus.VERIFIED:
                raise ValidationError("Farmer is already verified")
            updated = store.update_user(
                farmer.id,
                {"verification_id": verification_id, "verification_status": VerificationStatus.PENDING},
            )
        logger.info("Farmer %s submitted verification", current_user["sub"])
        return updated.public()

    @classmethod
    async def update_certifications(cls, data: CertificationUpdate, current_user: Dict[str, Any]) -> UserRead:
        """Add or remove a certification; both operations are idempotent."""
        store = get_store()
        with store.lock:
            farmer = cls._load_farmer(current_user["user_id"])
            certifications = list(farmer.certifications)
            if data.action == "add" and data.certification not in certifications:
                certifications.append(data.certification)
            elif data.action == "remove" and data.certification in certifications:
                certifications.remove(data.certification)
            updated = store.update_user(farmer.id, {"certifications": certifications})
        return updated.public()

    @classmethod
    async def list_pending_verifications(cls) -> List[UserRead]:
        return [u.public() for u in get_store().get_pending_farmer_verifications()]

    @classmethod
    async def review_verification(
        cls, user_id: int, status: str, current_user: Dict[str, Any]
    ) -> UserRead:
        store = get_store()
        with store.lock:
            farmer = cls._load_farmer(user_id)
            if not farmer.verification_id:
                raise ValidationError("Farmer has not submitted a verification ID")
            updated = store.update_user(user_id, {"verification_status": VerificationStatus(status)})
        logger.info("Admin %s marked farmer #%s as %s", current_user["sub"], user_id, status)
        return updated.public()
