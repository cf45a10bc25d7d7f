"""
Transport endpoints for API v1.

Requesters (farmers, buyers, middlemen) create transport requests;
transporters browse unclaimed requests, claim them and report progress.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from agri_market_api.app.core.security import get_current_user, require_roles
from agri_market_api.app.schemas.transport import (
    TransportRequestCreate,
    TransportRequestRead,
    TransportStatusUpdate,
)
from agri_market_api.app.schemas.user import Role
from agri_market_api.app.services.transport_service import TransportService


router = APIRouter()


@router.post("", response_model=TransportRequestRead, status_code=status.HTTP_201_CREATED)
async def create_transport_request(
    request: TransportRequestCreate,
    current_user: dict = Depends(require_roles(Role.FARMER, Role.BUYER, Role.MIDDLEMAN)),
) -> TransportRequestRead:
    return await TransportService.create_request(request, current_user)


@router.get("/requester", response_model=List[TransportRequestRead])
async def list_my_requests(current_user: dict = Depends(get_current_user)) -> List[TransportRequestRead]:
    """Transport requests created by the caller."""
    return await TransportService.list_for_requester(current_user["user_id"])


@router.get("/transporter", response_model=List[TransportRequestRead])
async def list_my_jobs(
    current_user: dict = Depends(require_roles(Role.TRANSPORTER)),
) -> List[TransportRequestRead]:
    """Transport requests claimed by the calling transporter."""
    return await TransportService.list_for_transporter(current_user["user_id"])


@router.get("/available", response_model=List[TransportRequestRead])
async def list_available_requests(
    current_user: dict = Depends(require_roles(Role.TRANSPORTER)),
) -> List[TransportRequestRead]:
    """Pending transport requests no transporter has claimed yet."""
    return await TransportService.list_available()


@router.patch("/{request_id}/status", response_model=TransportRequestRead)
async def update_transport_status(
    request_id: int,
    body: TransportStatusUpdate,
    current_user: dict = Depends(get_current_user),
) -> TransportRequestRead:
    """Claim (``accepted``) or progress (``in_transit``, ``delivered``) a request."""
    return await TransportService.update_status(request_id, body.status, current_user)
