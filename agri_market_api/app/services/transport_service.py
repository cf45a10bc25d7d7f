"""
Business logic for transport requests.

Farmers, buyers and middlemen request transport for a product.  A
transporter claims an unclaimed request by moving it to ``accepted``,
which records them as the request's transporter; the claim cannot be
undone or taken over by another transporter.  After the claim, the
assigned transporter and the original requester may both move the
request along ``accepted -> in_transit -> delivered``.
"""

import logging
from typing import Any, Dict, List

from ..core.errors import ForbiddenError, NotFoundError
from ..core.store import get_store
from ..core.transitions import TransportStatus, check_transport_transition
from ..schemas.transport import TransportRequestCreate, TransportRequestRead
from ..schemas.user import Role


logger = logging.getLogger(__name__)


class TransportService:
    """Service for creating, claiming and progressing transport requests."""

    @classmethod
    async def create_request(
        cls, data: TransportRequestCreate, current_user: Dict[str, Any]
    ) -> TransportRequestRead:
        store = get_store()
        if store.get_product_by_id(data.product_id) is None:
            raise NotFoundError("Product not found")
        request = store.create_transport_request(data.model_dump(), requester_id=current_user["user_id"])
        logger.info(
            "Transport request #%s for product #%s created by %s",
            request.id, request.product_id, current_user["sub"],
        )
        return request

    @classmethod
    async def list_for_requester(cls, user_id: int) -> List[TransportRequestRead]:
        return get_store().get_transport_requests_by_requester_id(user_id)

    @classmethod
    async def list_for_transporter(cls, user_id: int) -> List[TransportRequestRead]:
        return get_store().get_transport_requests_by_transporter_id(user_id)

    @classmethod
    async def list_available(cls) -> List[TransportRequestRead]:
        """Pending requests no transporter has claimed yet."""
        return get_store().get_available_transport_requests()

    @classmethod
    async def update_status(
        cls, request_id: int, status: TransportStatus, current_user: Dict[str, Any]
    ) -> TransportRequestRead:
        """Claim or progress a transport request.

        Authorisation is decided before the state machine is consulted,
        so a transporter trying to claim someone else's request gets a
        403 rather than a transition error.
        """
        store = get_store()
        target = TransportStatus(status)
        user_id = current_user["user_id"]
        with store.lock:
            request = store.get_transport_request_by_id(request_id)
            if request is None:
                raise NotFoundError("Transport request not found")

            is_claim = (
                current_user["role"] == Role.TRANSPORTER.value
                and target == TransportStatus.ACCEPTED
                and request.transporter_id is None
            )
            if is_claim:
                check_transport_transition(request.status, target)
                updated = store.update_transport_request_status(request_id, target, transporter_id=user_id)
                logger.info("Transporter %s claimed transport request #%s", current_user["sub"], request_id)
                return updated

            if user_id not in (request.transporter_id, request.requester_id):
                logger.warning("User %s may not update transport request #%s", current_user["sub"], request_id)
                raise ForbiddenError("You don't have permission to update this transport request")
            if target == TransportStatus.ACCEPTED and request.transporter_id is None:
                raise ForbiddenError("Only a transporter can accept a transport request")
            check_transport_transition(request.status, target)
            updated = store.update_transport_request_status(request_id, target)
        logger.info("Transport request #%s is now %s", request_id, target.value)
        return updated
