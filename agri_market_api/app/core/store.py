"""
In‑memory entity store.

The ``EntityStore`` owns every record of the marketplace: users,
products, bids, transport requests and messages.  Each collection is a
dictionary keyed by an integer id handed out by a per‑collection
counter starting at 1.  Records are pydantic models; every read hands
out a deep copy so callers only ever see point‑in‑time snapshots and
cannot mutate stored state behind the store's back.

Lookups by id return ``None`` when the record does not exist, which
services translate into ``NotFoundError``.  Composite transitions
(accepting a bid and selling its product, claiming a transport request)
must run inside ``with store.lock:`` so that two requests can never both
succeed against the same aggregate when handlers run on a thread pool.

A single store instance is shared per process and obtained with
``get_store()``; ``reset_store()`` swaps in a fresh instance, which the
test suite does before every test.
"""

import logging
import threading
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional, TypeVar

from pydantic import BaseModel

from ..schemas.bid import BidRead
from ..schemas.message import MessageRead
from ..schemas.product import ProductRead
from ..schemas.transport import TransportRequestRead
from ..schemas.user import Role, UserInDB, VerificationStatus
from .errors import ValidationError
from .transitions import BidStatus, ProductStatus, TransportStatus


logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class _Collection:
    """A keyed collection with its own monotonic id counter."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.records: Dict[int, BaseModel] = {}
        self._next_id = 1

    def next_id(self) -> int:
        record_id = self._next_id
        self._next_id += 1
        return record_id


class EntityStore:
    """Process‑local repository for all marketplace entities."""

    def __init__(self) -> None:
        self.lock = threading.RLock()
        self._users = _Collection("users")
        self._products = _Collection("products")
        self._bids = _Collection("bids")
        self._transport_requests = _Collection("transport_requests")
        self._messages = _Collection("messages")

    # ------------------------------------------------------------------
    # Generic helpers
    # ------------------------------------------------------------------
    def _insert(self, collection: _Collection, build: Callable[[int], ModelT]) -> ModelT:
        with self.lock:
            record = build(collection.next_id())
            collection.records[record.id] = record
            logger.debug("Inserted %s #%s", collection.name, record.id)
            return record.model_copy(deep=True)

    def _get(self, collection: _Collection, record_id: int) -> Optional[Any]:
        record = collection.records.get(record_id)
        return record.model_copy(deep=True) if record is not None else None

    def _update(self, collection: _Collection, record_id: int, updates: Dict[str, Any]) -> Optional[Any]:
        with self.lock:
            record = collection.records.get(record_id)
            if record is None:
                return None
            # Validate the merged record so a bad partial never lands in the store.
            updated = type(record).model_validate({**record.model_dump(), **updates})
            collection.records[record_id] = updated
            return updated.model_copy(deep=True)

    def _filter(self, collection: _Collection, predicate: Callable[[Any], bool]) -> List[Any]:
        return [r.model_copy(deep=True) for r in collection.records.values() if predicate(r)]

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------
    def create_user(self, data: Dict[str, Any], password_hash: str) -> UserInDB:
        """Insert a user; usernames are unique across the store.

        Raises ``ValidationError`` on the ``username`` field when the
        name is already taken.
        """
        def build(user_id: int) -> UserInDB:
            return UserInDB(
                **data,
                id=user_id,
                password_hash=password_hash,
                certifications=[],
                verification_status=VerificationStatus.PENDING,
                created_at=utcnow(),
            )

        with self.lock:
            if self.get_user_by_username(data["username"]) is not None:
                raise ValidationError.for_field("username", "Username already exists")
            return self._insert(self._users, build)

    def get_user(self, user_id: int) -> Optional[UserInDB]:
        return self._get(self._users, user_id)

    def get_user_by_username(self, username: str) -> Optional[UserInDB]:
        for user in self._users.records.values():
            if user.username == username:
                return user.model_copy(deep=True)
        return None

    def update_user(self, user_id: int, updates: Dict[str, Any]) -> Optional[UserInDB]:
        return self._update(self._users, user_id, updates)

    def has_role(self, role: Role) -> bool:
        return any(u.role == role for u in self._users.records.values())

    def get_pending_farmer_verifications(self) -> List[UserInDB]:
        return self._filter(
            self._users,
            lambda u: u.role == Role.FARMER
            and u.verification_status == VerificationStatus.PENDING
            and bool(u.verification_id),
        )

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------
    def create_product(self, data: Dict[str, Any], farmer_id: int) -> ProductRead:
        def build(product_id: int) -> ProductRead:
            return ProductRead(
                **data,
                id=product_id,
                farmer_id=farmer_id,
                images=[],
                status=ProductStatus.ACTIVE,
                created_at=utcnow(),
            )

        return self._insert(self._products, build)

    def get_products(self) -> List[ProductRead]:
        return self._filter(self._products, lambda p: True)

    def get_products_by_farmer_id(self, farmer_id: int) -> List[ProductRead]:
        return self._filter(self._products, lambda p: p.farmer_id == farmer_id)

    def get_product_by_id(self, product_id: int) -> Optional[ProductRead]:
        return self._get(self._products, product_id)

    def update_product(self, product_id: int, updates: Dict[str, Any]) -> Optional[ProductRead]:
        return self._update(self._products, product_id, updates)

    # ------------------------------------------------------------------
    # Bids
    # ------------------------------------------------------------------
    def create_bid(self, data: Dict[str, Any], buyer_id: int) -> BidRead:
        def build(bid_id: int) -> BidRead:
            return BidRead(
                **data,
                id=bid_id,
                buyer_id=buyer_id,
                status=BidStatus.PENDING,
                created_at=utcnow(),
            )

        return self._insert(self._bids, build)

    def get_bids_by_product_id(self, product_id: int) -> List[BidRead]:
        return self._filter(self._bids, lambda b: b.product_id == product_id)

    def get_bids_by_buyer_id(self, buyer_id: int) -> List[BidRead]:
        return self._filter(self._bids, lambda b: b.buyer_id == buyer_id)

    def get_bid_by_id(self, bid_id: int) -> Optional[BidRead]:
        return self._get(self._bids, bid_id)

    def update_bid_status(self, bid_id: int, status: BidStatus) -> Optional[BidRead]:
        return self._update(self._bids, bid_id, {"status": status})

    # ------------------------------------------------------------------
    # Transport requests
    # ------------------------------------------------------------------
    def create_transport_request(self, data: Dict[str, Any], requester_id: int) -> TransportRequestRead:
        def build(request_id: int) -> TransportRequestRead:
            return TransportRequestRead(
                **data,
                id=request_id,
                requester_id=requester_id,
                transporter_id=None,
                status=TransportStatus.PENDING,
                created_at=utcnow(),
            )

        return self._insert(self._transport_requests, build)

    def get_transport_requests_by_requester_id(self, requester_id: int) -> List[TransportRequestRead]:
        return self._filter(self._transport_requests, lambda r: r.requester_id == requester_id)

    def get_transport_requests_by_transporter_id(self, transporter_id: int) -> List[TransportRequestRead]:
        return self._filter(self._transport_requests, lambda r: r.transporter_id == transporter_id)

    def get_available_transport_requests(self) -> List[TransportRequestRead]:
        return self._filter(
            self._transport_requests,
            lambda r: r.transporter_id is None and r.status == TransportStatus.PENDING,
        )

    def get_transport_request_by_id(self, request_id: int) -> Optional[TransportRequestRead]:
        return self._get(self._transport_requests, request_id)

    def update_transport_request_status(
        self,
        request_id: int,
        status: TransportStatus,
        transporter_id: Optional[int] = None,
    ) -> Optional[TransportRequestRead]:
        updates: Dict[str, Any] = {"status": status}
        if transporter_id is not None:
            updates["transporter_id"] = transporter_id
        return self._update(self._transport_requests, request_id, updates)

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------
    def create_message(self, data: Dict[str, Any], sender_id: int) -> MessageRead:
        def build(message_id: int) -> MessageRead:
            return MessageRead(
                **data,
                id=message_id,
                sender_id=sender_id,
                read=False,
                created_at=utcnow(),
            )

        return self._insert(self._messages, build)

    def get_messages_between_users(self, user1_id: int, user2_id: int) -> List[MessageRead]:
        pair = {user1_id, user2_id}
        messages = self._filter(
            self._messages,
            lambda m: {m.sender_id, m.receiver_id} == pair,
        )
        # Ids break ties between messages created within the same clock tick.
        return sorted(messages, key=lambda m: (m.created_at, m.id))

    def get_unread_messages_by_user_id(self, user_id: int) -> List[MessageRead]:
        return self._filter(self._messages, lambda m: m.receiver_id == user_id and not m.read)

    def get_message_by_id(self, message_id: int) -> Optional[MessageRead]:
        return self._get(self._messages, message_id)

    def mark_message_as_read(self, message_id: int) -> Optional[MessageRead]:
        return self._update(self._messages, message_id, {"read": True})

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    def counts(self) -> Dict[str, int]:
        collections: Iterable[_Collection] = (
            self._users,
            self._products,
            self._bids,
            self._transport_requests,
            self._messages,
        )
        return {c.name: len(c.records) for c in collections}


_store = EntityStore()


def get_store() -> EntityStore:
    """Return the process‑wide store."""
    return _store


def reset_store() -> EntityStore:
    """Replace the process‑wide store with an empty one and return it."""
    global _store
    _store = EntityStore()
    return _store
