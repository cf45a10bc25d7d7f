"""
Status machines for products, bids and transport requests.

Statuses are closed ``str`` enums so they serialise as plain strings in
JSON while still rejecting unknown values at the schema layer.  Each
machine is a table mapping a status to the set of statuses reachable
from it; a status missing from the table is terminal.  The
``check_*_transition`` helpers raise ``InvalidTransitionError`` for any
move the table does not list.
"""

from enum import Enum
from typing import Dict, FrozenSet, Mapping

from .errors import InvalidTransitionError


class ProductStatus(str, Enum):
    ACTIVE = "active"
    SOLD = "sold"
    EXPIRED = "expired"


class BidStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    COUNTERED = "countered"


class TransportStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"


PRODUCT_TRANSITIONS: Dict[ProductStatus, FrozenSet[ProductStatus]] = {
    ProductStatus.ACTIVE: frozenset({ProductStatus.SOLD, ProductStatus.EXPIRED}),
}

BID_TRANSITIONS: Dict[BidStatus, FrozenSet[BidStatus]] = {
    BidStatus.PENDING: frozenset({BidStatus.ACCEPTED, BidStatus.REJECTED, BidStatus.COUNTERED}),
}

TRANSPORT_TRANSITIONS: Dict[TransportStatus, FrozenSet[TransportStatus]] = {
    TransportStatus.PENDING: frozenset({TransportStatus.ACCEPTED}),
    TransportStatus.ACCEPTED: frozenset({TransportStatus.IN_TRANSIT}),
    TransportStatus.IN_TRANSIT: frozenset({TransportStatus.DELIVERED}),
}


def can_transition(table: Mapping[Enum, FrozenSet[Enum]], current: Enum, target: Enum) -> bool:
    return target in table.get(current, frozenset())


def is_terminal(table: Mapping[Enum, FrozenSet[Enum]], status: Enum) -> bool:
    return not table.get(status)


def _check(entity: str, table, current, target) -> None:
    if not can_transition(table, current, target):
        raise InvalidTransitionError(entity, current.value, target.value, terminal=is_terminal(table, current))


def check_product_transition(current: ProductStatus, target: ProductStatus) -> None:
    _check("product", PRODUCT_TRANSITIONS, ProductStatus(current), ProductStatus(target))


def check_bid_transition(current: BidStatus, target: BidStatus) -> None:
    _check("bid", BID_TRANSITIONS, BidStatus(current), BidStatus(target))


def check_transport_transition(current: TransportStatus, target: TransportStatus) -> None:
    _check("transport request", TRANSPORT_TRANSITIONS, TransportStatus(current), TransportStatus(target))
