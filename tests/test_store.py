from datetime import datetime, timedelta, timezone

import pytest

from agri_market_api.app.core.errors import ValidationError
from agri_market_api.app.core.store import EntityStore
from agri_market_api.app.core.transitions import BidStatus, ProductStatus, TransportStatus


def _user(store, username, role="buyer", **extra):
    data = {"username": username, "full_name": username, "email": f"{username}@example.com", "role": role}
    data.update(extra)
    return store.create_user(data, password_hash="x$y")


def _product(store, farmer_id, name="Wheat"):
    return store.create_product(
        {"name": name, "category": "Grains", "quantity": 10, "unit": "kg", "price": 2.5, "location": "Here"},
        farmer_id=farmer_id,
    )


def test_ids_are_monotonic_per_collection():
    store = EntityStore()
    farmer = _user(store, "f", role="farmer")
    second = _user(store, "b")
    assert (farmer.id, second.id) == (1, 2)
    first_product = _product(store, farmer.id)
    second_product = _product(store, farmer.id, "Corn")
    assert (first_product.id, second_product.id) == (1, 2)


def test_create_fills_defaults():
    store = EntityStore()
    farmer = _user(store, "f", role="farmer")
    assert farmer.certifications == []
    assert farmer.verification_status.value == "pending"
    product = _product(store, farmer.id)
    assert product.status == ProductStatus.ACTIVE
    assert product.images == []
    bid = store.create_bid({"product_id": product.id, "amount": 2.0, "quantity": 5}, buyer_id=2)
    assert bid.status == BidStatus.PENDING
    assert bid.message is None


def test_reads_are_snapshots():
    store = EntityStore()
    farmer = _user(store, "f", role="farmer")
    product = _product(store, farmer.id)
    product.name = "Changed locally"
    product.tags.append("leak")
    stored = store.get_product_by_id(product.id)
    assert stored.name == "Wheat"
    assert stored.tags == []


def test_missing_ids_return_none():
    store = EntityStore()
    assert store.get_user(99) is None
    assert store.get_product_by_id(1) is None
    assert store.update_product(1, {"name": "x"}) is None
    assert store.update_bid_status(1, BidStatus.ACCEPTED) is None
    assert store.update_transport_request_status(1, TransportStatus.ACCEPTED) is None
    assert store.mark_message_as_read(1) is None


def test_foreign_key_lookups():
    store = EntityStore()
    f1 = _user(store, "f1", role="farmer")
    f2 = _user(store, "f2", role="farmer")
    _product(store, f1.id, "A")
    _product(store, f2.id, "B")
    p = _product(store, f1.id, "C")
    assert [x.name for x in store.get_products_by_farmer_id(f1.id)] == ["A", "C"]
    store.create_bid({"product_id": p.id, "amount": 1, "quantity": 1}, buyer_id=7)
    store.create_bid({"product_id": p.id, "amount": 2, "quantity": 1}, buyer_id=8)
    assert len(store.get_bids_by_product_id(p.id)) == 2
    assert [b.amount for b in store.get_bids_by_buyer_id(8)] == [2]


def test_available_transport_requests_and_claim():
    store = EntityStore()
    data = {
        "product_id": 1,
        "pickup_location": "A",
        "delivery_location": "B",
        "quantity": 3,
        "date": datetime.now(timezone.utc) + timedelta(days=1),
    }
    first = store.create_transport_request(data, requester_id=1)
    store.create_transport_request(data, requester_id=1)
    assert first.transporter_id is None
    claimed = store.update_transport_request_status(first.id, TransportStatus.ACCEPTED, transporter_id=5)
    assert claimed.transporter_id == 5
    assert [r.id for r in store.get_available_transport_requests()] == [2]
    assert [r.id for r in store.get_transport_requests_by_transporter_id(5)] == [1]
    # A later status change keeps the transporter.
    moved = store.update_transport_request_status(first.id, TransportStatus.IN_TRANSIT)
    assert moved.transporter_id == 5


def test_conversation_is_chronological_and_two_sided():
    store = EntityStore()
    store.create_message({"receiver_id": 2, "content": "one"}, sender_id=1)
    store.create_message({"receiver_id": 1, "content": "two"}, sender_id=2)
    store.create_message({"receiver_id": 3, "content": "other"}, sender_id=1)
    store.create_message({"receiver_id": 2, "content": "three"}, sender_id=1)
    assert [m.content for m in store.get_messages_between_users(2, 1)] == ["one", "two", "three"]
    assert [m.content for m in store.get_unread_messages_by_user_id(2)] == ["one", "three"]
    store.mark_message_as_read(1)
    assert [m.content for m in store.get_unread_messages_by_user_id(2)] == ["three"]


def test_pending_farmer_verifications():
    store = EntityStore()
    _user(store, "no_id", role="farmer")
    submitted = _user(store, "with_id", role="farmer", verification_id="GOV-1")
    _user(store, "buyer_with_id", role="buyer", verification_id="GOV-2")
    assert [u.id for u in store.get_pending_farmer_verifications()] == [submitted.id]
    store.update_user(submitted.id, {"verification_status": "verified"})
    assert store.get_pending_farmer_verifications() == []


def test_counts():
    store = EntityStore()
    _user(store, "a")
    assert store.counts()["users"] == 1
    assert store.counts()["messages"] == 0


def test_usernames_are_unique():
    store = EntityStore()
    first = _user(store, "farmer1", role="farmer")
    with pytest.raises(ValidationError) as excinfo:
        _user(store, "farmer1", role="transporter")
    assert excinfo.value.errors == [{"field": "username", "message": "Username already exists"}]
    assert store.counts()["users"] == 1
    assert store.get_user_by_username("farmer1").id == first.id
