"""
Demo marketplace data.

``seed_demo_data`` fills the store with one user per trading role, a
few products, bids, a transport request and a short conversation.  It
only creates what is missing, so calling it repeatedly is harmless.
All demo accounts use the password ``password``.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from ..schemas.user import Role
from .security import hash_password
from .store import EntityStore, get_store


logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password"

DEMO_USERS = [
    {
        "username": "farmer1",
        "full_name": "John Farmer",
        "email": "john@agrifarm.com",
        "role": Role.FARMER,
        "phone": "+1234567891",
        "location": "Rural County, Midwest",
    },
    {
        "username": "buyer1",
        "full_name": "Emma Buyer",
        "email": "emma@foodstore.com",
        "role": Role.BUYER,
        "phone": "+1234567892",
        "location": "Metro City, East Coast",
    },
    {
        "username": "middleman1",
        "full_name": "Michael Broker",
        "email": "michael@agribroker.com",
        "role": Role.MIDDLEMAN,
        "phone": "+1234567893",
        "location": "Trade Center, West Coast",
    },
    {
        "username": "transporter1",
        "full_name": "Sara Trucker",
        "email": "sara@transportco.com",
        "role": Role.TRANSPORTER,
        "phone": "+1234567894",
        "location": "Highway Junction, South",
    },
]

DEMO_PRODUCTS = [
    {
        "name": "Premium Wheat",
        "category": "Grains",
        "description": "High-quality wheat grown using sustainable practices",
        "quantity": 100,
        "unit": "quintal",
        "price": 20.5,
        "location": "Rural County, Midwest",
        "tags": ["organic", "sustainable", "wheat"],
    },
    {
        "name": "Sweet Corn",
        "category": "Vegetables",
        "description": "Freshly harvested sweet corn, perfect for direct consumption",
        "quantity": 50,
        "unit": "quintal",
        "price": 15.75,
        "location": "Rural County, Midwest",
        "tags": ["fresh", "corn", "vegetable"],
    },
    {
        "name": "Heirloom Tomatoes",
        "category": "Vegetables",
        "description": "Variety of heirloom tomatoes, perfect for restaurants and specialty stores",
        "quantity": 30,
        "unit": "quintal",
        "price": 25.0,
        "location": "Rural County, Midwest",
        "tags": ["heirloom", "tomato", "specialty"],
    },
]


def _ensure_user(store: EntityStore, data: Dict[str, Any]):
    existing = store.get_user_by_username(data["username"])
    if existing:
        return existing
    return store.create_user(data, password_hash=hash_password(DEMO_PASSWORD))


def _ensure_product(store: EntityStore, farmer_id: int, data: Dict[str, Any]):
    for product in store.get_products_by_farmer_id(farmer_id):
        if product.name == data["name"]:
            return product
    return store.create_product(data, farmer_id=farmer_id)


def _ensure_bid(store: EntityStore, product_id: int, buyer_id: int, amount: float, quantity: float, message: str):
    for bid in store.get_bids_by_product_id(product_id):
        if bid.buyer_id == buyer_id and bid.amount == amount and bid.quantity == quantity:
            return bid
    return store.create_bid(
        {"product_id": product_id, "amount": amount, "quantity": quantity, "message": message},
        buyer_id=buyer_id,
    )


def _ensure_message(store: EntityStore, sender_id: int, receiver_id: int, content: str):
    for message in store.get_messages_between_users(sender_id, receiver_id):
        if message.sender_id == sender_id and message.content == content:
            return message
    return store.create_message({"receiver_id": receiver_id, "content": content}, sender_id=sender_id)


def seed_demo_data(store: Optional[EntityStore] = None) -> Dict[str, int]:
    """Populate ``store`` (the process store by default) with demo data.

    Returns the per‑collection record counts after seeding.
    """
    store = store or get_store()
    with store.lock:
        users = {u["username"]: _ensure_user(store, u) for u in DEMO_USERS}
        farmer = users["farmer1"]
        buyer = users["buyer1"]
        middleman = users["middleman1"]
        transporter = users["transporter1"]

        wheat, _corn, tomatoes = (_ensure_product(store, farmer.id, p) for p in DEMO_PRODUCTS)

        _ensure_bid(store, wheat.id, buyer.id, 19.0, 50,
                    "I'd like to purchase half of your wheat stock for my bakery.")
        _ensure_bid(store, wheat.id, middleman.id, 19.5, 75,
                    "Representing a chain of bakeries interested in your wheat.")
        _ensure_bid(store, tomatoes.id, buyer.id, 24.0, 15,
                    "Need these tomatoes for our restaurant's special menu.")

        existing = [
            r for r in store.get_transport_requests_by_requester_id(buyer.id)
            if r.product_id == wheat.id
        ]
        if not existing:
            store.create_transport_request(
                {
                    "product_id": wheat.id,
                    "pickup_location": "Rural County, Midwest",
                    "delivery_location": "Metro City, East Coast",
                    "quantity": 50,
                    "date": datetime.now(timezone.utc) + timedelta(days=7),
                },
                requester_id=buyer.id,
            )

        _ensure_message(store, buyer.id, farmer.id,
                        "Hi, I'm interested in buying more wheat next season. What are your projected yields?")
        _ensure_message(store, farmer.id, buyer.id,
                        "Hello! I expect to have around 150-200 quintals available. "
                        "Would you like to place a pre-order?")
        _ensure_message(store, transporter.id, buyer.id,
                        "I saw your transport request for wheat. I have availability next week.")

        counts = store.counts()
    logger.info("Demo data seeded: %s", counts)
    return counts
