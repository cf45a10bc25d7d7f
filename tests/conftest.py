"""
Shared fixtures.

Every test starts from an empty store.  Users are created directly in
the store with a precomputed password hash and authenticated with a
freshly signed token, which keeps the suite fast; the auth tests cover
the real register/login endpoints.
"""

import itertools
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from agri_market_api.app.core import store as store_module
from agri_market_api.app.core.security import create_access_token, hash_password
from agri_market_api.app.main import create_app


TEST_PASSWORD = "secret123"
_PASSWORD_HASH = hash_password(TEST_PASSWORD)


@pytest.fixture(autouse=True)
def store():
    return store_module.reset_store()


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
def client(app):
    return TestClient(app)


def auth_headers(username: str) -> dict:
    return {"Authorization": f"Bearer {create_access_token({'sub': username})}"}


@pytest.fixture
def make_user(store):
    """Factory: ``make_user("farmer")`` -> ``(user, headers)``.

    Generated names (``farmer_1``, ...) never clash with the named role
    fixtures below (``farmer1``, ...).
    """
    counter = itertools.count(1)

    def _make(role: str, username: str = None, **extra):
        username = username or f"{role}_{next(counter)}"
        data = {
            "username": username,
            "full_name": username.title(),
            "email": f"{username}@example.com",
            "role": role,
        }
        data.update(extra)
        user = store.create_user(data, password_hash=_PASSWORD_HASH)
        return user, auth_headers(username)

    return _make


@pytest.fixture
def farmer(make_user):
    return make_user("farmer", "farmer1")


@pytest.fixture
def buyer(make_user):
    return make_user("buyer", "buyer1")


@pytest.fixture
def middleman(make_user):
    return make_user("middleman", "middleman1")


@pytest.fixture
def transporter(make_user):
    return make_user("transporter", "transporter1")


@pytest.fixture
def admin(make_user):
    return make_user("admin", "admin1")


PRODUCT_PAYLOAD = {
    "name": "Premium Wheat",
    "category": "Grains",
    "description": "Sustainably grown",
    "quantity": 100,
    "unit": "quintal",
    "price": 20.5,
    "location": "Rural County",
    "tags": ["organic", "wheat"],
}


@pytest.fixture
def product(client, farmer):
    response = client.post("/api/products", json=PRODUCT_PAYLOAD, headers=farmer[1])
    assert response.status_code == 201
    return response.json()


def future_date(days: int = 7) -> str:
    return (datetime.now(timezone.utc) + timedelta(days=days)).isoformat()
