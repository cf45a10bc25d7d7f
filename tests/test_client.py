import json

import pytest
import requests
from fastapi.testclient import TestClient

from agri_market_client import AgriMarketAPI

from .conftest import TEST_PASSWORD


class FakeSession:
    """Records requests and answers with a canned response."""

    def __init__(self, status_code=200, body=None, error=None):
        self.status_code = status_code
        self.body = body
        self.error = error
        self.calls = []

    def request(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        response = requests.Response()
        response.status_code = self.status_code
        response.url = kwargs["url"]
        response._content = b"" if self.body is None else json.dumps(self.body).encode("utf-8")
        return response


def test_urls_and_auth_header():
    session = FakeSession(body=[])
    api = AgriMarketAPI(base_url="http://market.local/", token="abc", session=session)
    products, error = api.list_products(category="Grains")
    assert (products, error) == ([], None)
    call = session.calls[0]
    assert call["url"] == "http://market.local/api/products"
    assert call["params"] == {"category": "Grains"}
    assert call["headers"] == {"Authorization": "Bearer abc"}


def test_http_errors_become_error_tuples():
    session = FakeSession(status_code=404, body={"detail": "Product not found"})
    api = AgriMarketAPI(base_url="http://market.local", session=session)
    data, error = api.get_product(9)
    assert data is None
    assert error == {"status_code": 404, "message": "Product not found"}

    listing, error = api.conversation(3)
    assert listing == []
    assert error["status_code"] == 404


def test_connection_errors_become_error_tuples():
    session = FakeSession(error=requests.ConnectionError("connection refused"))
    api = AgriMarketAPI(base_url="http://market.local", session=session)
    data, error = api.mark_message_read(1)
    assert data is None
    assert error == {"status_code": None, "message": "connection refused"}


def test_failed_login_keeps_no_token():
    session = FakeSession(status_code=401, body={"detail": "Invalid username or password"})
    api = AgriMarketAPI(base_url="http://market.local", session=session)
    user, error = api.login("farmer1", "nope")
    assert user is None
    assert error["status_code"] == 401
    assert api.token is None


@pytest.mark.usefixtures("product")
def test_against_running_app(app, buyer):
    api = AgriMarketAPI(base_url="http://testserver", session=TestClient(app))
    user, error = api.login("buyer1", TEST_PASSWORD)
    assert error is None
    assert user["id"] == buyer[0].id
    assert api.token

    products, error = api.list_products(status="active")
    assert error is None
    assert [p["name"] for p in products] == ["Premium Wheat"]

    bid, error = api.place_bid(products[0]["id"], amount=19.5, quantity=10, message="Half now")
    assert error is None
    assert bid["status"] == "pending"
