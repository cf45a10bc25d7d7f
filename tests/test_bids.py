import pytest

from agri_market_api.app.core.config import settings


def place_bid(client, headers, product_id, amount=19.5, quantity=50, message=None):
    body = {"product_id": product_id, "amount": amount, "quantity": quantity}
    if message:
        body["message"] = message
    return client.post("/api/bids", json=body, headers=headers)


def answer(client, headers, bid_id, status):
    return client.patch(f"/api/bids/{bid_id}/status", json={"status": status}, headers=headers)


def test_accepting_a_bid_sells_the_product(client, farmer, buyer, middleman, product):
    response = place_bid(client, buyer[1], product["id"], message="For my bakery")
    assert response.status_code == 201
    bid = response.json()
    assert bid["status"] == "pending"
    assert bid["buyer_id"] == buyer[0].id

    accepted = answer(client, farmer[1], bid["id"], "accepted")
    assert accepted.status_code == 200
    assert accepted.json()["status"] == "accepted"
    assert client.get(f"/api/products/{product['id']}").json()["status"] == "sold"

    late = place_bid(client, middleman[1], product["id"])
    assert late.status_code == 400
    assert late.json()["detail"] == "Product is not available for bidding"


def test_only_buyers_and_middlemen_bid(client, farmer, transporter, middleman, product):
    assert place_bid(client, farmer[1], product["id"]).status_code == 403
    assert place_bid(client, transporter[1], product["id"]).status_code == 403
    assert place_bid(client, middleman[1], product["id"]).status_code == 201


def test_bid_on_missing_product(client, buyer):
    assert place_bid(client, buyer[1], 404).status_code == 404


def test_bid_quantity_cannot_exceed_listing(client, buyer, product):
    response = place_bid(client, buyer[1], product["id"], quantity=150)
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "quantity"


def test_bid_amount_must_be_positive(client, buyer, product):
    response = place_bid(client, buyer[1], product["id"], amount=0)
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "amount"


def test_only_owning_farmer_answers_bids(client, make_user, buyer, product):
    bid = place_bid(client, buyer[1], product["id"]).json()
    other_farmer = make_user("farmer")
    for headers in (other_farmer[1], buyer[1]):
        assert answer(client, headers, bid["id"], "accepted").status_code == 403
    assert client.get("/api/user/bids", headers=buyer[1]).json()[0]["status"] == "pending"
    assert client.get(f"/api/products/{product['id']}").json()["status"] == "active"


def test_answer_missing_bid(client, farmer):
    assert answer(client, farmer[1], 77, "rejected").status_code == 404


@pytest.mark.parametrize("status", ["pending", "sold", "maybe"])
def test_answer_with_invalid_status(client, farmer, buyer, product, status):
    bid = place_bid(client, buyer[1], product["id"]).json()
    assert answer(client, farmer[1], bid["id"], status).status_code == 400


@pytest.mark.parametrize("status", ["rejected", "countered"])
def test_reject_and_counter_leave_product_active(client, farmer, buyer, product, status):
    bid = place_bid(client, buyer[1], product["id"]).json()
    response = answer(client, farmer[1], bid["id"], status)
    assert response.json()["status"] == status
    assert client.get(f"/api/products/{product['id']}").json()["status"] == "active"


def test_answered_bids_are_final(client, farmer, buyer, product):
    bid = place_bid(client, buyer[1], product["id"]).json()
    answer(client, farmer[1], bid["id"], "accepted")
    for status in ("rejected", "countered", "accepted"):
        response = answer(client, farmer[1], bid["id"], status)
        assert response.status_code == 400
        assert response.json()["detail"] == "The bid is already 'accepted' and its status can no longer change"
    assert client.get("/api/user/bids", headers=buyer[1]).json()[0]["status"] == "accepted"


def test_product_is_sold_at_most_once(client, farmer, buyer, middleman, product):
    first = place_bid(client, buyer[1], product["id"]).json()
    second = place_bid(client, middleman[1], product["id"], amount=21).json()
    assert answer(client, farmer[1], first["id"], "accepted").status_code == 200

    # Sibling bids stay pending by default...
    bids = client.get(f"/api/products/{product['id']}/bids").json()
    assert {b["id"]: b["status"] for b in bids} == {first["id"]: "accepted", second["id"]: "pending"}

    # ...but can no longer be accepted.
    response = answer(client, farmer[1], second["id"], "accepted")
    assert response.status_code == 400
    assert client.get("/api/user/bids", headers=middleman[1]).json()[0]["status"] == "pending"
    # Rejecting the leftover bid is still possible.
    assert answer(client, farmer[1], second["id"], "rejected").status_code == 200


def test_sibling_bids_rejected_when_enabled(client, monkeypatch, farmer, buyer, middleman, product):
    monkeypatch.setattr(settings, "reject_sibling_bids_on_accept", True)
    first = place_bid(client, buyer[1], product["id"]).json()
    second = place_bid(client, middleman[1], product["id"]).json()
    answer(client, farmer[1], first["id"], "accepted")
    bids = client.get(f"/api/products/{product['id']}/bids").json()
    assert {b["id"]: b["status"] for b in bids} == {first["id"]: "accepted", second["id"]: "rejected"}


def test_sold_products_always_have_an_accepted_bid(client, farmer, buyer, middleman, product):
    other = client.post(
        "/api/products",
        json={"name": "Corn", "category": "Vegetables", "quantity": 10, "price": 3, "location": "X"},
        headers=farmer[1],
    ).json()
    b1 = place_bid(client, buyer[1], product["id"]).json()
    b2 = place_bid(client, middleman[1], other["id"], quantity=5).json()
    answer(client, farmer[1], b1["id"], "accepted")
    answer(client, farmer[1], b2["id"], "rejected")
    for p in client.get("/api/products").json():
        bids = client.get(f"/api/products/{p['id']}/bids").json()
        if p["status"] == "sold":
            assert any(b["status"] == "accepted" for b in bids)
        else:
            assert not any(b["status"] == "accepted" for b in bids)


def test_bid_listings(client, buyer, middleman, product):
    place_bid(client, buyer[1], product["id"])
    place_bid(client, middleman[1], product["id"])
    assert len(client.get(f"/api/products/{product['id']}/bids").json()) == 2
    assert client.get("/api/products/999/bids").status_code == 404
    mine = client.get("/api/user/bids", headers=buyer[1]).json()
    assert [b["buyer_id"] for b in mine] == [buyer[0].id]
    assert client.get("/api/user/bids").status_code == 401
