"""Integration tests for the cart endpoints via TestClient."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from ordering.api.errors import register_error_handlers
from ordering.api.routes import cart_router


@pytest.fixture()
def client():
    app = FastAPI()
    register_error_handlers(app)
    app.include_router(cart_router)
    return TestClient(app)


def _add(client, product_id="10", quantity=1, headers=None):
    return client.post("/cart/add", json={"product_id": product_id, "quantity": quantity}, headers=headers or {})


class TestAccountCart:
    def test_empty_cart_view(self, client, marketplace):
        response = client.get("/cart", headers={"X-Account-Id": "cust-1"})
        assert response.status_code == 200
        assert response.json()["lines"] == []

    def test_add_accumulates(self, client, marketplace):
        headers = {"X-Account-Id": "cust-1"}
        _add(client, quantity=2, headers=headers)
        response = _add(client, quantity=3, headers=headers)

        assert response.status_code == 200
        body = response.json()
        assert body["lines"][0]["quantity"] == 5
        assert body["lines"][0]["product_name"] == "Agaseke Basket"
        assert body["subtotal"] == 5000.0

    def test_remove(self, client, marketplace):
        headers = {"X-Account-Id": "cust-1"}
        _add(client, quantity=2, headers=headers)
        response = client.request("DELETE", "/cart/remove", json={"product_id": "10"}, headers=headers)

        assert response.status_code == 200
        assert response.json()["lines"] == []

    def test_invalid_quantity(self, client, marketplace):
        response = _add(client, quantity=0, headers={"X-Account-Id": "cust-1"})
        assert response.status_code == 400
        assert "quantity" in response.json()["error"]

    def test_unknown_product(self, client, marketplace):
        response = _add(client, product_id="999", headers={"X-Account-Id": "cust-1"})
        assert response.status_code == 404

    def test_unknown_account(self, client, marketplace):
        response = _add(client, headers={"X-Account-Id": "ghost"})
        assert response.status_code == 403


class TestAnonymousCart:
    def test_token_round_trip(self, client, marketplace):
        first = _add(client)
        token = first.json()["cart_token"]
        assert token

        _add(client, product_id="11", headers={"X-Cart-Token": token})
        response = client.get("/cart", headers={"X-Cart-Token": token})
        assert response.status_code == 200
        assert {line["product_id"] for line in response.json()["lines"]} == {"10", "11"}

    def test_unknown_token(self, client, marketplace):
        response = client.get("/cart", headers={"X-Cart-Token": "missing"})
        assert response.status_code == 404

    def test_merge_into_account(self, client, marketplace):
        token = _add(client, quantity=2).json()["cart_token"]
        _add(client, quantity=1, headers={"X-Account-Id": "cust-1"})

        response = client.post("/cart/merge", json={}, headers={"X-Account-Id": "cust-1", "X-Cart-Token": token})

        assert response.status_code == 200
        assert response.json()["lines"][0]["quantity"] == 3

    def test_merge_requires_account(self, client, marketplace):
        token = _add(client).json()["cart_token"]
        response = client.post("/cart/merge", json={"cart_token": token})
        assert response.status_code == 403
