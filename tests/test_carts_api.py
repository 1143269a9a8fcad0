"""
HTTP tests for the cart router
"""
import uuid

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_catalog_client
from app.data.database import get_db
from app.main import app

from tests.conftest import B1, C1, MISSING, OWNER

HEADERS = {"X-User-Id": str(OWNER)}


@pytest.fixture
def client(session_factory, catalog):
    def override_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_db
    app.dependency_overrides[get_catalog_client] = lambda: catalog
    yield TestClient(app)
    app.dependency_overrides.clear()


def add(client, item_type="course", item_id=C1, currency="USD", quantity=None):
    body = {"item_type": item_type, "item_id": str(item_id), "currency_code": currency}
    if quantity is not None:
        body["quantity"] = quantity
    return client.post("/cart/items", json=body, headers=HEADERS)


class TestCartApi:
    def test_empty_cart(self, client):
        res = client.get("/cart", headers=HEADERS)

        assert res.status_code == 200
        body = res.json()
        assert body["id"] is None
        assert body["owner_id"] == str(OWNER)
        assert body["items"] == []
        assert body["items_count"] == 0
        assert float(body["total_price"]) == 0

    def test_add_item(self, client):
        res = add(client)

        assert res.status_code == 201
        body = res.json()
        assert body["items_count"] == 1
        assert body["currency_code"] == "USD"
        assert body["total_price"] == "49.99"
        assert body["items"][0]["item_title"] == "Advanced Python"

    def test_get_cart_is_decorated(self, client):
        add(client)

        body = client.get("/cart", headers=HEADERS).json()

        details = body["items"][0]["course_details"]
        assert details["slug"] == "advanced-python"
        assert details["instructor"]["name"] == "Jane Doe"

    def test_currency_mismatch(self, client):
        add(client)

        res = add(client, item_type="bundle", item_id=B1, currency="EUR")

        assert res.status_code == 400
        assert res.json()["detail"]["code"] == "CurrencyMismatch"

    def test_duplicate(self, client):
        add(client)

        res = add(client)

        assert res.status_code == 409
        assert res.json()["detail"]["code"] == "DuplicateItem"

    def test_item_not_found(self, client):
        res = add(client, item_id=MISSING)

        assert res.status_code == 404
        assert res.json()["detail"]["code"] == "ItemNotFound"

    def test_pricing_unavailable(self, client):
        res = add(client, currency="SAR")

        assert res.status_code == 404
        assert res.json()["detail"]["code"] == "PricingUnavailable"

    def test_update_item(self, client):
        item_id = add(client).json()["items"][0]["id"]

        res = client.put(f"/cart/items/{item_id}", json={"quantity": 3}, headers=HEADERS)

        assert res.status_code == 200
        assert res.json()["total_price"] == "149.97"

    def test_update_without_cart(self, client):
        res = client.put(f"/cart/items/{uuid.uuid4()}", json={"quantity": 2}, headers=HEADERS)

        assert res.status_code == 404
        assert res.json()["detail"]["code"] == "CartNotFound"

    def test_remove_last_item_returns_empty_shape(self, client):
        item_id = add(client).json()["items"][0]["id"]

        res = client.delete(f"/cart/items/{item_id}", headers=HEADERS)

        assert res.status_code == 200
        assert res.json()["id"] is None
        assert res.json()["items_count"] == 0
        assert client.get("/cart", headers=HEADERS).json()["id"] is None

    def test_remove_unknown_item(self, client):
        add(client)

        res = client.delete(f"/cart/items/{uuid.uuid4()}", headers=HEADERS)

        assert res.status_code == 404
        assert res.json()["detail"]["code"] == "ItemNotFound"

    def test_clear_twice(self, client):
        add(client)

        first = client.delete("/cart/clear", headers=HEADERS)
        second = client.delete("/cart/clear", headers=HEADERS)

        assert first.status_code == second.status_code == 200
        assert first.json() == second.json() == {"message": "Cart cleared successfully"}

    @pytest.mark.parametrize("quantity", [0, -3])
    def test_non_positive_quantity_rejected(self, client, quantity):
        assert add(client, quantity=quantity).status_code == 422

    def test_unknown_item_type_rejected(self, client):
        assert add(client, item_type="ebook").status_code == 422

    def test_missing_owner_header(self, client):
        assert client.get("/cart").status_code == 422

    def test_malformed_owner_header(self, client):
        assert client.get("/cart", headers={"X-User-Id": "not-a-uuid"}).status_code == 401

    def test_health(self, client):
        res = client.get("/health")

        assert res.status_code == 200
        assert res.json() == {"status": "ok"}
