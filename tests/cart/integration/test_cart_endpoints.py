"""Integration tests for cart endpoints via TestClient."""

import pytest


@pytest.fixture()
def products(make_product):
    return {
        "a": make_product(name="A", price="50.00", stock=10),
        "b": make_product(name="B", price="40.00", sale_price="25.00", stock=10),
    }


def _add(client, product, quantity=1, user_id="user-1"):
    response = client.post("/cart", json={"userId": user_id, "productId": str(product.id), "quantity": quantity})
    assert response.status_code == 200
    return response.json()["itemId"]


class TestCartEndpoints:
    def test_empty_cart(self, api_client):
        response = api_client.get("/cart/user-1")
        assert response.status_code == 200
        assert response.json() == {"items": [], "itemCount": 0, "total": "0.00"}

    def test_reference_cart_totals(self, api_client, products):
        _add(api_client, products["a"], 2)
        _add(api_client, products["b"], 1)

        body = api_client.get("/cart/user-1").json()

        assert body["itemCount"] == 3
        assert body["total"] == "125.00"
        line_b = next(i for i in body["items"] if i["productId"] == str(products["b"].id))
        assert line_b["product"]["effectivePrice"] == "25.00"
        assert line_b["lineTotal"] == "25.00"

    def test_quantity_defaults_to_one(self, api_client, products):
        response = api_client.post("/cart", json={"userId": "user-1", "productId": str(products["a"].id)})
        assert response.status_code == 200
        assert api_client.get("/cart/user-1").json()["itemCount"] == 1

    def test_update_to_zero_removes(self, api_client, products):
        item_id = _add(api_client, products["a"], 2)
        response = api_client.put(f"/cart/{item_id}", json={"quantity": 0})
        assert response.status_code == 200
        assert response.json()["removed"] is True
        assert api_client.get("/cart/user-1").json()["items"] == []

    def test_remove_item(self, api_client, products):
        item_id = _add(api_client, products["a"])
        assert api_client.delete(f"/cart/{item_id}").status_code == 200
        assert api_client.delete(f"/cart/{item_id}").status_code == 404

    def test_clear_cart(self, api_client, products):
        _add(api_client, products["a"])
        _add(api_client, products["b"])
        response = api_client.delete("/cart/clear/user-1")
        assert response.json() == {"removed": 2}
        assert api_client.delete("/cart/clear/user-1").json() == {"removed": 0}

    def test_unknown_product_is_404(self, api_client):
        response = api_client.post("/cart", json={"userId": "user-1", "productId": "missing"})
        assert response.status_code == 404

    def test_zero_quantity_add_is_422(self, api_client, products):
        body = {"userId": "user-1", "productId": str(products["a"].id), "quantity": 0}
        response = api_client.post("/cart", json=body)
        assert response.status_code == 422
