"""Integration tests for payment record and maintenance endpoints."""

import pytest


@pytest.fixture()
def order_id(api_client, make_product):
    product = make_product(price="20.00", stock=5)
    body = {"shippingAddress": "1 Market St", "items": [{"productId": str(product.id), "quantity": 1}]}
    return api_client.post("/orders", json=body).json()["orderId"]


class TestPaymentRecord:
    def test_payment_for_order(self, api_client, fake_gateway, order_id):
        intent_id = api_client.post("/create-payment-intent", json={"orderId": order_id}).json()["paymentIntentId"]

        body = api_client.get(f"/payments/order/{order_id}").json()

        assert body["stripePaymentId"] == intent_id
        assert body["amount"] == "20.00"
        assert body["status"] == "pending"
        assert body["currency"] == "usd"

    def test_no_payment_is_404(self, api_client, order_id):
        assert api_client.get(f"/payments/order/{order_id}").status_code == 404


class TestMaintenance:
    def test_expire_without_stale_payments(self, api_client, fake_gateway, order_id):
        api_client.post("/create-payment-intent", json={"orderId": order_id})
        response = api_client.post("/payments/maintenance/expire", json={"maxAgeMinutes": 60})
        assert response.json() == {"expired": 0}

    def test_configure_fake_gateway(self, api_client, fake_gateway, order_id):
        response = api_client.post("/payments/gateway/configure", json={"available": False})
        assert response.json()["available"] is False

        response = api_client.post("/create-payment-intent", json={"orderId": order_id})
        assert response.status_code == 500
        assert response.json()["message"] == "Gateway unavailable"

    def test_configure_refused_in_production(self, api_client, fake_gateway, monkeypatch):
        monkeypatch.setenv("PROTEAN_ENV", "production")
        response = api_client.post("/payments/gateway/configure", json={"available": False})
        assert response.status_code == 403
        assert fake_gateway.available is True
