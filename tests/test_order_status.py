"""Tests for order fulfilment updates: status, shopper, delivery time, payment status."""

from app.core.config import settings


def set_status(client, headers, order_id, status, note=None):
    body = {"status": status}
    if note:
        body["note"] = note
    return client.put(f"/api/v1/orders/{order_id}/status", json=body, headers=headers)


class TestStatusUpdates:
    def test_admin_moves_order_and_history_grows(self, client, seed, order):
        response = set_status(client, seed.admin, order["id"], "processing", "Picked up by store")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "processing"
        assert [entry["status"] for entry in body["statusHistory"]] == ["pending", "processing"]
        assert body["statusHistory"][-1]["note"] == "Picked up by store"

        body = set_status(client, seed.admin, order["id"], "shopping").json()
        assert len(body["statusHistory"]) == 3

    def test_customer_cannot_change_status(self, client, seed, order):
        response = set_status(client, seed.alice, order["id"], "delivered")

        assert response.status_code == 403
        assert response.json() == {"message": "Not authorized to perform this action"}

    def test_only_assigned_shopper_may_update(self, client, seed, order):
        refused = set_status(client, seed.shopper, order["id"], "shopping")
        assert refused.status_code == 403
        assert refused.json() == {"message": "Not authorized"}

        client.put(f"/api/v1/orders/{order['id']}/assign", json={"shopperId": str(seed.shopper_id)}, headers=seed.admin)

        assert set_status(client, seed.shopper, order["id"], "shopping").status_code == 200
        assert set_status(client, seed.other_shopper, order["id"], "delivered").status_code == 403

    def test_any_status_accepted_by_default(self, client, seed, order):
        assert set_status(client, seed.admin, order["id"], "delivered").status_code == 200

        response = set_status(client, seed.admin, order["id"], "pending")

        assert response.status_code == 200
        assert response.json()["status"] == "pending"

    def test_enforced_transitions(self, client, seed, order, monkeypatch):
        monkeypatch.setattr(settings, "ENFORCE_STATUS_TRANSITIONS", True)

        assert set_status(client, seed.admin, order["id"], "out_for_delivery").status_code == 200
        assert set_status(client, seed.admin, order["id"], "delivered").status_code == 200

        response = set_status(client, seed.admin, order["id"], "processing")

        assert response.status_code == 400
        assert response.json() == {"message": "Cannot transition order from delivered to processing"}
        history = client.get(f"/api/v1/orders/{order['id']}", headers=seed.admin).json()["statusHistory"]
        assert len(history) == 3

    def test_unknown_status_value(self, client, seed, order):
        response = set_status(client, seed.admin, order["id"], "teleported")

        assert response.status_code == 400
        assert response.json()["message"] == "Validation failed"


class TestAssignShopper:
    def test_assign(self, client, seed, order):
        response = client.put(
            f"/api/v1/orders/{order['id']}/assign",
            json={"shopperId": str(seed.shopper_id)},
            headers=seed.admin,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["shopper"] == str(seed.shopper_id)
        assert body["status"] == "pending"
        assert body["statusHistory"][-1]["note"] == "Shopper assigned"

    def test_assign_non_shopper(self, client, seed, order):
        response = client.put(
            f"/api/v1/orders/{order['id']}/assign",
            json={"shopperId": str(seed.bob_id)},
            headers=seed.admin,
        )

        assert response.status_code == 400
        assert response.json() == {"message": "User is not a shopper"}

    def test_assign_unknown_user(self, client, seed, order):
        response = client.put(
            f"/api/v1/orders/{order['id']}/assign",
            json={"shopperId": str(seed.store_id)},
            headers=seed.admin,
        )

        assert response.status_code == 404
        assert response.json() == {"message": "Shopper not found"}

    def test_shopper_cannot_assign(self, client, seed, order):
        response = client.put(
            f"/api/v1/orders/{order['id']}/assign",
            json={"shopperId": str(seed.shopper_id)},
            headers=seed.shopper,
        )

        assert response.status_code == 403


class TestDeliveryTimeAndPaymentStatus:
    def test_set_delivery_time(self, client, seed, order):
        response = client.put(
            f"/api/v1/orders/{order['id']}/delivery-time",
            json={"deliveryTime": "2026-01-15T14:30:00+00:00"},
            headers=seed.admin,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["deliveryTime"].startswith("2026-01-15T14:30:00")
        assert body["statusHistory"][-1]["note"].startswith("Delivery time set to 2026-01-15T14:30:00")

    def test_payment_status_by_admin(self, client, seed, order):
        response = client.put(
            f"/api/v1/orders/{order['id']}/payment-status",
            json={"paymentStatus": "refunded"},
            headers=seed.admin,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["paymentStatus"] == "refunded"
        assert body["status"] == "pending"
        assert body["statusHistory"][-1]["note"] == "Payment status updated to refunded"

    def test_payment_status_refused_for_shopper(self, client, seed, order):
        client.put(f"/api/v1/orders/{order['id']}/assign", json={"shopperId": str(seed.shopper_id)}, headers=seed.admin)

        response = client.put(
            f"/api/v1/orders/{order['id']}/payment-status",
            json={"paymentStatus": "paid"},
            headers=seed.shopper,
        )

        assert response.status_code == 403
