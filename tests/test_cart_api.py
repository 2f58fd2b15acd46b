"""Integration tests for the cart endpoints."""

from conftest import create_cart


class TestCreateCart:
    def test_create_cart_computes_totals(self, client, seed):
        cart = create_cart(client, seed.alice, seed.store_id, [(seed.apples_id, 2), (seed.milk_id, 1)])

        assert cart["user"] == str(seed.alice_id)
        assert cart["store"] == str(seed.store_id)
        assert cart["isActive"] is True
        assert [item["quantity"] for item in cart["items"]] == [2, 1]
        # Milk is on sale, the line captures the sale price
        assert cart["items"][1]["price"] == 3.5
        assert cart["subtotal"] == 8.5
        assert cart["tax"] == 0.68
        assert cart["total"] == 9.18

    def test_posting_again_replaces_lines(self, client, seed):
        first = create_cart(client, seed.alice, seed.store_id, [(seed.apples_id, 2), (seed.milk_id, 1)])
        second = create_cart(client, seed.alice, seed.store_id, [(seed.saffron_id, 1)])

        assert second["id"] == first["id"]
        assert [item["productId"] for item in second["items"]] == [str(seed.saffron_id)]
        assert second["subtotal"] == 9.99

    def test_repeated_product_lines_are_merged(self, client, seed):
        cart = create_cart(client, seed.alice, seed.store_id, [(seed.apples_id, 2), (seed.apples_id, 3)])

        assert len(cart["items"]) == 1
        assert cart["items"][0]["quantity"] == 5

    def test_one_cart_per_store(self, client, seed):
        fresh = create_cart(client, seed.alice, seed.store_id, [(seed.apples_id, 1)])
        organic = create_cart(client, seed.alice, seed.other_store_id, [(seed.kale_id, 1)])

        assert fresh["id"] != organic["id"]

        response = client.get(f"/api/v1/cart/?store={seed.store_id}", headers=seed.alice)
        assert response.json()["id"] == fresh["id"]

    def test_product_from_another_store(self, client, seed):
        response = client.post(
            "/api/v1/cart/",
            json={"store": str(seed.store_id), "items": [{"product": str(seed.kale_id), "quantity": 1}]},
            headers=seed.alice,
        )

        assert response.status_code == 400
        assert response.json() == {
            "message": f"Product {seed.kale_id} not found or does not belong to this store"
        }

    def test_inactive_product(self, client, seed):
        response = client.post(
            "/api/v1/cart/",
            json={"store": str(seed.store_id), "items": [{"product": str(seed.retired_id), "quantity": 1}]},
            headers=seed.alice,
        )

        assert response.status_code == 400
        assert "does not belong to this store" in response.json()["message"]

    def test_more_than_stock(self, client, seed):
        response = client.post(
            "/api/v1/cart/",
            json={"store": str(seed.store_id), "items": [{"product": str(seed.apples_id), "quantity": 11}]},
            headers=seed.alice,
        )

        assert response.status_code == 400
        assert response.json() == {"message": "Not enough stock for product Apples. Available: 10"}

    def test_failed_replace_keeps_existing_lines(self, client, seed):
        create_cart(client, seed.alice, seed.store_id, [(seed.apples_id, 2)])

        response = client.post(
            "/api/v1/cart/",
            json={
                "store": str(seed.store_id),
                "items": [
                    {"product": str(seed.milk_id), "quantity": 1},
                    {"product": str(seed.saffron_id), "quantity": 2},
                ],
            },
            headers=seed.alice,
        )
        assert response.status_code == 400

        cart = client.get("/api/v1/cart/", headers=seed.alice).json()
        assert [item["productId"] for item in cart["items"]] == [str(seed.apples_id)]

    def test_unknown_store(self, client, seed):
        response = client.post(
            "/api/v1/cart/",
            json={"store": str(seed.apples_id), "items": [{"product": str(seed.apples_id), "quantity": 1}]},
            headers=seed.alice,
        )

        assert response.status_code == 400
        assert response.json() == {"message": "Store not found"}

    def test_zero_quantity_fails_validation(self, client, seed):
        response = client.post(
            "/api/v1/cart/",
            json={"store": str(seed.store_id), "items": [{"product": str(seed.apples_id), "quantity": 0}]},
            headers=seed.alice,
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Validation failed"

    def test_requires_login(self, client, seed):
        response = client.get("/api/v1/cart/")

        assert response.status_code == 401


class TestCartItems:
    def test_add_merges_existing_line(self, client, seed):
        create_cart(client, seed.alice, seed.store_id, [(seed.apples_id, 2)])

        response = client.put(
            "/api/v1/cart/add",
            json={"productId": str(seed.apples_id), "quantity": 3},
            headers=seed.alice,
        )

        assert response.status_code == 200
        cart = response.json()
        assert len(cart["items"]) == 1
        assert cart["items"][0]["quantity"] == 5
        assert cart["subtotal"] == 12.5

    def test_add_creates_cart_for_product_store(self, client, seed):
        response = client.put(
            "/api/v1/cart/add",
            json={"productId": str(seed.kale_id), "quantity": 2, "notes": "<b>crisp</b> leaves"},
            headers=seed.alice,
        )

        assert response.status_code == 200
        cart = response.json()
        assert cart["store"] == str(seed.other_store_id)
        assert cart["items"][0]["notes"] == "crisp leaves"

    def test_add_unknown_product(self, client, seed):
        response = client.put(
            "/api/v1/cart/add",
            json={"productId": str(seed.store_id), "quantity": 1},
            headers=seed.alice,
        )

        assert response.status_code == 400
        assert response.json() == {"message": "Product not found"}

    def test_update_quantity(self, client, seed):
        cart = create_cart(client, seed.alice, seed.store_id, [(seed.apples_id, 2), (seed.milk_id, 1)])
        item_id = cart["items"][0]["id"]

        response = client.put(f"/api/v1/cart/update/{item_id}", json={"quantity": 4}, headers=seed.alice)

        assert response.status_code == 200
        assert response.json()["items"][0]["quantity"] == 4
        assert response.json()["subtotal"] == 13.5

    def test_update_beyond_stock(self, client, seed):
        cart = create_cart(client, seed.alice, seed.store_id, [(seed.milk_id, 1)])
        item_id = cart["items"][0]["id"]

        response = client.put(f"/api/v1/cart/update/{item_id}", json={"quantity": 6}, headers=seed.alice)

        assert response.status_code == 400
        assert response.json() == {"message": "Not enough stock for product Milk. Available: 5"}

    def test_update_someone_elses_item(self, client, seed):
        cart = create_cart(client, seed.alice, seed.store_id, [(seed.apples_id, 1)])
        item_id = cart["items"][0]["id"]

        response = client.put(f"/api/v1/cart/update/{item_id}", json={"quantity": 2}, headers=seed.bob)

        assert response.status_code == 404
        assert response.json() == {"message": "Cart or item not found"}

    def test_remove_item(self, client, seed):
        cart = create_cart(client, seed.alice, seed.store_id, [(seed.apples_id, 2), (seed.milk_id, 1)])

        response = client.delete(f"/api/v1/cart/remove/{cart['items'][0]['id']}", headers=seed.alice)

        assert response.status_code == 200
        assert [item["productId"] for item in response.json()["items"]] == [str(seed.milk_id)]
        assert response.json()["subtotal"] == 3.5

    def test_removing_last_item_deletes_cart(self, client, seed):
        cart = create_cart(client, seed.alice, seed.store_id, [(seed.apples_id, 1)])

        response = client.delete(f"/api/v1/cart/remove/{cart['items'][0]['id']}", headers=seed.alice)

        assert response.status_code == 200
        assert response.json() == {"message": "Cart is now empty"}

        missing = client.get("/api/v1/cart/", headers=seed.alice)
        assert missing.status_code == 404
        assert missing.json() == {"message": "Cart not found"}

    def test_clear_cart(self, client, seed):
        create_cart(client, seed.alice, seed.store_id, [(seed.apples_id, 1)])

        response = client.delete("/api/v1/cart/", headers=seed.alice)

        assert response.status_code == 200
        assert response.json() == {"message": "Cart cleared"}
        assert client.get("/api/v1/cart/", headers=seed.alice).status_code == 404


class TestCheckout:
    def test_checkout_applies_fees(self, client, seed):
        create_cart(client, seed.alice, seed.store_id, [(seed.apples_id, 2), (seed.milk_id, 1)])

        response = client.put(
            "/api/v1/cart/checkout",
            json={"deliveryFee": 3.99, "serviceFee": 1.5, "tip": 2},
            headers=seed.alice,
        )

        assert response.status_code == 200
        cart = response.json()
        assert cart["deliveryFee"] == 3.99
        assert cart["serviceFee"] == 1.5
        assert cart["tip"] == 2.0
        # 8.50 + 0.68 tax + 3.99 + 1.50 + 2.00
        assert cart["total"] == 16.67

    def test_checkout_without_cart(self, client, seed):
        response = client.put(
            "/api/v1/cart/checkout",
            json={"deliveryFee": 3.99, "serviceFee": 1.5},
            headers=seed.alice,
        )

        assert response.status_code == 404
        assert response.json() == {"message": "Cart not found"}
