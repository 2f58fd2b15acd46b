"""Tests for the store, category and product endpoints."""


class TestStores:
    def test_admin_creates_store(self, client, seed):
        response = client.post(
            "/api/v1/stores/",
            json={
                "name": "Merkato Fresh",
                "address": {"street": "Merkato 1", "city": "Addis Ababa", "state": "AA", "zipCode": "1000"},
                "deliveryFee": 2.5,
                "minimumOrder": 10,
            },
            headers=seed.admin,
        )

        assert response.status_code == 201
        store = response.json()
        assert store["deliveryFee"] == 2.5
        assert store["address"]["zipCode"] == "1000"

        names = [s["name"] for s in client.get("/api/v1/stores/").json()]
        assert names == ["Fresh Grocery", "Merkato Fresh", "Organic Market"]

    def test_unknown_store(self, client, seed):
        response = client.get(f"/api/v1/stores/{seed.apples_id}")

        assert response.status_code == 404
        assert response.json() == {"message": "Store not found"}


class TestCategories:
    def test_slug_is_derived_and_unique(self, client, seed):
        created = client.post("/api/v1/categories/", json={"name": "Dairy Eggs"}, headers=seed.admin)

        assert created.status_code == 201
        assert created.json()["slug"] == "dairy-eggs"

        duplicate = client.post("/api/v1/categories/", json={"name": "dairy eggs"}, headers=seed.admin)
        assert duplicate.status_code == 400
        assert duplicate.json() == {"message": "Category with slug 'dairy-eggs' already exists"}

    def test_children_filter(self, client, seed):
        parent = client.post("/api/v1/categories/", json={"name": "Produce"}, headers=seed.admin).json()
        client.post("/api/v1/categories/", json={"name": "Fruit", "parent": parent["id"]}, headers=seed.admin)

        children = client.get(f"/api/v1/categories/?parent={parent['id']}").json()

        assert [c["name"] for c in children] == ["Fruit"]
        assert children[0]["parent"] == parent["id"]


class TestProducts:
    def test_admin_creates_product(self, client, seed):
        response = client.post(
            "/api/v1/products/",
            json={
                "name": "Teff Flour",
                "store": str(seed.store_id),
                "price": 4.75,
                "stock": 12,
                "unit": "kg",
            },
            headers=seed.admin,
        )

        assert response.status_code == 201
        product = response.json()
        assert product["store"] == str(seed.store_id)
        assert product["stock"] == 12
        assert product["effectivePrice"] == 4.75

    def test_invalid_unit(self, client, seed):
        response = client.post(
            "/api/v1/products/",
            json={"name": "Teff Flour", "store": str(seed.store_id), "price": 4.75, "unit": "bushel"},
            headers=seed.admin,
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Validation failed"

    def test_list_filters(self, client, seed):
        by_store = client.get(f"/api/v1/products/?store={seed.store_id}").json()
        assert by_store["pagination"]["total"] == 3
        assert {p["name"] for p in by_store["products"]} == {"Apples", "Milk", "Saffron"}

        on_sale = client.get("/api/v1/products/?onSale=true").json()
        assert [p["name"] for p in on_sale["products"]] == ["Milk"]
        assert on_sale["products"][0]["effectivePrice"] == 3.5

        search = client.get("/api/v1/products/?search=saff").json()
        assert [p["name"] for p in search["products"]] == ["Saffron"]

    def test_inactive_product_is_hidden(self, client, seed):
        response = client.get(f"/api/v1/products/{seed.retired_id}")

        assert response.status_code == 404
        assert response.json() == {"message": "Product not found"}

    def test_restock_through_update(self, client, seed):
        response = client.put(
            f"/api/v1/products/{seed.saffron_id}",
            json={"stock": 7, "price": 10.5},
            headers=seed.admin,
        )

        assert response.status_code == 200
        assert response.json()["stock"] == 7
        assert response.json()["price"] == 10.5
