"""Tests for product endpoints."""

from httpx import AsyncClient


class TestProductCrud:
    async def test_create_and_get(self, client: AsyncClient):
        response = await client.post(
            "/api/products",
            json={
                "product_name": "Bulb",
                "product_code": "BLB-9",
                "stock_quantity": 4,
                "buying_price": 2.5,
                "images": ["img/a.png", "img/b.png"],
            },
        )
        assert response.status_code == 201
        product_id = response.json()["id"]

        response = await client.get(f"/api/products/{product_id}")

        assert response.status_code == 200
        data = response.json()
        assert data["product_name"] == "Bulb"
        assert data["stock_value"] == 10.0
        assert data["images"] == ["img/a.png", "img/b.png"]

    async def test_missing_name_is_rejected(self, client: AsyncClient):
        response = await client.post("/api/products", json={"product_code": "X"})

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_duplicate_code_conflicts(self, client: AsyncClient, product_id: int):
        response = await client.post(
            "/api/products", json={"product_name": "Copy", "product_code": "CBL-1"}
        )

        assert response.status_code == 409
        assert response.json()["error_code"] == "DUPLICATE_RECORD"

    async def test_update(self, client: AsyncClient, product_id: int):
        response = await client.put(
            f"/api/products/{product_id}",
            json={"product_name": "Cable 2m", "product_code": "CBL-1", "images": ["x.png"]},
        )

        assert response.status_code == 200
        assert response.json()["product_name"] == "Cable 2m"
        images = await client.get(f"/api/products/{product_id}/images")
        assert images.json() == ["x.png"]

    async def test_update_missing(self, client: AsyncClient):
        response = await client.put("/api/products/999", json={"product_name": "Ghost"})

        assert response.status_code == 404
        assert response.json()["error_code"] == "PRODUCT_NOT_FOUND"

    async def test_soft_delete_hides_product(self, client: AsyncClient, product_id: int):
        response = await client.delete(f"/api/products/{product_id}")
        assert response.status_code == 204

        assert (await client.get(f"/api/products/{product_id}")).status_code == 404
        assert (await client.get("/api/products")).json() == []
        assert (await client.delete(f"/api/products/{product_id}")).status_code == 404


class TestProductHistory:
    async def test_stock_and_purchase_history(self, client: AsyncClient, product_id: int):
        await client.post(
            "/api/purchases",
            json={
                "purchase_date": "2024-06-01T09:00:00",
                "items": [{"product_id": product_id, "quantity": 5, "buying_price": 4.0}],
            },
        )
        await client.post(
            "/api/orders",
            json={
                "order_date": "2024-06-02T09:00:00",
                "items": [{"product_id": product_id, "quantity": 2, "selling_price": 9.0}],
            },
        )

        movements = (await client.get(f"/api/products/{product_id}/stock-history")).json()
        purchases = (await client.get(f"/api/products/{product_id}/purchase-history")).json()

        assert [m["movement_type"] for m in movements] == ["OUT", "IN"]
        assert len(purchases) == 1
        assert purchases[0]["quantity"] == 5.0
