"""Tests for purchase and order endpoints."""

import pytest
from httpx import AsyncClient


async def _product(client: AsyncClient, product_id: int) -> dict:
    return (await client.get(f"/api/products/{product_id}")).json()


def _purchase(product_id: int, quantity: float, price: float, **extra) -> dict:
    return {
        "supplier_name": "Acme",
        "invoice_number": "INV-1",
        "items": [
            {"product_id": product_id, "quantity": quantity, "buying_price": price, **extra}
        ],
    }


def _order(product_id: int, quantity: float, price: float = 9.0, **header) -> dict:
    return {
        **header,
        "items": [{"product_id": product_id, "quantity": quantity, "selling_price": price}],
    }


class TestPurchasesApi:
    async def test_record_updates_average_cost(self, client: AsyncClient, product_id: int):
        response = await client.post("/api/purchases", json=_purchase(product_id, 10, 5.0))
        assert response.status_code == 201
        assert response.json()["lines"] == 1

        await client.post("/api/orders", json=_order(product_id, 4))
        await client.post("/api/purchases", json=_purchase(product_id, 10, 7.0))

        product = await _product(client, product_id)
        assert product["stock_quantity"] == pytest.approx(16)
        assert product["buying_price"] == pytest.approx(6.25)

    async def test_get_and_items(self, client: AsyncClient, product_id: int):
        created = await client.post(
            "/api/purchases", json=_purchase(product_id, 4, 3.0, extra_charge=2.0)
        )
        purchase_id = created.json()["id"]

        purchase = (await client.get(f"/api/purchases/{purchase_id}")).json()
        items = (await client.get(f"/api/purchases/{purchase_id}/items")).json()

        assert purchase["supplier_name"] == "Acme"
        assert purchase["total_amount"] == pytest.approx(14.0)
        assert items[0]["product_name"] == "Cable"
        assert items[0]["purchase_unit_cost"] == pytest.approx(3.5)

    async def test_items_of_missing_purchase(self, client: AsyncClient):
        response = await client.get("/api/purchases/77/items")

        assert response.status_code == 404
        assert response.json()["error_code"] == "PURCHASE_NOT_FOUND"

    async def test_revise(self, client: AsyncClient, product_id: int):
        created = await client.post("/api/purchases", json=_purchase(product_id, 10, 5.0))
        purchase_id = created.json()["id"]

        response = await client.put(
            f"/api/purchases/{purchase_id}", json=_purchase(product_id, 4, 8.0)
        )

        assert response.status_code == 200
        product = await _product(client, product_id)
        assert product["stock_quantity"] == pytest.approx(4)
        assert product["buying_price"] == pytest.approx(8.0)

    async def test_delete_reverses(self, client: AsyncClient, product_id: int):
        created = await client.post("/api/purchases", json=_purchase(product_id, 10, 5.0))

        response = await client.delete(f"/api/purchases/{created.json()['id']}")

        assert response.status_code == 204
        product = await _product(client, product_id)
        assert product["stock_quantity"] == 0
        assert product["buying_price"] == 0

    async def test_list_newest_first(self, client: AsyncClient, product_id: int):
        for _ in range(3):
            await client.post("/api/purchases", json=_purchase(product_id, 1, 1.0))

        ids = [p["purchase_id"] for p in (await client.get("/api/purchases")).json()]

        assert ids == sorted(ids, reverse=True)
        assert len(ids) == 3

    async def test_missing_purchase(self, client: AsyncClient):
        response = await client.get("/api/purchases/404")

        assert response.status_code == 404
        body = response.json()
        assert body["error_code"] == "PURCHASE_NOT_FOUND"
        assert body["path"] == "/api/purchases/404"

    async def test_delete_missing(self, client: AsyncClient):
        response = await client.delete("/api/purchases/404")
        assert response.status_code == 404

    async def test_unknown_product(self, client: AsyncClient):
        response = await client.post("/api/purchases", json=_purchase(999, 1, 1.0))

        assert response.status_code == 400
        assert response.json()["error_code"] == "UNKNOWN_PRODUCT"

    async def test_empty_lines(self, client: AsyncClient):
        response = await client.post("/api/purchases", json={"items": []})

        assert response.status_code == 400
        assert response.json()["error_code"] == "EMPTY_LINE_ITEMS"

    async def test_malformed_line(self, client: AsyncClient, product_id: int):
        response = await client.post(
            "/api/purchases", json={"items": [{"product_id": product_id, "quantity": "lots"}]}
        )

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"


class TestOrdersApi:
    async def test_record_snapshots_cost(self, client: AsyncClient, product_id: int):
        await client.post("/api/purchases", json=_purchase(product_id, 10, 5.0))

        response = await client.post(
            "/api/orders",
            json=_order(product_id, 3, customer_name="Dana", delivery_charge=4.0, discount=2.0),
        )
        assert response.status_code == 201
        order_id = response.json()["id"]

        order = (await client.get(f"/api/orders/{order_id}")).json()
        assert order["grand_total"] == pytest.approx(29.0)
        assert order["order_type"] == "local"
        assert order["items"][0]["buying_price_snapshot"] == pytest.approx(5.0)

        product = await _product(client, product_id)
        assert product["stock_quantity"] == pytest.approx(7)
        assert product["buying_price"] == pytest.approx(5.0)

    async def test_oversell_allowed(self, client: AsyncClient, product_id: int):
        response = await client.post("/api/orders", json=_order(product_id, 2))

        assert response.status_code == 201
        assert (await _product(client, product_id))["stock_quantity"] == -2

    async def test_revise_and_delete(self, client: AsyncClient, product_id: int):
        await client.post("/api/purchases", json=_purchase(product_id, 10, 5.0))
        order_id = (await client.post("/api/orders", json=_order(product_id, 3))).json()["id"]

        revised = await client.put(f"/api/orders/{order_id}", json=_order(product_id, 6))
        assert revised.status_code == 200
        assert (await _product(client, product_id))["stock_quantity"] == pytest.approx(4)

        deleted = await client.delete(f"/api/orders/{order_id}")
        assert deleted.status_code == 204
        product = await _product(client, product_id)
        assert product["stock_quantity"] == pytest.approx(10)
        assert product["buying_price"] == pytest.approx(5.0)

    async def test_invalid_order_type(self, client: AsyncClient, product_id: int):
        response = await client.post(
            "/api/orders", json=_order(product_id, 1, order_type="drive-thru")
        )
        assert response.status_code == 422

    async def test_missing_order(self, client: AsyncClient, product_id: int):
        response = await client.put("/api/orders/77", json=_order(product_id, 1))

        assert response.status_code == 404
        assert response.json()["error_code"] == "ORDER_NOT_FOUND"

    async def test_items(self, client: AsyncClient, product_id: int):
        await client.post("/api/purchases", json=_purchase(product_id, 10, 5.0))
        order_id = (await client.post("/api/orders", json=_order(product_id, 2))).json()["id"]

        items = (await client.get(f"/api/orders/{order_id}/items")).json()

        assert len(items) == 1
        assert items[0]["product_name"] == "Cable"
        assert items[0]["subtotal"] == pytest.approx(18.0)
        assert items[0]["buying_price_snapshot"] == pytest.approx(5.0)

    async def test_items_of_missing_order(self, client: AsyncClient):
        response = await client.get("/api/orders/77/items")

        assert response.status_code == 404
        assert response.json()["error_code"] == "ORDER_NOT_FOUND"
