"""Tests for activity log, expense and maintenance endpoints."""

from httpx import AsyncClient


class TestActivityApi:
    async def test_log_and_list(self, client: AsyncClient):
        for action in ("CREATE", "UPDATE"):
            response = await client.post(
                "/api/activity",
                json={
                    "username": "owner",
                    "action": action,
                    "entity_type": "product",
                    "entity_id": 1,
                },
            )
            assert response.status_code == 201

        entries = (await client.get("/api/activity")).json()

        assert [e["action"] for e in entries] == ["UPDATE", "CREATE"]
        assert (await client.get("/api/activity", params={"limit": 1})).json()[0][
            "action"
        ] == "UPDATE"


class TestExpensesApi:
    async def test_crud(self, client: AsyncClient):
        created = await client.post(
            "/api/expenses",
            json={"expense_date": "2024-06-01", "category": "Rent", "amount": 500},
        )
        assert created.status_code == 201
        expense_id = created.json()["id"]

        updated = await client.put(
            f"/api/expenses/{expense_id}",
            json={"expense_date": "2024-06-01", "category": "Rent", "amount": 550},
        )
        assert updated.json()["amount"] == 550

        assert (await client.delete(f"/api/expenses/{expense_id}")).status_code == 204
        assert (await client.delete(f"/api/expenses/{expense_id}")).status_code == 404

    async def test_date_filter(self, client: AsyncClient):
        for day, category in (("2024-05-31", "Power"), ("2024-06-10", "Rent")):
            await client.post(
                "/api/expenses",
                json={"expense_date": day, "category": category, "amount": 10},
            )

        response = await client.get(
            "/api/expenses", params={"start_date": "2024-06-01", "end_date": "2024-06-30"}
        )

        assert [e["category"] for e in response.json()] == ["Rent"]

    async def test_update_missing(self, client: AsyncClient):
        response = await client.put(
            "/api/expenses/42", json={"category": "Rent", "amount": 1}
        )

        assert response.status_code == 404
        assert response.json()["error_code"] == "EXPENSE_NOT_FOUND"


class TestMaintenanceApi:
    async def test_cleanup_sales_only(self, client: AsyncClient, product_id: int):
        await client.post(
            "/api/orders",
            json={"items": [{"product_id": product_id, "quantity": 1, "selling_price": 9}]},
        )

        response = await client.post("/api/maintenance/cleanup", json={"sales": True})

        assert response.status_code == 200
        assert response.json()["removed"] == {"order_items": 1, "orders": 1}
        assert (await client.get("/api/orders")).json() == []
        assert len((await client.get("/api/products")).json()) == 1

    async def test_cleanup_nothing_selected(self, client: AsyncClient):
        response = await client.post("/api/maintenance/cleanup", json={})
        assert response.json() == {"removed": {}}
