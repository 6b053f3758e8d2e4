"""Tests for activity log, expense and maintenance stores."""

from datetime import date

import pytest

from shopledger.core.entities.account import ActivityLog
from shopledger.core.entities.expense import Expense
from shopledger.core.entities.order import Order, OrderItem
from shopledger.core.entities.purchase import Purchase, PurchaseItem
from shopledger.core.exceptions import ExpenseNotFoundError, ValidationError
from shopledger.infrastructure.storage.sqlite import (
    Database,
    SQLiteActivityLogStore,
    SQLiteExpenseStore,
    SQLiteMaintenanceStore,
    SQLiteOrderStore,
    SQLiteProductStore,
    SQLitePurchaseStore,
)


@pytest.fixture
def activity_store(db: Database) -> SQLiteActivityLogStore:
    return SQLiteActivityLogStore(db)


@pytest.fixture
def expense_store(db: Database) -> SQLiteExpenseStore:
    return SQLiteExpenseStore(db)


@pytest.fixture
def maintenance_store(db: Database) -> SQLiteMaintenanceStore:
    return SQLiteMaintenanceStore(db)


class TestActivityLog:
    async def test_log_and_list_newest_first(self, activity_store: SQLiteActivityLogStore):
        for action in ("CREATE", "UPDATE", "DELETE"):
            await activity_store.log(
                ActivityLog(
                    username="owner",
                    action=action,
                    entity_type="product",
                    entity_id=1,
                )
            )

        entries = await activity_store.list_logs()
        assert [e.action for e in entries] == ["DELETE", "UPDATE", "CREATE"]
        assert entries[0].created_at is not None

    async def test_paging(self, activity_store: SQLiteActivityLogStore):
        for i in range(5):
            await activity_store.log(
                ActivityLog(username="owner", action=f"A{i}", entity_type="order")
            )

        page = await activity_store.list_logs(limit=2, offset=1)
        assert [e.action for e in page] == ["A3", "A2"]


class TestExpenses:
    async def test_crud(self, expense_store: SQLiteExpenseStore):
        expense = await expense_store.create(
            Expense(expense_date=date(2024, 6, 1), category="Rent", amount=500.0)
        )
        assert expense.id is not None

        expense.amount = 550.0
        await expense_store.update(expense)
        assert (await expense_store.get(expense.id)).amount == 550.0

        assert await expense_store.delete(expense.id)
        assert not await expense_store.delete(expense.id)
        assert await expense_store.get(expense.id) is None

    async def test_update_missing(self, expense_store: SQLiteExpenseStore):
        with pytest.raises(ExpenseNotFoundError):
            await expense_store.update(Expense(id=9999, category="Rent", amount=1.0))
        with pytest.raises(ValidationError):
            await expense_store.update(Expense(category="Rent", amount=1.0))

    async def test_date_filter(self, expense_store: SQLiteExpenseStore):
        for day in (1, 10, 20):
            await expense_store.create(
                Expense(expense_date=date(2024, 6, day), category="Utilities", amount=day)
            )

        ranged = await expense_store.list_expenses(date(2024, 6, 5), date(2024, 6, 20))
        assert [e.expense_date.day for e in ranged] == [20, 10]
        assert len(await expense_store.list_expenses()) == 3
        assert len(await expense_store.list_expenses(end_date=date(2024, 6, 1))) == 1


class TestMaintenance:
    @pytest.fixture
    async def populated(
        self,
        make_product,
        purchase_store: SQLitePurchaseStore,
        order_store: SQLiteOrderStore,
        expense_store: SQLiteExpenseStore,
        activity_store: SQLiteActivityLogStore,
    ):
        product = await make_product()
        await purchase_store.record(
            Purchase(items=[PurchaseItem(product_id=product.id, quantity=5, buying_price=2.0)])
        )
        await order_store.record(
            Order(items=[OrderItem(product_id=product.id, quantity=1, selling_price=3.0)])
        )
        await expense_store.create(Expense(category="Rent", amount=1.0))
        await activity_store.log(ActivityLog(username="u", action="X", entity_type="y"))
        return product

    async def test_clear_sales_only(
        self,
        populated,
        maintenance_store: SQLiteMaintenanceStore,
        order_store: SQLiteOrderStore,
        purchase_store: SQLitePurchaseStore,
    ):
        removed = await maintenance_store.cleanup(sales=True)

        assert removed == {"order_items": 1, "orders": 1}
        assert await order_store.list_orders() == []
        assert len(await purchase_store.list_purchases()) == 1

    async def test_clear_products_cascades(
        self,
        populated,
        maintenance_store: SQLiteMaintenanceStore,
        product_store: SQLiteProductStore,
        purchase_store: SQLitePurchaseStore,
        expense_store: SQLiteExpenseStore,
    ):
        removed = await maintenance_store.cleanup(products=True)

        assert removed["products"] == 1
        assert removed["purchases"] == 1
        assert removed["orders"] == 1
        assert await product_store.list_products() == []
        assert await purchase_store.list_purchases() == []
        assert len(await expense_store.list_expenses()) == 1

    async def test_clear_logs_and_expenses(
        self,
        populated,
        maintenance_store: SQLiteMaintenanceStore,
        activity_store: SQLiteActivityLogStore,
        expense_store: SQLiteExpenseStore,
    ):
        removed = await maintenance_store.cleanup(logs=True, expenses=True)

        assert removed == {"expenses": 1, "activity_logs": 1}
        assert await activity_store.list_logs() == []
        assert await expense_store.list_expenses() == []

    async def test_nothing_selected(self, maintenance_store: SQLiteMaintenanceStore):
        assert await maintenance_store.cleanup() == {}
