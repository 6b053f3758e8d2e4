"""End-to-end ledger scenarios through use cases and real SQLite stores."""

import pytest

from shopledger.application.dto.requests import (
    OrderItemRequest,
    OrderRequest,
    PurchaseItemRequest,
    PurchaseRequest,
)
from shopledger.application.use_cases import (
    DeletePurchaseUseCase,
    DeleteSaleUseCase,
    RecordPurchaseUseCase,
    RecordSaleUseCase,
    RevisePurchaseUseCase,
    ReviseSaleUseCase,
)
from shopledger.infrastructure.storage.sqlite import (
    SQLiteOrderStore,
    SQLiteProductStore,
    SQLitePurchaseStore,
)


def _buy(product_id: int, quantity: float, price: float, extra: float = 0.0) -> PurchaseRequest:
    return PurchaseRequest(
        supplier_name="Acme",
        items=[
            PurchaseItemRequest(
                product_id=product_id,
                quantity=quantity,
                buying_price=price,
                extra_charge=extra,
            )
        ],
    )


def _sell(product_id: int, quantity: float, price: float = 9.0) -> OrderRequest:
    return OrderRequest(
        items=[OrderItemRequest(product_id=product_id, quantity=quantity, selling_price=price)]
    )


class Shop:
    """Use cases wired to one database."""

    def __init__(self, products, purchases, orders):
        self.products = products
        self.orders = orders
        self.record_purchase = RecordPurchaseUseCase(purchase_store=purchases)
        self.revise_purchase = RevisePurchaseUseCase(purchase_store=purchases)
        self.delete_purchase = DeletePurchaseUseCase(purchase_store=purchases)
        self.record_sale = RecordSaleUseCase(order_store=orders)
        self.revise_sale = ReviseSaleUseCase(order_store=orders)
        self.delete_sale = DeleteSaleUseCase(order_store=orders)

    async def position(self, product_id: int) -> tuple[float, float]:
        product = await self.products.get(product_id, include_deleted=True)
        return product.stock_quantity, product.buying_price


@pytest.fixture
def shop(
    product_store: SQLiteProductStore,
    purchase_store: SQLitePurchaseStore,
    order_store: SQLiteOrderStore,
) -> Shop:
    return Shop(product_store, purchase_store, order_store)


def assert_position(actual: tuple[float, float], quantity: float, cost: float) -> None:
    assert actual[0] == pytest.approx(quantity)
    assert actual[1] == pytest.approx(cost)


class TestAverageCostScenario:
    async def test_buy_sell_buy(self, shop: Shop, make_product):
        product = await make_product()

        await shop.record_purchase.execute(_buy(product.id, 10, 5.0))
        assert_position(await shop.position(product.id), 10, 5.0)

        sale = await shop.record_sale.execute(_sell(product.id, 4))
        assert_position(await shop.position(product.id), 6, 5.0)
        items = await shop.orders.get_items(sale.entity_id)
        assert items[0].buying_price_snapshot == pytest.approx(5.0)

        await shop.record_purchase.execute(_buy(product.id, 10, 7.0))
        assert_position(await shop.position(product.id), 16, 6.25)

    async def test_deleting_later_purchase_restores_position(self, shop: Shop, make_product):
        product = await make_product()
        await shop.record_purchase.execute(_buy(product.id, 10, 5.0))
        await shop.record_sale.execute(_sell(product.id, 4))
        second = await shop.record_purchase.execute(_buy(product.id, 10, 7.0))

        await shop.delete_purchase.execute(second.entity_id)

        assert_position(await shop.position(product.id), 6, 5.0)


class TestLedgerProperties:
    async def test_sales_never_change_cost(self, shop: Shop, make_product):
        product = await make_product()
        await shop.record_purchase.execute(_buy(product.id, 10, 4.0, extra=5.0))
        _, cost_before = await shop.position(product.id)

        sale = await shop.record_sale.execute(_sell(product.id, 3))
        await shop.revise_sale.execute(sale.entity_id, _sell(product.id, 7))
        await shop.delete_sale.execute(sale.entity_id)

        assert_position(await shop.position(product.id), 10, cost_before)

    async def test_snapshot_is_frozen(self, shop: Shop, make_product):
        product = await make_product()
        await shop.record_purchase.execute(_buy(product.id, 10, 5.0))
        sale = await shop.record_sale.execute(_sell(product.id, 2))

        await shop.record_purchase.execute(_buy(product.id, 8, 20.0))

        items = await shop.orders.get_items(sale.entity_id)
        assert items[0].buying_price_snapshot == pytest.approx(5.0)

    async def test_record_then_delete_is_identity(self, shop: Shop, make_product):
        product = await make_product(stock=7, cost=3.5)

        purchase = await shop.record_purchase.execute(_buy(product.id, 5, 6.0, extra=12.5))
        await shop.delete_purchase.execute(purchase.entity_id)

        assert_position(await shop.position(product.id), 7, 3.5)

    async def test_purchase_order_does_not_matter(self, shop: Shop, make_product):
        first = await make_product("First")
        second = await make_product("Second")

        await shop.record_purchase.execute(_buy(first.id, 4, 3.0, extra=2.0))
        await shop.record_purchase.execute(_buy(first.id, 6, 8.0))
        await shop.record_purchase.execute(_buy(second.id, 6, 8.0))
        await shop.record_purchase.execute(_buy(second.id, 4, 3.0, extra=2.0))

        a = await shop.position(first.id)
        b = await shop.position(second.id)
        assert a[0] == pytest.approx(b[0])
        assert a[1] == pytest.approx(b[1])
        # (4 * 3 + 2 + 6 * 8) / 10
        assert a[1] == pytest.approx(6.2)

    async def test_revise_equals_delete_then_record(self, shop: Shop, make_product):
        revised = await make_product("Revised", stock=3, cost=2.0)
        rebuilt = await make_product("Rebuilt", stock=3, cost=2.0)

        purchase = await shop.record_purchase.execute(_buy(revised.id, 10, 5.0))
        await shop.revise_purchase.execute(purchase.entity_id, _buy(revised.id, 4, 9.0, extra=1.0))

        other = await shop.record_purchase.execute(_buy(rebuilt.id, 10, 5.0))
        await shop.delete_purchase.execute(other.entity_id)
        await shop.record_purchase.execute(_buy(rebuilt.id, 4, 9.0, extra=1.0))

        a = await shop.position(revised.id)
        b = await shop.position(rebuilt.id)
        assert a[0] == pytest.approx(b[0])
        assert a[1] == pytest.approx(b[1])

    async def test_oversold_stock_takes_purchase_cost(self, shop: Shop, make_product):
        product = await make_product()
        await shop.record_sale.execute(_sell(product.id, 5))
        assert_position(await shop.position(product.id), -5, 0.0)

        await shop.record_purchase.execute(_buy(product.id, 3, 4.0, extra=3.0))

        # Stock still negative: cost is the purchase's effective unit cost
        assert_position(await shop.position(product.id), -2, 5.0)
