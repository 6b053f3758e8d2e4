"""
SQLite implementation of the order ledger.

Selling freezes the product's current average cost on the line and moves
stock out; cost itself is never touched by a sale.
"""

from datetime import datetime

import aiosqlite

from shopledger.config import get_logger
from shopledger.core.entities.order import Order, OrderItem, OrderType
from shopledger.core.exceptions import EmptyLineItemsError, OrderNotFoundError
from shopledger.core.interfaces.ledger_store import IOrderStore
from shopledger.infrastructure.storage.sqlite.connection import Database, to_db_datetime
from shopledger.infrastructure.storage.sqlite.product_store import (
    adjust_stock,
    read_cost_position,
    require_products,
)

logger = get_logger(__name__)


class SQLiteOrderStore(IOrderStore):
    """SQLite implementation of the order ledger."""

    def __init__(self, db: Database):
        self._db = db

    async def record(self, order: Order) -> Order:
        """Insert an order, snapshot costs and decrement stock."""
        if not order.items:
            raise EmptyLineItemsError("order")

        async with self._db.transaction("record_order") as conn:
            await require_products(conn, (i.product_id for i in order.items))

            cursor = await conn.execute(
                """
                INSERT INTO orders (
                    order_date, order_type, customer_name, customer_phone,
                    customer_address, subtotal, extra_charge, delivery_charge,
                    discount, grand_total, payment_method, notes
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                self._header_params(order),
            )
            order_id = cursor.lastrowid
            assert order_id is not None

            for item in order.items:
                await self._apply_line(conn, order_id, item)

        order.order_id = order_id
        logger.info(
            "order_recorded",
            order_id=order_id,
            lines=len(order.items),
            grand_total=order.grand_total,
        )
        return order

    async def revise(self, order_id: int, order: Order) -> Order:
        """Restore stock of the existing lines, then apply the new ones."""
        if not order.items:
            raise EmptyLineItemsError("order")

        async with self._db.transaction("revise_order") as conn:
            await self._require_header(conn, order_id)
            await require_products(conn, (i.product_id for i in order.items))

            old_lines = await self._fetch_lines(conn, order_id)
            for line in old_lines:
                await adjust_stock(conn, line.product_id, line.quantity)

            await conn.execute("DELETE FROM order_items WHERE order_id = ?", (order_id,))
            await conn.execute(
                """
                UPDATE orders SET
                    order_date = ?, order_type = ?, customer_name = ?,
                    customer_phone = ?, customer_address = ?, subtotal = ?,
                    extra_charge = ?, delivery_charge = ?, discount = ?,
                    grand_total = ?, payment_method = ?, notes = ?
                WHERE order_id = ?
                """,
                (*self._header_params(order), order_id),
            )

            for item in order.items:
                await self._apply_line(conn, order_id, item)

        order.order_id = order_id
        logger.info(
            "order_revised",
            order_id=order_id,
            restored_lines=len(old_lines),
            lines=len(order.items),
        )
        return order

    async def delete(self, order_id: int) -> None:
        """Restore stock of every line and remove the order."""
        async with self._db.transaction("delete_order") as conn:
            await self._require_header(conn, order_id)

            old_lines = await self._fetch_lines(conn, order_id)
            for line in old_lines:
                await adjust_stock(conn, line.product_id, line.quantity)

            await conn.execute("DELETE FROM order_items WHERE order_id = ?", (order_id,))
            await conn.execute("DELETE FROM orders WHERE order_id = ?", (order_id,))

        logger.info("order_deleted", order_id=order_id, restored_lines=len(old_lines))

    async def get(self, order_id: int) -> Order | None:
        """Get an order with its lines."""
        async with self._db.connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM orders WHERE order_id = ?", (order_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            items = await self._fetch_lines(conn, order_id, with_names=True)
            return self._row_to_order(row, items)

    async def list_orders(self, limit: int = 100, offset: int = 0) -> list[Order]:
        """List order headers, newest first."""
        async with self._db.connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM orders
                ORDER BY order_date DESC, order_id DESC
                LIMIT ? OFFSET ?
                """,
                (limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_order(row, []) for row in rows]

    async def get_items(self, order_id: int) -> list[OrderItem]:
        """Get the lines of an order with product names."""
        async with self._db.connection() as conn:
            return await self._fetch_lines(conn, order_id, with_names=True)

    async def _apply_line(
        self, conn: aiosqlite.Connection, order_id: int, item: OrderItem
    ) -> None:
        """Snapshot the current cost, insert the line and move stock out."""
        current = await read_cost_position(conn, item.product_id)
        item.buying_price_snapshot = current.average_cost

        cursor = await conn.execute(
            """
            INSERT INTO order_items (
                order_id, product_id, quantity, selling_price,
                subtotal, buying_price_snapshot
            ) VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                order_id,
                item.product_id,
                item.quantity,
                item.selling_price,
                item.subtotal,
                item.buying_price_snapshot,
            ),
        )
        item.id = cursor.lastrowid
        item.order_id = order_id

        await adjust_stock(conn, item.product_id, -item.quantity)

    @staticmethod
    async def _require_header(conn: aiosqlite.Connection, order_id: int) -> None:
        cursor = await conn.execute("SELECT 1 FROM orders WHERE order_id = ?", (order_id,))
        if await cursor.fetchone() is None:
            raise OrderNotFoundError(order_id)

    @staticmethod
    def _header_params(order: Order) -> tuple:
        return (
            to_db_datetime(order.order_date),
            order.order_type.value,
            order.customer_name,
            order.customer_phone,
            order.customer_address,
            order.subtotal,
            order.extra_charge,
            order.delivery_charge,
            order.discount,
            order.grand_total,
            order.payment_method,
            order.notes,
        )

    async def _fetch_lines(
        self,
        conn: aiosqlite.Connection,
        order_id: int,
        with_names: bool = False,
    ) -> list[OrderItem]:
        if with_names:
            cursor = await conn.execute(
                """
                SELECT oi.*, p.product_name
                FROM order_items oi
                JOIN products p ON oi.product_id = p.id
                WHERE oi.order_id = ?
                ORDER BY oi.id
                """,
                (order_id,),
            )
        else:
            cursor = await conn.execute(
                "SELECT * FROM order_items WHERE order_id = ? ORDER BY id",
                (order_id,),
            )
        rows = await cursor.fetchall()
        return [self._row_to_item(row, with_names) for row in rows]

    @staticmethod
    def _row_to_item(row: aiosqlite.Row, with_name: bool = False) -> OrderItem:
        """Convert database row to OrderItem entity."""
        return OrderItem(
            id=row["id"],
            order_id=row["order_id"],
            product_id=row["product_id"],
            product_name=row["product_name"] if with_name else None,
            quantity=row["quantity"],
            selling_price=row["selling_price"],
            subtotal=row["subtotal"],
            buying_price_snapshot=row["buying_price_snapshot"],
        )

    @staticmethod
    def _row_to_order(row: aiosqlite.Row, items: list[OrderItem]) -> Order:
        """Convert database row to Order entity."""
        return Order(
            order_id=row["order_id"],
            order_date=datetime.fromisoformat(row["order_date"]),
            order_type=OrderType(row["order_type"]),
            customer_name=row["customer_name"],
            customer_phone=row["customer_phone"],
            customer_address=row["customer_address"],
            subtotal=row["subtotal"],
            extra_charge=row["extra_charge"],
            delivery_charge=row["delivery_charge"],
            discount=row["discount"],
            grand_total=row["grand_total"],
            payment_method=row["payment_method"],
            notes=row["notes"],
            items=items,
            created_at=datetime.fromisoformat(row["created_at"]),
        )
