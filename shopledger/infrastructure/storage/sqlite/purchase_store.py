"""
SQLite implementation of the purchase ledger.

Recording a purchase moves stock in and recomputes each product's
weighted-average cost. Revising or deleting first reverses the effect of
the existing lines, so the end state matches a fresh recording.
"""

from datetime import datetime

import aiosqlite

from shopledger.config import get_logger
from shopledger.core.entities.purchase import Purchase, PurchaseItem
from shopledger.core.exceptions import EmptyLineItemsError, PurchaseNotFoundError
from shopledger.core.interfaces.ledger_store import IPurchaseStore
from shopledger.core.services.average_cost import apply_inbound, reverse_inbound
from shopledger.infrastructure.storage.sqlite.connection import Database, to_db_datetime
from shopledger.infrastructure.storage.sqlite.product_store import (
    read_cost_position,
    require_products,
    write_cost_position,
)

logger = get_logger(__name__)


class SQLitePurchaseStore(IPurchaseStore):
    """SQLite implementation of the purchase ledger."""

    def __init__(self, db: Database):
        self._db = db

    async def record(self, purchase: Purchase) -> Purchase:
        """Insert a purchase and apply its lines to product cost and stock."""
        if not purchase.items:
            raise EmptyLineItemsError("purchase")

        async with self._db.transaction("record_purchase") as conn:
            await require_products(conn, (i.product_id for i in purchase.items))

            cursor = await conn.execute(
                """
                INSERT INTO purchases (
                    supplier_name, supplier_phone, invoice_number,
                    purchase_date, total_amount, notes
                ) VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    purchase.supplier_name,
                    purchase.supplier_phone,
                    purchase.invoice_number,
                    to_db_datetime(purchase.purchase_date),
                    purchase.total_amount,
                    purchase.notes,
                ),
            )
            purchase_id = cursor.lastrowid
            assert purchase_id is not None

            for item in purchase.items:
                await self._apply_line(conn, purchase_id, item)

        purchase.purchase_id = purchase_id
        logger.info(
            "purchase_recorded",
            purchase_id=purchase_id,
            lines=len(purchase.items),
            total_amount=purchase.total_amount,
        )
        return purchase

    async def revise(self, purchase_id: int, purchase: Purchase) -> Purchase:
        """Reverse the existing lines, then apply the new ones."""
        if not purchase.items:
            raise EmptyLineItemsError("purchase")

        async with self._db.transaction("revise_purchase") as conn:
            await self._require_header(conn, purchase_id)
            await require_products(conn, (i.product_id for i in purchase.items))

            old_lines = await self._fetch_lines(conn, purchase_id)
            for line in old_lines:
                await self._reverse_line(conn, line)

            await conn.execute(
                "DELETE FROM purchase_items WHERE purchase_id = ?", (purchase_id,)
            )
            await conn.execute(
                """
                UPDATE purchases SET
                    supplier_name = ?, supplier_phone = ?, invoice_number = ?,
                    purchase_date = ?, total_amount = ?, notes = ?
                WHERE purchase_id = ?
                """,
                (
                    purchase.supplier_name,
                    purchase.supplier_phone,
                    purchase.invoice_number,
                    to_db_datetime(purchase.purchase_date),
                    purchase.total_amount,
                    purchase.notes,
                    purchase_id,
                ),
            )

            for item in purchase.items:
                await self._apply_line(conn, purchase_id, item)

        purchase.purchase_id = purchase_id
        logger.info(
            "purchase_revised",
            purchase_id=purchase_id,
            reversed_lines=len(old_lines),
            lines=len(purchase.items),
        )
        return purchase

    async def delete(self, purchase_id: int) -> None:
        """Reverse every line and remove the purchase."""
        async with self._db.transaction("delete_purchase") as conn:
            await self._require_header(conn, purchase_id)

            old_lines = await self._fetch_lines(conn, purchase_id)
            for line in old_lines:
                await self._reverse_line(conn, line)

            await conn.execute(
                "DELETE FROM purchase_items WHERE purchase_id = ?", (purchase_id,)
            )
            await conn.execute(
                "DELETE FROM purchases WHERE purchase_id = ?", (purchase_id,)
            )

        logger.info(
            "purchase_deleted",
            purchase_id=purchase_id,
            reversed_lines=len(old_lines),
        )

    async def get(self, purchase_id: int) -> Purchase | None:
        """Get a purchase with its lines."""
        async with self._db.connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM purchases WHERE purchase_id = ?", (purchase_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            items = await self._fetch_lines(conn, purchase_id, with_names=True)
            return self._row_to_purchase(row, items)

    async def list_purchases(self, limit: int = 100, offset: int = 0) -> list[Purchase]:
        """List purchase headers, newest first."""
        async with self._db.connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM purchases
                ORDER BY purchase_date DESC, purchase_id DESC
                LIMIT ? OFFSET ?
                """,
                (limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_purchase(row, []) for row in rows]

    async def get_items(self, purchase_id: int) -> list[PurchaseItem]:
        """Get the lines of a purchase with product names."""
        async with self._db.connection() as conn:
            return await self._fetch_lines(conn, purchase_id, with_names=True)

    async def _apply_line(
        self, conn: aiosqlite.Connection, purchase_id: int, item: PurchaseItem
    ) -> None:
        """Insert one line and fold it into the product's average cost."""
        cursor = await conn.execute(
            """
            INSERT INTO purchase_items (
                purchase_id, product_id, quantity, buying_price,
                extra_charge, subtotal, purchase_unit_cost
            ) VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                purchase_id,
                item.product_id,
                item.quantity,
                item.buying_price,
                item.extra_charge,
                item.subtotal,
                item.purchase_unit_cost,
            ),
        )
        item.id = cursor.lastrowid
        item.purchase_id = purchase_id

        current = await read_cost_position(conn, item.product_id)
        updated = apply_inbound(
            current.quantity,
            current.average_cost,
            item.quantity,
            item.buying_price,
            item.extra_charge,
            fallback_unit_cost=item.purchase_unit_cost,
        )
        await write_cost_position(conn, item.product_id, updated)

    async def _reverse_line(self, conn: aiosqlite.Connection, line: PurchaseItem) -> None:
        """Take one previously applied line back out of the product's cost."""
        current = await read_cost_position(conn, line.product_id)
        updated = reverse_inbound(
            current.quantity,
            current.average_cost,
            line.quantity,
            line.buying_price,
            line.extra_charge,
        )
        await write_cost_position(conn, line.product_id, updated)

    @staticmethod
    async def _require_header(conn: aiosqlite.Connection, purchase_id: int) -> None:
        cursor = await conn.execute(
            "SELECT 1 FROM purchases WHERE purchase_id = ?", (purchase_id,)
        )
        if await cursor.fetchone() is None:
            raise PurchaseNotFoundError(purchase_id)

    async def _fetch_lines(
        self,
        conn: aiosqlite.Connection,
        purchase_id: int,
        with_names: bool = False,
    ) -> list[PurchaseItem]:
        if with_names:
            cursor = await conn.execute(
                """
                SELECT pi.*, p.product_name
                FROM purchase_items pi
                JOIN products p ON pi.product_id = p.id
                WHERE pi.purchase_id = ?
                ORDER BY pi.id
                """,
                (purchase_id,),
            )
        else:
            cursor = await conn.execute(
                "SELECT * FROM purchase_items WHERE purchase_id = ? ORDER BY id",
                (purchase_id,),
            )
        rows = await cursor.fetchall()
        return [self._row_to_item(row, with_names) for row in rows]

    @staticmethod
    def _row_to_item(row: aiosqlite.Row, with_name: bool = False) -> PurchaseItem:
        """Convert database row to PurchaseItem entity."""
        return PurchaseItem(
            id=row["id"],
            purchase_id=row["purchase_id"],
            product_id=row["product_id"],
            product_name=row["product_name"] if with_name else None,
            quantity=row["quantity"],
            buying_price=row["buying_price"],
            extra_charge=row["extra_charge"],
            subtotal=row["subtotal"],
            purchase_unit_cost=row["purchase_unit_cost"],
        )

    @staticmethod
    def _row_to_purchase(row: aiosqlite.Row, items: list[PurchaseItem]) -> Purchase:
        """Convert database row to Purchase entity."""
        return Purchase(
            purchase_id=row["purchase_id"],
            supplier_name=row["supplier_name"],
            supplier_phone=row["supplier_phone"],
            invoice_number=row["invoice_number"],
            purchase_date=datetime.fromisoformat(row["purchase_date"]),
            total_amount=row["total_amount"],
            notes=row["notes"],
            items=items,
            created_at=datetime.fromisoformat(row["created_at"]),
        )
