"""
SQLite reporting projections.

Every query here is read-only. Calendar windows are computed in Python from
the caller's local date and passed as parameters, so results do not depend
on SQLite's notion of "now".
"""

from datetime import date, datetime

import aiosqlite

from shopledger.config import get_logger
from shopledger.core.entities.report import (
    DashboardStats,
    InventoryReportRow,
    MovementType,
    PurchaseHistoryEntry,
    SalesReportRow,
    StockMovement,
)
from shopledger.core.interfaces.report_store import IReportStore
from shopledger.infrastructure.storage.sqlite.connection import Database

logger = get_logger(__name__)

# window -> (predicate over a date column, parameter from the local date)
_WINDOWS = {
    "today": ("date({col}) = ?", lambda d: d.isoformat()),
    "month": ("strftime('%Y-%m', {col}) = ?", lambda d: d.strftime("%Y-%m")),
    "year": ("strftime('%Y', {col}) = ?", lambda d: d.strftime("%Y")),
    "total": ("1 = 1", None),
}


class SQLiteReportStore(IReportStore):
    """SQLite implementation of the reporting projections."""

    def __init__(self, db: Database, low_stock_threshold: float = 5.0):
        self._db = db
        self.low_stock_threshold = low_stock_threshold

    async def dashboard_stats(self, today: date | None = None) -> DashboardStats:
        """Sales, purchases and profit per calendar window plus inventory figures."""
        today = today or date.today()
        values: dict[str, float | int] = {}

        async with self._db.connection() as conn:
            for window, (predicate, param_of) in _WINDOWS.items():
                params = (param_of(today),) if param_of else ()

                sales = await self._scalar(
                    conn,
                    "SELECT COALESCE(SUM(grand_total), 0) FROM orders WHERE "
                    + predicate.format(col="order_date"),
                    params,
                )
                purchases = await self._scalar(
                    conn,
                    "SELECT COALESCE(SUM(total_amount), 0) FROM purchases WHERE "
                    + predicate.format(col="purchase_date"),
                    params,
                )
                cogs = await self._scalar(
                    conn,
                    """
                    SELECT COALESCE(SUM(oi.quantity * oi.buying_price_snapshot), 0)
                    FROM order_items oi
                    JOIN orders o ON oi.order_id = o.order_id
                    WHERE """
                    + predicate.format(col="o.order_date"),
                    params,
                )

                suffix = f"_{window}" if window != "total" else ""
                prefix = "total_" if window == "total" else ""
                values[f"{prefix}sales{suffix}"] = sales
                values[f"{prefix}purchases{suffix}"] = purchases
                values[f"{prefix}profit{suffix}"] = sales - cogs

            values["inventory_value"] = await self._scalar(
                conn,
                """
                SELECT COALESCE(SUM(stock_quantity * buying_price), 0)
                FROM products WHERE is_deleted = 0
                """,
            )
            values["low_stock_count"] = int(
                await self._scalar(
                    conn,
                    """
                    SELECT COUNT(*) FROM products
                    WHERE is_deleted = 0 AND stock_quantity <= ?
                    """,
                    (self.low_stock_threshold,),
                )
            )
            values["order_count"] = int(
                await self._scalar(conn, "SELECT COUNT(*) FROM orders")
            )
            values["product_count"] = int(
                await self._scalar(
                    conn, "SELECT COUNT(*) FROM products WHERE is_deleted = 0"
                )
            )

        stats = DashboardStats(**values)
        logger.debug("dashboard_computed", today=today.isoformat(), orders=stats.order_count)
        return stats

    async def sales_report(self, start_date: date, end_date: date) -> list[SalesReportRow]:
        """Orders within an inclusive date range, newest first."""
        async with self._db.connection() as conn:
            cursor = await conn.execute(
                """
                SELECT
                    o.order_id,
                    o.order_date,
                    o.customer_name,
                    o.grand_total,
                    o.discount,
                    (SELECT COUNT(*) FROM order_items oi
                     WHERE oi.order_id = o.order_id) AS items_count,
                    o.grand_total - COALESCE(
                        (SELECT SUM(oi.quantity * oi.buying_price_snapshot)
                         FROM order_items oi WHERE oi.order_id = o.order_id), 0
                    ) AS profit
                FROM orders o
                WHERE date(o.order_date) BETWEEN ? AND ?
                ORDER BY o.order_date DESC, o.order_id DESC
                """,
                (start_date.isoformat(), end_date.isoformat()),
            )
            rows = await cursor.fetchall()

        return [
            SalesReportRow(
                order_id=row["order_id"],
                date=datetime.fromisoformat(row["order_date"]),
                customer=row["customer_name"],
                total=row["grand_total"],
                discount=row["discount"],
                items_count=row["items_count"],
                profit=row["profit"],
            )
            for row in rows
        ]

    async def inventory_report(self) -> list[InventoryReportRow]:
        """Non-deleted products ordered by stock ascending."""
        async with self._db.connection() as conn:
            cursor = await conn.execute(
                """
                SELECT id, product_name, category, stock_quantity, unit,
                       buying_price, default_selling_price,
                       stock_quantity * buying_price AS stock_value
                FROM products
                WHERE is_deleted = 0
                ORDER BY stock_quantity ASC, id ASC
                """
            )
            rows = await cursor.fetchall()

        return [
            InventoryReportRow(
                id=row["id"],
                name=row["product_name"],
                category=row["category"],
                stock=row["stock_quantity"],
                unit=row["unit"],
                cost_price=row["buying_price"],
                selling_price=row["default_selling_price"],
                stock_value=row["stock_value"],
            )
            for row in rows
        ]

    async def stock_movements(self, product_id: int) -> list[StockMovement]:
        """Merged IN/OUT timeline of one product, newest first.

        Movements on the same timestamp list sales before purchases, then
        later lines first.
        """
        async with self._db.connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM (
                    SELECT pi.id AS line_id, p.purchase_date AS movement_date,
                           'IN' AS movement_type, p.supplier_name AS entity_name,
                           p.invoice_number AS reference, pi.quantity,
                           pi.purchase_unit_cost AS price
                    FROM purchase_items pi
                    JOIN purchases p ON pi.purchase_id = p.purchase_id
                    WHERE pi.product_id = ?
                    UNION ALL
                    SELECT oi.id, o.order_date, 'OUT', o.customer_name,
                           CAST(o.order_id AS TEXT), oi.quantity,
                           oi.selling_price
                    FROM order_items oi
                    JOIN orders o ON oi.order_id = o.order_id
                    WHERE oi.product_id = ?
                )
                ORDER BY movement_date DESC,
                         CASE movement_type WHEN 'OUT' THEN 0 ELSE 1 END,
                         line_id DESC
                """,
                (product_id, product_id),
            )
            rows = await cursor.fetchall()

        return [
            StockMovement(
                line_id=row["line_id"],
                date=datetime.fromisoformat(row["movement_date"]),
                movement_type=MovementType(row["movement_type"]),
                entity_name=row["entity_name"],
                reference=row["reference"],
                quantity=row["quantity"],
                price=row["price"],
            )
            for row in rows
        ]

    async def purchase_history(self, product_id: int) -> list[PurchaseHistoryEntry]:
        """Purchase lines of one product, newest first."""
        async with self._db.connection() as conn:
            cursor = await conn.execute(
                """
                SELECT p.purchase_id, p.purchase_date, p.supplier_name,
                       p.invoice_number, pi.quantity, pi.buying_price,
                       pi.extra_charge, pi.subtotal, pi.purchase_unit_cost
                FROM purchase_items pi
                JOIN purchases p ON pi.purchase_id = p.purchase_id
                WHERE pi.product_id = ?
                ORDER BY p.purchase_date DESC, pi.id DESC
                """,
                (product_id,),
            )
            rows = await cursor.fetchall()

        return [
            PurchaseHistoryEntry(
                purchase_id=row["purchase_id"],
                date=datetime.fromisoformat(row["purchase_date"]),
                supplier_name=row["supplier_name"],
                invoice_number=row["invoice_number"],
                quantity=row["quantity"],
                buying_price=row["buying_price"],
                extra_charge=row["extra_charge"],
                subtotal=row["subtotal"],
                purchase_unit_cost=row["purchase_unit_cost"],
            )
            for row in rows
        ]

    @staticmethod
    async def _scalar(
        conn: aiosqlite.Connection, sql: str, params: tuple = ()
    ) -> float:
        cursor = await conn.execute(sql, params)
        row = await cursor.fetchone()
        return row[0] if row and row[0] is not None else 0.0
