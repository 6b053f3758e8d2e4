"""SQLite bulk cleanup of ledger and auxiliary data."""

from shopledger.config import get_logger
from shopledger.core.interfaces.storage import IMaintenanceStore
from shopledger.infrastructure.storage.sqlite.connection import Database

logger = get_logger(__name__)

# Child tables come before the headers they reference.
_SALES_TABLES = ("order_items", "orders")
_PURCHASE_TABLES = ("purchase_items", "purchases")
_PRODUCT_TABLES = ("product_images", *_SALES_TABLES, *_PURCHASE_TABLES, "products")


class SQLiteMaintenanceStore(IMaintenanceStore):
    """Destructive cleanup, all-or-nothing."""

    def __init__(self, db: Database):
        self._db = db

    async def cleanup(
        self,
        sales: bool = False,
        purchases: bool = False,
        products: bool = False,
        logs: bool = False,
        expenses: bool = False,
    ) -> dict[str, int]:
        """Delete the selected data in one transaction; returns rows removed per table.

        Clearing products also clears every purchase and sale, since those
        lines cannot outlive the products they reference.
        """
        tables: list[str] = []
        if products:
            tables.extend(_PRODUCT_TABLES)
        else:
            if sales:
                tables.extend(_SALES_TABLES)
            if purchases:
                tables.extend(_PURCHASE_TABLES)
        if expenses:
            tables.append("expenses")
        if logs:
            tables.append("activity_logs")

        removed: dict[str, int] = {}
        async with self._db.transaction("cleanup_database") as conn:
            for table in tables:
                cursor = await conn.execute(f"DELETE FROM {table}")
                removed[table] = cursor.rowcount

        logger.warning("database_cleaned", removed=removed)
        return removed
