"""SQLite storage implementations."""

from shopledger.config import get_settings
from shopledger.infrastructure.storage.sqlite.activity_store import SQLiteActivityLogStore
from shopledger.infrastructure.storage.sqlite.connection import (
    Database,
    close_database,
    get_database,
    to_db_datetime,
)
from shopledger.infrastructure.storage.sqlite.expense_store import SQLiteExpenseStore
from shopledger.infrastructure.storage.sqlite.maintenance_store import SQLiteMaintenanceStore
from shopledger.infrastructure.storage.sqlite.order_store import SQLiteOrderStore
from shopledger.infrastructure.storage.sqlite.product_store import SQLiteProductStore
from shopledger.infrastructure.storage.sqlite.purchase_store import SQLitePurchaseStore
from shopledger.infrastructure.storage.sqlite.report_store import SQLiteReportStore
from shopledger.infrastructure.storage.sqlite.settings_store import SQLiteSettingsStore
from shopledger.infrastructure.storage.sqlite.user_store import SQLiteUserStore

# Singleton instances, bound to the process-wide database
_product_store: SQLiteProductStore | None = None
_purchase_store: SQLitePurchaseStore | None = None
_order_store: SQLiteOrderStore | None = None
_report_store: SQLiteReportStore | None = None
_settings_store: SQLiteSettingsStore | None = None
_user_store: SQLiteUserStore | None = None
_activity_store: SQLiteActivityLogStore | None = None
_expense_store: SQLiteExpenseStore | None = None
_maintenance_store: SQLiteMaintenanceStore | None = None


async def get_product_store() -> SQLiteProductStore:
    """Get singleton product store instance."""
    global _product_store
    if _product_store is None:
        _product_store = SQLiteProductStore(await get_database())
    return _product_store


async def get_purchase_store() -> SQLitePurchaseStore:
    """Get singleton purchase store instance."""
    global _purchase_store
    if _purchase_store is None:
        _purchase_store = SQLitePurchaseStore(await get_database())
    return _purchase_store


async def get_order_store() -> SQLiteOrderStore:
    """Get singleton order store instance."""
    global _order_store
    if _order_store is None:
        _order_store = SQLiteOrderStore(await get_database())
    return _order_store


async def get_report_store() -> SQLiteReportStore:
    """Get singleton report store instance."""
    global _report_store
    if _report_store is None:
        _report_store = SQLiteReportStore(
            await get_database(),
            low_stock_threshold=get_settings().inventory.low_stock_threshold,
        )
    return _report_store


async def get_settings_store() -> SQLiteSettingsStore:
    """Get singleton settings store instance."""
    global _settings_store
    if _settings_store is None:
        _settings_store = SQLiteSettingsStore(await get_database())
    return _settings_store


async def get_user_store() -> SQLiteUserStore:
    """Get singleton user store instance."""
    global _user_store
    if _user_store is None:
        _user_store = SQLiteUserStore(await get_database())
    return _user_store


async def get_activity_store() -> SQLiteActivityLogStore:
    """Get singleton activity log store instance."""
    global _activity_store
    if _activity_store is None:
        _activity_store = SQLiteActivityLogStore(await get_database())
    return _activity_store


async def get_expense_store() -> SQLiteExpenseStore:
    """Get singleton expense store instance."""
    global _expense_store
    if _expense_store is None:
        _expense_store = SQLiteExpenseStore(await get_database())
    return _expense_store


async def get_maintenance_store() -> SQLiteMaintenanceStore:
    """Get singleton maintenance store instance."""
    global _maintenance_store
    if _maintenance_store is None:
        _maintenance_store = SQLiteMaintenanceStore(await get_database())
    return _maintenance_store


def reset_stores() -> None:
    """Drop store singletons so the next call rebinds to a fresh database."""
    global _product_store, _purchase_store, _order_store, _report_store
    global _settings_store, _user_store, _activity_store, _expense_store
    global _maintenance_store
    _product_store = None
    _purchase_store = None
    _order_store = None
    _report_store = None
    _settings_store = None
    _user_store = None
    _activity_store = None
    _expense_store = None
    _maintenance_store = None


__all__ = [
    # Connection
    "Database",
    "get_database",
    "close_database",
    "to_db_datetime",
    # Store classes
    "SQLiteProductStore",
    "SQLitePurchaseStore",
    "SQLiteOrderStore",
    "SQLiteReportStore",
    "SQLiteSettingsStore",
    "SQLiteUserStore",
    "SQLiteActivityLogStore",
    "SQLiteExpenseStore",
    "SQLiteMaintenanceStore",
    # Factory functions
    "get_product_store",
    "get_purchase_store",
    "get_order_store",
    "get_report_store",
    "get_settings_store",
    "get_user_store",
    "get_activity_store",
    "get_expense_store",
    "get_maintenance_store",
    "reset_stores",
]
