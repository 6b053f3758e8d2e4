"""Core domain entities."""

from shopledger.core.entities.account import ActivityLog, User, UserRole
from shopledger.core.entities.backup import BackupConfig, BackupInfo, BackupSchedule
from shopledger.core.entities.expense import Expense
from shopledger.core.entities.order import Order, OrderItem, OrderType
from shopledger.core.entities.product import Product
from shopledger.core.entities.purchase import Purchase, PurchaseItem
from shopledger.core.entities.report import (
    DashboardStats,
    InventoryReportRow,
    MovementType,
    PurchaseHistoryEntry,
    SalesReportRow,
    StockMovement,
)

__all__ = [
    # Catalog
    "Product",
    # Ledger
    "Purchase",
    "PurchaseItem",
    "Order",
    "OrderItem",
    "OrderType",
    # Reports
    "DashboardStats",
    "SalesReportRow",
    "InventoryReportRow",
    "StockMovement",
    "MovementType",
    "PurchaseHistoryEntry",
    # Accounts
    "User",
    "UserRole",
    "ActivityLog",
    # Expenses
    "Expense",
    # Backups
    "BackupConfig",
    "BackupInfo",
    "BackupSchedule",
]
