"""Abstract interface for reporting queries."""

from abc import ABC, abstractmethod
from datetime import date

from shopledger.core.entities.report import (
    DashboardStats,
    InventoryReportRow,
    PurchaseHistoryEntry,
    SalesReportRow,
    StockMovement,
)


class IReportStore(ABC):
    """Read-only projections over the stock ledger."""

    @abstractmethod
    async def dashboard_stats(self, today: date | None = None) -> DashboardStats:
        """Sales, purchases and profit per calendar window plus inventory figures."""
        pass

    @abstractmethod
    async def sales_report(self, start_date: date, end_date: date) -> list[SalesReportRow]:
        """Orders within an inclusive date range, newest first."""
        pass

    @abstractmethod
    async def inventory_report(self) -> list[InventoryReportRow]:
        """Non-deleted products ordered by stock ascending."""
        pass

    @abstractmethod
    async def stock_movements(self, product_id: int) -> list[StockMovement]:
        """Merged IN/OUT timeline of one product, newest first."""
        pass

    @abstractmethod
    async def purchase_history(self, product_id: int) -> list[PurchaseHistoryEntry]:
        """Purchase lines of one product, newest first."""
        pass
