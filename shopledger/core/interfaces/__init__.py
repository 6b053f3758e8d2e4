"""Abstract interfaces for storage backends."""

from shopledger.core.interfaces.ledger_store import IOrderStore, IProductStore, IPurchaseStore
from shopledger.core.interfaces.report_store import IReportStore
from shopledger.core.interfaces.storage import (
    IActivityLogStore,
    IExpenseStore,
    IMaintenanceStore,
    ISettingsStore,
    IUserStore,
)

__all__ = [
    "IProductStore",
    "IPurchaseStore",
    "IOrderStore",
    "IReportStore",
    "ISettingsStore",
    "IUserStore",
    "IActivityLogStore",
    "IExpenseStore",
    "IMaintenanceStore",
]
