"""
Dependency injection container for FastAPI.

Provides stores and use cases to route handlers. Tests replace any of these
through ``app.dependency_overrides``.
"""

from functools import lru_cache

from shopledger.application.use_cases import (
    ChangePasswordUseCase,
    DeletePurchaseUseCase,
    DeleteSaleUseCase,
    LoginUserUseCase,
    RecordPurchaseUseCase,
    RecordSaleUseCase,
    RevisePurchaseUseCase,
    ReviseSaleUseCase,
    RunAutoBackupUseCase,
    SetupAdminUseCase,
)
from shopledger.config import Settings, get_settings
from shopledger.infrastructure.backup import BackupManager, get_backup_manager
from shopledger.infrastructure.storage.sqlite import (
    SQLiteActivityLogStore,
    SQLiteExpenseStore,
    SQLiteMaintenanceStore,
    SQLiteOrderStore,
    SQLiteProductStore,
    SQLitePurchaseStore,
    SQLiteReportStore,
    SQLiteSettingsStore,
    SQLiteUserStore,
    get_activity_store,
    get_expense_store,
    get_maintenance_store,
    get_order_store,
    get_product_store,
    get_purchase_store,
    get_report_store,
    get_settings_store,
    get_user_store,
)


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


# Store dependencies
async def get_catalog_store() -> SQLiteProductStore:
    """Get product store."""
    return await get_product_store()


async def get_purchase_ledger() -> SQLitePurchaseStore:
    """Get purchase store."""
    return await get_purchase_store()


async def get_order_ledger() -> SQLiteOrderStore:
    """Get order store."""
    return await get_order_store()


async def get_reports() -> SQLiteReportStore:
    """Get report store."""
    return await get_report_store()


async def get_settings_kv() -> SQLiteSettingsStore:
    """Get settings store."""
    return await get_settings_store()


async def get_accounts() -> SQLiteUserStore:
    """Get user store."""
    return await get_user_store()


async def get_activity_log() -> SQLiteActivityLogStore:
    """Get activity log store."""
    return await get_activity_store()


async def get_expenses() -> SQLiteExpenseStore:
    """Get expense store."""
    return await get_expense_store()


async def get_maintenance() -> SQLiteMaintenanceStore:
    """Get maintenance store."""
    return await get_maintenance_store()


async def get_backups() -> BackupManager:
    """Get backup manager."""
    return await get_backup_manager()


# Ledger use case dependencies
def get_record_purchase_use_case() -> RecordPurchaseUseCase:
    """Get record purchase use case."""
    return RecordPurchaseUseCase()


def get_revise_purchase_use_case() -> RevisePurchaseUseCase:
    """Get revise purchase use case."""
    return RevisePurchaseUseCase()


def get_delete_purchase_use_case() -> DeletePurchaseUseCase:
    """Get delete purchase use case."""
    return DeletePurchaseUseCase()


def get_record_sale_use_case() -> RecordSaleUseCase:
    """Get record sale use case."""
    return RecordSaleUseCase()


def get_revise_sale_use_case() -> ReviseSaleUseCase:
    """Get revise sale use case."""
    return ReviseSaleUseCase()


def get_delete_sale_use_case() -> DeleteSaleUseCase:
    """Get delete sale use case."""
    return DeleteSaleUseCase()


# Account use case dependencies
def get_setup_admin_use_case() -> SetupAdminUseCase:
    """Get setup admin use case."""
    return SetupAdminUseCase()


def get_login_use_case() -> LoginUserUseCase:
    """Get login use case."""
    return LoginUserUseCase()


def get_change_password_use_case() -> ChangePasswordUseCase:
    """Get change password use case."""
    return ChangePasswordUseCase()


# Backup use case dependencies
def get_auto_backup_use_case() -> RunAutoBackupUseCase:
    """Get auto backup use case."""
    return RunAutoBackupUseCase()
