"""Fixtures wiring the API to a temporary database."""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from shopledger.api import dependencies as deps
from shopledger.api.main import app
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
from shopledger.config import get_settings
from shopledger.infrastructure.backup import BackupManager
from shopledger.infrastructure.storage.sqlite import (
    Database,
    SQLiteActivityLogStore,
    SQLiteExpenseStore,
    SQLiteMaintenanceStore,
    SQLiteOrderStore,
    SQLiteProductStore,
    SQLitePurchaseStore,
    SQLiteReportStore,
    SQLiteSettingsStore,
    SQLiteUserStore,
)


@pytest.fixture
async def client(db: Database, tmp_path: Path) -> AsyncGenerator[AsyncClient, None]:
    """API client whose stores and use cases all use the test database."""
    products = SQLiteProductStore(db)
    purchases = SQLitePurchaseStore(db)
    orders = SQLiteOrderStore(db)
    settings_store = SQLiteSettingsStore(db)
    users = SQLiteUserStore(db)
    backups = BackupManager(db, restore_path=tmp_path / "restore.db")

    overrides = {
        deps.get_app_settings: get_settings,
        deps.get_catalog_store: lambda: products,
        deps.get_purchase_ledger: lambda: purchases,
        deps.get_order_ledger: lambda: orders,
        deps.get_reports: lambda: SQLiteReportStore(db, low_stock_threshold=5.0),
        deps.get_settings_kv: lambda: settings_store,
        deps.get_accounts: lambda: users,
        deps.get_activity_log: lambda: SQLiteActivityLogStore(db),
        deps.get_expenses: lambda: SQLiteExpenseStore(db),
        deps.get_maintenance: lambda: SQLiteMaintenanceStore(db),
        deps.get_backups: lambda: backups,
        deps.get_record_purchase_use_case: lambda: RecordPurchaseUseCase(purchase_store=purchases),
        deps.get_revise_purchase_use_case: lambda: RevisePurchaseUseCase(purchase_store=purchases),
        deps.get_delete_purchase_use_case: lambda: DeletePurchaseUseCase(purchase_store=purchases),
        deps.get_record_sale_use_case: lambda: RecordSaleUseCase(order_store=orders),
        deps.get_revise_sale_use_case: lambda: ReviseSaleUseCase(order_store=orders),
        deps.get_delete_sale_use_case: lambda: DeleteSaleUseCase(order_store=orders),
        deps.get_setup_admin_use_case: lambda: SetupAdminUseCase(user_store=users),
        deps.get_login_use_case: lambda: LoginUserUseCase(user_store=users),
        deps.get_change_password_use_case: lambda: ChangePasswordUseCase(user_store=users),
        deps.get_auto_backup_use_case: lambda: RunAutoBackupUseCase(
            settings_store=settings_store, backup_manager=backups, file_prefix="shop"
        ),
    }
    app.dependency_overrides.update(overrides)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    for dependency in overrides:
        app.dependency_overrides.pop(dependency, None)


@pytest.fixture
async def product_id(client: AsyncClient) -> int:
    """A product created through the API."""
    response = await client.post(
        "/api/products",
        json={"product_name": "Cable", "product_code": "CBL-1", "default_selling_price": 9.0},
    )
    assert response.status_code == 201
    return response.json()["id"]
