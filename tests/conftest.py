"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator, Generator
from pathlib import Path

import pytest

from shopledger.config import reset_settings
from shopledger.core.entities.product import Product
from shopledger.infrastructure.storage.sqlite import (
    Database,
    SQLiteOrderStore,
    SQLiteProductStore,
    SQLitePurchaseStore,
)
from shopledger.infrastructure.storage.sqlite.migrations import initialize_database


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Point every settings-derived path into the test's temp directory."""
    monkeypatch.setenv("STORAGE_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("BACKUP_DEFAULT_DIR", str(tmp_path / "backups"))
    monkeypatch.setenv("BACKUP_AUTO_BACKUP_ON_START", "false")
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Temporary database path."""
    return tmp_path / "ledger.db"


@pytest.fixture
async def db(db_path: Path) -> AsyncGenerator[Database, None]:
    """Migrated database with an open shared connection."""
    await initialize_database(db_path)
    database = Database(db_path)
    await database.open()
    yield database
    await database.close()


@pytest.fixture
def product_store(db: Database) -> SQLiteProductStore:
    return SQLiteProductStore(db)


@pytest.fixture
def purchase_store(db: Database) -> SQLitePurchaseStore:
    return SQLitePurchaseStore(db)


@pytest.fixture
def order_store(db: Database) -> SQLiteOrderStore:
    return SQLiteOrderStore(db)


@pytest.fixture
def make_product(product_store: SQLiteProductStore):
    """Factory creating products with a given opening stock and cost."""

    async def _make(
        name: str = "Cable",
        stock: float = 0.0,
        cost: float = 0.0,
        price: float = 10.0,
        code: str | None = None,
    ) -> Product:
        return await product_store.create(
            Product(
                product_name=name,
                product_code=code,
                stock_quantity=stock,
                buying_price=cost,
                default_selling_price=price,
            )
        )

    return _make
