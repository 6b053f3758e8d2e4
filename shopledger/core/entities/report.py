"""Read-only reporting projections over the ledger."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel


class MovementType(str, Enum):
    """Direction of a stock movement."""

    IN = "IN"
    OUT = "OUT"


class DashboardStats(BaseModel):
    """Windowed sales, purchase and profit totals plus inventory figures."""

    sales_today: float = 0.0
    sales_month: float = 0.0
    sales_year: float = 0.0
    total_sales: float = 0.0
    purchases_today: float = 0.0
    purchases_month: float = 0.0
    purchases_year: float = 0.0
    total_purchases: float = 0.0
    profit_today: float = 0.0
    profit_month: float = 0.0
    profit_year: float = 0.0
    total_profit: float = 0.0
    inventory_value: float = 0.0
    low_stock_count: int = 0
    order_count: int = 0
    product_count: int = 0


class SalesReportRow(BaseModel):
    """One order in a sales report."""

    order_id: int
    date: datetime
    customer: str | None = None
    total: float
    discount: float = 0.0
    items_count: int = 0
    profit: float


class InventoryReportRow(BaseModel):
    """One product in the inventory report."""

    id: int
    name: str
    category: str | None = None
    stock: float
    unit: str | None = None
    cost_price: float
    selling_price: float
    stock_value: float


class StockMovement(BaseModel):
    """A purchase (IN) or sale (OUT) line in a product's stock timeline."""

    line_id: int
    date: datetime
    movement_type: MovementType
    entity_name: str | None = None  # supplier or customer
    reference: str | None = None  # invoice number or order id
    quantity: float
    price: float


class PurchaseHistoryEntry(BaseModel):
    """One purchase line in a product's purchase history."""

    purchase_id: int
    date: datetime
    supplier_name: str | None = None
    invoice_number: str | None = None
    quantity: float
    buying_price: float
    extra_charge: float = 0.0
    subtotal: float
    purchase_unit_cost: float
