"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field


# =============================================================================
# Catalog
# =============================================================================


class ProductResponse(BaseModel):
    """Product with running stock and average cost."""

    id: int = Field(..., description="Product ID")
    product_name: str
    product_code: str | None = None
    category: str | None = None
    brand: str | None = None
    buying_price: float = Field(..., description="Weighted-average unit cost")
    default_selling_price: float
    stock_quantity: float
    unit: str | None = None
    tax_percentage: float = 0.0
    original_price: float | None = None
    profit_percentage: float | None = None
    facebook_link: str | None = None
    product_link: str | None = None
    stock_value: float = Field(..., description="stock_quantity * buying_price")
    images: list[str] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CreatedResponse(BaseModel):
    """ID of a newly created record."""

    id: int


# =============================================================================
# Ledger
# =============================================================================


class PurchaseItemResponse(BaseModel):
    """Purchase line."""

    id: int
    product_id: int
    product_name: str | None = None
    quantity: float
    buying_price: float
    extra_charge: float
    subtotal: float
    purchase_unit_cost: float


class PurchaseResponse(BaseModel):
    """Purchase header with its lines (empty on list views)."""

    purchase_id: int
    supplier_name: str | None = None
    supplier_phone: str | None = None
    invoice_number: str | None = None
    purchase_date: datetime
    total_amount: float
    notes: str | None = None
    items: list[PurchaseItemResponse] = Field(default_factory=list)
    created_at: datetime | None = None


class OrderItemResponse(BaseModel):
    """Order line with the cost frozen at sale time."""

    id: int
    product_id: int
    product_name: str | None = None
    quantity: float
    selling_price: float
    subtotal: float
    buying_price_snapshot: float


class OrderResponse(BaseModel):
    """Order header with its lines (empty on list views)."""

    order_id: int
    order_date: datetime
    order_type: str
    customer_name: str | None = None
    customer_phone: str | None = None
    customer_address: str | None = None
    subtotal: float
    extra_charge: float
    delivery_charge: float
    discount: float
    grand_total: float
    payment_method: str | None = None
    notes: str | None = None
    items: list[OrderItemResponse] = Field(default_factory=list)
    created_at: datetime | None = None


class LedgerChangeResponse(BaseModel):
    """Outcome of a ledger mutation."""

    id: int = Field(..., description="Purchase or order ID")
    lines: int = Field(..., description="Lines applied")


# =============================================================================
# Accounts
# =============================================================================


class UserResponse(BaseModel):
    """User account without credentials."""

    id: int
    username: str
    role: str
    created_at: datetime | None = None


class SetupStatusResponse(BaseModel):
    """Whether the first admin still has to be created."""

    setup_required: bool


class ActivityLogResponse(BaseModel):
    """Activity log entry."""

    id: int
    user_id: int | None = None
    username: str
    action: str
    entity_type: str
    entity_id: int | None = None
    description: str
    created_at: datetime | None = None


# =============================================================================
# Settings and backups
# =============================================================================


class BackupConfigResponse(BaseModel):
    """Automatic backup configuration."""

    auto_backup_enabled: bool
    backup_dir: str | None = None
    backup_schedule: str
    keep_backup_count: int
    last_auto_backup_date: date | None = None


class BackupFileResponse(BaseModel):
    """Backup file on disk."""

    name: str
    path: str
    size: int
    modified_at: datetime


class BackupResultResponse(BaseModel):
    """Outcome of a backup or restore request."""

    path: str
    message: str


class AutoBackupResponse(BaseModel):
    """Outcome of an automatic backup check."""

    performed: bool
    reason: str
    path: str | None = None
    pruned: int = 0


# =============================================================================
# Expenses and maintenance
# =============================================================================


class ExpenseResponse(BaseModel):
    """Operating expense."""

    id: int
    expense_date: date
    category: str
    amount: float
    notes: str | None = None
    created_at: datetime | None = None


class CleanupResponse(BaseModel):
    """Rows removed per table."""

    removed: dict[str, int]


# =============================================================================
# Health and errors
# =============================================================================


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    version: str
    uptime_seconds: float = Field(default=0.0, description="Seconds since start")
    timestamp: datetime = Field(default_factory=datetime.now)
    database: dict[str, object] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. PURCHASE_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
