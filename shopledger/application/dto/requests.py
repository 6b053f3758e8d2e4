"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.
"""

from datetime import date, datetime
from pathlib import Path

from pydantic import BaseModel, Field

from shopledger.core.entities.account import UserRole
from shopledger.core.entities.backup import BackupSchedule
from shopledger.core.entities.order import OrderType


# =============================================================================
# Catalog
# =============================================================================


class ProductRequest(BaseModel):
    """Create or update a product."""

    product_name: str = Field(..., min_length=1, description="Display name")
    product_code: str | None = Field(
        default=None, description="Unique SKU or barcode", examples=["SKU-001"]
    )
    category: str | None = Field(default=None, description="Category label")
    brand: str | None = Field(default=None, description="Brand")
    buying_price: float = Field(
        default=0.0,
        description="Average unit cost; normally maintained by purchases",
    )
    default_selling_price: float = Field(default=0.0, description="Suggested sale price")
    stock_quantity: float = Field(default=0.0, description="Units on hand")
    unit: str | None = Field(default=None, examples=["pcs", "kg"])
    tax_percentage: float = Field(default=0.0, ge=0)
    original_price: float | None = Field(default=None)
    profit_percentage: float | None = Field(default=None)
    facebook_link: str | None = Field(default=None)
    product_link: str | None = Field(default=None)
    images: list[str] = Field(default_factory=list, description="Stored image paths")


# =============================================================================
# Ledger
# =============================================================================


class PurchaseItemRequest(BaseModel):
    """One purchase line. Subtotal and unit cost are derived when omitted."""

    product_id: int = Field(..., description="Product receiving stock")
    quantity: float = Field(..., description="Units received")
    buying_price: float = Field(..., description="Invoice unit price")
    extra_charge: float = Field(
        default=0.0, description="Freight or handling attributed to this line"
    )
    subtotal: float | None = Field(default=None)
    purchase_unit_cost: float | None = Field(default=None)


class PurchaseRequest(BaseModel):
    """Record or revise a purchase."""

    supplier_name: str | None = Field(default=None, examples=["Acme Wholesale"])
    supplier_phone: str | None = Field(default=None)
    invoice_number: str | None = Field(default=None, examples=["INV-1001"])
    purchase_date: datetime | None = Field(
        default=None, description="Defaults to now"
    )
    total_amount: float | None = Field(
        default=None, description="Defaults to the sum of line subtotals"
    )
    notes: str | None = Field(default=None)
    items: list[PurchaseItemRequest] = Field(..., description="Purchase lines")


class OrderItemRequest(BaseModel):
    """One sale line. The cost snapshot is taken by the ledger."""

    product_id: int = Field(..., description="Product being sold")
    quantity: float = Field(..., description="Units sold")
    selling_price: float = Field(..., description="Unit sale price")
    subtotal: float | None = Field(default=None)


class OrderRequest(BaseModel):
    """Record or revise a sale."""

    order_date: datetime | None = Field(default=None, description="Defaults to now")
    order_type: OrderType = Field(default=OrderType.LOCAL)
    customer_name: str | None = Field(default=None)
    customer_phone: str | None = Field(default=None)
    customer_address: str | None = Field(default=None)
    subtotal: float | None = Field(
        default=None, description="Defaults to the sum of line subtotals"
    )
    extra_charge: float = Field(default=0.0)
    delivery_charge: float = Field(default=0.0)
    discount: float = Field(default=0.0)
    grand_total: float | None = Field(
        default=None,
        description="Defaults to subtotal + extra + delivery - discount",
    )
    payment_method: str | None = Field(default=None, examples=["cash", "card"])
    notes: str | None = Field(default=None)
    items: list[OrderItemRequest] = Field(..., description="Sale lines")


# =============================================================================
# Accounts
# =============================================================================


class SetupAdminRequest(BaseModel):
    """Create the first super admin."""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class LoginRequest(BaseModel):
    """Authenticate a user."""

    username: str
    password: str


class CreateUserRequest(BaseModel):
    """Create a user account."""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    role: UserRole = Field(default=UserRole.STAFF)


class UpdateRoleRequest(BaseModel):
    """Change a user's role."""

    role: UserRole


class ChangePasswordRequest(BaseModel):
    """Change a user's password."""

    current_password: str | None = Field(
        default=None, description="Required unless acting as super admin"
    )
    new_password: str = Field(..., min_length=1)
    is_super_admin: bool = Field(
        default=False, description="Caller is a super admin resetting the password"
    )


class ActivityLogRequest(BaseModel):
    """Append an activity entry."""

    user_id: int | None = None
    username: str
    action: str = Field(..., examples=["CREATE", "UPDATE", "DELETE"])
    entity_type: str = Field(..., examples=["product", "order"])
    entity_id: int | None = None
    description: str = ""


# =============================================================================
# Settings and backups
# =============================================================================


class BackupConfigRequest(BaseModel):
    """Update the automatic backup configuration."""

    auto_backup_enabled: bool = False
    backup_dir: Path | None = None
    backup_schedule: BackupSchedule = BackupSchedule.DAILY
    keep_backup_count: int = Field(default=5, ge=1)


class BackupRequest(BaseModel):
    """Snapshot the database to a file."""

    destination: Path = Field(..., description="Target file path")


class RestoreRequest(BaseModel):
    """Stage a backup file for restore on next start."""

    source: Path = Field(..., description="Backup file to restore")


class PruneBackupsRequest(BaseModel):
    """Keep only the newest backups in a directory."""

    directory: Path
    keep: int = Field(default=5, ge=0)


# =============================================================================
# Expenses and maintenance
# =============================================================================


class ExpenseRequest(BaseModel):
    """Create or update an expense."""

    expense_date: date = Field(default_factory=date.today)
    category: str = Field(..., min_length=1, examples=["Rent", "Utilities"])
    amount: float
    notes: str | None = None


class CleanupRequest(BaseModel):
    """Select which data to wipe."""

    sales: bool = False
    purchases: bool = False
    products: bool = Field(
        default=False, description="Also wipes every purchase and sale"
    )
    logs: bool = False
    expenses: bool = False
