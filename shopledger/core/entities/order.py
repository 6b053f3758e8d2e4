"""Order (sale) domain entities."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, model_validator


class OrderType(str, Enum):
    """Sales channel of an order."""

    LOCAL = "local"
    ONLINE = "online"


class OrderItem(BaseModel):
    """A single sold line with its frozen cost snapshot."""

    id: int | None = None
    order_id: int | None = None
    product_id: int  # FK → products.id
    product_name: str | None = None  # populated on detail reads
    quantity: float
    selling_price: float
    subtotal: float | None = None
    buying_price_snapshot: float | None = None  # set by the ledger at sale time

    @model_validator(mode="after")
    def compute_line(self) -> "OrderItem":
        """Default subtotal to quantity * selling_price."""
        if self.subtotal is None:
            self.subtotal = self.quantity * self.selling_price
        return self


class Order(BaseModel):
    """An order header grouping sold lines for one customer."""

    order_id: int | None = None
    order_date: datetime = Field(default_factory=datetime.now)
    order_type: OrderType = OrderType.LOCAL
    customer_name: str | None = None
    customer_phone: str | None = None
    customer_address: str | None = None
    subtotal: float | None = None
    extra_charge: float = 0.0
    delivery_charge: float = 0.0
    discount: float = 0.0
    grand_total: float | None = None
    payment_method: str | None = None
    notes: str | None = None
    items: list[OrderItem] = Field(default_factory=list)
    created_at: datetime | None = None

    @model_validator(mode="after")
    def compute_totals(self) -> "Order":
        """Default subtotal and grand_total from lines and charges."""
        if self.subtotal is None:
            self.subtotal = sum(i.subtotal or 0.0 for i in self.items)
        if self.grand_total is None:
            self.grand_total = (
                self.subtotal + self.extra_charge + self.delivery_charge - self.discount
            )
        return self
