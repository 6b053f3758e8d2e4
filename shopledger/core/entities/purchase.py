"""Purchase (stock receipt) domain entities."""

from datetime import datetime

from pydantic import BaseModel, Field, model_validator

from shopledger.core.services.average_cost import effective_unit_cost


class PurchaseItem(BaseModel):
    """A single received line on a purchase."""

    id: int | None = None
    purchase_id: int | None = None
    product_id: int  # FK → products.id
    product_name: str | None = None  # populated on detail reads
    quantity: float
    buying_price: float  # unit price on the supplier invoice
    extra_charge: float = 0.0  # freight, duty, handling
    subtotal: float | None = None
    purchase_unit_cost: float | None = None  # unit cost including extra charge

    @model_validator(mode="after")
    def compute_line(self) -> "PurchaseItem":
        """Default subtotal and effective unit cost from the line values."""
        if self.subtotal is None:
            self.subtotal = self.quantity * self.buying_price + self.extra_charge
        if self.purchase_unit_cost is None:
            self.purchase_unit_cost = effective_unit_cost(
                self.quantity, self.buying_price, self.extra_charge
            )
        return self


class Purchase(BaseModel):
    """A purchase header grouping lines against one supplier invoice."""

    purchase_id: int | None = None
    supplier_name: str | None = None
    supplier_phone: str | None = None
    invoice_number: str | None = None
    purchase_date: datetime = Field(default_factory=datetime.now)
    total_amount: float | None = None
    notes: str | None = None
    items: list[PurchaseItem] = Field(default_factory=list)
    created_at: datetime | None = None

    @model_validator(mode="after")
    def compute_total(self) -> "Purchase":
        """Default total_amount to the sum of line subtotals."""
        if self.total_amount is None:
            self.total_amount = sum(i.subtotal or 0.0 for i in self.items)
        return self
