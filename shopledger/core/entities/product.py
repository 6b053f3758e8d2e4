"""Product catalog domain entities."""

from datetime import datetime

from pydantic import BaseModel, Field


class Product(BaseModel):
    """A sellable product with its running stock level and average cost."""

    id: int | None = None
    product_name: str
    product_code: str | None = None  # unique when set
    category: str | None = None
    brand: str | None = None
    buying_price: float = 0.0  # weighted-average unit cost
    default_selling_price: float = 0.0
    stock_quantity: float = 0.0  # may go negative (oversell)
    unit: str | None = None
    tax_percentage: float = 0.0
    original_price: float | None = None
    profit_percentage: float | None = None
    facebook_link: str | None = None
    product_link: str | None = None
    is_deleted: bool = False
    images: list[str] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def stock_value(self) -> float:
        """Stock value = stock_quantity * buying_price."""
        return self.stock_quantity * self.buying_price
