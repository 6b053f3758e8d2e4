"""Operating expense entity."""

from datetime import date, datetime

from pydantic import BaseModel, Field


class Expense(BaseModel):
    """A dated operating expense (rent, utilities, wages)."""

    id: int | None = None
    expense_date: date = Field(default_factory=date.today)
    category: str
    amount: float
    notes: str | None = None
    created_at: datetime | None = None
