"""Data transfer objects for the API boundary."""

from shopledger.application.dto.requests import (
    OrderItemRequest,
    OrderRequest,
    ProductRequest,
    PurchaseItemRequest,
    PurchaseRequest,
)
from shopledger.application.dto.responses import (
    ErrorResponse,
    HealthResponse,
    LedgerChangeResponse,
    OrderResponse,
    ProductResponse,
    PurchaseResponse,
)

__all__ = [
    "ProductRequest",
    "PurchaseItemRequest",
    "PurchaseRequest",
    "OrderItemRequest",
    "OrderRequest",
    "ProductResponse",
    "PurchaseResponse",
    "OrderResponse",
    "LedgerChangeResponse",
    "HealthResponse",
    "ErrorResponse",
]
