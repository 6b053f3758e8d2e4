"""
Application layer - Use cases and DTOs.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Implementing use cases that coordinate the ledger stores

Use cases are the entry point for ledger, account and backup handlers.
"""

from shopledger.application.dto.requests import OrderRequest, PurchaseRequest
from shopledger.application.dto.responses import ErrorResponse, LedgerChangeResponse
from shopledger.application.use_cases import (
    DeletePurchaseUseCase,
    DeleteSaleUseCase,
    RecordPurchaseUseCase,
    RecordSaleUseCase,
    RevisePurchaseUseCase,
    ReviseSaleUseCase,
)

__all__ = [
    # DTOs
    "PurchaseRequest",
    "OrderRequest",
    "LedgerChangeResponse",
    "ErrorResponse",
    # Use Cases
    "RecordPurchaseUseCase",
    "RevisePurchaseUseCase",
    "DeletePurchaseUseCase",
    "RecordSaleUseCase",
    "ReviseSaleUseCase",
    "DeleteSaleUseCase",
]
