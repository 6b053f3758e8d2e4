"""
Domain exceptions for ShopLedger.

Every failure surfaced to a caller carries one human-readable message.
"""

from typing import Any


class ShopLedgerError(Exception):
    """Base exception for all ShopLedger errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Validation Exceptions
class ValidationError(ShopLedgerError):
    """Input validation failed. Raised before any write."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
    ):
        super().__init__(
            message,
            code="VALIDATION_ERROR",
            details={"field": field, "value": value} if field else {},
        )


class ProductReferenceError(ValidationError):
    """A line item references a product that does not exist."""

    def __init__(self, product_id: int):
        super().__init__(
            f"Unknown product referenced by line item: {product_id}",
            field="product_id",
            value=product_id,
        )
        self.code = "UNKNOWN_PRODUCT"


class EmptyLineItemsError(ValidationError):
    """A purchase or order was submitted without line items."""

    def __init__(self, entity: str):
        super().__init__(
            f"A {entity} needs at least one line item",
            field="items",
        )
        self.code = "EMPTY_LINE_ITEMS"


# Not Found Exceptions
class NotFoundError(ShopLedgerError):
    """Requested record does not exist."""

    pass


class ProductNotFoundError(NotFoundError):
    """Product not found."""

    def __init__(self, product_id: int):
        super().__init__(
            f"Product not found: {product_id}",
            code="PRODUCT_NOT_FOUND",
            details={"product_id": product_id},
        )


class PurchaseNotFoundError(NotFoundError):
    """Purchase header not found."""

    def __init__(self, purchase_id: int):
        super().__init__(
            f"Purchase not found: {purchase_id}",
            code="PURCHASE_NOT_FOUND",
            details={"purchase_id": purchase_id},
        )


class OrderNotFoundError(NotFoundError):
    """Order header not found."""

    def __init__(self, order_id: int):
        super().__init__(
            f"Order not found: {order_id}",
            code="ORDER_NOT_FOUND",
            details={"order_id": order_id},
        )


class UserNotFoundError(NotFoundError):
    """User account not found."""

    def __init__(self, user_id: int):
        super().__init__(
            f"User not found: {user_id}",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class ExpenseNotFoundError(NotFoundError):
    """Expense entry not found."""

    def __init__(self, expense_id: int):
        super().__init__(
            f"Expense not found: {expense_id}",
            code="EXPENSE_NOT_FOUND",
            details={"expense_id": expense_id},
        )


# Persistence Exceptions
class PersistenceError(ShopLedgerError):
    """Store operation failed; the transaction was rolled back."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="PERSISTENCE_ERROR",
            details={"operation": operation, "error": error},
        )


class DuplicateRecordError(PersistenceError):
    """Unique constraint violated."""

    def __init__(self, operation: str, error: str):
        super().__init__(operation, error)
        self.code = "DUPLICATE_RECORD"


# Account Exceptions
class AuthenticationError(ShopLedgerError):
    """Credentials rejected."""

    def __init__(self, message: str = "Invalid username or password"):
        super().__init__(message, code="AUTHENTICATION_FAILED")


class SetupAlreadyCompletedError(ShopLedgerError):
    """First-run administrator setup attempted after users exist."""

    def __init__(self):
        super().__init__(
            "Setup has already been completed",
            code="SETUP_ALREADY_COMPLETED",
        )


# Backup Exceptions
class BackupError(ShopLedgerError):
    """Backup or restore file operation failed."""

    def __init__(self, operation: str, path: str, error: str):
        super().__init__(
            f"{operation.capitalize()} failed for {path}: {error}",
            code="BACKUP_FAILED",
            details={"operation": operation, "path": path, "error": error},
        )
