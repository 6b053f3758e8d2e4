"""
Error handling middleware.

Every failure leaves the API as an ErrorResponse body:
error_code, message, hint, detail, path and timestamp.
"""

import traceback
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from shopledger.application.dto.responses import ErrorResponse
from shopledger.config import get_logger
from shopledger.core.exceptions import (
    AuthenticationError,
    BackupError,
    DuplicateRecordError,
    NotFoundError,
    PersistenceError,
    SetupAlreadyCompletedError,
    ShopLedgerError,
    ValidationError,
)

logger = get_logger(__name__)


# Resolved along the exception's MRO, so subclasses may override their base
EXCEPTION_STATUS_MAP: dict[type[Exception], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    DuplicateRecordError: status.HTTP_409_CONFLICT,
    SetupAlreadyCompletedError: status.HTTP_409_CONFLICT,
    PersistenceError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    BackupError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ValueError: status.HTTP_400_BAD_REQUEST,
}

HINT_MAP: dict[str, str] = {
    "PRODUCT_NOT_FOUND": "Check the product ID and try GET /api/products to list products.",
    "PURCHASE_NOT_FOUND": "Check the purchase ID and try GET /api/purchases to list purchases.",
    "ORDER_NOT_FOUND": "Check the order ID and try GET /api/orders to list orders.",
    "USER_NOT_FOUND": "Check the user ID and try GET /api/users to list users.",
    "EXPENSE_NOT_FOUND": "Check the expense ID and try GET /api/expenses to list expenses.",
    "UNKNOWN_PRODUCT": "Every line must reference an existing product ID.",
    "EMPTY_LINE_ITEMS": "Add at least one line item.",
    "DUPLICATE_RECORD": "A record with the same unique value (product code, username) already exists.",
    "PERSISTENCE_ERROR": "The database rejected the operation. Nothing was changed. Check server logs.",
    "AUTHENTICATION_FAILED": "Check the username and password.",
    "SETUP_ALREADY_COMPLETED": "An administrator already exists. Log in instead.",
    "BACKUP_FAILED": "Check that the backup path exists and is writable.",
    "VALIDATION_ERROR": "Check the request body against the API schema.",
}

STATUS_HINTS: dict[int, str] = {
    400: "Check the request parameters and body.",
    401: "Authenticate with valid credentials.",
    404: "The requested resource was not found. Verify the ID.",
    405: "The endpoint does not accept this HTTP method.",
    409: "The request conflicts with existing data.",
    422: "The request could not be processed. Check the input format.",
    500: "An internal error occurred. Check server logs.",
}

HTTP_ERROR_CODES: dict[int, str] = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
    422: "UNPROCESSABLE_ENTITY",
}


def status_for(exc: Exception) -> int:
    """HTTP status of an exception; unknown types are 500."""
    for cls in type(exc).__mro__:
        if cls in EXCEPTION_STATUS_MAP:
            return EXCEPTION_STATUS_MAP[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_json(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    detail: str | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        error_code=error_code,
        message=message,
        hint=HINT_MAP.get(error_code) or STATUS_HINTS.get(status_code, ""),
        detail=detail,
        path=request.url.path,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def build_error_response(request: Request, exc: Exception) -> JSONResponse:
    """Log an exception and turn it into an ErrorResponse."""
    status_code = status_for(exc)

    if isinstance(exc, ShopLedgerError):
        error_code, message = exc.code, exc.message
        detail = "; ".join(f"{k}={v}" for k, v in exc.details.items()) or None
    else:
        error_code, message, detail = type(exc).__name__, str(exc), None

    server_side = status_code >= 500
    (logger.error if server_side else logger.warning)(
        "request_error",
        request_id=getattr(request.state, "request_id", None),
        path=request.url.path,
        error_type=error_code,
        error=str(exc),
        traceback=traceback.format_exc() if server_side else None,
    )

    return error_json(request, status_code, error_code, message, detail)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Last line of defence for exceptions no handler claimed."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            return build_error_response(request, e)


def setup_exception_handlers(app: FastAPI) -> None:
    """Register handlers for domain, request validation and HTTP errors."""

    @app.exception_handler(ShopLedgerError)
    async def domain_exception_handler(request: Request, exc: ShopLedgerError) -> JSONResponse:
        return build_error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        problems = [
            f"{' -> '.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        ]
        return error_json(
            request,
            422,
            "VALIDATION_ERROR",
            "Request validation failed",
            "; ".join(problems),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return error_json(
            request,
            exc.status_code,
            HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR"),
            str(exc.detail) if exc.detail else "An error occurred",
        )
