"""Order (sales) ledger endpoints."""

from fastapi import APIRouter, Depends, status

from shopledger.api.dependencies import (
    get_delete_sale_use_case,
    get_order_ledger,
    get_record_sale_use_case,
    get_revise_sale_use_case,
)
from shopledger.application.dto.requests import OrderRequest
from shopledger.application.dto.responses import (
    ErrorResponse,
    LedgerChangeResponse,
    OrderItemResponse,
    OrderResponse,
)
from shopledger.application.use_cases import (
    DeleteSaleUseCase,
    RecordSaleUseCase,
    ReviseSaleUseCase,
)
from shopledger.application.use_cases.record_sale import (
    order_item_to_response,
    order_to_response,
)
from shopledger.core.exceptions import OrderNotFoundError
from shopledger.infrastructure.storage.sqlite import SQLiteOrderStore

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.post(
    "",
    response_model=LedgerChangeResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def record_sale(
    request: OrderRequest,
    use_case: RecordSaleUseCase = Depends(get_record_sale_use_case),
) -> LedgerChangeResponse:
    """Record a sale; snapshots line costs and decrements stock."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get("", response_model=list[OrderResponse])
async def list_orders(
    limit: int = 100,
    offset: int = 0,
    store: SQLiteOrderStore = Depends(get_order_ledger),
) -> list[OrderResponse]:
    """List orders, newest first."""
    orders = await store.list_orders(limit=limit, offset=offset)
    return [order_to_response(o) for o in orders]


@router.get(
    "/{order_id}",
    response_model=OrderResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_order(
    order_id: int,
    store: SQLiteOrderStore = Depends(get_order_ledger),
) -> OrderResponse:
    """Get an order with its lines."""
    order = await store.get(order_id)
    if order is None:
        raise OrderNotFoundError(order_id)
    return order_to_response(order)


@router.get("/{order_id}/items", response_model=list[OrderItemResponse])
async def get_order_items(
    order_id: int,
    store: SQLiteOrderStore = Depends(get_order_ledger),
) -> list[OrderItemResponse]:
    """Get the lines of an order with product names."""
    items = await store.get_items(order_id)
    if not items and await store.get(order_id) is None:
        raise OrderNotFoundError(order_id)
    return [order_item_to_response(item) for item in items]


@router.put(
    "/{order_id}",
    response_model=LedgerChangeResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def revise_sale(
    order_id: int,
    request: OrderRequest,
    use_case: ReviseSaleUseCase = Depends(get_revise_sale_use_case),
) -> LedgerChangeResponse:
    """Replace an order; old quantities return to stock before new lines apply."""
    result = await use_case.execute(order_id, request)
    return use_case.to_response(result)


@router.delete(
    "/{order_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_sale(
    order_id: int,
    use_case: DeleteSaleUseCase = Depends(get_delete_sale_use_case),
) -> None:
    """Delete an order and return its quantities to stock."""
    await use_case.execute(order_id)
