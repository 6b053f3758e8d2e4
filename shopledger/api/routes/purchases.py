"""Purchase ledger endpoints."""

from fastapi import APIRouter, Depends, status

from shopledger.api.dependencies import (
    get_delete_purchase_use_case,
    get_purchase_ledger,
    get_record_purchase_use_case,
    get_revise_purchase_use_case,
)
from shopledger.application.dto.requests import PurchaseRequest
from shopledger.application.dto.responses import (
    ErrorResponse,
    LedgerChangeResponse,
    PurchaseItemResponse,
    PurchaseResponse,
)
from shopledger.application.use_cases import (
    DeletePurchaseUseCase,
    RecordPurchaseUseCase,
    RevisePurchaseUseCase,
)
from shopledger.application.use_cases.record_purchase import (
    purchase_item_to_response,
    purchase_to_response,
)
from shopledger.core.exceptions import PurchaseNotFoundError
from shopledger.infrastructure.storage.sqlite import SQLitePurchaseStore

router = APIRouter(prefix="/api/purchases", tags=["purchases"])


@router.post(
    "",
    response_model=LedgerChangeResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def record_purchase(
    request: PurchaseRequest,
    use_case: RecordPurchaseUseCase = Depends(get_record_purchase_use_case),
) -> LedgerChangeResponse:
    """Record a purchase; updates stock and average cost of every line's product."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get("", response_model=list[PurchaseResponse])
async def list_purchases(
    limit: int = 100,
    offset: int = 0,
    store: SQLitePurchaseStore = Depends(get_purchase_ledger),
) -> list[PurchaseResponse]:
    """List purchases, newest first."""
    purchases = await store.list_purchases(limit=limit, offset=offset)
    return [purchase_to_response(p) for p in purchases]


@router.get(
    "/{purchase_id}",
    response_model=PurchaseResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_purchase(
    purchase_id: int,
    store: SQLitePurchaseStore = Depends(get_purchase_ledger),
) -> PurchaseResponse:
    """Get a purchase with its lines."""
    purchase = await store.get(purchase_id)
    if purchase is None:
        raise PurchaseNotFoundError(purchase_id)
    return purchase_to_response(purchase)


@router.get("/{purchase_id}/items", response_model=list[PurchaseItemResponse])
async def get_purchase_items(
    purchase_id: int,
    store: SQLitePurchaseStore = Depends(get_purchase_ledger),
) -> list[PurchaseItemResponse]:
    """Get the lines of a purchase with product names."""
    items = await store.get_items(purchase_id)
    if not items and await store.get(purchase_id) is None:
        raise PurchaseNotFoundError(purchase_id)
    return [purchase_item_to_response(item) for item in items]


@router.put(
    "/{purchase_id}",
    response_model=LedgerChangeResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def revise_purchase(
    purchase_id: int,
    request: PurchaseRequest,
    use_case: RevisePurchaseUseCase = Depends(get_revise_purchase_use_case),
) -> LedgerChangeResponse:
    """Replace a purchase; old lines are reversed before new ones apply."""
    result = await use_case.execute(purchase_id, request)
    return use_case.to_response(result)


@router.delete(
    "/{purchase_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_purchase(
    purchase_id: int,
    use_case: DeletePurchaseUseCase = Depends(get_delete_purchase_use_case),
) -> None:
    """Delete a purchase and reverse its effect on stock and cost."""
    await use_case.execute(purchase_id)
