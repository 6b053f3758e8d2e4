"""Record Purchase Use Case: stock in with weighted-average cost update."""

from dataclasses import dataclass
from datetime import datetime

from shopledger.application.dto.requests import PurchaseRequest
from shopledger.application.dto.responses import (
    LedgerChangeResponse,
    PurchaseItemResponse,
    PurchaseResponse,
)
from shopledger.config import get_logger
from shopledger.core.entities.purchase import Purchase, PurchaseItem
from shopledger.core.interfaces.ledger_store import IPurchaseStore

logger = get_logger(__name__)


@dataclass
class LedgerChangeResult:
    """Result of a ledger mutation."""

    entity_id: int
    lines: int


def build_purchase(request: PurchaseRequest) -> Purchase:
    """Turn a request into a Purchase, filling derived amounts."""
    return Purchase(
        supplier_name=request.supplier_name,
        supplier_phone=request.supplier_phone,
        invoice_number=request.invoice_number,
        purchase_date=request.purchase_date or datetime.now(),
        total_amount=request.total_amount,
        notes=request.notes,
        items=[
            PurchaseItem(
                product_id=item.product_id,
                quantity=item.quantity,
                buying_price=item.buying_price,
                extra_charge=item.extra_charge,
                subtotal=item.subtotal,
                purchase_unit_cost=item.purchase_unit_cost,
            )
            for item in request.items
        ],
    )


def purchase_item_to_response(item: PurchaseItem) -> PurchaseItemResponse:
    return PurchaseItemResponse(
        id=item.id,  # type: ignore[arg-type]
        product_id=item.product_id,
        product_name=item.product_name,
        quantity=item.quantity,
        buying_price=item.buying_price,
        extra_charge=item.extra_charge,
        subtotal=item.subtotal or 0.0,
        purchase_unit_cost=item.purchase_unit_cost or 0.0,
    )


def purchase_to_response(purchase: Purchase) -> PurchaseResponse:
    """Convert a stored Purchase to its API representation."""
    return PurchaseResponse(
        purchase_id=purchase.purchase_id,  # type: ignore[arg-type]
        supplier_name=purchase.supplier_name,
        supplier_phone=purchase.supplier_phone,
        invoice_number=purchase.invoice_number,
        purchase_date=purchase.purchase_date,
        total_amount=purchase.total_amount or 0.0,
        notes=purchase.notes,
        items=[purchase_item_to_response(item) for item in purchase.items],
        created_at=purchase.created_at,
    )


class RecordPurchaseUseCase:
    """Record a purchase and fold its lines into product cost and stock."""

    def __init__(self, purchase_store: IPurchaseStore | None = None):
        self._purchase_store = purchase_store

    async def _get_purchase_store(self) -> IPurchaseStore:
        if self._purchase_store is None:
            from shopledger.infrastructure.storage.sqlite import get_purchase_store

            self._purchase_store = await get_purchase_store()
        return self._purchase_store

    async def execute(self, request: PurchaseRequest) -> LedgerChangeResult:
        """Execute record purchase use case."""
        logger.info(
            "record_purchase_started",
            supplier=request.supplier_name,
            lines=len(request.items),
        )

        purchase = build_purchase(request)
        store = await self._get_purchase_store()
        purchase = await store.record(purchase)

        logger.info(
            "record_purchase_complete",
            purchase_id=purchase.purchase_id,
            total_amount=purchase.total_amount,
        )
        return LedgerChangeResult(
            entity_id=purchase.purchase_id,  # type: ignore[arg-type]
            lines=len(purchase.items),
        )

    def to_response(self, result: LedgerChangeResult) -> LedgerChangeResponse:
        """Convert result to API response."""
        return LedgerChangeResponse(id=result.entity_id, lines=result.lines)
