"""Revise Sale Use Case: return the old quantities, sell the new lines."""

from shopledger.application.dto.requests import OrderRequest
from shopledger.application.dto.responses import LedgerChangeResponse
from shopledger.application.use_cases.record_purchase import LedgerChangeResult
from shopledger.application.use_cases.record_sale import build_order
from shopledger.config import get_logger
from shopledger.core.interfaces.ledger_store import IOrderStore

logger = get_logger(__name__)


class ReviseSaleUseCase:
    """Replace an order's header and lines with fresh cost snapshots."""

    def __init__(self, order_store: IOrderStore | None = None):
        self._order_store = order_store

    async def _get_order_store(self) -> IOrderStore:
        if self._order_store is None:
            from shopledger.infrastructure.storage.sqlite import get_order_store

            self._order_store = await get_order_store()
        return self._order_store

    async def execute(self, order_id: int, request: OrderRequest) -> LedgerChangeResult:
        """Execute revise sale use case."""
        logger.info("revise_sale_started", order_id=order_id, lines=len(request.items))

        store = await self._get_order_store()
        order = await store.revise(order_id, build_order(request))

        logger.info("revise_sale_complete", order_id=order_id, grand_total=order.grand_total)
        return LedgerChangeResult(entity_id=order_id, lines=len(order.items))

    def to_response(self, result: LedgerChangeResult) -> LedgerChangeResponse:
        """Convert result to API response."""
        return LedgerChangeResponse(id=result.entity_id, lines=result.lines)
