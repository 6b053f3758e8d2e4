"""Revise Purchase Use Case: undo the old lines, apply the new ones."""

from shopledger.application.dto.requests import PurchaseRequest
from shopledger.application.dto.responses import LedgerChangeResponse
from shopledger.application.use_cases.record_purchase import (
    LedgerChangeResult,
    build_purchase,
)
from shopledger.config import get_logger
from shopledger.core.interfaces.ledger_store import IPurchaseStore

logger = get_logger(__name__)


class RevisePurchaseUseCase:
    """Replace a purchase's header and lines, keeping product cost consistent."""

    def __init__(self, purchase_store: IPurchaseStore | None = None):
        self._purchase_store = purchase_store

    async def _get_purchase_store(self) -> IPurchaseStore:
        if self._purchase_store is None:
            from shopledger.infrastructure.storage.sqlite import get_purchase_store

            self._purchase_store = await get_purchase_store()
        return self._purchase_store

    async def execute(self, purchase_id: int, request: PurchaseRequest) -> LedgerChangeResult:
        """Execute revise purchase use case."""
        logger.info("revise_purchase_started", purchase_id=purchase_id, lines=len(request.items))

        store = await self._get_purchase_store()
        purchase = await store.revise(purchase_id, build_purchase(request))

        logger.info("revise_purchase_complete", purchase_id=purchase_id)
        return LedgerChangeResult(entity_id=purchase_id, lines=len(purchase.items))

    def to_response(self, result: LedgerChangeResult) -> LedgerChangeResponse:
        """Convert result to API response."""
        return LedgerChangeResponse(id=result.entity_id, lines=result.lines)
