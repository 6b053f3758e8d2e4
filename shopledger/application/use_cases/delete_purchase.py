"""Delete Purchase Use Case."""

from shopledger.config import get_logger
from shopledger.core.interfaces.ledger_store import IPurchaseStore

logger = get_logger(__name__)


class DeletePurchaseUseCase:
    """Remove a purchase and take its stock and cost back out of products."""

    def __init__(self, purchase_store: IPurchaseStore | None = None):
        self._purchase_store = purchase_store

    async def _get_purchase_store(self) -> IPurchaseStore:
        if self._purchase_store is None:
            from shopledger.infrastructure.storage.sqlite import get_purchase_store

            self._purchase_store = await get_purchase_store()
        return self._purchase_store

    async def execute(self, purchase_id: int) -> None:
        """Execute delete purchase use case."""
        logger.info("delete_purchase_started", purchase_id=purchase_id)
        store = await self._get_purchase_store()
        await store.delete(purchase_id)
        logger.info("delete_purchase_complete", purchase_id=purchase_id)
