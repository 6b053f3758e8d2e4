"""Delete Sale Use Case."""

from shopledger.config import get_logger
from shopledger.core.interfaces.ledger_store import IOrderStore

logger = get_logger(__name__)


class DeleteSaleUseCase:
    """Remove an order and put its quantities back in stock."""

    def __init__(self, order_store: IOrderStore | None = None):
        self._order_store = order_store

    async def _get_order_store(self) -> IOrderStore:
        if self._order_store is None:
            from shopledger.infrastructure.storage.sqlite import get_order_store

            self._order_store = await get_order_store()
        return self._order_store

    async def execute(self, order_id: int) -> None:
        """Execute delete sale use case."""
        logger.info("delete_sale_started", order_id=order_id)
        store = await self._get_order_store()
        await store.delete(order_id)
        logger.info("delete_sale_complete", order_id=order_id)
