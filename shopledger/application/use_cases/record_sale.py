"""Record Sale Use Case: stock out with a frozen cost snapshot per line."""

from datetime import datetime

from shopledger.application.dto.requests import OrderRequest
from shopledger.application.dto.responses import (
    LedgerChangeResponse,
    OrderItemResponse,
    OrderResponse,
)
from shopledger.application.use_cases.record_purchase import LedgerChangeResult
from shopledger.config import get_logger
from shopledger.core.entities.order import Order, OrderItem
from shopledger.core.interfaces.ledger_store import IOrderStore

logger = get_logger(__name__)


def build_order(request: OrderRequest) -> Order:
    """Turn a request into an Order, filling derived totals."""
    return Order(
        order_date=request.order_date or datetime.now(),
        order_type=request.order_type,
        customer_name=request.customer_name,
        customer_phone=request.customer_phone,
        customer_address=request.customer_address,
        subtotal=request.subtotal,
        extra_charge=request.extra_charge,
        delivery_charge=request.delivery_charge,
        discount=request.discount,
        grand_total=request.grand_total,
        payment_method=request.payment_method,
        notes=request.notes,
        items=[
            OrderItem(
                product_id=item.product_id,
                quantity=item.quantity,
                selling_price=item.selling_price,
                subtotal=item.subtotal,
            )
            for item in request.items
        ],
    )


def order_item_to_response(item: OrderItem) -> OrderItemResponse:
    return OrderItemResponse(
        id=item.id,  # type: ignore[arg-type]
        product_id=item.product_id,
        product_name=item.product_name,
        quantity=item.quantity,
        selling_price=item.selling_price,
        subtotal=item.subtotal or 0.0,
        buying_price_snapshot=item.buying_price_snapshot or 0.0,
    )


def order_to_response(order: Order) -> OrderResponse:
    """Convert a stored Order to its API representation."""
    return OrderResponse(
        order_id=order.order_id,  # type: ignore[arg-type]
        order_date=order.order_date,
        order_type=order.order_type.value,
        customer_name=order.customer_name,
        customer_phone=order.customer_phone,
        customer_address=order.customer_address,
        subtotal=order.subtotal or 0.0,
        extra_charge=order.extra_charge,
        delivery_charge=order.delivery_charge,
        discount=order.discount,
        grand_total=order.grand_total or 0.0,
        payment_method=order.payment_method,
        notes=order.notes,
        items=[order_item_to_response(item) for item in order.items],
        created_at=order.created_at,
    )


class RecordSaleUseCase:
    """Record an order, snapshot line costs and decrement stock."""

    def __init__(self, order_store: IOrderStore | None = None):
        self._order_store = order_store

    async def _get_order_store(self) -> IOrderStore:
        if self._order_store is None:
            from shopledger.infrastructure.storage.sqlite import get_order_store

            self._order_store = await get_order_store()
        return self._order_store

    async def execute(self, request: OrderRequest) -> LedgerChangeResult:
        """Execute record sale use case."""
        logger.info(
            "record_sale_started",
            order_type=request.order_type.value,
            lines=len(request.items),
        )

        store = await self._get_order_store()
        order = await store.record(build_order(request))

        logger.info(
            "record_sale_complete",
            order_id=order.order_id,
            grand_total=order.grand_total,
        )
        return LedgerChangeResult(
            entity_id=order.order_id,  # type: ignore[arg-type]
            lines=len(order.items),
        )

    def to_response(self, result: LedgerChangeResult) -> LedgerChangeResponse:
        """Convert result to API response."""
        return LedgerChangeResponse(id=result.entity_id, lines=result.lines)
