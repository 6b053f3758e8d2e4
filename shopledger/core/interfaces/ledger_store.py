"""Abstract interfaces for catalog and stock ledger storage."""

from abc import ABC, abstractmethod

from shopledger.core.entities.order import Order, OrderItem
from shopledger.core.entities.product import Product
from shopledger.core.entities.purchase import Purchase, PurchaseItem


class IProductStore(ABC):
    """Interface for product catalog persistence."""

    @abstractmethod
    async def create(self, product: Product) -> Product:
        """Create a product and its image rows."""
        pass

    @abstractmethod
    async def get(self, product_id: int, include_deleted: bool = False) -> Product | None:
        """Get product by ID."""
        pass

    @abstractmethod
    async def update(self, product: Product) -> Product:
        """Update product fields and replace its images."""
        pass

    @abstractmethod
    async def soft_delete(self, product_id: int) -> bool:
        """Flag a product as deleted."""
        pass

    @abstractmethod
    async def list_products(self, limit: int = 500, offset: int = 0) -> list[Product]:
        """List non-deleted products."""
        pass

    @abstractmethod
    async def get_images(self, product_id: int) -> list[str]:
        """Get image paths of a product."""
        pass


class IPurchaseStore(ABC):
    """Interface for purchase ledger persistence.

    Every mutating method is one atomic transaction covering the header,
    its lines and the affected product rows.
    """

    @abstractmethod
    async def record(self, purchase: Purchase) -> Purchase:
        """Insert a purchase and apply its lines to product cost and stock."""
        pass

    @abstractmethod
    async def revise(self, purchase_id: int, purchase: Purchase) -> Purchase:
        """Reverse the existing lines, then apply the new ones."""
        pass

    @abstractmethod
    async def delete(self, purchase_id: int) -> None:
        """Reverse every line and remove the purchase."""
        pass

    @abstractmethod
    async def get(self, purchase_id: int) -> Purchase | None:
        """Get a purchase with its lines."""
        pass

    @abstractmethod
    async def list_purchases(self, limit: int = 100, offset: int = 0) -> list[Purchase]:
        """List purchase headers, newest first."""
        pass

    @abstractmethod
    async def get_items(self, purchase_id: int) -> list[PurchaseItem]:
        """Get the lines of a purchase with product names."""
        pass


class IOrderStore(ABC):
    """Interface for order ledger persistence.

    Every mutating method is one atomic transaction covering the header,
    its lines and the affected product rows.
    """

    @abstractmethod
    async def record(self, order: Order) -> Order:
        """Insert an order, snapshot costs and decrement stock."""
        pass

    @abstractmethod
    async def revise(self, order_id: int, order: Order) -> Order:
        """Restore stock of the existing lines, then apply the new ones."""
        pass

    @abstractmethod
    async def delete(self, order_id: int) -> None:
        """Restore stock of every line and remove the order."""
        pass

    @abstractmethod
    async def get(self, order_id: int) -> Order | None:
        """Get an order with its lines."""
        pass

    @abstractmethod
    async def list_orders(self, limit: int = 100, offset: int = 0) -> list[Order]:
        """List order headers, newest first."""
        pass

    @abstractmethod
    async def get_items(self, order_id: int) -> list[OrderItem]:
        """Get the lines of an order with product names."""
        pass
