"""
SQLite implementation of product catalog storage.

Also hosts the product-row helpers the ledger stores run inside their
own transactions.
"""

from collections.abc import Iterable
from datetime import datetime

import aiosqlite

from shopledger.config import get_logger
from shopledger.core.entities.product import Product
from shopledger.core.exceptions import (
    ProductNotFoundError,
    ProductReferenceError,
    ValidationError,
)
from shopledger.core.interfaces.ledger_store import IProductStore
from shopledger.core.services.average_cost import CostPosition
from shopledger.infrastructure.storage.sqlite.connection import Database

logger = get_logger(__name__)


async def require_products(conn: aiosqlite.Connection, product_ids: Iterable[int]) -> None:
    """Raise ProductReferenceError for the first id with no product row."""
    for product_id in dict.fromkeys(product_ids):
        cursor = await conn.execute("SELECT 1 FROM products WHERE id = ?", (product_id,))
        if await cursor.fetchone() is None:
            raise ProductReferenceError(product_id)


async def read_cost_position(conn: aiosqlite.Connection, product_id: int) -> CostPosition:
    """Read stock_quantity and buying_price of a product."""
    cursor = await conn.execute(
        "SELECT stock_quantity, buying_price FROM products WHERE id = ?",
        (product_id,),
    )
    row = await cursor.fetchone()
    if row is None:
        raise ProductReferenceError(product_id)
    return CostPosition(row["stock_quantity"], row["buying_price"])


async def write_cost_position(
    conn: aiosqlite.Connection, product_id: int, position: CostPosition
) -> None:
    """Write stock_quantity and buying_price of a product."""
    await conn.execute(
        """
        UPDATE products
        SET stock_quantity = ?, buying_price = ?, updated_at = datetime('now', 'localtime')
        WHERE id = ?
        """,
        (position.quantity, position.average_cost, product_id),
    )


async def adjust_stock(conn: aiosqlite.Connection, product_id: int, delta: float) -> None:
    """Add delta to stock_quantity without touching cost."""
    await conn.execute(
        """
        UPDATE products
        SET stock_quantity = stock_quantity + ?, updated_at = datetime('now', 'localtime')
        WHERE id = ?
        """,
        (delta, product_id),
    )


class SQLiteProductStore(IProductStore):
    """SQLite implementation of the product catalog."""

    def __init__(self, db: Database):
        self._db = db

    async def create(self, product: Product) -> Product:
        """Create a product and its image rows."""
        async with self._db.transaction("create_product") as conn:
            cursor = await conn.execute(
                """
                INSERT INTO products (
                    product_name, product_code, category, brand,
                    buying_price, default_selling_price, stock_quantity,
                    unit, tax_percentage, original_price, profit_percentage,
                    facebook_link, product_link
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    product.product_name,
                    product.product_code,
                    product.category,
                    product.brand,
                    product.buying_price,
                    product.default_selling_price,
                    product.stock_quantity,
                    product.unit,
                    product.tax_percentage,
                    product.original_price,
                    product.profit_percentage,
                    product.facebook_link,
                    product.product_link,
                ),
            )
            product.id = cursor.lastrowid
            await self._replace_images(conn, product.id, product.images)  # type: ignore[arg-type]

        logger.info(
            "product_created",
            product_id=product.id,
            product_code=product.product_code,
        )
        return product

    async def get(self, product_id: int, include_deleted: bool = False) -> Product | None:
        """Get product by ID."""
        async with self._db.connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM products WHERE id = ?", (product_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            if row["is_deleted"] and not include_deleted:
                return None

            cursor = await conn.execute(
                "SELECT image_path FROM product_images WHERE product_id = ? ORDER BY id",
                (product_id,),
            )
            images = [r["image_path"] for r in await cursor.fetchall()]
            return self._row_to_product(row, images)

    async def update(self, product: Product) -> Product:
        """Update product fields and replace its images."""
        if product.id is None:
            raise ValidationError("Product id is required for update", field="id")

        async with self._db.transaction("update_product") as conn:
            cursor = await conn.execute(
                """
                UPDATE products SET
                    product_name = ?, product_code = ?, category = ?, brand = ?,
                    buying_price = ?, default_selling_price = ?, stock_quantity = ?,
                    unit = ?, tax_percentage = ?, original_price = ?,
                    profit_percentage = ?, facebook_link = ?, product_link = ?,
                    updated_at = datetime('now', 'localtime')
                WHERE id = ? AND is_deleted = 0
                """,
                (
                    product.product_name,
                    product.product_code,
                    product.category,
                    product.brand,
                    product.buying_price,
                    product.default_selling_price,
                    product.stock_quantity,
                    product.unit,
                    product.tax_percentage,
                    product.original_price,
                    product.profit_percentage,
                    product.facebook_link,
                    product.product_link,
                    product.id,
                ),
            )
            if cursor.rowcount == 0:
                raise ProductNotFoundError(product.id)
            await self._replace_images(conn, product.id, product.images)

        logger.info("product_updated", product_id=product.id)
        return product

    async def soft_delete(self, product_id: int) -> bool:
        """Flag a product as deleted. Ledger lines keep referencing it."""
        async with self._db.transaction("delete_product") as conn:
            cursor = await conn.execute(
                """
                UPDATE products
                SET is_deleted = 1, updated_at = datetime('now', 'localtime')
                WHERE id = ? AND is_deleted = 0
                """,
                (product_id,),
            )
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info("product_deleted", product_id=product_id)
        return deleted

    async def list_products(self, limit: int = 500, offset: int = 0) -> list[Product]:
        """List non-deleted products with their first image."""
        async with self._db.connection() as conn:
            cursor = await conn.execute(
                """
                SELECT p.*,
                    (SELECT image_path FROM product_images
                     WHERE product_id = p.id ORDER BY id LIMIT 1) AS first_image
                FROM products p
                WHERE p.is_deleted = 0
                ORDER BY p.product_name ASC, p.id ASC
                LIMIT ? OFFSET ?
                """,
                (limit, offset),
            )
            rows = await cursor.fetchall()
            return [
                self._row_to_product(
                    row, [row["first_image"]] if row["first_image"] else []
                )
                for row in rows
            ]

    async def get_images(self, product_id: int) -> list[str]:
        """Get image paths of a product."""
        async with self._db.connection() as conn:
            cursor = await conn.execute(
                "SELECT image_path FROM product_images WHERE product_id = ? ORDER BY id",
                (product_id,),
            )
            return [row["image_path"] for row in await cursor.fetchall()]

    @staticmethod
    async def _replace_images(
        conn: aiosqlite.Connection, product_id: int, images: list[str]
    ) -> None:
        await conn.execute("DELETE FROM product_images WHERE product_id = ?", (product_id,))
        for image_path in images:
            await conn.execute(
                "INSERT INTO product_images (product_id, image_path) VALUES (?, ?)",
                (product_id, image_path),
            )

    @staticmethod
    def _row_to_product(row: aiosqlite.Row, images: list[str]) -> Product:
        """Convert database row to Product entity."""
        return Product(
            id=row["id"],
            product_name=row["product_name"],
            product_code=row["product_code"],
            category=row["category"],
            brand=row["brand"],
            buying_price=row["buying_price"],
            default_selling_price=row["default_selling_price"],
            stock_quantity=row["stock_quantity"],
            unit=row["unit"],
            tax_percentage=row["tax_percentage"],
            original_price=row["original_price"],
            profit_percentage=row["profit_percentage"],
            facebook_link=row["facebook_link"],
            product_link=row["product_link"],
            is_deleted=bool(row["is_deleted"]),
            images=images,
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )
