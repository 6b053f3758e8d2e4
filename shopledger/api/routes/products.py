"""Product catalog endpoints."""

from fastapi import APIRouter, Depends, status

from shopledger.api.dependencies import get_catalog_store, get_reports
from shopledger.application.dto.requests import ProductRequest
from shopledger.application.dto.responses import (
    CreatedResponse,
    ErrorResponse,
    ProductResponse,
)
from shopledger.core.entities.product import Product
from shopledger.core.entities.report import PurchaseHistoryEntry, StockMovement
from shopledger.core.exceptions import ProductNotFoundError
from shopledger.infrastructure.storage.sqlite import SQLiteProductStore, SQLiteReportStore

router = APIRouter(prefix="/api/products", tags=["products"])


def _to_response(product: Product) -> ProductResponse:
    return ProductResponse(
        id=product.id,  # type: ignore[arg-type]
        product_name=product.product_name,
        product_code=product.product_code,
        category=product.category,
        brand=product.brand,
        buying_price=product.buying_price,
        default_selling_price=product.default_selling_price,
        stock_quantity=product.stock_quantity,
        unit=product.unit,
        tax_percentage=product.tax_percentage,
        original_price=product.original_price,
        profit_percentage=product.profit_percentage,
        facebook_link=product.facebook_link,
        product_link=product.product_link,
        stock_value=product.stock_value,
        images=product.images,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


@router.get("", response_model=list[ProductResponse])
async def list_products(
    limit: int = 500,
    offset: int = 0,
    store: SQLiteProductStore = Depends(get_catalog_store),
) -> list[ProductResponse]:
    """List non-deleted products with their first image."""
    products = await store.list_products(limit=limit, offset=offset)
    return [_to_response(p) for p in products]


@router.post(
    "",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
)
async def create_product(
    request: ProductRequest,
    store: SQLiteProductStore = Depends(get_catalog_store),
) -> CreatedResponse:
    """Create a product."""
    product = await store.create(Product(**request.model_dump()))
    return CreatedResponse(id=product.id)  # type: ignore[arg-type]


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_product(
    product_id: int,
    store: SQLiteProductStore = Depends(get_catalog_store),
) -> ProductResponse:
    """Get a product with all its images."""
    product = await store.get(product_id)
    if product is None:
        raise ProductNotFoundError(product_id)
    return _to_response(product)


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def update_product(
    product_id: int,
    request: ProductRequest,
    store: SQLiteProductStore = Depends(get_catalog_store),
) -> ProductResponse:
    """Update product fields and replace its images."""
    product = await store.update(Product(id=product_id, **request.model_dump()))
    return _to_response(product)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_product(
    product_id: int,
    store: SQLiteProductStore = Depends(get_catalog_store),
) -> None:
    """Soft-delete a product."""
    if not await store.soft_delete(product_id):
        raise ProductNotFoundError(product_id)


@router.get("/{product_id}/images", response_model=list[str])
async def get_product_images(
    product_id: int,
    store: SQLiteProductStore = Depends(get_catalog_store),
) -> list[str]:
    """List image paths of a product."""
    return await store.get_images(product_id)


@router.get("/{product_id}/stock-history", response_model=list[StockMovement])
async def get_stock_history(
    product_id: int,
    reports: SQLiteReportStore = Depends(get_reports),
) -> list[StockMovement]:
    """Merged IN/OUT movements of a product, newest first."""
    return await reports.stock_movements(product_id)


@router.get("/{product_id}/purchase-history", response_model=list[PurchaseHistoryEntry])
async def get_purchase_history(
    product_id: int,
    reports: SQLiteReportStore = Depends(get_reports),
) -> list[PurchaseHistoryEntry]:
    """Purchase lines of a product, newest first."""
    return await reports.purchase_history(product_id)
