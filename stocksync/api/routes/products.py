"""Product catalogue endpoints."""

from fastapi import APIRouter, Depends, status

from stocksync.api.dependencies import get_notifier, get_save_product_use_case, get_services
from stocksync.application.dto.requests import SaveProductRequest, UpdateProductRequest
from stocksync.application.dto.responses import (
    ErrorResponse,
    ProductListResponse,
    ProductResponse,
    SaveProductResponse,
)
from stocksync.application.notifications import NotificationCollector
from stocksync.application.services import StockServices
from stocksync.application.use_cases import SaveProductUseCase
from stocksync.core.exceptions import ProductNotFoundError

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("", response_model=ProductListResponse)
async def list_products(
    services: StockServices = Depends(get_services),
) -> ProductListResponse:
    """List cached products."""
    products = await services.products.list_all()
    return ProductListResponse(
        products=[ProductResponse.from_entity(p) for p in products],
        total=len(products),
    )


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_product(
    product_id: str,
    services: StockServices = Depends(get_services),
) -> ProductResponse:
    """Get one product by code."""
    product = await services.products.get(product_id)
    if product is None:
        raise ProductNotFoundError(product_id)
    return ProductResponse.from_entity(product)


@router.post(
    "",
    response_model=SaveProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def create_product(
    request: SaveProductRequest,
    use_case: SaveProductUseCase = Depends(get_save_product_use_case),
    notifier: NotificationCollector = Depends(get_notifier),
) -> SaveProductResponse:
    """Register a product (or update it when is_new is false)."""
    product = await use_case.execute(request)
    return SaveProductResponse(
        product=ProductResponse.from_entity(product),
        notifications=notifier.notifications,
    )


@router.put(
    "/{product_id}",
    response_model=SaveProductResponse,
    responses={400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def update_product(
    product_id: str,
    request: UpdateProductRequest,
    use_case: SaveProductUseCase = Depends(get_save_product_use_case),
    notifier: NotificationCollector = Depends(get_notifier),
) -> SaveProductResponse:
    """Update name and stock of an existing product."""
    product = await use_case.execute(
        SaveProductRequest(id=product_id, name=request.name, qty=request.qty, is_new=False)
    )
    return SaveProductResponse(
        product=ProductResponse.from_entity(product),
        notifications=notifier.notifications,
    )
