from fastapi import APIRouter, Depends, Query, Response, status

from shopcart.api.deps import get_product_store
from shopcart.schemas.catalog import ProductRead
from shopcart.services import catalog as catalog_service
from shopcart.stores import ProductStore

router = APIRouter(prefix="/products", tags=["catalog"])


@router.get("", response_model=list[ProductRead])
async def list_active_products(products: ProductStore = Depends(get_product_store)) -> list[ProductRead]:
    rows = await catalog_service.list_active_products(products)
    return [ProductRead.model_validate(row) for row in rows]


@router.get("/{product_id}", response_model=ProductRead)
async def get_product(product_id: str, products: ProductStore = Depends(get_product_store)) -> ProductRead:
    product = await catalog_service.get_product(products, product_id)
    return ProductRead.model_validate(product)


@router.put("/{product_id}/stock", status_code=status.HTTP_200_OK)
async def update_stock(
    product_id: str,
    quantity: int = Query(),
    products: ProductStore = Depends(get_product_store),
) -> Response:
    await catalog_service.update_stock(products, product_id, quantity)
    return Response(status_code=status.HTTP_200_OK)


@router.put("/{product_id}/active", status_code=status.HTTP_200_OK)
async def set_product_active(
    product_id: str,
    active: bool = Query(),
    products: ProductStore = Depends(get_product_store),
) -> Response:
    await catalog_service.set_product_active(products, product_id, active)
    return Response(status_code=status.HTTP_200_OK)


@router.get("/{product_id}/availability", response_model=bool)
async def check_availability(
    product_id: str,
    quantity: int = Query(),
    products: ProductStore = Depends(get_product_store),
) -> bool:
    return await catalog_service.is_product_available(products, product_id, quantity)
