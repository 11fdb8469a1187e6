from fastapi import APIRouter, Depends, Query, Response, status

from shopcart.api.deps import get_cart_store, get_product_store
from shopcart.schemas.cart import CartRead
from shopcart.services import cart as cart_service
from shopcart.stores import CartStore, ProductStore

router = APIRouter(prefix="/cart", tags=["cart"])


@router.post("/add", status_code=status.HTTP_200_OK)
async def add_item_to_cart(
    user_id: str = Query(alias="userId"),
    product_id: str = Query(alias="productId"),
    quantity: int = Query(),
    carts: CartStore = Depends(get_cart_store),
    products: ProductStore = Depends(get_product_store),
) -> Response:
    await cart_service.add_item_to_cart(carts, products, user_id, product_id, quantity)
    return Response(status_code=status.HTTP_200_OK)


@router.get("/{user_id}", response_model=CartRead)
async def get_cart(user_id: str, carts: CartStore = Depends(get_cart_store)) -> CartRead:
    cart = await cart_service.get_cart(carts, user_id)
    return cart_service.serialize_cart(cart)


@router.delete("/{user_id}/items/{product_id}", status_code=status.HTTP_200_OK)
async def remove_item_from_cart(
    user_id: str,
    product_id: str,
    carts: CartStore = Depends(get_cart_store),
) -> Response:
    await cart_service.remove_item_from_cart(carts, user_id, product_id)
    return Response(status_code=status.HTTP_200_OK)
