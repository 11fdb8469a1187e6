from __future__ import annotations

import logging
from decimal import Decimal, ROUND_HALF_UP

from shopcart.core import metrics
from shopcart.core.config import settings
from shopcart.core.errors import ErrorKind, ShopError, require_id
from shopcart.models.cart import MAX_LINE_QUANTITY, Cart, CartItem
from shopcart.schemas.cart import CartItemRead, CartRead
from shopcart.services import catalog as catalog_service
from shopcart.stores.base import CartStore, ProductStore, StoreConflictError, StoreError

logger = logging.getLogger("shopcart.cart")

_CENT = Decimal("0.01")


def _to_money(value: Decimal | int | float) -> Decimal:
    dec = value if isinstance(value, Decimal) else Decimal(str(value))
    return dec.quantize(_CENT, rounding=ROUND_HALF_UP)


async def _save_with_retry(carts: CartStore, cart: Cart, user_id: str) -> Cart:
    """Persist ``cart``; on a version conflict reload and re-save the stored copy.

    The retry does not re-apply the caller's mutation. Whatever the reload
    returns is saved as-is, so the last writer wins.
    """
    retries_left = settings.cart_save_retries
    retried = False
    while True:
        try:
            return await carts.save(cart)
        except StoreConflictError as exc:
            metrics.record(metrics.CART_SAVE_CONFLICTS)
            if retries_left <= 0:
                raise ShopError(
                    ErrorKind.persistence_failure, "Failed to save cart after concurrent modification", exc
                ) from exc
            retries_left -= 1
            logger.warning("cart_save_conflict", extra={"user_id": user_id})
            reloaded = await carts.find_by_user_id(user_id)
            if reloaded is None:
                raise ShopError(ErrorKind.cart_not_found, "Cart not found on retry") from exc
            metrics.record(metrics.CART_SAVE_RETRIES)
            cart = reloaded
            retried = True
        except StoreError as exc:
            if retried:
                raise ShopError(ErrorKind.service_failure, "Failed to save cart on retry", exc) from exc
            raise ShopError(ErrorKind.persistence_failure, "Failed to save cart", exc) from exc


async def add_item_to_cart(
    carts: CartStore,
    products: ProductStore,
    user_id: str | None,
    product_id: str | None,
    quantity: int,
) -> Cart:
    user_id = require_id(user_id, "User ID")
    product_id = require_id(product_id, "Product ID")
    if quantity <= 0:
        raise ShopError(ErrorKind.invalid_quantity, "Quantity must be greater than zero")
    if quantity > MAX_LINE_QUANTITY:
        raise ShopError(ErrorKind.invalid_quantity, "Quantity exceeds maximum allowed value")

    try:
        product = await catalog_service.get_product(products, product_id)
        if not product.is_active:
            raise ShopError(ErrorKind.product_not_available, "Product is not available")
        if product.stock_quantity < quantity:
            raise ShopError(ErrorKind.out_of_stock, "Product is out of stock")

        cart = await carts.find_by_user_id(user_id)
        if cart is None:
            cart = Cart(user_id=user_id)

        existing = cart.find_item(product_id)
        if existing is not None:
            new_quantity = existing.quantity + quantity
            if new_quantity > MAX_LINE_QUANTITY:
                raise ShopError(ErrorKind.arithmetic_overflow, "Quantity would exceed maximum allowed value")
            existing.quantity = new_quantity
        else:
            cart.add_item(CartItem(product_id=product_id, quantity=quantity, unit_price_at_add=product.price))

        cart = await _save_with_retry(carts, cart, user_id)
    except ShopError:
        raise
    except Exception as exc:
        logger.exception("cart_add_failed", extra={"user_id": user_id, "product_id": product_id})
        raise ShopError(ErrorKind.service_failure, "Failed to add item to cart", exc) from exc

    metrics.record(metrics.CART_ITEMS_ADDED)
    logger.info("cart_item_added", extra={"user_id": user_id, "product_id": product_id, "quantity": quantity})
    return cart


async def get_cart(carts: CartStore, user_id: str | None) -> Cart:
    user_id = require_id(user_id, "User ID")
    cart = await carts.find_by_user_id(user_id)
    if cart is None:
        raise ShopError(ErrorKind.cart_not_found, f"Cart not found for user: {user_id}")
    return cart


async def remove_item_from_cart(carts: CartStore, user_id: str | None, product_id: str | None) -> Cart:
    user_id = require_id(user_id, "User ID")
    product_id = require_id(product_id, "Product ID")

    cart = await get_cart(carts, user_id)
    removed = cart.remove_items(product_id)
    try:
        await carts.save(cart)
    except StoreError as exc:
        raise ShopError(ErrorKind.persistence_failure, "Failed to remove item from cart", exc) from exc

    if removed:
        metrics.record(metrics.CART_ITEMS_REMOVED)
    logger.info("cart_item_removed", extra={"user_id": user_id, "product_id": product_id, "removed": removed})
    return cart


def serialize_cart(cart: Cart) -> CartRead:
    items = [
        CartItemRead(
            product_id=item.product_id,
            quantity=item.quantity,
            unit_price_at_add=_to_money(item.unit_price_at_add),
            line_total=_to_money(_to_money(item.unit_price_at_add) * item.quantity),
        )
        for item in cart.items
    ]
    subtotal = _to_money(sum((item.line_total for item in items), Decimal("0")))
    return CartRead(user_id=cart.user_id, items=items, subtotal=subtotal)
