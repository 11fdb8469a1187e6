from __future__ import annotations

import logging
from decimal import Decimal

from shopcart.core import metrics
from shopcart.core.errors import ErrorKind, ShopError, invalid_argument, require_id
from shopcart.models.cart import MAX_LINE_QUANTITY
from shopcart.models.catalog import Product
from shopcart.stores.base import ProductStore, StoreError

logger = logging.getLogger("shopcart.catalog")


def is_available(product: Product, quantity: int) -> bool:
    """True when the product is active and has at least ``quantity`` units in stock."""
    if quantity <= 0:
        raise invalid_argument("Quantity must be greater than zero")
    if quantity > MAX_LINE_QUANTITY:
        raise invalid_argument("Quantity exceeds maximum allowed value")
    return bool(product.is_active) and product.stock_quantity >= quantity


async def get_product(products: ProductStore, product_id: str | None) -> Product:
    product_id = require_id(product_id, "Product ID")
    product = await products.get(product_id)
    if product is None:
        raise ShopError(ErrorKind.product_not_found, f"Product not found with ID: {product_id}")
    return product


async def list_active_products(products: ProductStore) -> list[Product]:
    return await products.list_active()


async def _persist(products: ProductStore, product: Product, action: str) -> None:
    try:
        await products.save(product)
    except StoreError as exc:
        raise ShopError(ErrorKind.persistence_failure, f"Failed to {action}", exc) from exc


async def update_stock(products: ProductStore, product_id: str | None, quantity: int) -> Product:
    if quantity < 0:
        raise invalid_argument("Stock quantity cannot be negative")
    if quantity > MAX_LINE_QUANTITY:
        raise invalid_argument("Stock quantity exceeds maximum allowed value")
    product = await get_product(products, product_id)
    previous = product.stock_quantity
    product.stock_quantity = quantity
    await _persist(products, product, "update stock")
    metrics.record(metrics.STOCK_UPDATES)
    logger.info(
        "stock_updated",
        extra={"product_id": product_id, "previous": previous, "stock_quantity": quantity},
    )
    return product


async def set_product_active(products: ProductStore, product_id: str | None, active: bool) -> Product:
    product = await get_product(products, product_id)
    product.is_active = active
    await _persist(products, product, "update product status")
    logger.info("product_active_changed", extra={"product_id": product_id, "active": active})
    return product


async def is_product_available(products: ProductStore, product_id: str | None, quantity: int) -> bool:
    if quantity <= 0:
        raise invalid_argument("Quantity must be greater than zero")
    if quantity > MAX_LINE_QUANTITY:
        raise invalid_argument("Quantity exceeds maximum allowed value")
    product = await get_product(products, product_id)
    return is_available(product, quantity)


async def create_product(
    products: ProductStore,
    *,
    product_id: str | None,
    name: str,
    price: Decimal,
    stock_quantity: int = 0,
    active: bool = True,
) -> Product:
    product_id = require_id(product_id, "Product ID")
    if price < 0:
        raise invalid_argument("Price cannot be negative")
    if stock_quantity < 0:
        raise invalid_argument("Stock quantity cannot be negative")
    if stock_quantity > MAX_LINE_QUANTITY:
        raise invalid_argument("Stock quantity exceeds maximum allowed value")
    product = Product(
        id=product_id,
        name=name,
        price=price,
        stock_quantity=stock_quantity,
        is_active=active,
    )
    try:
        await products.add(product)
    except StoreError as exc:
        raise ShopError(ErrorKind.persistence_failure, f"Failed to create product {product_id}", exc) from exc
    return product
