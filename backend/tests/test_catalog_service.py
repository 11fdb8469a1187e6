from decimal import Decimal

import pytest

from fakes import FakeProductStore
from shopcart.core import metrics
from shopcart.core.errors import ErrorKind, ShopError
from shopcart.models.cart import MAX_LINE_QUANTITY
from shopcart.models.catalog import Product
from shopcart.services import catalog as catalog_service
from shopcart.stores.base import StoreError


def _product(product_id: str = "p1", *, stock: int = 5, active: bool = True) -> Product:
    return Product(id=product_id, name=f"Product {product_id}", price=Decimal("4.50"), stock_quantity=stock, is_active=active)


def test_new_product_defaults_to_active() -> None:
    product = Product(id="p9", name="Mug", price=Decimal("3.00"))
    assert product.is_active is True
    assert product.stock_quantity == 0


@pytest.mark.parametrize(
    ("stock", "active", "quantity", "expected"),
    [
        (5, True, 5, True),
        (5, True, 6, False),
        (5, False, 1, False),
        (0, True, 1, False),
    ],
)
def test_is_available(stock: int, active: bool, quantity: int, expected: bool) -> None:
    assert catalog_service.is_available(_product(stock=stock, active=active), quantity) is expected


@pytest.mark.parametrize("quantity", [0, -3, MAX_LINE_QUANTITY + 1])
def test_is_available_requires_positive_quantity(quantity: int) -> None:
    with pytest.raises(ShopError) as excinfo:
        catalog_service.is_available(_product(), quantity)
    assert excinfo.value.kind == ErrorKind.invalid_argument


@pytest.mark.anyio
async def test_get_product_not_found_and_blank_id() -> None:
    store = FakeProductStore(_product())

    assert (await catalog_service.get_product(store, "p1")).id == "p1"
    with pytest.raises(ShopError) as missing:
        await catalog_service.get_product(store, "nope")
    assert missing.value.kind == ErrorKind.product_not_found
    with pytest.raises(ShopError) as blank:
        await catalog_service.get_product(store, "  ")
    assert blank.value.kind == ErrorKind.invalid_argument


@pytest.mark.anyio
async def test_list_active_products_skips_inactive() -> None:
    store = FakeProductStore(_product("a"), _product("b", active=False), _product("c", stock=0))

    rows = await catalog_service.list_active_products(store)

    assert sorted(product.id for product in rows) == ["a", "c"]


@pytest.mark.anyio
async def test_update_stock_overwrites_and_persists() -> None:
    product = _product(stock=5)
    store = FakeProductStore(product)

    await catalog_service.update_stock(store, "p1", 0)

    assert product.stock_quantity == 0
    assert store.saved == [product]
    assert metrics.snapshot()["stock_updates"] == 1


@pytest.mark.anyio
async def test_update_stock_rejects_negative_before_lookup() -> None:
    with pytest.raises(ShopError) as excinfo:
        await catalog_service.update_stock(FakeProductStore(), "missing", -1)
    assert excinfo.value.kind == ErrorKind.invalid_argument


@pytest.mark.anyio
async def test_update_stock_rejects_quantity_above_column_range() -> None:
    product = _product(stock=5)
    store = FakeProductStore(product)

    with pytest.raises(ShopError) as excinfo:
        await catalog_service.update_stock(store, "p1", MAX_LINE_QUANTITY + 1)

    assert excinfo.value.kind == ErrorKind.invalid_argument
    assert product.stock_quantity == 5
    assert store.saved == []


@pytest.mark.anyio
async def test_update_stock_unknown_product() -> None:
    with pytest.raises(ShopError) as excinfo:
        await catalog_service.update_stock(FakeProductStore(), "missing", 3)
    assert excinfo.value.kind == ErrorKind.product_not_found


@pytest.mark.anyio
async def test_update_stock_storage_fault() -> None:
    store = FakeProductStore(_product(), save_error=StoreError("disk full"))
    with pytest.raises(ShopError) as excinfo:
        await catalog_service.update_stock(store, "p1", 3)
    assert excinfo.value.kind == ErrorKind.persistence_failure


@pytest.mark.anyio
async def test_is_product_available() -> None:
    store = FakeProductStore(_product(stock=2))

    assert await catalog_service.is_product_available(store, "p1", 2) is True
    assert await catalog_service.is_product_available(store, "p1", 3) is False
    with pytest.raises(ShopError) as bad_quantity:
        await catalog_service.is_product_available(store, "p1", 0)
    assert bad_quantity.value.kind == ErrorKind.invalid_argument
    with pytest.raises(ShopError) as too_many:
        await catalog_service.is_product_available(store, "p1", MAX_LINE_QUANTITY + 1)
    assert too_many.value.kind == ErrorKind.invalid_argument
    with pytest.raises(ShopError) as missing:
        await catalog_service.is_product_available(store, "p2", 1)
    assert missing.value.kind == ErrorKind.product_not_found


@pytest.mark.anyio
async def test_set_product_active_toggles_availability() -> None:
    product = _product()
    store = FakeProductStore(product)

    await catalog_service.set_product_active(store, "p1", False)

    assert product.is_active is False
    assert await catalog_service.is_product_available(store, "p1", 1) is False


@pytest.mark.anyio
async def test_create_product_validates_price_and_stock() -> None:
    store = FakeProductStore()

    created = await catalog_service.create_product(store, product_id="new", name="New", price=Decimal("1.25"), stock_quantity=4)
    assert store.products["new"] is created
    assert created.is_active is True

    for kwargs in (
        {"price": Decimal("-0.01")},
        {"price": Decimal("1.00"), "stock_quantity": -1},
        {"price": Decimal("1.00"), "stock_quantity": MAX_LINE_QUANTITY + 1},
    ):
        with pytest.raises(ShopError) as excinfo:
            await catalog_service.create_product(store, product_id="bad", name="Bad", **kwargs)
        assert excinfo.value.kind == ErrorKind.invalid_argument
