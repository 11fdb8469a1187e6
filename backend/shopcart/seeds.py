import json
import logging
from pathlib import Path

from pydantic import TypeAdapter
from sqlalchemy.ext.asyncio import AsyncSession

from shopcart.schemas.catalog import ProductSeed
from shopcart.services import catalog as catalog_service
from shopcart.stores import SqlProductStore

logger = logging.getLogger("shopcart.seeds")

_PRODUCT_LIST = TypeAdapter(list[ProductSeed])


def load_products_file(path: Path) -> list[ProductSeed]:
    payload = json.loads(path.read_text(encoding="utf-8"))
    return _PRODUCT_LIST.validate_python(payload)


async def seed_products(session: AsyncSession, seeds: list[ProductSeed]) -> tuple[int, int]:
    """Insert new products and overwrite existing ones; returns (created, updated)."""
    store = SqlProductStore(session)
    created = updated = 0
    for seed in seeds:
        product = await store.get(seed.id)
        if product is None:
            await catalog_service.create_product(
                store,
                product_id=seed.id,
                name=seed.name,
                price=seed.price,
                stock_quantity=seed.stock_quantity,
                active=seed.active,
            )
            created += 1
            continue
        product.name = seed.name
        product.price = seed.price
        product.stock_quantity = seed.stock_quantity
        product.is_active = seed.active
        await store.save(product)
        updated += 1
    logger.info("products_seeded", extra={"products_created": created, "products_updated": updated})
    return created, updated
