from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from shopcart.db.session import get_session
from shopcart.stores import SqlCartStore, SqlProductStore


def get_product_store(session: AsyncSession = Depends(get_session)) -> SqlProductStore:
    return SqlProductStore(session)


def get_cart_store(session: AsyncSession = Depends(get_session)) -> SqlCartStore:
    return SqlCartStore(session)
