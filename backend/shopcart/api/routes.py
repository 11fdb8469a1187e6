from fastapi import APIRouter

from shopcart.api import cart, products
from shopcart.core.metrics import snapshot as metrics_snapshot

api_router = APIRouter()

api_router.include_router(cart.router)
api_router.include_router(products.router)


@api_router.get("/health", tags=["health"])
def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@api_router.get("/health/ready", tags=["health"])
def readiness() -> dict[str, str]:
    return {"status": "ready"}


@api_router.get("/metrics", tags=["metrics"])
def metrics() -> dict[str, int]:
    return metrics_snapshot()
