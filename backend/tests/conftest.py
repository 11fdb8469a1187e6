from collections.abc import Generator

import pytest

from shopcart.core import metrics


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def _reset_metrics() -> Generator[None, None, None]:
    # Counters are process-global and would leak between tests otherwise.
    metrics.reset()
    yield
    metrics.reset()
