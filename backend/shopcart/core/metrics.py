from collections import Counter
from threading import Lock
from typing import Dict, Counter as CounterType

CART_ITEMS_ADDED = "cart_items_added"
CART_ITEMS_REMOVED = "cart_items_removed"
CART_SAVE_CONFLICTS = "cart_save_conflicts"
CART_SAVE_RETRIES = "cart_save_retries"
STOCK_UPDATES = "stock_updates"

_metrics: CounterType[str] = Counter()
_lock = Lock()


def record(name: str, amount: int = 1) -> None:
    with _lock:
        _metrics[name] += amount


def snapshot() -> Dict[str, int]:
    with _lock:
        return dict(_metrics)


def reset() -> None:
    with _lock:
        _metrics.clear()
