import os
import threading

from .base import InventoryStore
from .memory import MemoryInventoryStore, seed_sample_catalog


_STORE: InventoryStore | None = None
_STORE_LOCK = threading.Lock()


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def get_inventory_store() -> InventoryStore:
    global _STORE
    with _STORE_LOCK:
        if _STORE is None:
            store = MemoryInventoryStore()
            if _env_flag("SEED_SAMPLE_CATALOG", True):
                seed_sample_catalog(store)
            _STORE = store
    return _STORE
