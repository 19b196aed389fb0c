from functools import lru_cache

from perfulandia.inventory.store import StockStore


@lru_cache
def get_stock_store() -> StockStore:
    return StockStore()
