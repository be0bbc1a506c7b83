from grocerycheck.adapters.base import GroceryStoreService
from grocerycheck.adapters.kroger import KrogerAdapter

__all__ = [
    "GroceryStoreService",
    "KrogerAdapter",
]
