import asyncio
import copy
from typing import Dict, Any, List, Optional

from .log import get_logger

logger = get_logger(__name__)

# Loaded into every new store.
SEED_PRODUCTS: List[Dict[str, Any]] = [
    {
        "id": "1",
        "name": "Laptop",
        "description": "High-performance laptop with 16GB RAM",
        "price": 1200,
        "category": "electronics",
        "inStock": True,
    },
    {
        "id": "2",
        "name": "Smartphone",
        "description": "Latest model with 128GB storage",
        "price": 800,
        "category": "electronics",
        "inStock": True,
    },
    {
        "id": "3",
        "name": "Coffee Maker",
        "description": "Programmable coffee maker with timer",
        "price": 50,
        "category": "kitchen",
        "inStock": False,
    },
]


class ProductStore:
    """Ordered in-memory product collection.

    Writers must hold ``lock``. Readers never await, so on the event loop
    they cannot interleave with a write in progress; they get copies.
    """

    def __init__(self, seed: Optional[List[Dict[str, Any]]] = None):
        self._products: List[Dict[str, Any]] = copy.deepcopy(SEED_PRODUCTS if seed is None else seed)
        self.lock = asyncio.Lock()
        logger.debug("store initialised with %d products", len(self._products))

    def __len__(self) -> int:
        return len(self._products)

    def snapshot(self) -> List[Dict[str, Any]]:
        return [dict(p) for p in self._products]

    def find(self, product_id: str) -> Optional[Dict[str, Any]]:
        idx = self.index_of(product_id)
        if idx == -1:
            return None
        return dict(self._products[idx])

    def index_of(self, product_id: str) -> int:
        for i, p in enumerate(self._products):
            if p["id"] == product_id:
                return i
        return -1

    # Mutators below expect the caller to hold self.lock.

    def append(self, product: Dict[str, Any]) -> Dict[str, Any]:
        self._products.append(dict(product))
        return dict(product)

    def replace_fields(self, index: int, fields: Dict[str, Any]) -> Dict[str, Any]:
        self._products[index].update(fields)
        return dict(self._products[index])

    def splice(self, index: int) -> List[Dict[str, Any]]:
        """Remove one record, returning the removed records as a list."""
        return [self._products.pop(index)]
