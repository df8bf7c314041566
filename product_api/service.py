import uuid
from typing import Optional, Dict, Any, List

from pydantic import ValidationError

from .core import ProductIn, PRODUCT_INVALID_MSG, _make_product_dict
from .database import ProductStore
from .errors import invalid, not_found, unauthorized
from .log import get_logger

logger = get_logger(__name__)

# Logic behind each product endpoint. Routes live in main.py.


def authenticate(provided_key: Optional[str], expected_key: str) -> None:
    if not provided_key or provided_key != expected_key:
        logger.warning("rejected request with %s API key", "missing" if not provided_key else "invalid")
        raise unauthorized()


def parse_product(data: Any) -> ProductIn:
    try:
        return ProductIn.model_validate(data)
    except ValidationError as e:
        logger.info("invalid product payload: %d error(s)", e.error_count())
        raise invalid(PRODUCT_INVALID_MSG)


def list_products_logic(store: ProductStore, category: Optional[str] = None, page: int = 1, limit: int = 10):
    filtered = store.snapshot()
    if category:
        filtered = [p for p in filtered if p["category"] == category]

    # page and limit are not bounds-checked
    start = (page - 1) * limit
    end = start + limit
    return {
        "total": len(filtered),
        "page": page,
        "limit": limit,
        "data": filtered[start:end],
    }


def get_product_logic(store: ProductStore, product_id: str) -> Dict[str, Any]:
    p = store.find(product_id)
    if p is None:
        raise not_found()
    return p


def search_product_logic(store: ProductStore, name: str) -> List[Dict[str, Any]]:
    term = name.lower()
    return [p for p in store.snapshot() if term in p["name"].lower()]


def stats_logic(store: ProductStore) -> Dict[str, int]:
    stats: Dict[str, int] = {}
    for p in store.snapshot():
        stats[p["category"]] = stats.get(p["category"], 0) + 1
    return stats


async def create_product_logic(store: ProductStore, payload: ProductIn) -> Dict[str, Any]:
    pid = str(uuid.uuid4())
    async with store.lock:
        product = store.append(_make_product_dict(pid, payload))
    logger.info("created product %s (%s)", pid, payload.name)
    return product


async def update_product_logic(store: ProductStore, product_id: str, payload: ProductIn) -> Dict[str, Any]:
    fields = _make_product_dict(product_id, payload)
    del fields["id"]
    async with store.lock:
        idx = store.index_of(product_id)
        if idx == -1:
            raise not_found()
        product = store.replace_fields(idx, fields)
    logger.info("updated product %s", product_id)
    return product


async def delete_product_logic(store: ProductStore, product_id: str) -> Dict[str, Any]:
    async with store.lock:
        idx = store.index_of(product_id)
        if idx == -1:
            raise not_found()
        deleted = store.splice(idx)
    logger.info("deleted product %s", product_id)
    return {"message": "Product deleted", "deleted": deleted}
