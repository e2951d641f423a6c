import threading
from typing import Any, Dict, List, Optional

from .errors import NotFoundError, OperationalError
from .models import Product

# This file holds the in-memory product store and its query operations.

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


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class ProductStore:
    """Ordered in-memory collection of products keyed by string id.

    Every operation runs under one re-entrant lock, so a mutation is never
    observed half-applied even when handlers run on worker threads.
    """

    def __init__(self, products: Optional[List[Dict[str, Any]]] = None) -> None:
        self._lock = threading.RLock()
        self._products: List[Product] = []
        self._initial = [dict(p) for p in (products or [])]
        self.reset()

    @classmethod
    def seeded(cls) -> "ProductStore":
        return cls(SEED_PRODUCTS)

    def reset(self) -> None:
        """Restore the records the store was built with."""
        with self._lock:
            self._products = [Product.model_validate(p) for p in self._initial]

    def __len__(self) -> int:
        with self._lock:
            return len(self._products)

    def _find(self, product_id: str) -> Optional[Product]:
        for product in self._products:
            if product.id == product_id:
                return product
        return None

    # ---------------------------
    # Queries
    # ---------------------------
    def list(self, category: Optional[str] = None) -> List[Product]:
        with self._lock:
            if not category:
                return list(self._products)
            wanted = category.lower()
            return [p for p in self._products if p.category.lower() == wanted]

    def get(self, product_id: str) -> Product:
        with self._lock:
            product = self._find(product_id)
        if product is None:
            raise NotFoundError("No product found with specified id")
        return product

    def search(self, name: Optional[str]) -> List[Product]:
        if not name:
            raise OperationalError("Name parameter is required.", 400)
        term = name.lower()
        with self._lock:
            return [p for p in self._products if term in p.name.lower()]

    def filter_by_category(self, category: Optional[str]) -> List[Product]:
        if not category:
            raise OperationalError("Category parameter is required.", 400)
        results = self.list(category)
        if not results:
            raise OperationalError("Could not find products in specified category.", 404)
        return results

    def statistics(self) -> Dict[str, int]:
        stats: Dict[str, int] = {}
        with self._lock:
            for product in self._products:
                key = product.category.lower()
                stats[key] = stats.get(key, 0) + 1
        return stats

    def paginate(self, category: Optional[str] = None, page: Any = 1, limit: Any = 10) -> List[Product]:
        """Slice ``[(page-1)*limit, page*limit)`` of the (filtered) list.

        A page or limit that is not a positive integer selects nothing.
        """
        page, limit = _as_int(page), _as_int(limit)
        if page is None or limit is None or page < 1 or limit < 1:
            return []
        results = self.list(category)
        return results[(page - 1) * limit:page * limit]

    # ---------------------------
    # Mutations
    # ---------------------------
    def create(self, payload: Dict[str, Any]) -> Product:
        with self._lock:
            # length + 1, skipping ids still held after deletions
            candidate = len(self._products) + 1
            while self._find(str(candidate)) is not None:
                candidate += 1
            fields = {k: v for k, v in payload.items() if k != "id"}
            product = Product.model_validate({**fields, "id": str(candidate)})
            self._products.append(product)
            return product

    def update(self, product_id: str, partial: Dict[str, Any]) -> Product:
        with self._lock:
            product = self._find(product_id)
            if product is None:
                raise NotFoundError("Could not find the product with the id specified.")
            product.merge(partial)
            return product

    def remove(self, product_id: str) -> Product:
        with self._lock:
            product = self._find(product_id)
            if product is None:
                raise NotFoundError("Could not find item with the specified id.")
            self._products = [p for p in self._products if p.id != product_id]
            return product
