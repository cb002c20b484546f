import threading
from typing import Iterable, List, Optional

from product_api.models.product import Product


SEED_PRODUCTS = [
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


def seed_products() -> List[Product]:
    return [Product.model_validate(item) for item in SEED_PRODUCTS]


class ProductStore:
    """
    In-memory product collection kept in insertion order.

    One instance is owned by each application. Every method holds the store
    lock for its whole duration, so callers see each operation as atomic.
    """

    def __init__(self, products: Optional[Iterable[Product]] = None):
        self._lock = threading.RLock()
        self._products: List[Product] = list(products) if products is not None else seed_products()

    def __len__(self) -> int:
        with self._lock:
            return len(self._products)

    def all(self) -> List[Product]:
        """Snapshot of every product, in insertion order."""
        with self._lock:
            return list(self._products)

    def get(self, product_id: str) -> Optional[Product]:
        with self._lock:
            index = self._index_of(product_id)
            return None if index is None else self._products[index]

    def append(self, product: Product) -> Product:
        with self._lock:
            self._products.append(product)
            return product

    def replace(self, product: Product) -> Optional[Product]:
        """Swap the product with the same id in place; None if there is none."""
        with self._lock:
            index = self._index_of(product.id)
            if index is None:
                return None
            self._products[index] = product
            return product

    def remove(self, product_id: str) -> Optional[Product]:
        with self._lock:
            index = self._index_of(product_id)
            if index is None:
                return None
            return self._products.pop(index)

    def reset(self, products: Optional[Iterable[Product]] = None) -> None:
        """Drop every product and reload the given set, or the seed set."""
        with self._lock:
            self._products = list(products) if products is not None else seed_products()

    def _index_of(self, product_id: str) -> Optional[int]:
        for index, product in enumerate(self._products):
            if product.id == product_id:
                return index
        return None
