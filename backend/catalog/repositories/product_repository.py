from __future__ import annotations

import logging
import threading
from typing import Iterable, List, Optional

from ..core.exceptions import InvalidCodeError, ProductNotFoundError
from ..models.product import Product
from ..store.json_store import JsonStore, next_product_id

logger = logging.getLogger(__name__)


class ProductRepository:
    """In-memory, ordered product collection.

    All reads and writes hold the same lock, so handlers running in the
    server threadpool see a consistent list. When a store is given, each
    successful mutation rewrites the whole collection through it.
    """

    def __init__(self, products: Iterable[Product], store: Optional[JsonStore] = None) -> None:
        self._products: List[Product] = list(products)
        self._store = store
        self._lock = threading.Lock()

    def get_all(self) -> List[Product]:
        with self._lock:
            return list(self._products)

    def get_by_id(self, product_id: int) -> Product:
        with self._lock:
            return self._products[self._index_of(product_id)]

    def get_by_price_gt(self, price: float) -> List[Product]:
        with self._lock:
            return [p for p in self._products if p.price > price]

    def create(self, product: Product) -> Product:
        with self._lock:
            if self._code_in_use(product.code_value):
                raise InvalidCodeError()
            stored = product.model_copy(update={"id": next_product_id(self._products)})
            self._commit([*self._products, stored])
        logger.info("Created product %d (%s)", stored.id, stored.code_value)
        return stored

    def update(self, product_id: int, product: Product) -> Product:
        with self._lock:
            index = self._index_of(product_id)
            current = self._products[index]
            if product.code_value != current.code_value and self._code_in_use(product.code_value):
                raise InvalidCodeError()
            stored = product.model_copy(update={"id": product_id})
            products = list(self._products)
            products[index] = stored
            self._commit(products)
        logger.info("Updated product %d", product_id)
        return stored

    def delete(self, product_id: int) -> None:
        with self._lock:
            products = list(self._products)
            del products[self._index_of(product_id)]
            self._commit(products)
        logger.info("Deleted product %d", product_id)

    # Callers must hold self._lock

    def _index_of(self, product_id: int) -> int:
        for index, product in enumerate(self._products):
            if product.id == product_id:
                return index
        raise ProductNotFoundError()

    def _code_in_use(self, code_value: str) -> bool:
        return any(p.code_value == code_value for p in self._products)

    def _commit(self, products: List[Product]) -> None:
        # The file is written first; a failed save leaves memory untouched
        if self._store is not None:
            self._store.save(products)
        self._products = products
