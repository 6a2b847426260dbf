"""JSON-file-backed persistence for the product collection.

Every operation reads the whole file and every write rewrites it; there is
no incremental update.
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import List

from pydantic import TypeAdapter, ValidationError

from ..core.exceptions import ProductNotFoundError, StoreError
from ..models.product import Product

logger = logging.getLogger(__name__)

_PRODUCT_LIST = TypeAdapter(List[Product])


def next_product_id(products: List[Product]) -> int:
    """Return the identifier for a product appended to ``products``."""
    return max((p.id for p in products), default=0) + 1


class JsonStore:
    def __init__(self, file_path: str | Path) -> None:
        self._file_path = Path(file_path)
        self._lock = threading.Lock()

    @property
    def file_path(self) -> Path:
        return self._file_path

    def load(self) -> List[Product]:
        try:
            with self._file_path.open("r", encoding="utf-8") as f:
                payload = json.load(f)
        except FileNotFoundError as exc:
            raise StoreError(f"product file not found: {self._file_path}") from exc
        except OSError as exc:
            raise StoreError(f"unable to read product file {self._file_path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise StoreError(f"invalid JSON in product file {self._file_path}: {exc}") from exc

        try:
            return _PRODUCT_LIST.validate_python(payload)
        except ValidationError as exc:
            raise StoreError(f"invalid product records in {self._file_path}") from exc

    def save(self, products: List[Product]) -> None:
        data = _PRODUCT_LIST.dump_json(products, indent=2)
        try:
            self._file_path.write_bytes(data + b"\n")
        except OSError as exc:
            raise StoreError(f"unable to write product file {self._file_path}: {exc}") from exc
        logger.debug("Saved %d products to %s", len(products), self._file_path)

    def get_all(self) -> List[Product]:
        return self.load()

    def get_one(self, product_id: int) -> Product:
        product = next((p for p in self.load() if p.id == product_id), None)
        if product is None:
            raise ProductNotFoundError()
        return product

    def add_one(self, product: Product) -> Product:
        with self._lock:
            products = self.load()
            stored = product.model_copy(update={"id": next_product_id(products)})
            products.append(stored)
            self.save(products)
        return stored

    def update_one(self, product: Product) -> None:
        with self._lock:
            products = self.load()
            for index, current in enumerate(products):
                if current.id == product.id:
                    products[index] = product
                    self.save(products)
                    return
        raise ProductNotFoundError()

    def delete_one(self, product_id: int) -> None:
        with self._lock:
            products = self.load()
            for index, current in enumerate(products):
                if current.id == product_id:
                    del products[index]
                    self.save(products)
                    return
        raise ProductNotFoundError()
