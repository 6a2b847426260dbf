import logging
from typing import List

from ..core.exceptions import NoProductsFoundError
from ..models.product import Product, ProductRequest, ProductUpdateRequest
from ..repositories.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class ProductService:
    def __init__(self, repository: ProductRepository) -> None:
        self._repository = repository

    def get_all(self) -> List[Product]:
        return self._repository.get_all()

    def get_by_id(self, product_id: int) -> Product:
        return self._repository.get_by_id(product_id)

    def get_by_price_gt(self, price: float) -> List[Product]:
        """Products priced strictly above ``price``; an empty match is an error here."""
        products = self._repository.get_by_price_gt(price)
        if not products:
            raise NoProductsFoundError()
        return products

    def create(self, request: ProductRequest) -> Product:
        # id is a placeholder; the repository assigns the real one
        return self._repository.create(Product(id=0, **request.model_dump()))

    def update(self, product_id: int, data: ProductUpdateRequest) -> Product:
        """
        Merge ``data`` into the stored product and save it.

        Empty strings and non-positive numbers leave the stored value alone.
        is_published cannot tell "unset" from False, so it is always applied.
        """
        product = self._repository.get_by_id(product_id)

        changes = {"is_published": data.is_published}
        if data.name:
            changes["name"] = data.name
        if data.quantity is not None and data.quantity > 0:
            changes["quantity"] = data.quantity
        if data.code_value:
            changes["code_value"] = data.code_value
        if data.expiration:
            changes["expiration"] = data.expiration
        if data.price is not None and data.price > 0:
            changes["price"] = data.price

        logger.debug("Merging fields %s into product %d", sorted(changes), product_id)
        return self._repository.update(product_id, product.model_copy(update=changes))

    def delete(self, product_id: int) -> None:
        self._repository.delete(product_id)
