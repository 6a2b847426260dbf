"""Error kinds raised by the store, repository and service layers.

Routes translate them into HTTP responses; nothing below the API layer
knows about status codes.
"""


class CatalogError(Exception):
    """Base class for catalog failures."""

    message = "catalog error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)

    @property
    def detail(self) -> str:
        return str(self)


class ProductNotFoundError(CatalogError):
    message = "product not found"


class InvalidCodeError(CatalogError):
    """The code value is already used by another product."""

    message = "invalid product code value"


class NoProductsFoundError(CatalogError):
    message = "no products found"


class InvalidExpirationError(CatalogError):
    message = "invalid expiration date format"


class StoreError(CatalogError):
    """The JSON product file could not be read, decoded or written."""

    message = "product store unavailable"
