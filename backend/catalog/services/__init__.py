from .product_service import ProductService
from .validation import validate_expiration

__all__ = ["ProductService", "validate_expiration"]
