from .product import (
	Product,
	ProductListResponse,
	ProductRequest,
	ProductResponse,
	ProductUpdateRequest,
)

__all__ = [
	"Product",
	"ProductListResponse",
	"ProductRequest",
	"ProductResponse",
	"ProductUpdateRequest",
]
