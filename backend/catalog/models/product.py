from typing import List, Optional
from pydantic import BaseModel, Field


class Product(BaseModel):
	id: int
	name: str = Field(min_length=1)
	quantity: int = Field(ge=0)
	code_value: str = Field(min_length=1)
	is_published: bool = False
	expiration: str
	price: float = Field(gt=0)


class ProductRequest(BaseModel):
	name: str = Field(min_length=1)
	quantity: int = Field(ge=0)
	code_value: str = Field(min_length=1)
	is_published: bool = False
	expiration: str
	price: float = Field(gt=0)


class ProductUpdateRequest(BaseModel):
	# An omitted is_published reads as False and is still applied on merge
	name: Optional[str] = None
	quantity: Optional[int] = Field(default=None, ge=0)
	code_value: Optional[str] = None
	is_published: bool = False
	expiration: Optional[str] = None
	price: Optional[float] = Field(default=None, ge=0)


class ProductResponse(BaseModel):
	data: Product


class ProductListResponse(BaseModel):
	data: List[Product]
