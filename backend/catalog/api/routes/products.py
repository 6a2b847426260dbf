import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from pydantic import BaseModel, ValidationError

from ...core.exceptions import (
    InvalidCodeError,
    InvalidExpirationError,
    NoProductsFoundError,
    ProductNotFoundError,
)
from ...core.security import verify_token
from ...models.product import (
    ProductListResponse,
    ProductRequest,
    ProductResponse,
    ProductUpdateRequest,
)
from ...services.product_service import ProductService
from ...services.validation import validate_expiration
from ..responses import INVALID_DATA, ErrorResponse, success_response

logger = logging.getLogger(__name__)

router = APIRouter()
protected_router = APIRouter(
    dependencies=[Depends(verify_token)],
    responses={401: {"model": ErrorResponse}},
)


def get_product_service(request: Request) -> ProductService:
    return request.app.state.product_service


def json_body(model: type[BaseModel]):
    """
    Dependency that decodes the request body into ``model``.

    Declared as a dependency rather than a body parameter so that it runs
    after the token check; FastAPI decodes body parameters before any
    dependency.
    """

    async def parse(request: Request) -> BaseModel:
        try:
            return model.model_validate(await request.json())
        except (ValueError, ValidationError) as exc:
            raise HTTPException(status_code=400, detail=INVALID_DATA) from exc

    return parse


def _check_expiration(expiration: str) -> None:
    try:
        validate_expiration(expiration)
    except InvalidExpirationError as exc:
        raise HTTPException(status_code=400, detail=exc.detail) from exc


@router.get("/all", response_model=ProductListResponse)
def get_products(service: ProductService = Depends(get_product_service)):
    """List every product."""
    return success_response(200, service.get_all())


@router.get(
    "/search",
    response_model=ProductListResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def search_products(
    price_gt: float = Query(alias="priceGt"),
    service: ProductService = Depends(get_product_service),
):
    """List products priced strictly above priceGt."""
    try:
        products = service.get_by_price_gt(price_gt)
    except NoProductsFoundError as exc:
        raise HTTPException(status_code=404, detail=exc.detail) from exc
    return success_response(200, products)


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def get_product(product_id: int, service: ProductService = Depends(get_product_service)):
    try:
        product = service.get_by_id(product_id)
    except ProductNotFoundError as exc:
        raise HTTPException(status_code=404, detail=exc.detail) from exc
    return success_response(200, product)


@protected_router.post(
    "/new",
    status_code=201,
    response_model=ProductResponse,
    responses={400: {"model": ErrorResponse}},
)
def create_product(
    payload: ProductRequest = Depends(json_body(ProductRequest)),
    service: ProductService = Depends(get_product_service),
):
    """Create a product; the code value must not be in use."""
    _check_expiration(payload.expiration)
    try:
        product = service.create(payload)
    except InvalidCodeError as exc:
        logger.warning("Rejected new product with duplicate code %r", payload.code_value)
        raise HTTPException(status_code=400, detail=exc.detail) from exc
    return success_response(201, product)


def _update(service: ProductService, product_id: int, data: ProductUpdateRequest):
    try:
        product = service.update(product_id, data)
    except ProductNotFoundError as exc:
        raise HTTPException(status_code=404, detail=exc.detail) from exc
    except InvalidCodeError as exc:
        raise HTTPException(status_code=400, detail=exc.detail) from exc
    return success_response(200, product)


@protected_router.put(
    "/{product_id}",
    response_model=ProductResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def replace_product(
    product_id: int,
    payload: ProductRequest = Depends(json_body(ProductRequest)),
    service: ProductService = Depends(get_product_service),
):
    """Update every field of a product."""
    _check_expiration(payload.expiration)
    return _update(service, product_id, ProductUpdateRequest(**payload.model_dump()))


@protected_router.patch(
    "/{product_id}",
    response_model=ProductResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def patch_product(
    product_id: int,
    payload: ProductUpdateRequest = Depends(json_body(ProductUpdateRequest)),
    service: ProductService = Depends(get_product_service),
):
    """Update only the fields present in the payload (is_published is always applied)."""
    if payload.expiration:
        _check_expiration(payload.expiration)
    return _update(service, product_id, payload)


@protected_router.delete(
    "/{product_id}",
    status_code=204,
    response_class=Response,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def delete_product(product_id: int, service: ProductService = Depends(get_product_service)):
    try:
        service.delete(product_id)
    except ProductNotFoundError as exc:
        raise HTTPException(status_code=404, detail=exc.detail) from exc
    return Response(status_code=204)
