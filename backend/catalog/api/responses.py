"""Uniform JSON envelope for every response.

Success bodies are ``{"data": ...}``; failures are
``{"status": int, "code": reason phrase, "message": str}``.
"""

import logging
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..core.exceptions import StoreError

INVALID_ID = "invalid product id"
INVALID_PRICE = "invalid product price"
INVALID_DATA = "invalid product data"

logger = logging.getLogger(__name__)


class ErrorResponse(BaseModel):
    status: int
    code: str
    message: str


def success_response(status_code: int, data: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"data": jsonable_encoder(data)})


def error_response(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    try:
        code = HTTPStatus(status_code).phrase
    except ValueError:
        code = ""
    body = ErrorResponse(status=status_code, code=code, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump(), headers=headers)


def _validation_message(exc: RequestValidationError) -> str:
    # Path and query errors win over body errors
    for error in exc.errors():
        location = error.get("loc") or ()
        source = location[0] if location else ""
        if source == "path":
            return INVALID_ID
        if source == "query":
            return INVALID_PRICE
    return INVALID_DATA


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(400, _validation_message(exc))


async def store_exception_handler(request: Request, exc: StoreError) -> JSONResponse:
    logger.error("Product store failure on %s %s: %s", request.method, request.url.path, exc)
    return error_response(500, StoreError.message)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StoreError, store_exception_handler)
