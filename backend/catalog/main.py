import logging
import os
from logging.handlers import RotatingFileHandler
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from .core.config import Settings, get_settings
from .core.exceptions import StoreError
from .core.middleware import PanicRecoveryMiddleware
from .api.responses import register_exception_handlers
from .api.routes import products
from .repositories.product_repository import ProductRepository
from .services.product_service import ProductService
from .store.json_store import JsonStore

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Attach console and rotating file handlers to the root logger once."""
    root_logger = logging.getLogger()
    root_logger.setLevel(settings.log_level.upper())
    if any(getattr(h, "_catalog_handler", False) for h in root_logger.handlers):
        return

    log_formatter = logging.Formatter(LOG_FORMAT)

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(log_formatter)

    # File handler with rotation
    log_dir = os.path.normpath(settings.log_dir)
    os.makedirs(log_dir, exist_ok=True)
    file_handler = RotatingFileHandler(
        os.path.join(log_dir, "app.log"), maxBytes=5 * 1024 * 1024, backupCount=5, encoding="utf-8"
    )
    file_handler.setFormatter(log_formatter)

    for handler in (console_handler, file_handler):
        handler._catalog_handler = True
        root_logger.addHandler(handler)


def build_product_service(settings: Settings) -> ProductService:
    """Seed the repository from the JSON product file; a bad file aborts start-up."""
    store = JsonStore(settings.products_file)
    try:
        product_list = store.get_all()
    except StoreError:
        logger.critical("Cannot load products from %s", store.file_path)
        raise
    logger.info("Loaded %d products from %s", len(product_list), store.file_path)

    repository = ProductRepository(product_list, store=store if settings.persist_changes else None)
    return ProductService(repository)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        version=settings.version,
        debug=settings.debug
    )
    app.state.settings = settings
    app.state.product_service = build_product_service(settings)

    # Recovery sits inside CORS so 500 responses still carry CORS headers
    app.add_middleware(PanicRecoveryMiddleware)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    # Include routers
    prefix = f"{settings.api_prefix}/products"
    app.include_router(products.router, prefix=prefix, tags=["products"])
    app.include_router(products.protected_router, prefix=prefix, tags=["products"])

    @app.get("/")
    async def root():
        return {"message": settings.app_name, "version": settings.version}

    @app.get("/ping", response_class=PlainTextResponse)
    async def ping():
        return "pong"

    @app.get("/panic")
    def panic():
        raise RuntimeError("oh no!")

    return app


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "catalog.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
