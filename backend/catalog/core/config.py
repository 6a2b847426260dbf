from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # API Configuration
    app_name: str = "Product Catalog API"
    version: str = "1.0.0"
    debug: bool = False
    api_prefix: str = "/api/v1"

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 8080

    # CORS Configuration
    cors_origins: list = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Shared secret expected in the "token" header of mutating requests
    token: str

    # Product Store Configuration
    products_file: str = "data/products.json"
    # Write every repository mutation back to products_file
    persist_changes: bool = False

    # Logging Configuration
    log_dir: str = "logs"
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
