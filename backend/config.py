# backend/config.py
from pydantic_settings import BaseSettings
from typing import ClassVar
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

class Settings(BaseSettings):
    SECRET_KEY: str = "dev-secret-change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    DATABASE_URL: str = "sqlite:///./storefront.db"

    FRONTEND_URL: str = "http://localhost:5173"

    # Storage namespace for persisted carts
    CART_STORAGE_KEY: str = "veg-wholesale-cart"

    # Handoff target for checkout messages
    WHATSAPP_BASE_URL: str = "https://wa.me"

    UPLOAD_DIR: str = "static/uploads"
    MAX_IMAGE_BYTES: int = 700 * 1024

    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = ""

    class Config:
        env_file: ClassVar[str] = str(env_path)
        extra = "ignore"

settings = Settings()
