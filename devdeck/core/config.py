"""Application configuration from environment variables."""

from fastapi import Request
from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    APP_NAME: str = "DevDeck"
    DEBUG: bool = False
    CORS_ORIGINS: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]

    # Database (sqlite for local dev, mysql+pymysql://... in production)
    DATABASE_URL: str = "sqlite:///./devdeck.db"

    # Auth
    JWT_SECRET: Optional[str] = None
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRY_MINUTES: int = 60 * 24
    BCRYPT_ROUNDS: int = 10

    # Default admin seed
    SEED_DEFAULT_ADMIN: bool = True
    DEFAULT_ADMIN_EMAIL: str = "admin@devdeck.com"
    DEFAULT_ADMIN_PASSWORD: str = "admin123"

    # Listings
    MAX_PAGE_LIMIT: int = 100

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


settings = Settings()


def get_settings(request: Request) -> Settings:
    """FastAPI dependency returning the settings the running app was built with."""
    return request.app.state.settings
