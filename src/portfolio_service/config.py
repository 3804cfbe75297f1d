"""Configuration settings for Portfolio Service."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Form drafts live in process memory, so the API is meant to run as a
    single uvicorn worker; with several workers a user's draft would be
    split across them.
    """

    # Storage
    storage_backend: str = "mongo"  # "mongo" or "memory"
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_database: str = "portfolio"

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8003
    debug: bool = False
    log_level: str = "INFO"

    # Service
    service_name: str = "portfolio-service"
    service_version: str = "0.1.0"

    # Access
    admin_emails: str = "admin@portfolio-collection.com"

    # Catalog
    seed_default_categories: bool = True

    # Form sessions
    form_session_limit: int = 10_000
    form_session_idle_seconds: int = 3600

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    @property
    def admin_email_list(self) -> list[str]:
        """Admin emails, lower-cased."""
        return [e.strip().lower() for e in self.admin_emails.split(",") if e.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
