"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables (.env file). A single
Settings instance is built at startup and handed to the application factory.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Project Info
    PROJECT_NAME: str = "accounthub"
    VERSION: str = "0.1.0"

    DEBUG: bool = False

    # Database
    DATABASE_URL: Optional[str] = None
    DATABASE_USER: str = "postgres"
    DATABASE_PASSWORD: str = ""
    DATABASE_HOST: str = "localhost"
    DATABASE_PORT: int = 5432
    DATABASE_DBNAME: str = "postgres"
    DATABASE_POOL_SIZE: int = 5
    DATABASE_MAX_OVERFLOW: int = 10

    # Security
    BCRYPT_ROUNDS: int = Field(12, ge=4, le=31)

    # Pagination
    USERS_PAGE_DEFAULT: int = Field(20, ge=1)
    USERS_PAGE_MAX: int = Field(100, ge=1)

    # Billing provider
    BILLING_API_KEY: str = ""
    BILLING_API_BASE: str = "https://api.stripe.com"
    BILLING_TIMEOUT_SECONDS: float = Field(5.0, gt=0)
    BILLING_MAX_RETRIES: int = Field(1, ge=0)

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    @property
    def database_url(self) -> str:
        """Full SQLAlchemy URL; DATABASE_URL wins over the individual parts."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (f"postgresql://{self.DATABASE_USER}:{self.DATABASE_PASSWORD}@{self.DATABASE_HOST}"
                f":{self.DATABASE_PORT}"
                f"/{self.DATABASE_DBNAME}")


@lru_cache
def get_settings() -> Settings:
    """Build the settings once per process."""
    return Settings()
