"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables (.env file).
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Project Info
    PROJECT_NAME: str = "Todo API"
    VERSION: str = "0.1.0"

    # HTTP
    API_VERSION: str = "1"
    API_PORT: int = 8080

    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Storage: "sql" uses the database below, "memory" keeps everything in-process
    STORAGE_BACKEND: Literal["sql", "memory"] = "sql"

    # Database
    DATABASE_URL: Optional[str] = None
    DATABASE_USER: str = "postgres"
    DATABASE_PASSWORD: str = ""
    DATABASE_HOST: str = "localhost"
    DATABASE_PORT: int = 5432
    DATABASE_DBNAME: str = "postgres"

    # Security
    SECRET_KEY: str = Field(validation_alias=AliasChoices("SECRET_KEY", "JWT_SECRET"))
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    BCRYPT_ROUNDS: int = Field(default=12, ge=4, le=31)

    # Todos
    TODO_PAGE_SIZE: int = Field(default=10, ge=1)

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    @property
    def api_prefix(self) -> str:
        return f"/api/v{self.API_VERSION}"

    @property
    def database_url(self) -> str:
        """Full SQLAlchemy URL, built from the PostgreSQL parts unless DATABASE_URL is set."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (f"postgresql://{self.DATABASE_USER}:{self.DATABASE_PASSWORD}@{self.DATABASE_HOST}"
                f":{self.DATABASE_PORT}"
                f"/{self.DATABASE_DBNAME}")

    @property
    def token_max_age(self) -> int:
        """Cookie max-age in seconds, matching the token lifetime."""
        return self.ACCESS_TOKEN_EXPIRE_MINUTES * 60


@lru_cache
def get_settings() -> Settings:
    """Settings read once from the environment."""
    return Settings()
