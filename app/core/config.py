"""Application configuration using Pydantic Settings.

Loads configuration from environment variables and .env file.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, PostgresDsn, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ============ Application Settings ============
    APP_NAME: str = "Stashport"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"

    # ============ Server Settings ============
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    WORKERS: int = 1

    # ============ Security Settings ============
    SECRET_KEY: str = Field(
        default="your-super-secret-jwt-secret-change-in-production",
        description="Shared secret used by the identity provider to sign JWTs",
    )
    JWT_ALGORITHM: str = "HS256"
    JWT_AUDIENCE: str | None = Field(
        default="authenticated",
        description="Expected 'aud' claim; None disables the audience check",
    )
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(
        default=60,
        description="Lifetime of tokens minted locally (tests, tooling)",
    )

    # ============ CORS Settings ============
    CORS_ORIGINS: list[str] = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins",
    )

    # ============ Database Settings ============
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "stashport"
    POSTGRES_PASSWORD: str = "stashport_password"
    POSTGRES_DB: str = "stashport"
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10

    @computed_field  # type: ignore[misc]
    @property
    def DATABASE_URL(self) -> PostgresDsn:
        """Construct PostgreSQL async connection URL."""
        return PostgresDsn.build(
            scheme="postgresql+asyncpg",
            username=self.POSTGRES_USER,
            password=self.POSTGRES_PASSWORD,
            host=self.POSTGRES_HOST,
            port=self.POSTGRES_PORT,
            path=self.POSTGRES_DB,
        )

    @property
    def database_url(self) -> str:
        """Get database URL as string for Alembic."""
        return str(self.DATABASE_URL)

    # ============ Storage Settings ============
    STORAGE_URL: str = Field(
        default="http://localhost:54321",
        description="Base URL of the storage REST API (Supabase project URL)",
    )
    STORAGE_SERVICE_KEY: str = Field(
        default="",
        description="Service role key used to write to storage buckets",
    )
    COVER_BUCKET: str = "itinerary-covers"
    COVER_MAX_BYTES: int = 5 * 1024 * 1024
    STORAGE_TIMEOUT: float = 30.0

    # ============ Share Image Settings ============
    CHROME_EXECUTABLE_PATH: str | None = Field(
        default=None,
        description="Chromium binary to launch; Playwright's bundled one when unset",
    )
    SHARE_RENDER_TIMEOUT_MS: int = 30_000

    # ============ Logging Settings ============
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
