"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache): single instance per process
    - platform_fee_percent is the single source of truth for checkout and settlement fees

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Empty stripe_secret_key / receipt_notary_url select the local adapters
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://ethos:ethos@db:5432/ethos_guild"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres hands out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Commerce
    platform_fee_percent: float = Field(10, ge=0, le=100)
    currency: str = "usd"

    # Identity (shared secret with the external identity service)
    identity_token_secret: str = "dev-identity-secret"

    # Payment gateway
    stripe_secret_key: str = ""
    stripe_webhook_secret: str = ""
    payment_timeout_seconds: float = 10.0

    # Receipt notary
    receipt_notary_url: str = ""
    receipt_timeout_seconds: float = 5.0

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
