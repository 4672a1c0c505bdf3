"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - Payment gateway credentials are NOT settings: they live in the site config
      row and are read per call so rotation needs no restart

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://event:event@db:5432/event_site"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Credential gate
    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"
    jwt_expiry_hours: int = 24

    # Payment webhook; an empty secret rejects every notification
    webhook_secret: str = ""

    # Checkout
    public_site_url: str = "http://localhost:5173"
    checkout_return_path: str = "/presentes/confirmacao"
    payment_notification_url: str | None = None
    payment_currency: str = "BRL"

    # Uploads
    upload_dir: str = "public/uploads"
    upload_max_bytes: int = 5 * 1024 * 1024

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Seed
    seed_admin_email: str = "admin@casamento.com"
    seed_admin_password: str = "admin123"

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
