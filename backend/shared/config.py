"""
Centralized configuration for the Storefront backend.

All settings are loaded from environment variables with sensible defaults.
Variables are prefixed with STOREFRONT_ (e.g. STOREFRONT_DATABASE_URL).
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="STOREFRONT_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Storefront API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["*"]
    cors_allow_credentials: bool = False
    cors_allow_methods: list[str] = ["GET", "POST", "OPTIONS"]
    cors_allow_headers: list[str] = ["Content-Type"]

    # PostgreSQL
    database_url: str = ""
    db_pool_min: int = 1
    db_pool_max: int = 10

    # Accounts
    bcrypt_rounds: int = 10
    # Passwordless (Google) login re-links existing password accounts
    passwordless_relink: bool = True

    # SMTP delivery
    smtp_host: str = ""
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: str = ""
    email_from: str = ""
    store_name: str = "Minha Loja Online"

    # Feature Flags
    purchase_emails_enabled: bool = True

    def missing_smtp_settings(self) -> list[str]:
        """Names of the SMTP settings that are required but empty."""
        required = {
            "smtp_host": self.smtp_host,
            "smtp_user": self.smtp_user,
            "smtp_password": self.smtp_password,
            "email_from": self.email_from,
        }
        return [name for name, value in required.items() if not value.strip()]


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
