"""
Application configuration.
All settings are loaded from environment variables.
Use env.example as a reference for required variables.
"""
from urllib.parse import urlparse

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    IMPORTANT: Credentials have no defaults - they MUST be set in .env file.
    """

    # ===========================================
    # APPLICATION
    # ===========================================
    app_env: str = "production"
    port: int = 3000
    # Public static site, e.g. https://your-static-site.onrender.com
    app_url: str  # Required, no default
    # Comma-separated. Empty = any origin, without credentials.
    cors_origins: str = ""

    # ===========================================
    # STRIPE
    # ===========================================
    stripe_secret_key: str  # Required, no default
    stripe_price_id: str  # Required, no default
    # Empty = every webhook delivery is rejected
    stripe_webhook_secret: str = ""
    # Max age of a signed delivery, seconds
    stripe_webhook_tolerance: int = 300
    stripe_api_version: str = "2024-06-20"

    # ===========================================
    # DATABASE (managed PostgreSQL)
    # ===========================================
    # Privileged connection string; the store's service credentials live here.
    database_url: str  # Required, no default

    # ===========================================
    # EMAIL (Resend)
    # ===========================================
    resend_api_key: str = ""  # Optional: without it emails are only logged
    email_api_url: str = "https://api.resend.com/emails"
    support_email: str = "support@yourdomain.com"

    # ===========================================
    # PRODUCT
    # ===========================================
    brand_name: str = "PromptFoundry"
    license_tier: str = "all-access"

    # ===========================================
    # INTERNAL SERVICES
    # ===========================================
    http_client_timeout: float = 10.0

    # ===========================================
    # LOGGING
    # ===========================================
    request_id_header: str = "X-Request-Id"
    log_file: str | None = None
    log_max_bytes: int = 10_000_000
    log_backup_count: int = 5

    @field_validator("app_url")
    @classmethod
    def validate_app_url(cls, v: str) -> str:
        """Require an absolute http(s) URL; stored without trailing slash."""
        parsed = urlparse(v.strip())
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("app_url must be an absolute http(s) URL")
        return v.strip().rstrip("/")

    @property
    def app_hostname(self) -> str:
        return urlparse(self.app_url).hostname or "localhost"

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


settings = Settings()
