"""Application configuration with environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Environment
    ENV: str = "dev"

    # App Version (format: a.bc.de - major.feature.patch)
    VERSION: str = "1.0.0"

    # Database (one table per resource, SQLite by default)
    DATABASE_URL: str = "sqlite:///./db/database.sqlite"

    # Attachment storage (quotes/payments uploads)
    UPLOAD_ROOT: str = "./uploads"
    MAX_UPLOAD_BYTES: int = 25 * 1024 * 1024  # 25 MB
    # Remove stored files when the owning record is deleted or its file replaced
    PURGE_ATTACHMENTS: bool = True

    # Role policy: viewers may only issue GET requests when enabled
    ENFORCE_VIEWER_READ_ONLY: bool = False

    # List pagination (only applied when ?page= is given)
    DEFAULT_PER_PAGE: int = 20
    MAX_PER_PAGE: int = 100

    # CORS (comma-separated)
    CORS_ORIGINS: str = "http://localhost:3000"

    # Logging
    LOG_LEVEL: str = "INFO"

    # Error Tracking (optional, set in production)
    SENTRY_DSN: str = ""

    # Client gateway defaults
    CRM_API_URL: str = "http://localhost:5000"
    CRM_API_KEY: str = ""
    CRM_API_TIMEOUT_SECONDS: float = 30.0

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS_ORIGINS into a list."""
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
