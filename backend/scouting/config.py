"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - Every database URL handed to SQLAlchemy uses the asyncpg driver

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Firebase service-account fields flattened into settings (one env var each)
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _to_asyncpg_url(v):
    """Hosting providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
    if isinstance(v, str):
        for prefix in ("postgresql://", "postgres://"):
            if v.startswith(prefix):
                return v.replace(prefix, "postgresql+asyncpg://", 1)
    return v


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = "postgresql+asyncpg://smo:smo@db:5432/smo_dev"
    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Legacy statistics database (SMO_V1), optional
    legacy_database_url: str | None = None
    statistics_schema: str = "public"
    statistics_table: str = "statistics_cache"
    statistics_query_timeout_seconds: float = 10.0

    @field_validator("database_url", "legacy_database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v):
        return _to_asyncpg_url(v)

    # Internal worker API
    internal_api_key: str | None = None

    # Firebase service account
    firebase_type: str = "service_account"
    firebase_project_id: str | None = None
    firebase_private_key_id: str | None = None
    firebase_private_key: str | None = None
    firebase_client_email: str | None = None
    firebase_client_id: str | None = None
    firebase_auth_uri: str = "https://accounts.google.com/o/oauth2/auth"
    firebase_token_uri: str = "https://oauth2.googleapis.com/token"
    firebase_auth_provider_x509_cert_url: str | None = None
    firebase_client_x509_cert_url: str | None = None
    firebase_universe_domain: str = "googleapis.com"

    # Accounts
    signup_credits: int = 1

    # Pagination
    default_page_size: int = 4
    max_page_size: int = 100

    # Legacy media (S3) used by migration scripts
    media_url_prefix: str = "https://smo-operation.s3.eu-west-2.amazonaws.com/"

    # API
    frontend_url: str | None = None
    cors_origins: list[str] = ["http://localhost:3000"]
    expose_internal_errors: bool = True

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def allowed_origins(self) -> list[str]:
        origins = list(self.cors_origins)
        if self.frontend_url and self.frontend_url not in origins:
            origins.insert(0, self.frontend_url)
        return origins


@lru_cache
def get_settings() -> Settings:
    return Settings()
