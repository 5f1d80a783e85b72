"""Application configuration from environment variables."""

from functools import lru_cache
from urllib.parse import quote_plus

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment (and .env file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "FlowFit API"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # API
    api_v1_prefix: str = "/api/v1"

    # Database (PostgreSQL)
    database_host: str = "localhost"
    database_port: int = 5432
    database_user: str = "postgres"
    database_password: str = ""  # Set in .env - never commit
    database_name: str = "flowfit"
    database_ssl_mode: str = "disable"
    # Full SQLAlchemy URL; when set it wins over the host/port/user fields above
    database_uri: str = ""

    # Pool (production tuning)
    database_pool_size: int = 5
    database_max_overflow: int = 10

    # Redis: empty disables the cache and keeps rate limits in memory
    redis_url: str = ""
    catalog_cache_ttl_seconds: int = 300

    # JWT
    jwt_access_secret: str = "change_me_access"
    jwt_refresh_secret: str = "change_me_refresh"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 15
    refresh_token_expire_days: int = 7

    bcrypt_rounds: int = 12

    # Rate limiting (slowapi / limits syntax)
    rate_limit_enabled: bool = True
    rate_limit_standard: str = "100/15minutes"
    rate_limit_auth: str = "10/hour"

    # CORS: comma-separated list of allowed origins in production
    cors_origins: str = ""

    # Checkout redirect target and one-off seed route secret
    frontend_url: str = "http://localhost:3000"
    seed_secret: str = ""

    def _build_db_url(self, scheme: str = "postgresql", ssl_query: str = "sslmode=require") -> str:
        user = quote_plus(self.database_user)
        password = quote_plus(self.database_password)
        url = f"{scheme}://{user}:{password}@{self.database_host}:{self.database_port}/{self.database_name}"
        return f"{url}?{ssl_query}" if ssl_query else url

    @property
    def database_url(self) -> str:
        """Synchronous URL for Alembic and tooling."""
        if self.database_uri:
            return self.database_uri.replace("+asyncpg", "").replace("+aiosqlite", "")
        ssl_query = "" if self.database_ssl_mode == "disable" else f"sslmode={self.database_ssl_mode}"
        return self._build_db_url(scheme="postgresql", ssl_query=ssl_query)

    @property
    def async_database_url(self) -> str:
        """Async URL for FastAPI (asyncpg driver)."""
        if self.database_uri:
            return self.database_uri
        ssl_query = "" if self.database_ssl_mode == "disable" else "ssl=require"
        return self._build_db_url(scheme="postgresql+asyncpg", ssl_query=ssl_query)

    @property
    def redis_enabled(self) -> bool:
        return bool(self.redis_url)

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
