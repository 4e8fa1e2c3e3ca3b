"""Application settings and configuration.

This module defines all configuration options for the Album Journey service.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Album Journey", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Database configuration
    database_url: str = Field(default="sqlite:///./album_journey.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Shared secret expected from the daily scheduler; unset disables the check.
    cron_secret: str | None = Field(default=None, alias="CRON_SECRET")

    # Rating edits only re-notify once one of these windows has passed.
    notify_edit_after_creation_hours: float = Field(
        default=24.0,
        alias="NOTIFY_EDIT_AFTER_CREATION_HOURS",
    )
    notify_edit_after_update_hours: float = Field(
        default=2.0,
        alias="NOTIFY_EDIT_AFTER_UPDATE_HOURS",
    )

    # Read model limits
    notification_feed_limit: int = Field(default=50, alias="NOTIFICATION_FEED_LIMIT")
    community_ratings_limit: int = Field(default=20, alias="COMMUNITY_RATINGS_LIMIT")
    recent_users_limit: int = Field(default=10, alias="RECENT_USERS_LIMIT")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def database_url_sync(self) -> str:
        """Return a sync-compatible database URL for tooling.

        Converts asyncpg URLs to psycopg for synchronous database operations
        like Alembic migrations.
        """
        url = self.effective_database_url
        if url.startswith("postgresql+asyncpg"):
            return url.replace("postgresql+asyncpg", "postgresql+psycopg", 1)
        return url

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides."""
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url

    @property
    def notification_thresholds(self) -> dict[str, float]:
        """Return the rating edit notification windows, in hours."""
        return {
            "since_creation_hours": self.notify_edit_after_creation_hours,
            "since_update_hours": self.notify_edit_after_update_hours,
        }


settings = Settings()
