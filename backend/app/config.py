"""Application configuration."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings loaded from environment variables.

    Settings are loaded in this priority order (highest to lowest):
    1. Environment variables
    2. .env file (for local development)
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # =========================================================================
    # Application
    # =========================================================================
    app_name: str = "RIS Citation Engine"
    debug: bool = False

    # =========================================================================
    # Database
    # =========================================================================
    database_url: str = Field(
        default="sqlite:///data/database.db",
        description="SQLAlchemy URL of the statute database",
    )

    # =========================================================================
    # Citations
    # =========================================================================
    # Canonical statute IDs look like "gesetz-10001622"
    canonical_id_prefix: str = Field(
        default="gesetz",
        description="Prefix of canonical statute IDs accepted in citations",
    )

    # =========================================================================
    # Retrieval limits
    # =========================================================================
    max_provisions: int = Field(
        default=200,
        ge=1,
        description="Maximum provisions returned when a whole statute is requested",
    )
    search_default_limit: int = Field(default=10, ge=1)
    search_max_limit: int = Field(default=50, ge=1)


settings = Settings()
