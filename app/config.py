"""
Application configuration with Pydantic Settings for validation and type safety.
Supports environment-specific configurations and .env file loading.
"""

from enum import Enum
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator


class Environment(str, Enum):
    """Application environment types"""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """
    Application settings with validation.
    Settings are loaded from environment variables or .env file.
    """

    # Application settings
    app_name: str = Field(default="DinnerPlan", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT, description="Application environment"
    )

    # Local record store
    database_url: str = Field(
        default="sqlite:///./dinnerplan.db",
        description="SQLAlchemy URL of the local plan/order store",
    )
    db_echo: bool = Field(default=False, description="SQLAlchemy echo SQL statements")

    # Mealie (recipe catalog + household meal plan / shopping lists)
    mealie_url: str = Field(
        default="http://localhost:9000", description="Mealie base URL"
    )
    mealie_token: str = Field(default="", description="Mealie API token")

    # Anthropic (planning oracle)
    anthropic_api_key: str = Field(default="", description="Anthropic API key")
    anthropic_model: str = Field(
        default="claude-sonnet-4-20250514", description="Model used for meal planning"
    )
    planner_max_tokens: int = Field(
        default=2000, ge=1, description="Max tokens for a planning completion"
    )

    # Instacart Connect (grocery ordering)
    instacart_base_url: str = Field(
        default="https://connect.instacart.com/v2", description="Instacart API base URL"
    )
    instacart_access_token: str = Field(default="", description="Instacart access token")
    instacart_retailer_id: str = Field(default="", description="Instacart retailer ID")
    instacart_store_id: str = Field(
        default="", description="Instacart store (location) ID used for pickup"
    )

    # Remote call behaviour
    request_timeout_sec: float = Field(
        default=30.0, gt=0, description="Timeout applied to every HTTP call"
    )

    # Planning inputs
    catalog_fetch_limit: int = Field(
        default=100, ge=1, description="Recipes fetched from Mealie per listing"
    )
    prompt_recipe_limit: int = Field(
        default=50, ge=1, description="Recipes summarised in the planning prompt"
    )
    feedback_window: int = Field(
        default=5, ge=0, description="Most recent feedback entries used for planning"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="Log format string",
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment value"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    @field_validator("mealie_url", "instacart_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


# Global settings instance
settings = Settings()
