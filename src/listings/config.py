"""Runtime configuration loaded from environment variables (or a local .env).

Variable names match the deployment environment, e.g. ``DYNAMODB_TABLE_PREFIX``
and ``PROPERTY_IMAGES_BUCKET``.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for the listing service and its AWS collaborators."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: str = "dev"
    # Falls back to listings-{environment} when unset
    dynamodb_table_prefix: str | None = None
    aws_default_region: str = "eu-west-1"

    property_images_bucket: str = "property-images"
    # CDN domain in front of the bucket; S3 virtual-host URLs are used when unset
    public_asset_base_url: str | None = None

    cognito_user_pool_id: str = ""
    cognito_client_id: str = ""

    # Accept the unverified sub of a Bearer token; defaults to on only in dev
    trust_bearer_tokens: bool | None = None

    # Wizard sessions kept in memory
    wizard_idle_minutes: int = 24 * 60
    wizard_submitted_minutes: int = 15
    wizard_max_sessions: int = 1000

    cors_allow_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://127.0.0.1:3000"]
    )

    @property
    def table_prefix(self) -> str:
        """Resolved DynamoDB table name prefix."""
        return self.dynamodb_table_prefix or f"listings-{self.environment}"

    @property
    def bearer_tokens_trusted(self) -> bool:
        if self.trust_bearer_tokens is not None:
            return self.trust_bearer_tokens
        return self.environment == "dev"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get settings parsed once from the environment."""
    return Settings()
