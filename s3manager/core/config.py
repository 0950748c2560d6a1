"""Storage configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from s3manager.errors import ConfigurationError

# Checked in this order; the first empty one is reported.
REQUIRED_KEYS = (
    "AWS_ACCESS_KEY_ID",
    "AWS_SECRET_ACCESS_KEY",
    "AWS_REGION",
    "AWS_DEFAULT_BUCKET",
    "APP_CONFIG_FOLDER",
)


class StorageSettings(BaseSettings):
    """Storage settings loaded from environment variables."""

    # Credentials
    AWS_ACCESS_KEY_ID: str = ""
    AWS_SECRET_ACCESS_KEY: str = ""
    AWS_REGION: str = ""

    # Targets
    AWS_DEFAULT_BUCKET: str = ""
    APP_CONFIG_FOLDER: str = ""

    # Endpoint
    S3_ENDPOINT: str = "https://s3.amazonaws.com"
    S3_SECURE: bool = True

    # Bucket creation wait
    BUCKET_WAIT_TIMEOUT: float = 30.0
    BUCKET_WAIT_INTERVAL: float = 1.0

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    def validate_required(self) -> "StorageSettings":
        """Raise ConfigurationError naming the first missing required key."""
        for key in REQUIRED_KEYS:
            if not getattr(self, key).strip():
                raise ConfigurationError(key)
        return self


def load_settings(**overrides) -> StorageSettings:
    """Read settings from the environment and check the required keys."""
    return StorageSettings(**overrides).validate_required()


__all__ = ["REQUIRED_KEYS", "StorageSettings", "load_settings"]
