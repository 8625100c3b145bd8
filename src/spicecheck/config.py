"""Configuration using pydantic-settings."""

from functools import lru_cache

from pydantic import SecretStr, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from spicecheck.constants import (
    DEFAULT_CHECK_TIMEOUT_SECONDS,
    DEFAULT_ENDPOINT,
    DEFAULT_PRESHARED_KEY,
    ENV_PREFIX,
)
from spicecheck.errors import ConfigurationError


class Settings(BaseSettings):
    """Settings loaded from SPICECHECK_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = "development"  # development, staging, production

    # SpiceDB
    endpoint: str = DEFAULT_ENDPOINT
    token: SecretStr = SecretStr(DEFAULT_PRESHARED_KEY)
    insecure: bool = True
    timeout: float | None = DEFAULT_CHECK_TIMEOUT_SECONDS

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float | None) -> float | None:
        """Treat a zero timeout as no timeout.

        Raises:
            ValueError: If the timeout is negative
        """
        if v is None or v == 0:
            return None
        if v < 0:
            raise ValueError("timeout must not be negative")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize the log level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_production(self) -> bool:
        """Check if running in production environment.

        Raises:
            ConfigurationError: If the production config keeps the default key
                or a plaintext channel
        """
        is_prod = self.environment == "production"
        if is_prod and self.token.get_secret_value() == DEFAULT_PRESHARED_KEY:
            raise ConfigurationError(
                "SPICECHECK_TOKEN must be set to the SpiceDB preshared key in production"
            )
        if is_prod and self.insecure:
            raise ConfigurationError(
                "Plaintext connections are not allowed in production; "
                "set SPICECHECK_INSECURE=false"
            )
        return is_prod


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
