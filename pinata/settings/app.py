"""Client settings powered by Pydantic BaseSettings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from pinata.config import PinataConfiguration
from pinata.transport.constants import (
    DEFAULT_BASE_DELAY_MS,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_TIMEOUT_SECONDS,
)
from pinata.transport.models import RetryPolicy


class MissingCredentialsError(Exception):
    """Raised when the environment provides no usable credentials."""


class AppSettings(BaseSettings):
    """Centralized environment configuration.

    Reads ``PINATA_*`` variables, optionally from a ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_prefix="PINATA_",
        case_sensitive=False,
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    jwt: str | None = Field(default=None, description="JWT for bearer auth")
    api_key: str | None = Field(default=None, description="API key of a key pair")
    api_secret: str | None = Field(
        default=None, description="API secret of a key pair"
    )
    gateway_domain: str | None = Field(
        default=None, description="Gateway domain for content URLs"
    )
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0, le=600)
    max_attempts: int = Field(default=DEFAULT_MAX_ATTEMPTS, ge=1, le=10)
    base_delay_ms: int = Field(default=DEFAULT_BASE_DELAY_MS, ge=0, le=60000)

    def configuration(self) -> PinataConfiguration:
        """Build the client configuration.

        A JWT takes priority over a key pair.

        Returns:
            Configuration with the credentials found in the environment.

        Raises:
            MissingCredentialsError: If neither a JWT nor a full key pair is set.
        """
        if self.jwt:
            return PinataConfiguration.jwt(self.jwt, gateway_domain=self.gateway_domain)
        if self.api_key and self.api_secret:
            return PinataConfiguration.api_key(
                self.api_key,
                self.api_secret,
                gateway_domain=self.gateway_domain,
            )
        msg = "Set PINATA_JWT, or both PINATA_API_KEY and PINATA_API_SECRET"
        raise MissingCredentialsError(msg)

    def retry_policy(self) -> RetryPolicy:
        """Return the retry policy described by these settings."""
        return RetryPolicy(
            max_attempts=self.max_attempts,
            base_delay_ms=self.base_delay_ms,
        )


def get_settings() -> AppSettings:
    """Get a settings instance."""
    return AppSettings()
