"""Client configuration models."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pinata.credentials import BearerCredentials, Credentials, KeyPairCredentials


API_BASE_URL = "https://api.pinata.cloud"
UPLOAD_BASE_URL = "https://uploads.pinata.cloud"


def normalize_gateway_domain(domain: str) -> str:
    """Reduce a gateway given as a host or URL to a bare host.

    Raises:
        ValueError: If nothing is left after stripping.
    """
    host = domain.strip().removeprefix("https://").removeprefix("http://").rstrip("/")
    if not host:
        msg = "gateway_domain must not be empty"
        raise ValueError(msg)
    return host


def build_gateway_url(domain: str, cid: str) -> str:
    """Return the URL serving a CID through a gateway domain."""
    return f"https://{normalize_gateway_domain(domain)}/ipfs/{cid}"


class PinataConfiguration(BaseModel):
    """Configuration for the Pinata client.

    Immutable after construction, so one instance can be shared by every
    concurrent call made through a client.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    credentials: Credentials
    gateway_domain: Annotated[
        str | None,
        Field(default=None, description="Gateway domain, e.g. example.mypinata.cloud"),
    ] = None

    @field_validator("gateway_domain")
    @classmethod
    def strip_gateway_scheme(cls, v: str | None) -> str | None:
        """Normalize the gateway domain to a bare host."""
        if v is None:
            return None
        return normalize_gateway_domain(v)

    @classmethod
    def jwt(cls, token: str, gateway_domain: str | None = None) -> "PinataConfiguration":
        """Create a configuration with JWT authentication.

        Args:
            token: The JWT.
            gateway_domain: Optional gateway domain.

        Returns:
            Configuration using bearer credentials.
        """
        return cls(
            credentials=BearerCredentials(token=token),
            gateway_domain=gateway_domain,
        )

    @classmethod
    def api_key(
        cls,
        key: str,
        secret: str,
        gateway_domain: str | None = None,
    ) -> "PinataConfiguration":
        """Create a configuration with API key authentication.

        Args:
            key: The API key.
            secret: The API secret.
            gateway_domain: Optional gateway domain.

        Returns:
            Configuration using key-pair credentials.
        """
        return cls(
            credentials=KeyPairCredentials(key=key, secret=secret),
            gateway_domain=gateway_domain,
        )
