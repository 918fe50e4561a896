"""Credentials for authenticating with the Pinata API."""

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field


API_KEY_HEADER = "pinata_api_key"
SECRET_API_KEY_HEADER = "pinata_secret_api_key"


class Network(str, Enum):
    """IPFS network a file lives on.

    - PUBLIC: content reachable through any IPFS gateway
    - PRIVATE: content reachable only through the account's gateway
    """

    PUBLIC = "public"
    PRIVATE = "private"


class BearerCredentials(BaseModel):
    """JWT-based authentication (recommended)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    token: Annotated[str, Field(min_length=1, repr=False)]


class KeyPairCredentials(BaseModel):
    """API key pair authentication."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    key: Annotated[str, Field(min_length=1)]
    secret: Annotated[str, Field(min_length=1, repr=False)]


Credentials = BearerCredentials | KeyPairCredentials


def authorization_header(credentials: Credentials) -> str:
    """Return the Authorization header value for a credential.

    The API accepts the key of a key pair as a bearer token.

    Args:
        credentials: Active credentials.

    Returns:
        Header value of the form ``Bearer <token-or-key>``.
    """
    if isinstance(credentials, BearerCredentials):
        return f"Bearer {credentials.token}"
    if isinstance(credentials, KeyPairCredentials):
        return f"Bearer {credentials.key}"
    msg = f"Unsupported credentials type: {type(credentials).__name__}"
    raise TypeError(msg)


def additional_headers(credentials: Credentials) -> dict[str, str]:
    """Return the extra headers a credential requires.

    Args:
        credentials: Active credentials.

    Returns:
        Empty for bearer credentials, both Pinata key headers for a key pair.
    """
    if isinstance(credentials, BearerCredentials):
        return {}
    if isinstance(credentials, KeyPairCredentials):
        return {
            API_KEY_HEADER: credentials.key,
            SECRET_API_KEY_HEADER: credentials.secret,
        }
    msg = f"Unsupported credentials type: {type(credentials).__name__}"
    raise TypeError(msg)


def credential_headers(credentials: Credentials) -> dict[str, str]:
    """Return every header a credential contributes to a request."""
    headers = {"Authorization": authorization_header(credentials)}
    headers.update(additional_headers(credentials))
    return headers
