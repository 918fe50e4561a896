"""Turn operation descriptors into transport-ready requests."""

import json
from urllib.parse import quote

import httpx

from pinata.config import API_BASE_URL, UPLOAD_BASE_URL, PinataConfiguration
from pinata.credentials import credential_headers
from pinata.errors import EncodingError, InvalidURLError
from pinata.transport.constants import CONTENT_TYPE_JSON
from pinata.transport.models import Host, JsonBody, OperationDescriptor


_BASE_URLS = {
    Host.API: API_BASE_URL,
    Host.UPLOAD: UPLOAD_BASE_URL,
}


class RequestBuilder:
    """Builds authenticated ``httpx.Request`` objects.

    Holds only the immutable configuration, so one builder is safely shared
    by concurrent calls.
    """

    def __init__(self, config: PinataConfiguration) -> None:
        """Initialize the builder.

        Args:
            config: Client configuration supplying credentials.
        """
        self._config = config

    def build(self, operation: OperationDescriptor) -> httpx.Request:
        """Build the request for an operation.

        Args:
            operation: What to send.

        Returns:
            Request with body, query and credential headers in place.

        Raises:
            EncodingError: If the JSON body cannot be serialized.
            InvalidURLError: If the URL cannot be constructed.
        """
        url = self.build_url(operation)
        headers = httpx.Headers(operation.headers)
        content: bytes | None = None

        if isinstance(operation.body, JsonBody):
            content = encode_json(operation.body.value)
            headers["Content-Type"] = CONTENT_TYPE_JSON
        elif operation.body is not None:
            content = operation.body.encode()
            headers["Content-Type"] = operation.body.content_type

        # Credentials go last so nothing above can override them; Headers
        # assignment replaces case-insensitively
        for name, value in credential_headers(self._config.credentials).items():
            headers[name] = value

        return httpx.Request(
            operation.method.value,
            url,
            headers=headers,
            content=content,
        )

    def build_url(self, operation: OperationDescriptor) -> httpx.URL:
        """Build the absolute URL for an operation.

        Args:
            operation: Operation supplying host, path and query.

        Returns:
            URL with each path segment percent-encoded.

        Raises:
            InvalidURLError: If a path segment is empty or the URL is invalid.
        """
        if any(not segment for segment in operation.path):
            raise InvalidURLError(operation.display_path)

        encoded_path = "/".join(quote(segment, safe="") for segment in operation.path)
        params = {
            key: str(value)
            for key, value in operation.query.items()
            if value is not None
        }

        try:
            url = httpx.URL(f"{_BASE_URLS[operation.host]}/{encoded_path}")
            if params:
                url = url.copy_merge_params(params)
        except httpx.InvalidURL as e:
            raise InvalidURLError(operation.display_path) from e

        return url


def encode_json(value: object) -> bytes:
    """Serialize a request body as UTF-8 JSON.

    Args:
        value: JSON-compatible structure.

    Returns:
        Encoded body.

    Raises:
        EncodingError: If the value is not JSON-serializable.
    """
    try:
        return json.dumps(value, ensure_ascii=False, allow_nan=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise EncodingError(e) from e
