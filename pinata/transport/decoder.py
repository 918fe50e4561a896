"""Decode response envelopes into typed payloads."""

from typing import Any

from pydantic import ValidationError

from pinata.errors import DecodingError
from pinata.models import Envelope


def decode_data(body: bytes, payload_type: Any) -> Any:
    """Decode a ``{"data": ...}`` envelope and unwrap its payload.

    Args:
        body: Raw response body.
        payload_type: Expected type of ``data``, e.g. ``PinataFile`` or
            ``list[PinataSwap]``.

    Returns:
        The validated payload.

    Raises:
        DecodingError: If the body is not valid JSON or does not match the
            expected shape.
    """
    try:
        envelope = Envelope[payload_type].model_validate_json(body)
    except ValidationError as e:
        raise DecodingError(e) from e
    return envelope.data
