"""Wire models for Pinata API payloads."""

import re
from datetime import datetime
from typing import Annotated, Generic, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict


# Fractional-seconds variant first, whole seconds as fallback
TIMESTAMP_FORMATS = (
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%Y-%m-%dT%H:%M:%S%z",
)

# strptime reads at most six fractional digits; finer precision is dropped
_EXCESS_FRACTION = re.compile(r"(\.\d{6})\d+")


def parse_timestamp(value: object) -> datetime:
    """Parse an ISO-8601 timestamp as returned by the API.

    Args:
        value: Raw value from the response payload.

    Returns:
        Timezone-aware datetime.

    Raises:
        ValueError: If the value matches no supported format.
    """
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        msg = f"Cannot decode date: {value!r}"
        raise ValueError(msg)  # noqa: TRY004

    trimmed = _EXCESS_FRACTION.sub(r"\1", value, count=1)
    for fmt in TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(trimmed, fmt)
        except ValueError:
            continue

    msg = f"Cannot decode date: {value}"
    raise ValueError(msg)


Timestamp = Annotated[datetime, BeforeValidator(parse_timestamp)]


class WireModel(BaseModel):
    """Base model for response payloads.

    Immutable; field names match the snake_case wire names and
    unknown fields are ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")


class PinataFile(WireModel):
    """A file stored on Pinata."""

    id: str
    name: str | None = None
    cid: str
    size: int
    number_of_files: int | None = None
    mime_type: str | None = None
    group_id: str | None = None
    keyvalues: dict[str, str] | None = None
    created_at: Timestamp


class PinataGroup(WireModel):
    """A group organizing files."""

    id: str
    name: str
    created_at: Timestamp


class PinataSwap(WireModel):
    """A CID swap mapping."""

    mapped_cid: str
    created_at: Timestamp


class FilesPage(WireModel):
    """One page of a file listing."""

    files: list[PinataFile]
    next_page_token: str | None = None


class GroupsPage(WireModel):
    """One page of a group listing."""

    groups: list[PinataGroup]
    next_page_token: str | None = None


PayloadT = TypeVar("PayloadT")


class Envelope(WireModel, Generic[PayloadT]):
    """Response wrapper carrying the payload under ``data``."""

    data: PayloadT
