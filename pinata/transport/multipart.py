"""multipart/form-data encoding for file uploads."""

import uuid
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from pinata.credentials import Network
from pinata.transport.constants import CONTENT_TYPE_MULTIPART, CONTENT_TYPE_OCTET_STREAM


CRLF = b"\r\n"


def _quote(value: str) -> str:
    """Escape a value for use inside a quoted Content-Disposition parameter."""
    return value.replace("\r", "%0D").replace("\n", "%0A").replace('"', "%22")


class MultipartPart(BaseModel):
    """One field of a multipart form."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: Annotated[str, Field(min_length=1)]
    content: bytes
    filename: str | None = None
    content_type: str | None = None

    def encode(self, boundary: str) -> bytes:
        """Frame this part for the given boundary.

        Args:
            boundary: Boundary token shared by the whole form.

        Returns:
            Delimiter line, headers, blank line, content and trailing CRLF.
        """
        disposition = f'Content-Disposition: form-data; name="{_quote(self.name)}"'
        if self.filename is not None:
            disposition += f'; filename="{_quote(self.filename)}"'

        lines = [f"--{boundary}".encode(), disposition.encode()]
        if self.content_type is not None:
            lines.append(f"Content-Type: {self.content_type}".encode())

        return CRLF.join(lines) + CRLF + CRLF + self.content + CRLF


class MultipartForm(BaseModel):
    """An ordered multipart/form-data body.

    Parts are emitted in the order given; the boundary is fixed at
    construction so the Content-Type header and the body always agree.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    parts: tuple[MultipartPart, ...]
    boundary: str = Field(default_factory=lambda: uuid.uuid4().hex)

    @property
    def content_type(self) -> str:
        """Content-Type header value, including the boundary."""
        return f"{CONTENT_TYPE_MULTIPART}; boundary={self.boundary}"

    def encode(self) -> bytes:
        """Serialize the form, closing delimiter included."""
        body = b"".join(part.encode(self.boundary) for part in self.parts)
        return body + f"--{self.boundary}--".encode() + CRLF

    def field_names(self) -> list[str]:
        """Names of the parts in emission order."""
        return [part.name for part in self.parts]


def build_upload_form(
    data: bytes,
    name: str,
    group_id: str | None,
    network: Network,
) -> MultipartForm:
    """Build the form for a file upload.

    The API expects ``name`` as its own field even though the file part
    already carries it as the filename. ``group_id`` is sent only when given.

    Args:
        data: Raw file content.
        name: File name.
        group_id: Optional group to add the file to.
        network: Target network.

    Returns:
        Form with parts ordered file, name, group_id, network.
    """
    parts = [
        MultipartPart(
            name="file",
            content=data,
            filename=name,
            content_type=CONTENT_TYPE_OCTET_STREAM,
        ),
        MultipartPart(name="name", content=name.encode()),
    ]
    if group_id is not None:
        parts.append(MultipartPart(name="group_id", content=group_id.encode()))
    parts.append(MultipartPart(name="network", content=network.value.encode()))

    return MultipartForm(parts=tuple(parts))
