"""Unit tests for request construction."""

import json
import math

import pytest

from pinata.config import PinataConfiguration
from pinata.credentials import Network
from pinata.errors import EncodingError, InvalidURLError
from pinata.transport.models import Host, HttpMethod, JsonBody, OperationDescriptor
from pinata.transport.multipart import build_upload_form
from pinata.transport.request_builder import RequestBuilder, encode_json


@pytest.fixture
def builder() -> RequestBuilder:
    """Builder using bearer credentials."""
    return RequestBuilder(PinataConfiguration.jwt("abc"))


class TestUrls:
    """Tests for URL construction."""

    def test_api_host(self, builder: RequestBuilder) -> None:
        """Test that API operations target the API host."""
        request = builder.build(
            OperationDescriptor(method=HttpMethod.GET, path=("v3", "files", "groups"))
        )

        assert str(request.url) == "https://api.pinata.cloud/v3/files/groups"

    def test_upload_host(self, builder: RequestBuilder) -> None:
        """Test that uploads target the upload host."""
        request = builder.build(
            OperationDescriptor(
                method=HttpMethod.POST, host=Host.UPLOAD, path=("v3", "files")
            )
        )

        assert str(request.url) == "https://uploads.pinata.cloud/v3/files"

    def test_no_query_when_all_params_absent(self, builder: RequestBuilder) -> None:
        """Test that absent optional params produce no query string."""
        request = builder.build(
            OperationDescriptor(
                method=HttpMethod.GET,
                path=("v3", "files", "private"),
                query={"limit": None, "pageToken": None, "group": None},
            )
        )

        assert request.url.query == b""
        assert "?" not in str(request.url)

    def test_only_present_params_sent(self, builder: RequestBuilder) -> None:
        """Test that None params are dropped and others kept."""
        request = builder.build(
            OperationDescriptor(
                method=HttpMethod.GET,
                path=("v3", "files", "private"),
                query={"limit": 10, "pageToken": None, "group": "g1"},
            )
        )

        assert dict(request.url.params) == {"limit": "10", "group": "g1"}

    def test_empty_string_param_is_sent(self, builder: RequestBuilder) -> None:
        """Test that an empty string is distinguishable from omission."""
        request = builder.build(
            OperationDescriptor(
                method=HttpMethod.GET,
                path=("v3", "files", "private"),
                query={"pageToken": ""},
            )
        )

        assert "pageToken" in request.url.params
        assert request.url.params["pageToken"] == ""

    def test_path_segments_are_encoded(self, builder: RequestBuilder) -> None:
        """Test that reserved characters in IDs cannot change the path."""
        request = builder.build(
            OperationDescriptor(
                method=HttpMethod.GET, path=("v3", "files", "private", "a/b?c")
            )
        )

        assert request.url.raw_path == b"/v3/files/private/a%2Fb%3Fc"

    def test_empty_segment_is_invalid(self, builder: RequestBuilder) -> None:
        """Test that an empty ID raises InvalidURLError."""
        operation = OperationDescriptor(
            method=HttpMethod.GET, path=("v3", "files", "private", "")
        )

        with pytest.raises(InvalidURLError) as exc_info:
            builder.build(operation)

        assert exc_info.value.path == "v3/files/private/"


class TestHeaders:
    """Tests for credential and content headers."""

    def test_bearer_authorization(self, builder: RequestBuilder) -> None:
        """Test that bearer credentials set only Authorization."""
        request = builder.build(
            OperationDescriptor(method=HttpMethod.GET, path=("v3", "files"))
        )

        assert request.headers["Authorization"] == "Bearer abc"
        assert "pinata_api_key" not in request.headers
        assert "pinata_secret_api_key" not in request.headers

    def test_key_pair_headers(self) -> None:
        """Test that key-pair credentials add both Pinata headers."""
        builder = RequestBuilder(PinataConfiguration.api_key("k", "s"))

        request = builder.build(
            OperationDescriptor(method=HttpMethod.GET, path=("v3", "files"))
        )

        assert request.headers["Authorization"] == "Bearer k"
        assert request.headers["pinata_api_key"] == "k"
        assert request.headers["pinata_secret_api_key"] == "s"

    def test_credentials_override_operation_headers(
        self, builder: RequestBuilder
    ) -> None:
        """Test that credentials are applied last."""
        request = builder.build(
            OperationDescriptor(
                method=HttpMethod.GET,
                path=("v3", "files"),
                headers={"Authorization": "Bearer spoofed", "X-Trace": "1"},
            )
        )

        assert request.headers["Authorization"] == "Bearer abc"
        assert request.headers["X-Trace"] == "1"

    def test_credentials_override_headers_of_any_case(
        self, builder: RequestBuilder
    ) -> None:
        """Test that a lower-case authorization header is replaced, not kept."""
        request = builder.build(
            OperationDescriptor(
                method=HttpMethod.GET,
                path=("v3", "files"),
                headers={"authorization": "Bearer spoofed"},
            )
        )

        assert request.headers.get_list("Authorization") == ["Bearer abc"]

    def test_key_pair_headers_override_any_case(self) -> None:
        """Test that Pinata key headers cannot be spoofed by case changes."""
        builder = RequestBuilder(PinataConfiguration.api_key("k", "s"))

        request = builder.build(
            OperationDescriptor(
                method=HttpMethod.GET,
                path=("v3", "files"),
                headers={"PINATA_API_KEY": "other"},
            )
        )

        assert request.headers.get_list("pinata_api_key") == ["k"]

    def test_body_content_type_overrides_any_case(
        self, builder: RequestBuilder
    ) -> None:
        """Test that the body decides Content-Type whatever the caller's case."""
        request = builder.build(
            OperationDescriptor(
                method=HttpMethod.PUT,
                path=("v3", "files", "private", "id"),
                headers={"content-type": "text/plain"},
                body=JsonBody(value={"name": "n"}),
            )
        )

        assert request.headers.get_list("Content-Type") == ["application/json"]

    def test_no_body_no_content_type(self, builder: RequestBuilder) -> None:
        """Test that bodiless requests carry no Content-Type."""
        request = builder.build(
            OperationDescriptor(method=HttpMethod.DELETE, path=("v3", "files", "x"))
        )

        assert "Content-Type" not in request.headers
        assert request.method == "DELETE"


class TestJsonBodies:
    """Tests for JSON request bodies."""

    def test_json_body(self, builder: RequestBuilder) -> None:
        """Test that JSON bodies are serialized with the JSON content type."""
        request = builder.build(
            OperationDescriptor(
                method=HttpMethod.PUT,
                path=("v3", "files", "private", "id"),
                body=JsonBody(value={"name": "new", "keyvalues": {"k": "v"}}),
            )
        )

        assert request.headers["Content-Type"] == "application/json"
        assert json.loads(request.content) == {"name": "new", "keyvalues": {"k": "v"}}

    def test_non_ascii_is_utf8(self) -> None:
        """Test that non-ASCII text is encoded as UTF-8."""
        assert encode_json({"name": "café"}) == '{"name": "café"}'.encode()

    def test_unserializable_value(self) -> None:
        """Test that unsupported types raise EncodingError."""
        with pytest.raises(EncodingError) as exc_info:
            encode_json({"when": object()})

        assert isinstance(exc_info.value.cause, TypeError)

    def test_nan_is_rejected(self) -> None:
        """Test that NaN, which is not valid JSON, raises EncodingError."""
        with pytest.raises(EncodingError):
            encode_json({"value": math.nan})


class TestMultipartBodies:
    """Tests for multipart request bodies."""

    def test_multipart_content_type_matches_boundary(
        self, builder: RequestBuilder
    ) -> None:
        """Test that the header boundary matches the body."""
        form = build_upload_form(b"hi", "a.txt", None, Network.PRIVATE)

        request = builder.build(
            OperationDescriptor(
                method=HttpMethod.POST,
                host=Host.UPLOAD,
                path=("v3", "files"),
                body=form,
            )
        )

        assert request.headers["Content-Type"] == (
            f"multipart/form-data; boundary={form.boundary}"
        )
        assert request.content == form.encode()
        assert request.headers["Authorization"] == "Bearer abc"
