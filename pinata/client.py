"""Async client for the Pinata files API."""

import asyncio
from collections.abc import AsyncIterator
from pathlib import Path
from types import TracebackType

import httpx

from pinata.config import PinataConfiguration, build_gateway_url
from pinata.credentials import Network
from pinata.errors import EncodingError
from pinata.models import FilesPage, GroupsPage, PinataFile, PinataGroup, PinataSwap
from pinata.observability import get_logger
from pinata.settings import AppSettings, get_settings
from pinata.transport.constants import DEFAULT_TIMEOUT_SECONDS
from pinata.transport.executor import RequestExecutor, SleepFunc
from pinata.transport.models import (
    Host,
    HttpMethod,
    JsonBody,
    OperationDescriptor,
    RetryPolicy,
)
from pinata.transport.multipart import build_upload_form
from pinata.transport.protocols import Transport


logger = get_logger()

FILES_PATH = ("v3", "files")
GROUPS_PATH = ("v3", "files", "groups")


class Pinata:
    """Client for uploading, listing and managing files on Pinata.

    Every method builds an operation and hands it to the shared
    :class:`RequestExecutor`, which applies credentials, retries transient
    failures and decodes the response. The client keeps no per-call state,
    so one instance can serve many concurrent tasks.

    Example:
        async with Pinata.from_jwt("token", gateway_domain="x.mypinata.cloud") as p:
            file = await p.upload(b"hello", "hello.txt")
            url = p.gateway_url(file.cid)
    """

    def __init__(
        self,
        configuration: PinataConfiguration,
        transport: Transport | None = None,
        *,
        policy: RetryPolicy | None = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        """Initialize the client.

        Args:
            configuration: Credentials and gateway settings.
            transport: Transport to send requests through. When omitted, an
                ``httpx.AsyncClient`` is created and closed by this client.
            policy: Retry policy; defaults to three attempts, 500 ms step.
            timeout_seconds: Timeout for the client-created transport.
            sleep: Awaitable delay used between retry attempts.
        """
        self.configuration = configuration
        self._owns_transport = transport is None
        self._transport: Transport = transport or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout_seconds),
        )
        self._executor = RequestExecutor(
            configuration,
            self._transport,
            policy=policy,
            sleep=sleep,
        )
        self._log = logger.bind(component="client")

    @classmethod
    def from_jwt(
        cls,
        jwt: str,
        gateway_domain: str | None = None,
        transport: Transport | None = None,
    ) -> "Pinata":
        """Create a client with JWT authentication."""
        return cls(
            PinataConfiguration.jwt(jwt, gateway_domain=gateway_domain),
            transport,
        )

    @classmethod
    def from_api_key(
        cls,
        api_key: str,
        api_secret: str,
        gateway_domain: str | None = None,
        transport: Transport | None = None,
    ) -> "Pinata":
        """Create a client with API key authentication."""
        return cls(
            PinataConfiguration.api_key(
                api_key, api_secret, gateway_domain=gateway_domain
            ),
            transport,
        )

    @classmethod
    def from_settings(
        cls,
        settings: AppSettings | None = None,
        transport: Transport | None = None,
    ) -> "Pinata":
        """Create a client from ``PINATA_*`` environment settings.

        Args:
            settings: Settings to use; read from the environment when omitted.
            transport: Optional transport override.

        Returns:
            Configured client.

        Raises:
            MissingCredentialsError: If no credentials are configured.
        """
        settings = settings or get_settings()
        return cls(
            settings.configuration(),
            transport,
            policy=settings.retry_policy(),
            timeout_seconds=settings.timeout_seconds,
        )

    async def aclose(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport and isinstance(self._transport, httpx.AsyncClient):
            await self._transport.aclose()

    async def __aenter__(self) -> "Pinata":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    # Files

    async def upload(
        self,
        data: bytes,
        name: str,
        group_id: str | None = None,
        network: Network = Network.PRIVATE,
    ) -> PinataFile:
        """Upload raw bytes.

        Args:
            data: The content to upload.
            name: File name.
            group_id: Optional group to add the file to.
            network: Target network.

        Returns:
            Metadata of the uploaded file, including its CID.
        """
        operation = OperationDescriptor(
            method=HttpMethod.POST,
            host=Host.UPLOAD,
            path=FILES_PATH,
            body=build_upload_form(data, name, group_id, network),
        )
        file: PinataFile = await self._executor.execute_decoded(operation, PinataFile)
        self._log.info("upload_complete", cid=file.cid, size=file.size, name=name)
        return file

    async def upload_path(
        self,
        path: str | Path,
        name: str | None = None,
        group_id: str | None = None,
        network: Network = Network.PRIVATE,
    ) -> PinataFile:
        """Upload a file from disk.

        Args:
            path: Local file path.
            name: Name to upload under; defaults to the file's base name.
            group_id: Optional group to add the file to.
            network: Target network.

        Returns:
            Metadata of the uploaded file.

        Raises:
            EncodingError: If the file cannot be read.
        """
        path = Path(path)
        try:
            data = await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            raise EncodingError(e) from e
        return await self.upload(data, name or path.name, group_id, network)

    async def list_files(
        self,
        limit: int | None = None,
        page_token: str | None = None,
        group_id: str | None = None,
        network: Network = Network.PRIVATE,
    ) -> FilesPage:
        """List one page of files.

        Args:
            limit: Maximum number of files to return.
            page_token: Token from a previous page.
            group_id: Only files in this group.
            network: Network to list.

        Returns:
            Files and the token for the next page, if any.
        """
        operation = OperationDescriptor(
            method=HttpMethod.GET,
            path=(*FILES_PATH, network.value),
            query={"limit": limit, "pageToken": page_token, "group": group_id},
        )
        page: FilesPage = await self._executor.execute_decoded(operation, FilesPage)
        return page

    async def iter_files(
        self,
        limit: int | None = None,
        group_id: str | None = None,
        network: Network = Network.PRIVATE,
    ) -> AsyncIterator[PinataFile]:
        """Iterate over every file, following page tokens.

        Args:
            limit: Page size.
            group_id: Only files in this group.
            network: Network to list.

        Yields:
            Files in listing order.
        """
        page_token: str | None = None
        while True:
            page = await self.list_files(
                limit=limit, page_token=page_token, group_id=group_id, network=network
            )
            for file in page.files:
                yield file
            if not page.next_page_token:
                return
            page_token = page.next_page_token

    async def get_file(
        self, file_id: str, network: Network = Network.PRIVATE
    ) -> PinataFile:
        """Get a file by its ID.

        Raises:
            NotFoundError: If the file does not exist.
        """
        operation = OperationDescriptor(
            method=HttpMethod.GET,
            path=(*FILES_PATH, network.value, file_id),
        )
        file: PinataFile = await self._executor.execute_decoded(operation, PinataFile)
        return file

    async def delete_file(
        self, file_id: str, network: Network = Network.PRIVATE
    ) -> None:
        """Delete a file by its ID.

        Raises:
            NotFoundError: If the file does not exist.
        """
        operation = OperationDescriptor(
            method=HttpMethod.DELETE,
            path=(*FILES_PATH, network.value, file_id),
        )
        await self._executor.execute(operation)

    async def update_file(
        self,
        file_id: str,
        name: str | None = None,
        keyvalues: dict[str, str] | None = None,
        network: Network = Network.PRIVATE,
    ) -> PinataFile:
        """Update a file's name and/or key-value metadata.

        The content, and therefore the CID, cannot change. Only the given
        fields are sent.

        Args:
            file_id: The file ID.
            name: New name.
            keyvalues: New key-value metadata.
            network: Network the file lives on.

        Returns:
            The updated file metadata.
        """
        body: dict[str, object] = {}
        if name is not None:
            body["name"] = name
        if keyvalues is not None:
            body["keyvalues"] = keyvalues

        operation = OperationDescriptor(
            method=HttpMethod.PUT,
            path=(*FILES_PATH, network.value, file_id),
            body=JsonBody(value=body),
        )
        file: PinataFile = await self._executor.execute_decoded(operation, PinataFile)
        return file

    def gateway_url(self, cid: str) -> str | None:
        """Return the gateway URL for a CID, or None without a gateway domain."""
        domain = self.configuration.gateway_domain
        if domain is None:
            return None
        return build_gateway_url(domain, cid)

    # Swaps

    async def add_swap(
        self,
        cid: str,
        swap_cid: str,
        network: Network = Network.PRIVATE,
    ) -> PinataSwap:
        """Redirect one CID to another at the gateway.

        Only gateways with the Hot Swaps plugin honor the mapping.

        Args:
            cid: The original CID.
            swap_cid: The CID to serve instead.
            network: Network of the original CID.

        Returns:
            The created mapping.
        """
        operation = OperationDescriptor(
            method=HttpMethod.PUT,
            path=(*FILES_PATH, network.value, "swap", cid),
            body=JsonBody(value={"swapCid": swap_cid}),
        )
        swap: PinataSwap = await self._executor.execute_decoded(operation, PinataSwap)
        return swap

    async def get_swap_history(
        self,
        cid: str,
        domain: str,
        network: Network = Network.PRIVATE,
    ) -> list[PinataSwap]:
        """Get the swap history of a CID on a gateway domain."""
        operation = OperationDescriptor(
            method=HttpMethod.GET,
            path=(*FILES_PATH, network.value, "swap", cid),
            query={"domain": domain},
        )
        history: list[PinataSwap] = await self._executor.execute_decoded(
            operation, list[PinataSwap]
        )
        return history

    async def remove_swap(self, cid: str, network: Network = Network.PRIVATE) -> None:
        """Remove the swap of a CID so it serves its own content again."""
        operation = OperationDescriptor(
            method=HttpMethod.DELETE,
            path=(*FILES_PATH, network.value, "swap", cid),
        )
        await self._executor.execute(operation)

    # Groups

    async def create_group(self, name: str) -> PinataGroup:
        """Create a group."""
        operation = OperationDescriptor(
            method=HttpMethod.POST,
            path=GROUPS_PATH,
            body=JsonBody(value={"name": name}),
        )
        group: PinataGroup = await self._executor.execute_decoded(
            operation, PinataGroup
        )
        return group

    async def list_groups(
        self,
        limit: int | None = None,
        page_token: str | None = None,
    ) -> GroupsPage:
        """List one page of groups."""
        operation = OperationDescriptor(
            method=HttpMethod.GET,
            path=GROUPS_PATH,
            query={"limit": limit, "pageToken": page_token},
        )
        page: GroupsPage = await self._executor.execute_decoded(operation, GroupsPage)
        return page

    async def iter_groups(self, limit: int | None = None) -> AsyncIterator[PinataGroup]:
        """Iterate over every group, following page tokens."""
        page_token: str | None = None
        while True:
            page = await self.list_groups(limit=limit, page_token=page_token)
            for group in page.groups:
                yield group
            if not page.next_page_token:
                return
            page_token = page.next_page_token

    async def get_group(self, group_id: str) -> PinataGroup:
        """Get a group by its ID.

        Raises:
            NotFoundError: If the group does not exist.
        """
        operation = OperationDescriptor(
            method=HttpMethod.GET,
            path=(*GROUPS_PATH, group_id),
        )
        group: PinataGroup = await self._executor.execute_decoded(
            operation, PinataGroup
        )
        return group

    async def delete_group(self, group_id: str) -> None:
        """Delete a group by its ID."""
        operation = OperationDescriptor(
            method=HttpMethod.DELETE,
            path=(*GROUPS_PATH, group_id),
        )
        await self._executor.execute(operation)
