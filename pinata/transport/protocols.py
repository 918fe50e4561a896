"""Protocol interface for the HTTP transport."""

from typing import Protocol, runtime_checkable

import httpx


@runtime_checkable
class Transport(Protocol):
    """Protocol for the object that actually sends requests.

    ``httpx.AsyncClient`` satisfies it. Any object with a matching ``send``
    can stand in for tests, as long as transport faults surface as
    ``httpx.HTTPError`` and the returned response has its body read.
    """

    async def send(self, request: httpx.Request) -> httpx.Response:
        """Send a request and return the response.

        Args:
            request: Fully built request.

        Returns:
            Response with status, headers and body.

        Raises:
            httpx.HTTPError: On connection, timeout or protocol failures.
        """
        ...
