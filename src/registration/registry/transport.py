import logging
from typing import NamedTuple, Optional, Protocol

import httpx

logger = logging.getLogger(__name__)

class TransportResponse(NamedTuple):
    success: bool
    body: bytes

class Transport(Protocol):
    """the network seam of the registration client."""

    async def get(self, uri: str) -> TransportResponse:
        ...

class HttpxTransport:
    """transport backed by an httpx.AsyncClient.

    retries, auth, proxies and timeouts are whatever the client is configured
    with. a client passed in is not closed by this transport. connection
    failures and timeouts come back as an unsuccessful response.
    """

    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(follow_redirects=True)

    async def get(self, uri: str) -> TransportResponse:
        try:
            response = await self.client.get(uri)
        except httpx.TransportError as e:
            # unreachable hosts and timeouts read the same as a missing document
            logger.debug(f"Transport failure for {uri}: {e!r}")
            return TransportResponse(success=False, body=b"")
        return TransportResponse(success=response.is_success, body=response.content)

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
