"""HTTP fetcher implementation using httpx."""

import asyncio
import logging

import httpx

from .protocols import Response

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 20.0


class HttpFetcher:
    """Async HTTP fetcher using httpx with connection reuse."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.timeout = httpx.Timeout(timeout)
        self.user_agent = user_agent
        self.transport = transport
        self._client: httpx.AsyncClient | None = None
        self._lock = asyncio.Lock()

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client with double-checked locking."""
        if self._client is None:
            async with self._lock:
                if self._client is None:
                    headers = {"User-Agent": self.user_agent} if self.user_agent else None
                    self._client = httpx.AsyncClient(
                        timeout=self.timeout,
                        headers=headers,
                        follow_redirects=True,
                        transport=self.transport,
                    )
        return self._client

    async def fetch(self, url: str) -> Response:
        """GET a URL and return the full body as bytes."""
        client = await self._get_client()
        logger.debug("GET %s", url)
        resp = await client.get(url)
        logger.debug("%s -> %d (%d bytes)", resp.url, resp.status_code, len(resp.content))
        return Response(
            url=str(resp.url),
            status=resp.status_code,
            content=resp.content,
            headers=dict(resp.headers),
            reason=resp.reason_phrase,
        )

    async def close(self):
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
