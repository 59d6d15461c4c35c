"""arXiv API client: build a search, send it, decode the feed."""

from typing import Any, Optional

import httpx

from .config import ArxivAPIConfig, get_settings, parse_base_url
from .logging_config import get_logger
from .models import Feed
from .request import SearchOption, SearchRequest, build_search_request
from .transport import create_http_client, fetch_feed

logger = get_logger(__name__)

_UNSET: Any = object()


class ArxivClient:
    """
    Client for the arXiv query API.

    A single instance may be shared by concurrent tasks; each ``search``
    builds its own request and decoder and only the HTTP connection pool
    is shared.
    """

    def __init__(
        self,
        config: Optional[ArxivAPIConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = _UNSET,
    ):
        """
        Initialize the arXiv client.

        Args:
            config: API settings (defaults to the global settings)
            http_client: Injected HTTP client; the caller keeps ownership of it
            base_url: Query endpoint (overrides config)
            timeout: Default per-search deadline in seconds (overrides config)

        Raises:
            ConfigurationError: If the endpoint URL is malformed
        """
        self.config = config if config is not None else get_settings().arxiv_api
        self.base_url = parse_base_url(base_url if base_url is not None else self.config.base_url)
        self.timeout = self.config.timeout if timeout is _UNSET else timeout

        self._owns_client = http_client is None
        self._client = http_client if http_client is not None else create_http_client(self.config)

    async def close(self):
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def build_request(self, prefix: Any, query: str, *options: SearchOption) -> SearchRequest:
        return build_search_request(prefix, query, *options)

    def build_url(self, prefix: Any, query: str, *options: SearchOption) -> str:
        return self.build_request(prefix, query, *options).url(self.base_url)

    async def search(
        self,
        prefix: Any,
        query: str,
        *options: SearchOption,
        timeout: Optional[float] = _UNSET,
    ) -> Feed:
        """
        Search arXiv.

        Args:
            prefix: Field of the first clause
            query: Term of the first clause
            *options: Further clauses and request parameters, applied in order
            timeout: Deadline for this call (overrides the client default)

        Returns:
            Decoded Feed

        Raises:
            TransportError: Network failure or deadline expiry
            FeedDecodeError: Response is not a well-formed arXiv feed
        """
        url = self.build_url(prefix, query, *options)
        deadline = self.timeout if timeout is _UNSET else timeout

        logger.info(f"Searching arXiv: {url}")
        return await fetch_feed(self._client, url, timeout=deadline)
