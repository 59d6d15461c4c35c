"""HTTP transport for arXiv API requests."""

import asyncio
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import httpx

from .config import ArxivAPIConfig
from .decoder import decode_stream
from .exceptions import TransportError
from .logging_config import get_logger, log_api_request, log_api_response, log_error, log_performance
from .models import Feed

logger = get_logger(__name__)


def create_http_client(config: ArxivAPIConfig) -> httpx.AsyncClient:
    """
    Build the shared HTTP client.

    No transport-level timeout is set; deadlines are per call (see ``fetch_feed``).
    """
    return httpx.AsyncClient(
        timeout=httpx.Timeout(None),
        headers={"User-Agent": config.user_agent},
        limits=httpx.Limits(
            max_keepalive_connections=config.max_keepalive_connections,
            max_connections=config.max_connections,
            keepalive_expiry=30
        ),
        follow_redirects=True,
    )


@asynccontextmanager
async def open_response(client: httpx.AsyncClient, url: str) -> AsyncIterator[httpx.Response]:
    """
    GET ``url`` and yield the response with its body still unread.

    The response is closed when the block exits, whether it finished,
    raised or was cancelled. The status code is logged but not checked.

    Raises:
        TransportError: For any httpx failure, including while the body is read
    """
    start_time = time.monotonic()
    log_api_request(url)

    try:
        async with client.stream("GET", url) as response:
            log_api_response(url, response.status_code, time.monotonic() - start_time)
            yield response
    except httpx.HTTPError as e:
        log_error(e, context={'url': url})
        raise TransportError(f"HTTP error: {e}", url=url, original_error=e) from e


async def _get_feed(client: httpx.AsyncClient, url: str) -> Feed:
    async with open_response(client, url) as response:
        return await decode_stream(response.aiter_bytes())


async def fetch_feed(client: httpx.AsyncClient, url: str, timeout: Optional[float] = None) -> Feed:
    """
    Perform one GET and decode the body as a Feed.

    Args:
        client: Shared HTTP client
        url: Fully assembled request URL
        timeout: Deadline in seconds for request plus decode; None waits indefinitely

    Returns:
        The decoded Feed

    Raises:
        TransportError: Network failure or deadline expiry
        FeedDecodeError: Body is not a well-formed arXiv feed
    """
    start_time = time.monotonic()
    try:
        feed = await asyncio.wait_for(_get_feed(client, url), timeout)
    except asyncio.TimeoutError as e:
        logger.warning(f"Request deadline of {timeout}s exceeded for {url}")
        raise TransportError(f"Request deadline of {timeout}s exceeded", url=url, original_error=e) from e

    log_performance("fetch_feed", time.monotonic() - start_time, entries=len(feed.entries))
    return feed
