"""Logstash stats endpoint client."""
import logging
import posixpath
from typing import Optional

import httpx

from ..config import PIPELINE_STATS_PATH
from .pipeline_stats import CounterSnapshot, FetchError

logger = logging.getLogger(__name__)


class StatsSource:
    """Fetches one CounterSnapshot per call from a Logstash node."""

    def __init__(self, base_url: str, timeout: float, transport: Optional[httpx.AsyncBaseTransport] = None):
        """Initialize the stats source.

        Args:
            base_url: Logstash HTTP API root, e.g. http://127.0.0.1:9600
            timeout: Seconds before a fetch is abandoned
            transport: Optional httpx transport override
        """
        self.base_url = base_url
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def stats_url(self) -> str:
        """Pipeline stats endpoint."""
        url = httpx.URL(self.base_url)
        return str(url.copy_with(path=posixpath.join(url.path or "/", PIPELINE_STATS_PATH)))

    async def start(self):
        """Open the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    async def stop(self):
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def fetch(self) -> CounterSnapshot:
        """GET the pipeline stats and decode them.

        Raises FetchError for transport failures and non-2xx answers, and
        DecodeError when the body is not the expected JSON.
        """
        await self.start()
        url = self.stats_url
        logger.debug(f"Pulling node stats from: {url}")
        try:
            resp = await self._client.get(url)
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise FetchError(f"{url} answered HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise FetchError(f"{url}: {exc!r}") from exc
        return CounterSnapshot.from_json_text(resp.text)
