"""aiohttp-backed IHttpClient.

One lazily created ClientSession per client, reused across requests and
recreated after close(). Bodies are decoded leniently: JSON when it parses,
the raw text otherwise, None when empty.
"""

import json
import logging
from typing import Any

import aiohttp

from cryptomap.ingestion.config.value_objects import HttpClientConfig
from cryptomap.ingestion.ports.http import HttpResponse, IHttpClient

logger = logging.getLogger(__name__)


class AiohttpClient(IHttpClient):
    """HTTP client implementation using aiohttp."""

    def __init__(self, config: HttpClientConfig):
        self.config = config
        self._session: aiohttp.ClientSession | None = None

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=self._timeout(self.config.timeout)
            )
        return self._session

    def _timeout(self, total: float | None) -> aiohttp.ClientTimeout:
        return aiohttp.ClientTimeout(
            total=total or self.config.timeout,
            connect=self.config.connect_timeout,
        )

    async def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> HttpResponse:
        """Execute a GET and wrap whatever status comes back.

        Args:
            url: Full URL
            params: Query parameters
            headers: HTTP headers
            timeout: Total deadline in seconds, overriding the configured one

        Raises:
            aiohttp.ClientError: On connection errors
            asyncio.TimeoutError: When the deadline passes
        """
        session = await self._get_session()

        async with session.get(
            url,
            params=params,
            headers=headers,
            timeout=self._timeout(timeout),
        ) as resp:
            text = await resp.text()
            logger.debug(f"🔍 GET {resp.url} -> HTTP {resp.status}")
            return HttpResponse(
                status_code=resp.status,
                body=_decode_body(text),
                headers=dict(resp.headers),
                url=str(resp.url),
            )

    async def close(self) -> None:
        if self._session:
            await self._session.close()
            self._session = None


def _decode_body(text: str) -> Any:
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError:
        logger.debug(f"Response body is not JSON ({len(text)} chars)")
        return text
