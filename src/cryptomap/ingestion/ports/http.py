"""Transport port used by the CoinGecko client.

The client never touches aiohttp directly: it talks to an IHttpClient and
gets back an HttpResponse, which keeps status classification and payload
validation testable against an in-memory fake.
"""

from dataclasses import dataclass, field
from typing import Any, Protocol


@dataclass
class HttpResponse:
    """What the transport saw: status, decoded body, headers."""

    status_code: int
    body: Any  # JSON-decoded body, or the raw text when it is not JSON
    headers: dict[str, str] = field(default_factory=dict)
    url: str = ""

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


class IHttpClient(Protocol):
    """GET-only transport.

    Returns every status as an HttpResponse, including 4xx/5xx. Only
    transport failures raise: aiohttp.ClientError for connection problems
    and asyncio.TimeoutError when the deadline passes.
    """

    async def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> HttpResponse: ...

    async def close(self) -> None: ...


class IApiKeyProvider(Protocol):
    """Supplies the headers every CoinGecko request carries."""

    async def get_headers(self) -> dict[str, str]: ...
