API_KEY_HEADER = "X-CG-API-KEY"  # header name required by CoinGecko


class StaticApiKeyProvider:
    """
    Supplies the request headers for CoinGecko: a single static API key plus
    content negotiation and user agent. No rotation, no refresh.

    Usage:
        provider = StaticApiKeyProvider("CG-xxxx", user_agent="Mozilla/5.0")
        headers = await provider.get_headers()
    """

    def __init__(self, api_key: str, user_agent: str):
        self._api_key = api_key
        self._user_agent = user_agent

    async def get_headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/json",
            "User-Agent": self._user_agent,
        }
        # keyless requests still work against the public tier
        if self._api_key:
            headers[API_KEY_HEADER] = self._api_key
        return headers
