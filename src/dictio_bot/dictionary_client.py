import logging
from typing import Optional
from urllib.parse import quote

import httpx

from .models import DictionaryEntry

logger = logging.getLogger(__name__)


class DictionaryAPIError(Exception):
    """Non-OK, non-404 response from the dictionary API."""

    def __init__(self, status_code: int):
        super().__init__(f"API Error: {status_code}")
        self.status_code = status_code


class DictionaryClient:
    def __init__(
        self,
        *,
        base_url: str,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        # The word is appended directly, so keep the trailing slash.
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.timeout = timeout
        self._transport = transport
        # Persistent HTTP client with connection pooling
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the persistent async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
                headers={"Accept": "application/json"},
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client and clean up resources."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def url_for(self, word: str) -> str:
        return f"{self.base_url}{quote(word, safe='')}"

    async def fetch_entry(self, word: str) -> Optional[DictionaryEntry]:
        """Fetch the first dictionary entry for ``word``.

        Returns None when the API answers 404 (unknown word).

        Raises:
            DictionaryAPIError: For any other non-2xx status.
            httpx.HTTPError: On transport failures and timeouts.
            ValueError: If the body is not JSON or not a non-empty array.
            pydantic.ValidationError: If the entry lacks required fields.
        """
        url = self.url_for(word)
        client = await self._get_client()
        resp = await client.get(url)
        if resp.status_code == 404:
            logger.debug("Dictionary API has no entry for %r", word)
            return None
        if not resp.is_success:
            logger.error(
                "Dictionary request failed status=%s url=%s body=%s",
                resp.status_code,
                url,
                resp.text[:200],
            )
            raise DictionaryAPIError(resp.status_code)

        return DictionaryEntry.from_response(resp.json())
