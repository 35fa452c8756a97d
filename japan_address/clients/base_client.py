"""Base async HTTP client with retry."""

from typing import Any

import httpx
import structlog
from tenacity import retry, retry_if_exception, stop_after_attempt, wait_exponential

logger = structlog.get_logger()


def _is_retryable(exc: BaseException) -> bool:
    if isinstance(exc, httpx.TransportError):
        return True
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code >= 500
    return False


class BaseAPIClient:
    """
    Async HTTP client base using httpx.AsyncClient.
    Features: configurable headers, timeout, retry with backoff on transport
    errors and 5xx responses.
    """

    def __init__(
        self,
        base_url: str,
        headers: dict[str, str] | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url
        self._headers = headers or {}
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=self._headers,
                timeout=self._timeout,
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    @retry(
        retry=retry_if_exception(_is_retryable),
        stop=stop_after_attempt(3),
        wait=wait_exponential(min=2, max=30),
        reraise=True,
    )
    async def _request(self, method: str, path: str) -> httpx.Response:
        """Make an HTTP request with retry."""
        client = await self._get_client()

        logger.debug("API request", method=method, path=path)

        response = await client.request(method, path)

        logger.debug(
            "API response",
            method=method,
            path=path,
            status=response.status_code,
        )

        response.raise_for_status()
        return response

    async def get(self, path: str) -> Any:
        response = await self._request("GET", path)
        return response.json()

    async def close(self):
        if self._client and not self._client.is_closed:
            await self._client.aclose()
