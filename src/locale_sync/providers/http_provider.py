"""
HTTP translation provider.

Talks to a LibreTranslate-compatible REST endpoint: ``POST <endpoint>/translate``
with ``{"q", "source", "target", "format", "api_key"}`` returning
``{"translatedText": ...}``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, cast

import httpx

from ..core.exceptions import ProviderError

if TYPE_CHECKING:
    from types import TracebackType

    from ..config.schema import ProviderConfig

logger = logging.getLogger(__name__)


class HttpTranslationProvider:
    """Async translation client for a REST translation API."""

    def __init__(
        self,
        endpoint: str,
        api_key: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the provider with connection parameters."""
        self.endpoint: str = endpoint.rstrip("/")
        self.api_key: str | None = api_key
        self.timeout: float = timeout
        self._transport: httpx.AsyncBaseTransport | None = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_config(
        cls,
        config: ProviderConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> HttpTranslationProvider:
        """Build a provider from the provider section of the configuration."""
        return cls(
            endpoint=config.resolved_endpoint(),
            api_key=config.api_key,
            timeout=config.timeout,
            transport=transport,
        )

    async def __aenter__(self) -> HttpTranslationProvider:
        """Enter async context and initialize HTTP client."""
        self._client = httpx.AsyncClient(
            base_url=self.endpoint,
            timeout=self.timeout,
            transport=self._transport,
            headers={"User-Agent": "locale-sync/1.0"},
        )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit async context and cleanup HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def translate_text(
        self, source_language: str, target_language: str, text: str
    ) -> str:
        """
        Translate a single string.

        Raises:
            RuntimeError: If used outside the async context manager
            ProviderError: On network, HTTP or response format errors
        """
        if self._client is None:
            raise RuntimeError(
                "HttpTranslationProvider not initialized. Use as async context manager."
            )

        payload: dict[str, str] = {
            "q": text,
            "source": source_language,
            "target": target_language,
            "format": "text",
        }
        if self.api_key:
            payload["api_key"] = self.api_key

        try:
            response = await self._client.post("/translate", json=payload)
            _ = response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ProviderError(
                f"HTTP {e.response.status_code}: {e.response.text}",
                status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            raise ProviderError(f"Request failed: {e}") from e

        try:
            body: object = response.json()  # pyright: ignore[reportAny]
        except ValueError as e:
            raise ProviderError(f"Invalid JSON response: {e}") from e

        if not isinstance(body, dict):
            raise ProviderError("Invalid response format: expected object")

        translated = cast(dict[str, object], body).get("translatedText")
        if not isinstance(translated, str):
            raise ProviderError("Invalid response format: missing translatedText")

        return translated
