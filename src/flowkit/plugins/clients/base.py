# src/flowkit/plugins/clients/base.py
"""Base class for the HTTP-backed dataset readers."""

from __future__ import annotations

from typing import Any, Self

import httpx

from flowkit.contracts import SourceReadError
from flowkit.core.logging import get_logger

logger = get_logger(__name__)


class HttpReaderBase:
    """Shared httpx client plus the error mapping every reader needs.

    Transport failures and non-2xx responses surface as SourceReadError
    with the URL in the message, so callers handle one exception type.

    Readers own their httpx.Client unless one is passed in; an injected
    client is left open by close().
    """

    def __init__(
        self,
        *,
        timeout: float = 30.0,
        headers: dict[str, str] | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the reader.

        Args:
            timeout: Request timeout in seconds (default: 30.0)
            headers: Default headers for all requests
            client: Existing client to share; the reader then does not close it
        """
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout, follow_redirects=True)
        self._default_headers = headers or {}

    def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        headers = {**self._default_headers, **kwargs.pop("headers", {})}
        logger.debug("HTTP request", method=method, url=url)
        try:
            response = self._client.request(method, url, headers=headers, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise SourceReadError(f"HTTP {e.response.status_code}: {url}") from e
        except httpx.TimeoutException as e:
            raise SourceReadError(f"Timeout: {url}") from e
        except httpx.HTTPError as e:
            raise SourceReadError(f"Request failed: {url}: {e}") from e
        return response

    def close(self) -> None:
        """Close the underlying httpx client if this reader created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
