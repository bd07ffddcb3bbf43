# ABOUTME: HTTP transport shared by the catalog sources.
# ABOUTME: Retries transient failures with backoff and wraps every failure in CatalogFetchError.

import logging
import time
from typing import Any, Protocol, runtime_checkable

import httpx

logger = logging.getLogger(__name__)

_RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}


class CatalogFetchError(Exception):
    """Raised when a catalog request fails or returns an unusable body."""


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP GET operations against catalog APIs."""

    def get(self, url: str, params: dict[str, str] | None = None) -> Any: ...


class SpinescanHttpClient:
    """httpx-backed client with retry for catalog API calls.

    Transient statuses (429, 5xx) are retried with exponential backoff.
    Per-source pacing is not done here; see RateLimiter.
    """

    def __init__(
        self,
        *,
        max_retries: int = 2,
        retry_delay: float = 1.0,
        timeout: float = 15.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        client_kwargs: dict[str, Any] = {
            "headers": {"User-Agent": "spinescan/0.1.0"},
            "timeout": timeout,
        }
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.Client(**client_kwargs)
        self._max_retries = max_retries
        self._retry_delay = retry_delay

    def get(self, url: str, params: dict[str, str] | None = None) -> Any:
        """Send a GET request with retry and return the decoded JSON body.

        Raises:
            CatalogFetchError: On transport errors, non-retryable statuses,
                exhausted retries, or a body that is not JSON.
        """
        attempts = 1 + self._max_retries
        last_status = 0
        for attempt in range(attempts):
            try:
                response = self._client.get(url, params=params)
            except httpx.HTTPError as exc:
                raise CatalogFetchError(f"Request failed: {url}: {exc}") from exc
            last_status = response.status_code

            if response.status_code == 200:
                try:
                    return response.json()
                except ValueError as exc:
                    raise CatalogFetchError(f"Malformed JSON from {url}") from exc

            if response.status_code not in _RETRYABLE_STATUS_CODES:
                raise CatalogFetchError(f"HTTP {response.status_code} from {url}")

            if attempt < attempts - 1:
                delay = self._retry_delay * (2**attempt)
                logger.warning(
                    "HTTP %d from %s, retrying in %.1fs (attempt %d/%d)",
                    response.status_code,
                    url,
                    delay,
                    attempt + 1,
                    self._max_retries,
                )
                time.sleep(delay)

        raise CatalogFetchError(f"HTTP {last_status} from {url} after {attempts} attempts")

    def close(self) -> None:
        self._client.close()
