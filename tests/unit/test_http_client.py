# ABOUTME: Unit tests for the HTTP client abstraction.
# ABOUTME: Tests the HttpClient protocol, SpinescanHttpClient retries, and error wrapping.

import httpx
import pytest

from spinescan.metadata.http import (
    CatalogFetchError,
    HttpClient,
    SpinescanHttpClient,
)


class FakeTransport(httpx.BaseTransport):
    """Fake transport for httpx that returns canned responses."""

    def __init__(self, responses: list[httpx.Response] | None = None) -> None:
        self._responses = list(responses or [])
        self.requests: list[httpx.Request] = []

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._responses:
            return self._responses.pop(0)
        return httpx.Response(200, json={"ok": True})

    @property
    def call_count(self) -> int:
        return len(self.requests)


class FailingTransport(httpx.BaseTransport):
    """Transport that fails every request at the connection level."""

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)


class TestHttpClientProtocol:
    """Tests for HttpClient protocol compliance."""

    def test_spinescan_client_satisfies_protocol(self) -> None:
        """SpinescanHttpClient satisfies the HttpClient protocol."""
        client = SpinescanHttpClient(transport=FakeTransport())
        assert isinstance(client, HttpClient)


class TestSpinescanHttpClient:
    """Tests for SpinescanHttpClient."""

    def test_get_returns_json(self) -> None:
        """GET request returns parsed JSON response."""
        transport = FakeTransport()
        client = SpinescanHttpClient(transport=transport)
        assert client.get("https://example.com/api", params={"q": "dune"}) == {"ok": True}

    def test_params_sent_as_query_string(self) -> None:
        transport = FakeTransport()
        client = SpinescanHttpClient(transport=transport)
        client.get("https://example.com/search.json", params={"q": "the great gatsby"})
        assert transport.requests[0].url.params["q"] == "the great gatsby"

    def test_user_agent_header(self) -> None:
        """Requests include the spinescan User-Agent header."""
        transport = FakeTransport()
        client = SpinescanHttpClient(transport=transport)
        client.get("https://example.com/api")
        assert transport.requests[0].headers["user-agent"].startswith("spinescan/")

    def test_http_error_raises_fetch_error(self) -> None:
        """Non-retryable HTTP errors raise CatalogFetchError without retrying."""
        transport = FakeTransport([httpx.Response(404, json={"error": "not found"})])
        client = SpinescanHttpClient(transport=transport, retry_delay=0.0)

        with pytest.raises(CatalogFetchError, match="404"):
            client.get("https://example.com/missing")
        assert transport.call_count == 1

    def test_retry_on_429(self) -> None:
        """Client retries on 429 status and succeeds on next attempt."""
        transport = FakeTransport(
            [
                httpx.Response(429, json={"error": "rate limited"}),
                httpx.Response(200, json={"ok": True}),
            ]
        )
        client = SpinescanHttpClient(transport=transport, retry_delay=0.0)

        assert client.get("https://example.com/api") == {"ok": True}
        assert transport.call_count == 2

    def test_retry_exhausted_raises(self) -> None:
        """After max retries, raises CatalogFetchError."""
        transport = FakeTransport([httpx.Response(503, text="busy")] * 3)
        client = SpinescanHttpClient(transport=transport, max_retries=2, retry_delay=0.0)

        with pytest.raises(CatalogFetchError, match="503"):
            client.get("https://example.com/api")
        assert transport.call_count == 3  # 1 initial + 2 retries

    def test_malformed_json_raises(self) -> None:
        """A 200 response that is not JSON is a fetch error, not a crash."""
        transport = FakeTransport([httpx.Response(200, text="<html>oops</html>")])
        client = SpinescanHttpClient(transport=transport)

        with pytest.raises(CatalogFetchError, match="Malformed"):
            client.get("https://example.com/api")

    def test_connection_error_raises_fetch_error(self) -> None:
        client = SpinescanHttpClient(transport=FailingTransport())
        with pytest.raises(CatalogFetchError, match="Request failed"):
            client.get("https://example.com/api")

    def test_close_is_idempotent(self) -> None:
        client = SpinescanHttpClient(transport=FakeTransport())
        client.close()
        client.close()
