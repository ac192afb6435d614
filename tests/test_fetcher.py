"""Tests for the HTTP fetch gateway (retry/backoff, page and stylesheet fetch).

Mocking strategy:
- ``respx`` patches ``httpx`` at the transport layer so no real network calls
  are made.
- Backoff delays go through an injected ``sleep`` mock, so the tests never
  wait and can assert on the exact delays requested.
"""

from __future__ import annotations

from unittest.mock import MagicMock, call

import httpx
import pytest
import respx

from theme_intel.crawler.fetcher import (
    backoff_delay,
    build_client,
    default_headers,
    fetch_page,
    fetch_stylesheet,
    fetch_with_retry,
)
from theme_intel.crawler.models import CrawledPage


# ---------------------------------------------------------------------------
# Fixtures / constants
# ---------------------------------------------------------------------------

_HTML = """\
<html><head><link rel="stylesheet" href="/site.css"><script src="app.js"></script></head>
<body><a href="/docs">Docs</a><a href="https://elsewhere.org/">Out</a></body></html>
"""


# ---------------------------------------------------------------------------
# Backoff / client configuration
# ---------------------------------------------------------------------------

class TestBackoff:
    @pytest.mark.parametrize("attempt, expected", [(0, 1.0), (1, 2.0), (2, 4.0), (3, 8.0)])
    def test_doubles_per_attempt(self, attempt: int, expected: float) -> None:
        assert backoff_delay(attempt, 1.0) == expected

    def test_scales_with_initial_delay(self) -> None:
        assert backoff_delay(2, 0.25) == 1.0

    def test_client_sends_identifying_user_agent(self) -> None:
        assert default_headers()["User-Agent"].startswith("ThemeIntelligenceExtractor")
        with build_client() as client:
            assert client.follow_redirects is True
            assert client.headers["User-Agent"] == default_headers()["User-Agent"]


# ---------------------------------------------------------------------------
# fetch_with_retry
# ---------------------------------------------------------------------------

class TestFetchWithRetry:
    def test_success_on_first_attempt(self) -> None:
        sleep = MagicMock()
        with respx.mock:
            route = respx.get("https://example.com/").mock(
                return_value=httpx.Response(200, text="ok", headers={"Content-Type": "text/plain"})
            )
            response = fetch_with_retry("https://example.com/", sleep=sleep)

        assert route.call_count == 1
        assert response.status_code == 200
        assert response.text == "ok"
        assert response.headers["content-type"] == "text/plain"
        sleep.assert_not_called()

    def test_retries_server_errors_then_succeeds(self) -> None:
        sleep = MagicMock()
        with respx.mock:
            route = respx.get("https://example.com/").mock(
                side_effect=[httpx.Response(503), httpx.Response(429), httpx.Response(200, text="ok")]
            )
            response = fetch_with_retry(
                "https://example.com/", max_attempts=3, initial_delay=1.0, sleep=sleep
            )

        assert route.call_count == 3
        assert response.ok
        assert sleep.call_args_list == [call(1.0), call(2.0)]

    def test_exhausted_status_retries_raise_http_status_error(self) -> None:
        sleep = MagicMock()
        with respx.mock:
            route = respx.get("https://example.com/").mock(return_value=httpx.Response(500))
            with pytest.raises(httpx.HTTPStatusError) as excinfo:
                fetch_with_retry(
                    "https://example.com/", max_attempts=3, initial_delay=1.0, sleep=sleep
                )

        assert route.call_count == 3
        assert excinfo.value.response.status_code == 500
        # No sleep after the final attempt.
        assert sleep.call_args_list == [call(1.0), call(2.0)]

    def test_transport_errors_are_retried_then_raised(self) -> None:
        sleep = MagicMock()
        with respx.mock:
            route = respx.get("https://example.com/").mock(side_effect=httpx.ConnectError)
            with pytest.raises(httpx.ConnectError):
                fetch_with_retry("https://example.com/", max_attempts=2, sleep=sleep)

        assert route.call_count == 2
        assert sleep.call_count == 1

    def test_timeouts_are_retried_then_raised(self) -> None:
        sleep = MagicMock()
        with respx.mock:
            route = respx.get("https://example.com/").mock(side_effect=httpx.ReadTimeout)
            with pytest.raises(httpx.ReadTimeout):
                fetch_with_retry(
                    "https://example.com/", max_attempts=3, initial_delay=0.5, sleep=sleep
                )

        assert route.call_count == 3
        assert sleep.call_args_list == [call(0.5), call(1.0)]

    def test_timeout_recovers_on_next_attempt(self) -> None:
        with respx.mock:
            route = respx.get("https://example.com/").mock(
                side_effect=[httpx.ReadTimeout, httpx.Response(200, text="ok")]
            )
            response = fetch_with_retry("https://example.com/", sleep=MagicMock())

        assert route.call_count == 2
        assert response.text == "ok"

    def test_timeout_applies_to_each_request(self) -> None:
        with respx.mock:
            route = respx.get("https://example.com/").mock(return_value=httpx.Response(200))
            fetch_with_retry("https://example.com/", timeout=2.5, sleep=MagicMock())

        assert route.calls.last.request.extensions["timeout"]["read"] == 2.5

    def test_client_errors_are_not_retried(self) -> None:
        sleep = MagicMock()
        with respx.mock:
            route = respx.get("https://example.com/missing").mock(
                return_value=httpx.Response(404)
            )
            response = fetch_with_retry("https://example.com/missing", sleep=sleep)

        assert route.call_count == 1
        assert response.status_code == 404
        assert not response.ok
        sleep.assert_not_called()

    def test_rejects_zero_attempts(self) -> None:
        with pytest.raises(ValueError):
            fetch_with_retry("https://example.com/", max_attempts=0)


# ---------------------------------------------------------------------------
# fetch_page
# ---------------------------------------------------------------------------

class TestFetchPage:
    def test_successful_page_carries_links(self) -> None:
        with respx.mock:
            respx.get("https://example.com/").mock(
                return_value=httpx.Response(
                    200, text=_HTML, headers={"Content-Type": "text/html; charset=utf-8"}
                )
            )
            page = fetch_page("https://example.com/", sleep=MagicMock())

        assert isinstance(page, CrawledPage)
        assert page.error is None
        assert page.status == 200
        assert page.content_type.startswith("text/html")
        assert page.css_links == ["https://example.com/site.css"]
        assert page.js_links == ["https://example.com/app.js"]
        assert page.internal_links == ["https://example.com/docs"]
        assert page.html_snippet == _HTML[:2000]

    def test_links_resolve_against_final_url_after_redirect(self) -> None:
        with respx.mock:
            respx.get("https://example.com/old").mock(
                return_value=httpx.Response(301, headers={"Location": "https://example.com/new/"})
            )
            respx.get("https://example.com/new/").mock(
                return_value=httpx.Response(200, text='<a href="child">c</a>')
            )
            page = fetch_page("https://example.com/old", sleep=MagicMock())

        assert page.url == "https://example.com/old"
        assert page.final_url == "https://example.com/new/"
        assert page.internal_links == ["https://example.com/new/child"]

    def test_permanent_http_error_is_recorded(self) -> None:
        with respx.mock:
            respx.get("https://example.com/gone").mock(return_value=httpx.Response(404))
            page = fetch_page("https://example.com/gone", sleep=MagicMock())

        assert page.status == 404
        assert page.error == "HTTP 404"
        assert page.html == ""
        assert page.internal_links == []

    def test_exhausted_retries_are_recorded_not_raised(self) -> None:
        with respx.mock:
            respx.get("https://example.com/flaky").mock(return_value=httpx.Response(503))
            page = fetch_page("https://example.com/flaky", sleep=MagicMock())

        assert page.status == 503
        assert page.error
        assert page.html == ""

    def test_network_failure_records_status_zero(self) -> None:
        with respx.mock:
            respx.get("https://example.com/down").mock(side_effect=httpx.ConnectError)
            page = fetch_page("https://example.com/down", sleep=MagicMock())

        assert page.status == 0
        assert page.error


# ---------------------------------------------------------------------------
# fetch_stylesheet
# ---------------------------------------------------------------------------

class TestFetchStylesheet:
    def test_returns_css_text(self) -> None:
        with respx.mock:
            respx.get("https://example.com/site.css").mock(
                return_value=httpx.Response(200, text=":root{--x:1px}")
            )
            assert fetch_stylesheet("https://example.com/site.css", sleep=MagicMock()) == ":root{--x:1px}"

    def test_missing_stylesheet_returns_none(self) -> None:
        with respx.mock:
            respx.get("https://example.com/nope.css").mock(return_value=httpx.Response(404))
            assert fetch_stylesheet("https://example.com/nope.css", sleep=MagicMock()) is None

    def test_failing_stylesheet_returns_none(self) -> None:
        with respx.mock:
            respx.get("https://example.com/err.css").mock(side_effect=httpx.ConnectError)
            assert fetch_stylesheet("https://example.com/err.css", sleep=MagicMock()) is None
