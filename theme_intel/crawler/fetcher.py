"""HTTP fetch gateway: one GET with timeout, retry and exponential backoff.

This is the only module (besides the robots check) that talks to the network.
Callers may pass a shared ``httpx.Client``; otherwise a short-lived one is
opened per call.
"""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Callable, Optional

import httpx

from theme_intel.config import settings
from theme_intel.crawler.links import extract_links
from theme_intel.crawler.models import CrawledPage, FetchResponse

Sleeper = Callable[[float], None]


def default_headers() -> dict[str, str]:
    return {
        "User-Agent": settings.user_agent,
        "Accept": "text/html,text/css,application/javascript,*/*",
        "Accept-Language": "en-US,en;q=0.9",
    }


def build_client(timeout: Optional[float] = None) -> httpx.Client:
    """Return an ``httpx.Client`` configured with the crawler's headers and timeout."""
    return httpx.Client(
        headers=default_headers(),
        timeout=settings.request_timeout if timeout is None else timeout,
        follow_redirects=True,
    )


def backoff_delay(attempt: int, initial_delay: float) -> float:
    """Seconds to wait after failed attempt *attempt* (0-indexed): ``initial * 2**attempt``."""
    return initial_delay * (2 ** attempt)


def _is_retryable_status(status_code: int) -> bool:
    return status_code == 429 or status_code >= 500


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


# ---------------------------------------------------------------------------
# Retrying GET
# ---------------------------------------------------------------------------

def fetch_with_retry(
    url: str,
    client: Optional[httpx.Client] = None,
    max_attempts: Optional[int] = None,
    initial_delay: Optional[float] = None,
    timeout: Optional[float] = None,
    sleep: Sleeper = time.sleep,
) -> FetchResponse:
    """GET *url*, retrying on 429, 5xx and transport failures.

    Any other response (2xx, 3xx that was not followed, 4xx) is returned as-is
    for the caller to classify.

    Raises:
        httpx.TransportError: The last network failure, once every attempt failed.
        httpx.HTTPStatusError: Built from the last 429/5xx response, once every
            attempt failed.
        ValueError: If *max_attempts* is below 1.
    """
    max_attempts = settings.retry_max_attempts if max_attempts is None else max_attempts
    initial_delay = settings.retry_initial_delay if initial_delay is None else initial_delay
    timeout = settings.request_timeout if timeout is None else timeout
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    if client is None:
        with build_client() as own_client:
            return fetch_with_retry(url, own_client, max_attempts, initial_delay, timeout, sleep)

    last_error: Exception | None = None
    for attempt in range(max_attempts):
        try:
            response = client.get(url, timeout=timeout)
        except httpx.TransportError as exc:
            last_error = exc
            reason = f"Error fetching {url}: {exc}"
        else:
            if not _is_retryable_status(response.status_code):
                return FetchResponse(
                    url=url,
                    final_url=str(response.url),
                    status_code=response.status_code,
                    headers={k.lower(): v for k, v in response.headers.items()},
                    text=response.text,
                )
            last_error = httpx.HTTPStatusError(
                f"HTTP {response.status_code} for {url} after {attempt + 1} attempt(s)",
                request=response.request,
                response=response,
            )
            reason = f"{response.status_code} for {url}"

        if attempt < max_attempts - 1:
            delay = backoff_delay(attempt, initial_delay)
            print(f"[Crawler] {reason}, retrying in {delay:.1f}s …")
            sleep(delay)

    raise last_error  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Page / stylesheet fetch
# ---------------------------------------------------------------------------

def fetch_page(
    url: str,
    client: Optional[httpx.Client] = None,
    sleep: Sleeper = time.sleep,
) -> CrawledPage:
    """Fetch *url* and return a :class:`CrawledPage`.  Never raises on HTTP failure.

    - Transport failure or exhausted retries → ``error`` holds the exception text.
    - Any other non-2xx → ``error="HTTP <status>"`` with empty markup.
    - Success → markup plus links resolved against the final (post-redirect) URL.
    """
    crawled_at = _now_iso()
    try:
        response = fetch_with_retry(url, client=client, sleep=sleep)
    except httpx.HTTPStatusError as exc:
        return CrawledPage(
            url=url,
            final_url=str(exc.response.url),
            status=exc.response.status_code,
            html="",
            crawled_at=crawled_at,
            error=str(exc),
        )
    except httpx.HTTPError as exc:
        return CrawledPage(
            url=url,
            final_url=url,
            status=0,
            html="",
            crawled_at=crawled_at,
            error=str(exc) or exc.__class__.__name__,
        )

    content_type = response.headers.get("content-type", "")
    if not response.ok:
        return CrawledPage(
            url=url,
            final_url=response.final_url,
            status=response.status_code,
            html="",
            crawled_at=crawled_at,
            headers=response.headers,
            content_type=content_type,
            error=f"HTTP {response.status_code}",
        )

    links = extract_links(response.text, response.final_url)
    return CrawledPage(
        url=url,
        final_url=response.final_url,
        status=response.status_code,
        html=response.text,
        crawled_at=crawled_at,
        headers=response.headers,
        content_type=content_type,
        css_links=links.css_links,
        js_links=links.js_links,
        internal_links=links.internal_links,
    )


def fetch_stylesheet(
    url: str,
    client: Optional[httpx.Client] = None,
    sleep: Sleeper = time.sleep,
) -> Optional[str]:
    """Return the text of the stylesheet at *url*, or ``None`` if it cannot be fetched."""
    try:
        response = fetch_with_retry(url, client=client, sleep=sleep)
    except httpx.HTTPError as exc:
        print(f"[Crawler] Stylesheet skipped {url}: {exc}")
        return None
    if not response.ok:
        return None
    return response.text
