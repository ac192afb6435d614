"""Bounded, polite, strictly sequential breadth-first crawler.

``crawl`` is the single public function in this module.  It owns the frontier
and visited set for one run and returns a finished :class:`CrawlSession`:

    robots check → drain frontier (pages) → optional stylesheet pass → done
"""

from __future__ import annotations

import time
from collections import deque
from dataclasses import replace
from typing import Optional

import httpx

from theme_intel.config import settings
from theme_intel.crawler.fetcher import Sleeper, build_client, fetch_page, fetch_stylesheet
from theme_intel.crawler.links import is_same_origin, normalize_url
from theme_intel.crawler.models import CrawlConfig, CrawledPage, CrawlSession
from theme_intel.crawler.robots import check_robots_txt


def _off_origin(page: CrawledPage) -> CrawledPage:
    """Blank a page whose redirect left the seed origin, keeping the requested URL."""
    return replace(
        page,
        final_url=page.url,
        html="",
        headers={},
        content_type="",
        css_links=[],
        js_links=[],
        internal_links=[],
        error=f"redirected off-origin: {page.final_url}",
    )


def crawl(
    config: CrawlConfig,
    client: Optional[httpx.Client] = None,
    sleep: Sleeper = time.sleep,
) -> CrawlSession:
    """Crawl up to ``config.max_pages`` pages starting from ``config.theme_url``.

    Args:
        config: Validated per-run options.
        client: Optional shared HTTP client.  When ``None`` one is opened for
            the duration of the crawl and closed on exit.
        sleep: Blocking delay used for politeness spacing and retry backoff.

    Returns:
        The completed :class:`CrawlSession`.  Page failures are recorded on the
        pages themselves; stylesheets that fail to fetch are left out of
        ``css_contents``.
    """
    if client is None:
        with build_client() as own_client:
            return crawl(config, own_client, sleep)

    start = time.monotonic()
    session = CrawlSession(start_url=config.theme_url)

    # ------------------------------------------------------------------
    # Robots check (advisory only)
    # ------------------------------------------------------------------
    verdict = check_robots_txt(config.theme_url, client=client)
    session.robots_txt_status = "allowed" if verdict.allowed else "blocked"
    session.robots_txt_warning = verdict.warning
    if not verdict.allowed:
        print(f"[Crawler] Warning: {verdict.warning} (continuing; result will be flagged)")

    # ------------------------------------------------------------------
    # Page pass
    # ------------------------------------------------------------------
    frontier: deque[str] = deque([config.theme_url])
    visited: set[str] = set()
    stylesheet_urls: list[str] = []

    while frontier and len(session.pages) < config.max_pages:
        url = normalize_url(frontier.popleft())
        if url is None or url in visited:
            continue
        if config.same_origin_only and not is_same_origin(url, config.theme_url):
            continue
        visited.add(url)

        print(f"[Crawler] Fetching ({len(session.pages) + 1}/{config.max_pages}): {url}")
        session.total_requests += 1
        page = fetch_page(url, client=client, sleep=sleep)
        if config.same_origin_only and not is_same_origin(page.final_url, config.theme_url):
            page = _off_origin(page)
        if page.error:
            session.failed_requests += 1
            print(f"[Crawler] Failed: {page.error}")
        session.pages.append(page)

        for css_url in page.css_links:
            if css_url not in stylesheet_urls:
                stylesheet_urls.append(css_url)
        for link in page.internal_links:
            if link not in visited:
                frontier.append(link)

        sleep(settings.page_delay)

    # ------------------------------------------------------------------
    # Stylesheet pass
    # ------------------------------------------------------------------
    if config.include_assets:
        print(f"[Crawler] Fetching {len(stylesheet_urls)} CSS files...")
        for css_url in stylesheet_urls:
            session.total_requests += 1
            css = fetch_stylesheet(css_url, client=client, sleep=sleep)
            if css is not None:
                session.css_contents[css_url] = css
            else:
                session.failed_requests += 1
            sleep(settings.stylesheet_delay)

    session.crawl_duration = int((time.monotonic() - start) * 1000)
    return session
