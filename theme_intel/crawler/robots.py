"""Best-effort robots.txt check.

The verdict is advisory: a "blocked" answer is surfaced to the caller as a
warning, it never stops a crawl.  Only ``User-agent: *`` (or ``*bot*``) groups
are read, and only a root-level ``Disallow: /`` or ``Disallow: /*`` counts.
"""

from __future__ import annotations

from typing import Optional

import httpx

from theme_intel.config import settings
from theme_intel.crawler.fetcher import build_client
from theme_intel.crawler.links import get_origin
from theme_intel.crawler.models import RobotsVerdict

_BLOCK_ALL_PATHS = ("/", "/*")


def parse_robots_txt(text: str) -> RobotsVerdict:
    """Interpret *text* with the minimal rules described in the module docstring."""
    in_matching_group = False
    for line in text.splitlines():
        trimmed = line.strip().lower()
        if trimmed.startswith("user-agent:"):
            agent = trimmed[len("user-agent:"):].strip()
            in_matching_group = agent == "*" or "bot" in agent
        elif in_matching_group and trimmed.startswith("disallow:"):
            path = trimmed[len("disallow:"):].strip()
            if path in _BLOCK_ALL_PATHS:
                return RobotsVerdict(
                    allowed=False,
                    warning=f"robots.txt disallows crawling: {path}",
                )
    return RobotsVerdict(allowed=True)


def check_robots_txt(base_url: str, client: Optional[httpx.Client] = None) -> RobotsVerdict:
    """Fetch ``<origin>/robots.txt`` for *base_url* and return an advisory verdict.

    Fails open: a missing file or a fetch error yields ``allowed=True`` with a
    warning explaining why the check was inconclusive.
    """
    origin = get_origin(base_url)
    if origin is None:
        return RobotsVerdict(allowed=True, warning=f"Could not determine origin of {base_url!r}")

    robots_url = f"{origin}/robots.txt"
    print(f"[Robots] Checking {robots_url}")
    try:
        if client is None:
            with build_client(timeout=settings.robots_timeout) as own_client:
                response = own_client.get(robots_url)
        else:
            response = client.get(robots_url, timeout=settings.robots_timeout)
    except httpx.HTTPError as exc:
        warning = f"Could not fetch robots.txt: {str(exc) or exc.__class__.__name__}"
        print(f"[Robots] {warning}")
        return RobotsVerdict(allowed=True, warning=warning)

    if not response.is_success:
        warning = f"No robots.txt available (HTTP {response.status_code}); assuming allowed"
        print(f"[Robots] {warning}")
        return RobotsVerdict(allowed=True, warning=warning)

    return parse_robots_txt(response.text)
