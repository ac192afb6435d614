"""Link and asset discovery: turns one HTML document into absolute URL lists.

Markup is walked with BeautifulSoup; ``@import`` rules inside inline
``<style>`` blocks are matched with a regex over the style text.  Anything
that cannot be resolved to a URL is skipped silently.
"""

from __future__ import annotations

import re
from typing import List, Optional
from urllib.parse import urljoin, urlsplit, urlunsplit

from bs4 import BeautifulSoup

from theme_intel.crawler.models import PageLinks

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------
_IMPORT_RE = re.compile(r"""@import\s+(?:url\()?["']?([^"')\s;]+)["']?\)?""", re.IGNORECASE)
_SKIPPED_HREF_RE = re.compile(r"^(mailto:|tel:|javascript:|data:|#)", re.IGNORECASE)


# ---------------------------------------------------------------------------
# URL utilities
# ---------------------------------------------------------------------------

def normalize_url(url: str, base_url: Optional[str] = None) -> Optional[str]:
    """Return *url* as an absolute http(s) URL, or ``None`` if it is malformed.

    Relative references are resolved against *base_url* when given.
    """
    url = (url or "").strip()
    if not url:
        return None
    try:
        absolute = urljoin(base_url, url) if base_url else url
        parts = urlsplit(absolute)
        # Accessing .port validates it (raises ValueError when out of range).
        parts.port
    except ValueError:
        return None
    if parts.scheme.lower() not in ("http", "https") or not parts.hostname:
        return None
    path = parts.path or "/"
    return urlunsplit((parts.scheme.lower(), parts.netloc.lower(), path, parts.query, parts.fragment))


def strip_query_and_fragment(url: str) -> str:
    """Drop the query string and fragment so link variants collapse to one entry."""
    parts = urlsplit(url)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))


def get_origin(url: str) -> Optional[str]:
    """Return ``scheme://host[:port]`` for *url*, or ``None`` if unparseable."""
    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError:
        return None
    if not parts.scheme or not parts.hostname:
        return None
    scheme = parts.scheme.lower()
    default_port = {"http": 80, "https": 443}.get(scheme)
    host = parts.hostname.lower()
    if port is None or port == default_port:
        return f"{scheme}://{host}"
    return f"{scheme}://{host}:{port}"


def is_same_origin(url1: str, url2: str) -> bool:
    """``True`` when both URLs share scheme, host and port."""
    origin1 = get_origin(url1)
    return origin1 is not None and origin1 == get_origin(url2)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _add(bucket: List[str], url: Optional[str]) -> None:
    if url and url not in bucket:
        bucket.append(url)


def _rel_values(tag) -> List[str]:
    rel = tag.get("rel") or []
    if isinstance(rel, str):
        rel = rel.split()
    return [r.lower() for r in rel]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_links(html: str, base_url: str) -> PageLinks:
    """Return the stylesheet, script and same-origin page links found in *html*.

    - Stylesheets: ``<link rel="stylesheet">``, ``<link type="text/css">`` and
      ``@import`` inside ``<style>`` blocks, merged into one list.
    - Scripts: ``<script src>``.
    - Internal links: ``<a href>`` on the same origin as *base_url*, with
      ``mailto:``/``tel:``/``javascript:``/``data:``/fragment-only targets
      excluded and query string + fragment stripped before dedup.
    """
    links = PageLinks()
    soup = BeautifulSoup(html or "", "html.parser")

    for tag in soup.find_all("link", href=True):
        is_stylesheet = "stylesheet" in _rel_values(tag)
        is_css_type = (tag.get("type") or "").strip().lower() == "text/css"
        if is_stylesheet or is_css_type:
            _add(links.css_links, normalize_url(tag["href"], base_url))

    for style in soup.find_all("style"):
        for match in _IMPORT_RE.finditer(style.get_text()):
            _add(links.css_links, normalize_url(match.group(1), base_url))

    for tag in soup.find_all("script", src=True):
        _add(links.js_links, normalize_url(tag["src"], base_url))

    for tag in soup.find_all("a", href=True):
        href = tag["href"].strip()
        if not href or _SKIPPED_HREF_RE.match(href):
            continue
        absolute = normalize_url(href, base_url)
        if absolute and is_same_origin(absolute, base_url):
            _add(links.internal_links, strip_query_and_fragment(absolute))

    return links
