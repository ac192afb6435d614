"""Data models for the crawl phase."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

RobotsStatus = str  # "allowed" | "blocked"; "unknown" until the robots check runs

OUTPUT_MODES = ("extract", "prompt", "both")


@dataclass(frozen=True)
class CrawlConfig:
    """Per-run crawl options.  Validated by :func:`theme_intel.pipeline.build_config`."""

    theme_url: str
    max_pages: int = 6
    same_origin_only: bool = True
    include_assets: bool = False
    mode: str = "both"
    notes: str = ""


@dataclass
class FetchResponse:
    """A completed HTTP exchange as seen by the fetch gateway."""

    url: str
    final_url: str
    status_code: int
    headers: Dict[str, str]
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


@dataclass
class PageLinks:
    """Absolute, deduplicated URLs discovered in one HTML document."""

    css_links: List[str] = field(default_factory=list)
    js_links: List[str] = field(default_factory=list)
    internal_links: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class RobotsVerdict:
    allowed: bool
    warning: Optional[str] = None


@dataclass(frozen=True)
class CrawledPage:
    """One fetched page.  Failures are recorded here rather than dropped."""

    url: str
    final_url: str
    status: int
    html: str
    crawled_at: str
    headers: Dict[str, str] = field(default_factory=dict)
    content_type: str = ""
    css_links: List[str] = field(default_factory=list)
    js_links: List[str] = field(default_factory=list)
    internal_links: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def html_snippet(self) -> str:
        """First 2000 characters of the page markup."""
        return self.html[:2000]


@dataclass
class CrawlSession:
    """Everything the extraction phase needs; extraction never touches the network."""

    start_url: str
    pages: List[CrawledPage] = field(default_factory=list)
    css_contents: Dict[str, str] = field(default_factory=dict)
    robots_txt_status: RobotsStatus = "unknown"
    robots_txt_warning: Optional[str] = None
    total_requests: int = 0
    failed_requests: int = 0
    crawl_duration: int = 0  # milliseconds

    @property
    def source_urls(self) -> set[str]:
        """Every URL a fact extracted from this session may cite."""
        urls = {self.start_url}
        urls.update(p.final_url for p in self.pages)
        urls.update(p.url for p in self.pages)
        urls.update(self.css_contents)
        return urls
