"""Crawler package — robots check, page/stylesheet fetch and link discovery."""

from theme_intel.crawler.crawler import crawl
from theme_intel.crawler.fetcher import fetch_page, fetch_stylesheet, fetch_with_retry
from theme_intel.crawler.links import extract_links, normalize_url
from theme_intel.crawler.models import CrawlConfig, CrawledPage, CrawlSession
from theme_intel.crawler.robots import check_robots_txt

__all__ = [
    "crawl",
    "fetch_page",
    "fetch_stylesheet",
    "fetch_with_retry",
    "extract_links",
    "normalize_url",
    "check_robots_txt",
    "CrawlConfig",
    "CrawledPage",
    "CrawlSession",
]
