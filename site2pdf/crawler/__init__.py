"""
Crawler module for site2pdf.

Contains components for discovering, rendering and scheduling pages.
"""

from .crawler import LinkCrawler, CrawlResult
from .renderer import PageRenderer
from .extractor import LinkExtractor, UrlPattern, is_in_scope
from .scheduler import RenderScheduler, PageRenderResult

__all__ = [
    "LinkCrawler",
    "CrawlResult",
    "PageRenderer",
    "LinkExtractor",
    "UrlPattern",
    "is_in_scope",
    "RenderScheduler",
    "PageRenderResult",
]
