"""
Link extraction and scope filtering.

Uses BeautifulSoup to pull hyperlink targets out of rendered HTML and
decides which of them belong to the crawl.
"""

import re
from dataclasses import dataclass
from typing import List, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from ..errors import ConfigurationError
from ..utils.log import get_logger


# Markers that exclude a link regardless of the URL pattern
EXCLUDED_MARKERS = ("#", "mailto:", "tel:")

# Schemes that never resolve to a navigable page
_SKIPPED_HREF_PREFIXES = ("javascript:", "data:")


@dataclass(frozen=True)
class UrlPattern:
    """
    Predicate deciding whether an absolute URL is in scope.
    
    Two modes are supported:
        - ``prefix``: the URL starts with ``value`` (the seed URL by default)
        - ``regex``: ``value`` is a regular expression searched in the URL
    """
    
    value: str
    mode: str = "prefix"
    
    PREFIX = "prefix"
    REGEX = "regex"
    
    @classmethod
    def for_seed(cls, seed_url: str, pattern: Optional[str] = None) -> "UrlPattern":
        """
        Build the pattern for a crawl.
        
        Args:
            seed_url: Seed URL, used as the prefix when no pattern is given
            pattern: Optional regular expression
            
        Raises:
            ConfigurationError: If the regular expression does not compile
        """
        if not pattern:
            return cls(seed_url, cls.PREFIX)
        
        try:
            re.compile(pattern)
        except re.error as e:
            raise ConfigurationError(f"Invalid URL pattern {pattern!r}: {e}") from e
        return cls(pattern, cls.REGEX)
    
    def matches(self, url: str) -> bool:
        if self.mode == self.REGEX:
            return re.search(self.value, url) is not None
        return url.startswith(self.value)
    
    def __str__(self) -> str:
        if self.mode == self.REGEX:
            return f"/{self.value}/"
        return f"{self.value}*"


def is_in_scope(url: str, pattern: UrlPattern) -> bool:
    """
    Check whether an absolute link should be crawled.
    
    Links carrying a fragment, ``mailto:`` or ``tel:`` are always out of
    scope; everything else must satisfy ``pattern``.
    """
    if any(marker in url for marker in EXCLUDED_MARKERS):
        return False
    return pattern.matches(url)


class LinkExtractor:
    """
    Extracts hyperlink targets from HTML content.
    
    Every ``<a href>`` is resolved against the page's own location, so
    the result contains absolute URLs only, in document order.
    """
    
    def __init__(self):
        self.logger = get_logger("extractor")
    
    def extract_links(self, html: str, page_url: str) -> List[str]:
        """
        Extract all anchor links from HTML content.
        
        Args:
            html: HTML content to parse
            page_url: URL of the page (for resolving relative URLs)
            
        Returns:
            Absolute link URLs, duplicates removed, first occurrence kept
        """
        try:
            soup = BeautifulSoup(html, 'lxml')
        except Exception:
            # Fallback to html.parser if lxml fails
            soup = BeautifulSoup(html, 'html.parser')
        
        # Honour <base href> the way the browser does
        base_url = page_url
        base_tag = soup.find('base', href=True)
        if base_tag:
            base_url = urljoin(page_url, base_tag['href'].strip())
        
        links: List[str] = []
        seen = set()
        
        for anchor in soup.find_all('a', href=True):
            href = anchor.get('href', '').strip()
            
            if not href or href.lower().startswith(_SKIPPED_HREF_PREFIXES):
                continue
            
            full_url = urljoin(base_url, href)
            if full_url not in seen:
                seen.add(full_url)
                links.append(full_url)
        
        self.logger.debug(f"Extracted {len(links)} links from {page_url}")
        
        return links
