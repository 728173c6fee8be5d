"""
Breadth-first link crawler.

Discovers the in-scope pages of a site starting from a seed URL. Pages
are fetched one at a time; the queue and visited set live only inside
a single ``crawl()`` call.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Deque, List, Optional, Set
from urllib.parse import urljoin

from .extractor import UrlPattern, is_in_scope
from ..errors import CrawlFetchError
from ..utils.log import get_logger
from ..utils.paths import normalize_url


# Fetches a page and returns the hyperlinks found on it
FetchLinks = Callable[[str], Awaitable[List[str]]]


@dataclass
class CrawlResult:
    """Results of the crawling operation."""
    
    # Pages to render, seed first, then in crawl order
    pages: List[str] = field(default_factory=list)
    
    # Pages that failed during link discovery
    errors: List[CrawlFetchError] = field(default_factory=list)


class LinkCrawler:
    """
    Crawls a site breadth-first and collects in-scope pages.
    
    Every URL is identified by its normalized form, so each page is
    fetched at most once even on cyclic link graphs.
    """
    
    def __init__(
        self,
        seed_url: str,
        fetch_links: FetchLinks,
        pattern: Optional[UrlPattern] = None,
        max_pages: int = 0
    ):
        """
        Initialize the link crawler.
        
        Args:
            seed_url: Starting URL of the crawl
            fetch_links: Coroutine function loading a page and returning its links
            pattern: Scope predicate (default: URLs starting with the seed)
            max_pages: Stop after visiting this many pages, 0 for no limit
        """
        self.seed_url = seed_url
        self.fetch_links = fetch_links
        self.pattern = pattern or UrlPattern.for_seed(seed_url)
        self.max_pages = max_pages
        self.logger = get_logger("crawler")
    
    async def crawl(self) -> CrawlResult:
        """
        Run the breadth-first traversal.
        
        Returns:
            CrawlResult with the discovered pages and crawl-phase failures
        """
        result = CrawlResult()
        
        # The seed is dequeued first, so it leads the page list even when
        # its fetch fails or no page links back to it
        queue: Deque[str] = deque([self.seed_url])
        queued: Set[str] = {normalize_url(self.seed_url)}
        visited: Set[str] = set()
        
        while queue:
            if self.max_pages and len(visited) >= self.max_pages:
                self.logger.info(f"Page limit of {self.max_pages} reached, {len(queue)} pages left unvisited")
                break
            
            url = queue.popleft()
            key = normalize_url(url)
            
            if key in visited:
                continue
            visited.add(key)
            result.pages.append(url)
            
            self.logger.info(f"[{len(visited)}] Crawling: {url}")
            
            try:
                links = await self.fetch_links(url)
            except Exception as e:
                error = CrawlFetchError.from_exception(url, e)
                self.logger.warning(f"Could not crawl {url}: {error.reason}")
                result.errors.append(error)
                continue
            
            for link in links:
                absolute = urljoin(url, link)
                if not is_in_scope(absolute, self.pattern):
                    continue
                
                candidate = normalize_url(absolute)
                if candidate in visited or candidate in queued:
                    continue
                
                queued.add(candidate)
                queue.append(candidate)
        
        self.logger.info(f"Discovered {len(result.pages)} pages")
        
        return result
