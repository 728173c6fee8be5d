"""
Bounded-concurrency render scheduler.

Renders every discovered page to PDF bytes, at most ``concurrency`` at a
time, and turns per-page failures into failure results.
"""

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional, Sequence

from ..errors import ConfigurationError, RenderError
from ..utils.constants import DEFAULT_CONCURRENCY
from ..utils.log import get_logger


# Renders one URL to PDF bytes
RenderPage = Callable[[str], Awaitable[bytes]]


@dataclass
class PageRenderResult:
    """Outcome of rendering one page: PDF bytes or the failure."""
    
    url: str
    pdf: Optional[bytes] = None
    error: Optional[RenderError] = None
    
    @property
    def ok(self) -> bool:
        return self.error is None
    
    @classmethod
    def success(cls, url: str, pdf: bytes) -> "PageRenderResult":
        return cls(url=url, pdf=pdf)
    
    @classmethod
    def failure(cls, url: str, error: RenderError) -> "PageRenderResult":
        return cls(url=url, error=error)


class RenderScheduler:
    """
    Runs render operations under a concurrency limit.
    
    All pages are submitted at once; a semaphore admits at most
    ``concurrency`` of them and the rest wait for a free slot.
    """
    
    def __init__(self, concurrency: int = DEFAULT_CONCURRENCY):
        """
        Initialize the scheduler.
        
        Args:
            concurrency: Maximum simultaneous render operations
            
        Raises:
            ConfigurationError: If concurrency is not a positive integer
        """
        if not isinstance(concurrency, int) or concurrency < 1:
            raise ConfigurationError(f"Concurrency must be a positive integer, got {concurrency!r}")
        
        self.concurrency = concurrency
        self.logger = get_logger("scheduler")
    
    async def render_all(
        self,
        urls: Sequence[str],
        render: RenderPage,
        on_result: Optional[Callable[[PageRenderResult], None]] = None
    ) -> List[PageRenderResult]:
        """
        Render all pages.
        
        Args:
            urls: Pages to render, in output order
            render: Coroutine function producing PDF bytes for a URL
            on_result: Optional callback invoked as each page finishes
            
        Returns:
            One result per input URL, aligned with ``urls``
        """
        semaphore = asyncio.Semaphore(self.concurrency)
        
        async def render_one(url: str) -> PageRenderResult:
            async with semaphore:
                self.logger.info(f"Processing {url}")
                try:
                    pdf = await render(url)
                except Exception as e:
                    error = RenderError.from_exception(url, e)
                    self.logger.warning(f"Skipping {url}: {error.reason}")
                    result = PageRenderResult.failure(url, error)
                else:
                    self.logger.info(f"Successfully generated PDF for {url}")
                    result = PageRenderResult.success(url, pdf)
            
            if on_result:
                on_result(result)
            return result
        
        # gather() keeps submission order whatever the completion order
        results = await asyncio.gather(*(render_one(url) for url in urls))
        
        failed = sum(1 for r in results if not r.ok)
        self.logger.info(f"Rendered {len(results) - failed}/{len(results)} pages")
        
        return list(results)
