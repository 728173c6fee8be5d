"""
Pipeline orchestrator.

Sequences crawl, render, assembly and writing for one run, and owns the
browser session: it is released when the run ends, whatever happened.
"""

import time
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .crawler import LinkCrawler, PageRenderer, PageRenderResult, RenderScheduler, UrlPattern
from .errors import ConfigurationError, PageError
from .output import OutputAssembler, OutputMode, OutputWriter
from .utils.constants import (
    DEFAULT_CONCURRENCY,
    DEFAULT_MAX_PAGES,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_PAGE_TIMEOUT,
)
from .utils.log import create_progress, get_logger, print_info, print_success
from .utils.paths import validate_url


@dataclass
class PipelineResult:
    """Results of a site2pdf run."""
    
    pages_discovered: int = 0
    pages_rendered: int = 0
    files: List[str] = field(default_factory=list)
    # Crawl-phase and render-phase failures
    errors: List[PageError] = field(default_factory=list)
    duration_seconds: float = 0.0
    
    @property
    def pages_skipped(self) -> int:
        return self.pages_discovered - self.pages_rendered


class Site2Pdf:
    """
    Converts a website into PDF documents.
    
    Crawls from the seed URL, renders every discovered page, then writes
    one merged PDF or one PDF per page.
    """
    
    def __init__(
        self,
        url: str,
        output_dir: str = DEFAULT_OUTPUT_DIR,
        url_pattern: Optional[str] = None,
        separate: bool = False,
        concurrency: int = DEFAULT_CONCURRENCY,
        max_pages: int = DEFAULT_MAX_PAGES,
        timeout: int = DEFAULT_PAGE_TIMEOUT,
        high_quality: bool = True,
        bookmarks: bool = True,
        show_progress: bool = True,
        renderer: Optional[PageRenderer] = None
    ):
        """
        Initialize the pipeline. Nothing is started until ``run()``.
        
        Args:
            url: Seed URL
            output_dir: Directory for the generated files
            url_pattern: Regular expression selecting pages (default: seed prefix)
            separate: Write one PDF per page instead of a merged PDF
            concurrency: Maximum simultaneous page renders
            max_pages: Crawl page cap, 0 for no limit
            timeout: Navigation timeout in milliseconds
            high_quality: Wait for images and sharpen image scaling
            bookmarks: Add one outline entry per page to the merged PDF
            show_progress: Display a progress bar while rendering
            renderer: Rendering engine to use instead of a new PageRenderer
            
        Raises:
            ConfigurationError: On a missing seed URL or invalid settings
        """
        self.seed_url = validate_url(url)
        self.pattern = UrlPattern.for_seed(self.seed_url, url_pattern)
        
        if max_pages < 0:
            raise ConfigurationError(f"max_pages cannot be negative, got {max_pages}")
        
        self.mode = OutputMode.SEPARATE if separate else OutputMode.COMBINED
        self.show_progress = show_progress
        self.logger = get_logger("pipeline")
        
        self.renderer = renderer or PageRenderer(
            timeout=timeout,
            high_quality=high_quality
        )
        self.crawler = LinkCrawler(
            self.seed_url,
            self.renderer.fetch_links,
            pattern=self.pattern,
            max_pages=max_pages
        )
        self.scheduler = RenderScheduler(concurrency)
        self.assembler = OutputAssembler(bookmarks=bookmarks)
        self.writer = OutputWriter(output_dir)
    
    async def run(self) -> PipelineResult:
        """
        Run the whole pipeline.
        
        Returns:
            PipelineResult with statistics and written files
            
        Raises:
            NoPagesRendered: If every page failed to render
            MalformedPDF: If a rendered page is not a readable PDF
        """
        start_time = time.time()
        result = PipelineResult()
        
        print_info(f"Generating PDF for {self.seed_url} and sub-links matching {self.pattern}")
        
        try:
            await self.renderer.start()
            
            crawl = await self.crawler.crawl()
            result.pages_discovered = len(crawl.pages)
            result.errors.extend(crawl.errors)
            
            render_results = await self._render(crawl.pages)
            result.errors.extend(r.error for r in render_results if not r.ok)
            
            output = self.assembler.assemble(render_results, self.mode)
            result.pages_rendered = len(output.sources)
            
            result.files = self.writer.write(output, self.seed_url)
            self.writer.write_error_log(result.errors)
            
        finally:
            await self.renderer.stop()
        
        result.duration_seconds = time.time() - start_time
        
        print_success(
            f"Done! {result.pages_rendered}/{result.pages_discovered} pages "
            f"in {len(result.files)} files, {result.duration_seconds:.1f}s"
        )
        
        return result
    
    async def _render(self, pages: Sequence[str]) -> List[PageRenderResult]:
        """Render all pages, with a progress bar when enabled."""
        if not self.show_progress:
            return await self.scheduler.render_all(pages, self.renderer.render_pdf)
        
        with create_progress() as progress:
            task = progress.add_task("Rendering pages", total=len(pages))
            return await self.scheduler.render_all(
                pages,
                self.renderer.render_pdf,
                on_result=lambda _: progress.advance(task)
            )
