"""
Page renderer using Playwright.

Owns the headless browser for a run. Each operation opens its own
browser context and closes it on every exit path; the browser itself is
shared and closed once by ``stop()``.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, List, Optional

from playwright.async_api import (
    async_playwright,
    Browser,
    Page,
    Error as PlaywrightError,
    TimeoutError as PlaywrightTimeout,
)

from .extractor import LinkExtractor
from ..errors import NavigationError, NavigationTimeout, RenderTimeout
from ..utils.log import get_logger
from ..utils.constants import (
    CRAWL_VIEWPORT,
    DEFAULT_PAGE_TIMEOUT,
    DEFAULT_RENDER_TIMEOUT,
    DEFAULT_SETTLE_INTERVAL,
    DEFAULT_SETTLE_TIMEOUT,
    DEFAULT_USER_AGENT,
    PDF_FORMAT,
    PRINT_DEVICE_SCALE_FACTOR,
    PRINT_VIEWPORT,
    SETTLE_SCROLL_STEP,
)


PAGE_HEIGHT_JS = "() => document.body ? document.body.scrollHeight : 0"

SCROLL_BY_JS = "(step) => window.scrollBy(0, step)"

WAIT_FOR_IMAGES_JS = """
() => Promise.all(
    Array.from(document.images)
        .filter(img => !img.complete)
        .map(img => new Promise(resolve => { img.onload = img.onerror = resolve; }))
)
"""

IMAGE_QUALITY_CSS = """
img {
    image-rendering: -webkit-optimize-contrast;
    image-rendering: crisp-edges;
    -ms-interpolation-mode: nearest-neighbor;
}
"""


async def wait_for_stable_height(
    page: Page,
    timeout: float = DEFAULT_SETTLE_TIMEOUT,
    interval: float = DEFAULT_SETTLE_INTERVAL,
    scroll_step: int = SETTLE_SCROLL_STEP
) -> bool:
    """
    Give lazy-loaded content a bounded chance to appear.
    
    Scrolls the page and polls the document height until two readings
    taken ``interval`` apart match, or ``timeout`` elapses.
    
    Args:
        page: Playwright page
        timeout: Overall bound in seconds
        interval: Delay between scroll and re-measure in seconds
        scroll_step: Pixels scrolled per poll
        
    Returns:
        True if the height stabilized, False if it timed out or the page
        could not be evaluated. Neither outcome is an error.
    """
    logger = get_logger("renderer")
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    
    while True:
        try:
            initial_height = await page.evaluate(PAGE_HEIGHT_JS)
            await page.evaluate(SCROLL_BY_JS, scroll_step)
            await asyncio.sleep(interval)
            current_height = await page.evaluate(PAGE_HEIGHT_JS)
        except PlaywrightError as e:
            logger.debug(f"Settling check failed: {e}")
            return False
        
        if current_height == initial_height:
            return True
        
        if loop.time() >= deadline:
            logger.debug(f"Page height still changing after {timeout}s")
            return False


class PageRenderer:
    """
    Renders web pages using a Playwright headless browser.
    
    Provides the two operations the pipeline needs: loading a page to
    collect its links, and capturing a page as PDF bytes.
    """
    
    def __init__(
        self,
        timeout: int = DEFAULT_PAGE_TIMEOUT,
        render_timeout: float = DEFAULT_RENDER_TIMEOUT,
        settle_timeout: float = DEFAULT_SETTLE_TIMEOUT,
        high_quality: bool = True,
        wait_until: str = "networkidle",
        user_agent: Optional[str] = None
    ):
        """
        Initialize the page renderer.
        
        Args:
            timeout: Navigation timeout in milliseconds
            render_timeout: PDF capture timeout in seconds
            settle_timeout: Bound for the lazy content wait in seconds
            high_quality: Wait for images and force crisp image scaling
            wait_until: Event to wait for ('load', 'domcontentloaded', 'networkidle')
            user_agent: Optional custom user agent
        """
        self.timeout = timeout
        self.render_timeout = render_timeout
        self.settle_timeout = settle_timeout
        self.high_quality = high_quality
        self.wait_until = wait_until
        self.user_agent = user_agent or DEFAULT_USER_AGENT
        self.logger = get_logger("renderer")
        self.extractor = LinkExtractor()
        
        self._playwright = None
        self._browser: Optional[Browser] = None
    
    @property
    def is_running(self) -> bool:
        return self._browser is not None
    
    async def start(self) -> None:
        """
        Start the Playwright browser instance.
        """
        self.logger.info("Starting Playwright browser...")
        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(
            # page.pdf() only works in headless Chromium
            headless=True,
            args=[
                '--disable-blink-features=AutomationControlled',
                '--no-sandbox',
                '--disable-setuid-sandbox',
                '--disable-dev-shm-usage',
            ]
        )
        self.logger.info("Browser started successfully")
    
    async def stop(self) -> None:
        """
        Stop the Playwright browser instance. Safe to call more than once.
        """
        if self._browser:
            await self._browser.close()
            self._browser = None
        if self._playwright:
            await self._playwright.stop()
            self._playwright = None
        self.logger.info("Browser stopped")
    
    @asynccontextmanager
    async def _page_session(
        self,
        viewport: Dict[str, int],
        device_scale_factor: float = 1
    ) -> AsyncIterator[Page]:
        """Open a page in a fresh browser context, closing it on exit."""
        if not self._browser:
            raise RuntimeError("Browser is not started")
        
        context = await self._browser.new_context(
            user_agent=self.user_agent,
            viewport=viewport,
            device_scale_factor=device_scale_factor,
            ignore_https_errors=True,
        )
        try:
            yield await context.new_page()
        finally:
            await context.close()
    
    async def _navigate(self, page: Page, url: str) -> None:
        """
        Load a URL and wait for network idle.
        
        Raises:
            NavigationTimeout: If the page did not settle within the timeout
            NavigationError: On network failure or HTTP error status
        """
        self.logger.debug(f"Navigating: {url}")
        try:
            response = await page.goto(
                url,
                wait_until=self.wait_until,
                timeout=self.timeout
            )
        except PlaywrightTimeout as e:
            raise NavigationTimeout(url, f"Timeout after {self.timeout}ms") from e
        except PlaywrightError as e:
            raise NavigationError(url, e.message) from e
        
        if not response:
            raise NavigationError(url, "No response")
        
        if response.status >= 400:
            raise NavigationError(url, f"HTTP {response.status}")
    
    async def fetch_links(self, url: str) -> List[str]:
        """
        Load a page and return every hyperlink on it.
        
        Args:
            url: URL to load
            
        Returns:
            Absolute link URLs resolved against the final page location
        """
        async with self._page_session(CRAWL_VIEWPORT) as page:
            await self._navigate(page, url)
            
            try:
                html_content = await page.content()
            except PlaywrightError as e:
                raise NavigationError(url, e.message) from e
            
            return self.extractor.extract_links(html_content, page.url)
    
    async def render_pdf(self, url: str) -> bytes:
        """
        Capture a page as a PDF document.
        
        Args:
            url: URL to render
            
        Returns:
            PDF bytes
            
        Raises:
            NavigationTimeout, NavigationError: If the page failed to load
            RenderTimeout: If PDF capture exceeded the render timeout
        """
        async with self._page_session(CRAWL_VIEWPORT, PRINT_DEVICE_SCALE_FACTOR) as page:
            await self._navigate(page, url)
            
            # Best effort, either outcome is fine
            settled = await wait_for_stable_height(page, timeout=self.settle_timeout)
            if not settled:
                self.logger.debug(f"Content of {url} did not stabilize, rendering anyway")
            
            await page.set_viewport_size(PRINT_VIEWPORT)
            
            if self.high_quality:
                await self._prepare_images(page, url)
            
            try:
                pdf_bytes = await asyncio.wait_for(
                    page.pdf(
                        format=PDF_FORMAT,
                        prefer_css_page_size=True,
                        print_background=True,
                        scale=1,
                    ),
                    timeout=self.render_timeout
                )
            except asyncio.TimeoutError as e:
                raise RenderTimeout(url, f"PDF capture exceeded {self.render_timeout}s") from e
            
            self.logger.debug(f"Captured {len(pdf_bytes)} bytes for {url}")
            return pdf_bytes
    
    async def _prepare_images(self, page: Page, url: str) -> None:
        """Wait for pending images and inject crisp image scaling rules."""
        try:
            await asyncio.wait_for(
                page.evaluate(WAIT_FOR_IMAGES_JS),
                timeout=self.settle_timeout
            )
        except asyncio.TimeoutError:
            self.logger.debug(f"Some images on {url} are still loading")
        
        await page.add_style_tag(content=IMAGE_QUALITY_CSS)
    
    async def __aenter__(self):
        """Async context manager entry."""
        await self.start()
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.stop()
