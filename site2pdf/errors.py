"""
Exception hierarchy for site2pdf.

Page-level errors (``PageError`` and subclasses) are recovered where they
occur and recorded as failure markers. ``NoPagesRendered``,
``MalformedPDF`` and ``ConfigurationError`` end the run.
"""

from typing import Dict, Optional


class Site2PdfError(Exception):
    """Base class for all site2pdf errors."""


class ConfigurationError(Site2PdfError):
    """Invalid or missing settings, raised before any browser starts."""


class PageError(Site2PdfError):
    """
    A failure tied to a single page.
    
    Attributes:
        url: Page URL
        reason: Human readable failure reason
    """
    
    kind = "page_error"
    
    def __init__(self, url: str, reason: str):
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason
    
    @classmethod
    def from_exception(cls, url: str, exc: BaseException) -> "PageError":
        """Wrap an arbitrary exception, keeping it as the cause."""
        reason = exc.reason if isinstance(exc, PageError) else (str(exc) or type(exc).__name__)
        error = cls(url, reason)
        error.__cause__ = exc
        return error
    
    def to_dict(self) -> Dict[str, str]:
        return {"url": self.url, "error": self.reason, "type": self.kind}


class NavigationError(PageError):
    """The page could not be loaded (network error, HTTP error status)."""
    
    kind = "navigation_error"


class NavigationTimeout(NavigationError):
    """The page did not reach network idle within the navigation timeout."""
    
    kind = "navigation_timeout"


class RenderTimeout(PageError):
    """PDF capture exceeded the render timeout."""
    
    kind = "render_timeout"


class CrawlFetchError(PageError):
    """A page that yielded no links because it failed during the crawl."""
    
    kind = "crawl_error"


class RenderError(PageError):
    """A page excluded from the output because it failed to render."""
    
    kind = "render_error"


class NoPagesRendered(Site2PdfError):
    """Every discovered page failed to render, nothing can be written."""
    
    def __init__(self, attempted: int, message: Optional[str] = None):
        super().__init__(message or f"No PDFs were generated successfully ({attempted} pages attempted)")
        self.attempted = attempted


class MalformedPDF(Site2PdfError):
    """A rendered byte stream could not be parsed as a PDF."""
    
    def __init__(self, url: str, reason: str):
        super().__init__(f"Malformed PDF for {url}: {reason}")
        self.url = url
        self.reason = reason
