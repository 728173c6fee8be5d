# File: tests/conftest.py
import asyncio
from io import BytesIO
from typing import Callable, Dict, Iterable, List, Optional

import pytest
from pypdf import PdfWriter

from site2pdf.errors import NavigationError, NavigationTimeout
from site2pdf.utils.paths import normalize_url


def build_pdf(pages: int = 1, width: float = 200, height: float = 200) -> bytes:
    """Return a PDF with ``pages`` blank pages of the given size."""
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=width, height=height)
    buffer = BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


class FakeRenderer:
    """
    In-memory stand-in for PageRenderer.

    ``site`` maps page URLs to the links found on them. URLs are matched
    by their normalized form, like the crawler does.
    """

    def __init__(
        self,
        site: Dict[str, List[str]],
        failing_fetches: Iterable[str] = (),
        failing_renders: Iterable[str] = (),
        pages_per_pdf: int = 1,
        pdf_bytes: Optional[bytes] = None,
    ):
        self.site = {normalize_url(url): links for url, links in site.items()}
        self.failing_fetches = {normalize_url(u) for u in failing_fetches}
        self.failing_renders = {normalize_url(u) for u in failing_renders}
        self.pages_per_pdf = pages_per_pdf
        self.pdf_bytes = pdf_bytes
        self.start_count = 0
        self.stop_count = 0
        self.fetched: List[str] = []
        self.rendered: List[str] = []

    async def start(self) -> None:
        self.start_count += 1

    async def stop(self) -> None:
        self.stop_count += 1

    async def fetch_links(self, url: str) -> List[str]:
        self.fetched.append(url)
        key = normalize_url(url)
        await asyncio.sleep(0)
        if key in self.failing_fetches:
            raise NavigationTimeout(url, "Timeout after 30000ms")
        if key not in self.site:
            raise NavigationError(url, "HTTP 404")
        return list(self.site[key])

    async def render_pdf(self, url: str) -> bytes:
        self.rendered.append(url)
        await asyncio.sleep(0)
        if normalize_url(url) in self.failing_renders:
            raise NavigationTimeout(url, "Timeout after 30000ms")
        if self.pdf_bytes is not None:
            return self.pdf_bytes
        return build_pdf(self.pages_per_pdf)


@pytest.fixture()
def make_pdf() -> Callable[..., bytes]:
    return build_pdf


@pytest.fixture()
def site_graph() -> Dict[str, List[str]]:
    """
    Three mutually linked pages plus out-of-scope links.
    """
    links = [
        "https://site.test/",
        "https://site.test/a",
        "https://site.test/b",
        "https://elsewhere.test/external",
        "mailto:x@y.com",
    ]
    return {
        "https://site.test/": links,
        "https://site.test/a": links,
        "https://site.test/b": links,
    }


@pytest.fixture()
def fake_renderer(site_graph) -> FakeRenderer:
    return FakeRenderer(site_graph)


@pytest.fixture()
def renderer_factory() -> Callable[..., FakeRenderer]:
    return FakeRenderer
