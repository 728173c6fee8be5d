"""
Output assembler.

Turns per-page render results into the final documents: one merged PDF,
or one PDF per page. Uses pypdf as the document store.
"""

from dataclasses import dataclass, field
from enum import Enum
from io import BytesIO
from typing import List, Optional, Sequence

from pypdf import PdfReader, PdfWriter
from pypdf.errors import PdfReadError

from ..crawler.scheduler import PageRenderResult
from ..errors import MalformedPDF, NoPagesRendered
from ..utils.log import get_logger


class OutputMode(Enum):
    """How rendered pages are written out."""
    
    COMBINED = "combined"
    SEPARATE = "separate"


@dataclass
class PdfDocument:
    """A single output PDF."""
    
    data: bytes
    # Originating page; None for a merged document
    source_url: Optional[str] = None
    page_count: Optional[int] = None


@dataclass
class OutputDocument:
    """Documents produced by one run, plus the pages they came from."""
    
    mode: OutputMode
    documents: List[PdfDocument] = field(default_factory=list)
    sources: List[str] = field(default_factory=list)


class OutputAssembler:
    """
    Combines rendered pages into output documents.
    
    Failed results are dropped; the remaining pages keep their order.
    """
    
    def __init__(self, bookmarks: bool = True):
        """
        Initialize the assembler.
        
        Args:
            bookmarks: Add an outline entry per source page when merging
        """
        self.bookmarks = bookmarks
        self.logger = get_logger("assembler")
    
    def assemble(
        self,
        results: Sequence[PageRenderResult],
        mode: OutputMode = OutputMode.COMBINED
    ) -> OutputDocument:
        """
        Build the output documents.
        
        Args:
            results: Render results in output order
            mode: Combined or separate output
            
        Returns:
            OutputDocument holding one merged document or one per page
            
        Raises:
            NoPagesRendered: If no result succeeded
            MalformedPDF: If a successful result is not a readable PDF
        """
        successes = [r for r in results if r.ok]
        
        if not successes:
            raise NoPagesRendered(len(results))
        
        skipped = len(results) - len(successes)
        if skipped:
            self.logger.info(f"Excluding {skipped} failed pages from output")
        
        output = OutputDocument(mode=mode, sources=[r.url for r in successes])
        
        if mode is OutputMode.SEPARATE:
            output.documents = [
                PdfDocument(data=r.pdf, source_url=r.url)
                for r in successes
            ]
            return output
        
        output.documents = [self._merge(successes)]
        return output
    
    def _merge(self, successes: Sequence[PageRenderResult]) -> PdfDocument:
        """Concatenate all pages of all documents, in order."""
        writer = PdfWriter()
        
        for result in successes:
            try:
                reader = PdfReader(BytesIO(result.pdf))
                pages = list(reader.pages)
            except (PdfReadError, ValueError) as e:
                raise MalformedPDF(result.url, str(e)) from e
            
            first_page = len(writer.pages)
            for page in pages:
                writer.add_page(page)
            
            if self.bookmarks and pages:
                writer.add_outline_item(result.url, first_page)
            
            self.logger.debug(f"Appended {len(pages)} pages from {result.url}")
        
        buffer = BytesIO()
        writer.write(buffer)
        page_count = len(writer.pages)
        
        self.logger.info(f"Merged {len(successes)} documents into {page_count} pages")
        
        return PdfDocument(data=buffer.getvalue(), page_count=page_count)
