"""
Output module for site2pdf.

Contains the assembler building the final PDF documents and the writer
saving them to disk.
"""

from .assembler import OutputAssembler, OutputDocument, OutputMode, PdfDocument
from .writer import OutputWriter

__all__ = [
    "OutputAssembler",
    "OutputDocument",
    "OutputMode",
    "PdfDocument",
    "OutputWriter",
]
