"""
site2pdf - Convert a website and its sub-pages into PDF documents.

This package crawls a site breadth-first from a seed URL, renders each
page with a headless browser, and merges the results into one PDF or
writes one PDF per page.
"""

__version__ = "1.0.0"
