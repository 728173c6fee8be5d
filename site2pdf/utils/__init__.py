"""
Utility modules for site2pdf.

Contains logging, URL and path handling utilities, and constants.
"""

from .log import setup_logger, get_logger
from .paths import normalize_url, generate_slug, unique_slug, validate_url, ensure_dir, write_file
from .constants import (
    DEFAULT_USER_AGENT,
    DEFAULT_PAGE_TIMEOUT,
    DEFAULT_RENDER_TIMEOUT,
    DEFAULT_CONCURRENCY,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_MAX_PAGES,
)

__all__ = [
    "setup_logger",
    "get_logger",
    "normalize_url",
    "generate_slug",
    "unique_slug",
    "validate_url",
    "ensure_dir",
    "write_file",
    "DEFAULT_USER_AGENT",
    "DEFAULT_PAGE_TIMEOUT",
    "DEFAULT_RENDER_TIMEOUT",
    "DEFAULT_CONCURRENCY",
    "DEFAULT_OUTPUT_DIR",
    "DEFAULT_MAX_PAGES",
]
