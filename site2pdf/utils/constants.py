"""
Shared constants for site2pdf.

Contains common configuration values used across multiple modules.
"""

import os

# Default user agent string for the browser contexts
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)

# Navigation timeout in milliseconds (for Playwright)
DEFAULT_PAGE_TIMEOUT = 30000

# PDF capture timeout in seconds
DEFAULT_RENDER_TIMEOUT = 60

# Lazy content settling: overall bound, poll interval (seconds) and scroll step (px)
DEFAULT_SETTLE_TIMEOUT = 10.0
DEFAULT_SETTLE_INTERVAL = 0.5
SETTLE_SCROLL_STEP = 1000

# Print surface: A4 at 300 dpi, rendered at 4x device pixels
PRINT_VIEWPORT = {"width": 2480, "height": 3508}
PRINT_DEVICE_SCALE_FACTOR = 4

# Viewport used while crawling for links
CRAWL_VIEWPORT = {"width": 1920, "height": 1080}

# Paper size passed to page.pdf(); CSS @page size wins when present
PDF_FORMAT = "A3"

# Concurrent render operations, one per CPU like a worker pool
DEFAULT_CONCURRENCY = os.cpu_count() or 1

# Destination directory for generated files
DEFAULT_OUTPUT_DIR = "./out"

# Crawl page cap, 0 means unlimited
DEFAULT_MAX_PAGES = 0
