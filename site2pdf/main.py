#!/usr/bin/env python3
"""
site2pdf - Convert a website into PDF documents.

This tool crawls a website from a seed page, renders every in-scope page
with Playwright, and merges the pages into one PDF (or writes one PDF per
page).

Usage:
    python main.py https://example.com/docs/ --output ./out

Features:
    - Breadth-first crawl of pages under the seed URL or matching a regex
    - JavaScript rendering with network-idle and lazy content waits
    - Concurrent rendering bounded by a configurable limit
    - One merged PDF with bookmarks, or one PDF per page
"""

import argparse
import asyncio
import logging
import os
import sys
from typing import List, Optional

# Add parent directory to path for imports when running as script
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from site2pdf.errors import ConfigurationError, Site2PdfError
from site2pdf.pipeline import Site2Pdf, PipelineResult
from site2pdf.utils.constants import (
    DEFAULT_CONCURRENCY,
    DEFAULT_MAX_PAGES,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_PAGE_TIMEOUT,
)
from site2pdf.utils.log import (
    setup_logger,
    print_error,
    print_info,
    print_success,
    print_warning,
)


def build_parser() -> argparse.ArgumentParser:
    """
    Build the command line parser.
    
    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog='site2pdf',
        description='Generate PDF documents from a website and its sub-pages',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s https://example.com/docs/
    %(prog)s https://example.com/docs/ "^https://example.com/docs/(guide|api)/"
    %(prog)s https://example.com --separate -o ./pdfs
        """
    )
    
    parser.add_argument(
        'url',
        nargs='?',
        help='The main URL to generate PDF from'
    )
    
    parser.add_argument(
        'url_pattern',
        nargs='?',
        default=None,
        help='Regular expression matching the sub-links to include (default: URLs starting with url)'
    )
    
    parser.add_argument(
        '--separate', '-s',
        action='store_true',
        help='Generate a separate PDF for each page'
    )
    
    parser.add_argument(
        '--output', '-o',
        type=str,
        default=DEFAULT_OUTPUT_DIR,
        help=f'Output directory for PDF file(s) (default: {DEFAULT_OUTPUT_DIR})'
    )
    
    parser.add_argument(
        '--concurrency', '-c',
        type=int,
        default=DEFAULT_CONCURRENCY,
        help=f'Maximum pages rendered at once (default: {DEFAULT_CONCURRENCY})'
    )
    
    parser.add_argument(
        '--max-pages', '-m',
        type=int,
        default=DEFAULT_MAX_PAGES,
        help='Maximum number of pages to crawl, 0 for no limit (default: 0)'
    )
    
    parser.add_argument(
        '--timeout',
        type=int,
        default=DEFAULT_PAGE_TIMEOUT,
        help=f'Page load timeout in milliseconds (default: {DEFAULT_PAGE_TIMEOUT})'
    )
    
    parser.add_argument(
        '--fast',
        action='store_true',
        help='Skip waiting for images and the image quality styles'
    )
    
    parser.add_argument(
        '--no-bookmarks',
        action='store_true',
        help='Do not add a bookmark per page to the merged PDF'
    )
    
    parser.add_argument(
        '--log-file',
        type=str,
        default=None,
        help='Also write log records to this file'
    )
    
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose logging'
    )
    
    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress output except warnings and errors'
    )
    
    return parser


def print_summary(result: PipelineResult) -> None:
    """
    Print the run summary.
    
    Args:
        result: PipelineResult object
    """
    print("\n" + "=" * 60)
    print_success("SUMMARY")
    print("=" * 60)
    print(f"  Pages discovered:  {result.pages_discovered}")
    print(f"  Pages rendered:    {result.pages_rendered}")
    print(f"  Pages skipped:     {result.pages_skipped}")
    print(f"  Files written:     {len(result.files)}")
    print(f"  Duration:          {result.duration_seconds:.1f} seconds")
    print("=" * 60 + "\n")
    
    for error in result.errors:
        print_warning(f"{error.kind}: {error.url} ({error.reason})")


async def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for site2pdf.
    
    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    
    # Set up logging
    log_level = logging.DEBUG if args.verbose else (logging.WARNING if args.quiet else logging.INFO)
    setup_logger(level=log_level, log_file=args.log_file)
    
    try:
        generator = Site2Pdf(
            url=args.url,
            output_dir=args.output,
            url_pattern=args.url_pattern,
            separate=args.separate,
            concurrency=args.concurrency,
            max_pages=args.max_pages,
            timeout=args.timeout,
            high_quality=not args.fast,
            bookmarks=not args.no_bookmarks,
            show_progress=not args.quiet
        )
    except ConfigurationError as e:
        parser.print_usage(sys.stderr)
        print_error(f"Invalid input: {e}")
        return 1
    
    if not args.quiet:
        print_info(f"Output: {generator.writer.output_dir}")
    
    try:
        result = await generator.run()
    except Site2PdfError as e:
        print_error(f"Error generating PDF: {e}")
        return 1
    except Exception as e:
        print_error(f"Error: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1
    
    if not args.quiet:
        print_summary(result)
    
    return 0


def run() -> None:
    """Entry point wrapper for running as module."""
    try:
        code = asyncio.run(main())
    except KeyboardInterrupt:
        # asyncio.run() re-raises Ctrl-C here once the pipeline has cleaned up
        print_error("Interrupted by user")
        code = 130
    sys.exit(code)


if __name__ == '__main__':
    run()
