"""
Path and URL utilities for site2pdf.

Provides URL normalization, slug generation for output file names,
and directory and file management.
"""

import os
import re
from typing import Optional, Set
from urllib.parse import urlsplit, urlunsplit

from ..errors import ConfigurationError


_SCHEME_PATTERN = re.compile(r'https?://')
_UNSAFE_PATTERN = re.compile(r'[^\w\s-]', re.ASCII)
_SPACE_PATTERN = re.compile(r'\s+')
_HYPHEN_PATTERN = re.compile(r'-+')


def normalize_url(url: str) -> str:
    """
    Normalize a URL into its deduplication key.
    
    Drops everything from the first ``#`` onward, then the trailing
    slash. Repeated trailing slashes are all removed so that the
    operation stays idempotent.
    
    Args:
        url: URL to normalize
        
    Returns:
        Normalized URL string
    """
    without_fragment = url.split('#', 1)[0]
    return without_fragment.rstrip('/')


def generate_slug(url: str) -> str:
    """
    Derive a filesystem-safe name from a URL.
    
    Example:
        ``https://Example.com/A/B.html`` becomes ``example-com-a-b-html``.
    
    Args:
        url: URL to convert
        
    Returns:
        Lower-case slug made of word characters and single hyphens
    """
    slug = _SCHEME_PATTERN.sub('', url, count=1)
    slug = _UNSAFE_PATTERN.sub('-', slug)
    slug = _SPACE_PATTERN.sub('-', slug)
    slug = _HYPHEN_PATTERN.sub('-', slug)
    slug = slug.strip('-').lower()
    return slug or 'page'


def unique_slug(url: str, taken: Set[str]) -> str:
    """
    Generate a slug not already present in ``taken`` and reserve it.
    
    Colliding slugs get ``-2``, ``-3``, ... appended.
    """
    base = generate_slug(url)
    slug = base
    counter = 2
    while slug in taken:
        slug = f"{base}-{counter}"
        counter += 1
    taken.add(slug)
    return slug


def validate_url(url: Optional[str]) -> str:
    """
    Validate the seed URL, adding a scheme when it is missing.
    
    Args:
        url: URL string to validate
        
    Returns:
        URL with an http(s) scheme, scheme and host in lower case
        
    Raises:
        ConfigurationError: If the URL is missing, has no host or is not http(s)
    """
    if not url or not url.strip():
        raise ConfigurationError("A seed URL is required")
    
    url = url.strip()
    
    # Add protocol if missing; "host:port" parses as a scheme, so require "//"
    scheme = urlsplit(url).scheme.lower()
    if not scheme or "://" not in url:
        url = "https://" + url
    elif scheme not in ("http", "https"):
        raise ConfigurationError(f"Unsupported URL scheme {scheme!r}: {url}")
    
    parsed = urlsplit(url)
    if not parsed.netloc:
        raise ConfigurationError(f"Invalid URL: {url}")
    
    # Browsers report scheme and host in lower case, links must match the seed
    return urlunsplit(parsed._replace(scheme=parsed.scheme.lower(), netloc=parsed.netloc.lower()))


def ensure_dir(path: str) -> None:
    """
    Ensure a directory exists, creating it if necessary.
    
    Args:
        path: Directory path to ensure exists
    """
    os.makedirs(path, exist_ok=True)


def write_file(path: str, data: bytes) -> None:
    """
    Write bytes to a file, creating the parent directory first.
    
    Args:
        path: Destination file path
        data: File content
    """
    parent = os.path.dirname(path)
    if parent:
        ensure_dir(parent)
    
    with open(path, 'wb') as f:
        f.write(data)
