# File: tests/test_paths.py
import pytest

from site2pdf.errors import ConfigurationError
from site2pdf.utils.paths import (
    generate_slug,
    normalize_url,
    unique_slug,
    validate_url,
    write_file,
)


SAMPLE_URLS = [
    "https://a.com/p#frag",
    "https://a.com/p/",
    "https://a.com/p",
    "https://a.com//",
    "https://a.com/p/#x/",
    "https://a.com/?q=1#top",
    "",
    "#",
]


def test_fragment_and_trailing_slash_are_ignored():
    assert normalize_url("https://a.com/p#frag") == "https://a.com/p"
    assert normalize_url("https://a.com/p/") == "https://a.com/p"
    assert normalize_url("https://a.com/p") == "https://a.com/p"


def test_fragment_cut_at_first_hash():
    assert normalize_url("https://a.com/p/#one#two") == "https://a.com/p"


def test_query_is_kept():
    assert normalize_url("https://a.com/p?x=1#f") == "https://a.com/p?x=1"


@pytest.mark.parametrize("url", SAMPLE_URLS)
def test_normalize_is_idempotent(url):
    once = normalize_url(url)
    assert normalize_url(once) == once


def test_slug_example():
    assert generate_slug("https://Example.com/A/B.html") == "example-com-a-b-html"


def test_slug_strips_scheme_and_collapses_hyphens():
    assert generate_slug("http://site.test//docs/--intro/") == "site-test-docs-intro"
    assert generate_slug("https://site.test/a b?c=d") == "site-test-a-b-c-d"


def test_slug_keeps_underscores_and_drops_non_ascii():
    assert generate_slug("https://site.test/my_page") == "site-test-my_page"
    assert generate_slug("https://site.test/café") == "site-test-caf"


def test_slug_never_empty():
    assert generate_slug("https://") == "page"


def test_unique_slug_appends_counter():
    taken = set()
    assert unique_slug("https://site.test/a.b", taken) == "site-test-a-b"
    assert unique_slug("https://site.test/a-b", taken) == "site-test-a-b-2"
    assert unique_slug("https://site.test/a/b", taken) == "site-test-a-b-3"
    assert taken == {"site-test-a-b", "site-test-a-b-2", "site-test-a-b-3"}


def test_validate_url_adds_scheme():
    assert validate_url("example.com/docs") == "https://example.com/docs"
    assert validate_url(" http://example.com ") == "http://example.com"


@pytest.mark.parametrize("url", [None, "", "   "])
def test_validate_url_requires_seed(url):
    with pytest.raises(ConfigurationError):
        validate_url(url)


def test_write_file_creates_parent(tmp_path):
    target = tmp_path / "nested" / "dir" / "file.pdf"
    write_file(str(target), b"%PDF-")
    assert target.read_bytes() == b"%PDF-"


def test_validate_url_scheme_is_case_insensitive():
    assert validate_url("HTTP://Example.com/Docs") == "http://example.com/Docs"
    assert validate_url("Https://Site.Test/") == "https://site.test/"


def test_validate_url_keeps_port_without_scheme():
    assert validate_url("localhost:8080/docs") == "https://localhost:8080/docs"


@pytest.mark.parametrize("url", ["ftp://x.test", "file:///tmp/site/index.html", "ws://site.test/"])
def test_validate_url_rejects_other_schemes(url):
    with pytest.raises(ConfigurationError):
        validate_url(url)
