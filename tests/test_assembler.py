# File: tests/test_assembler.py
from io import BytesIO

import pytest
from pypdf import PdfReader

from site2pdf.crawler.scheduler import PageRenderResult
from site2pdf.errors import MalformedPDF, NoPagesRendered, RenderError
from site2pdf.output.assembler import OutputAssembler, OutputMode


def ok(url, pdf):
    return PageRenderResult.success(url, pdf)


def failed(url):
    return PageRenderResult.failure(url, RenderError(url, "Timeout after 30000ms"))


def page_widths(data):
    return [float(p.mediabox.width) for p in PdfReader(BytesIO(data)).pages]


def test_combined_page_count_is_sum(make_pdf):
    results = [
        ok("https://site.test/", make_pdf(1)),
        ok("https://site.test/a", make_pdf(3)),
        ok("https://site.test/b", make_pdf(2)),
    ]

    output = OutputAssembler().assemble(results, OutputMode.COMBINED)

    assert output.mode is OutputMode.COMBINED
    assert len(output.documents) == 1
    document = output.documents[0]
    assert document.source_url is None
    assert document.page_count == 6
    assert len(PdfReader(BytesIO(document.data)).pages) == 6


def test_combined_keeps_result_order(make_pdf):
    results = [
        ok("https://site.test/", make_pdf(1, width=100)),
        ok("https://site.test/a", make_pdf(2, width=200)),
        ok("https://site.test/b", make_pdf(1, width=300)),
    ]

    output = OutputAssembler().assemble(results)

    assert page_widths(output.documents[0].data) == [100, 200, 200, 300]
    assert output.sources == [r.url for r in results]


def test_combined_adds_one_bookmark_per_page(make_pdf):
    results = [ok("https://site.test/", make_pdf(2)), ok("https://site.test/a", make_pdf(1))]

    output = OutputAssembler(bookmarks=True).assemble(results)
    reader = PdfReader(BytesIO(output.documents[0].data))

    assert [item.title for item in reader.outline] == ["https://site.test/", "https://site.test/a"]
    assert [reader.get_destination_page_number(item) for item in reader.outline] == [0, 2]


def test_bookmarks_can_be_disabled(make_pdf):
    output = OutputAssembler(bookmarks=False).assemble([ok("https://site.test/", make_pdf(1))])
    assert PdfReader(BytesIO(output.documents[0].data)).outline == []


def test_failed_pages_are_excluded(make_pdf):
    results = [
        ok("https://site.test/", make_pdf(1, width=100)),
        failed("https://site.test/a"),
        ok("https://site.test/b", make_pdf(1, width=300)),
    ]

    output = OutputAssembler().assemble(results)

    assert output.sources == ["https://site.test/", "https://site.test/b"]
    assert page_widths(output.documents[0].data) == [100, 300]


@pytest.mark.parametrize("mode", [OutputMode.COMBINED, OutputMode.SEPARATE])
def test_all_failed_raises(mode):
    results = [failed("https://site.test/"), failed("https://site.test/a")]

    with pytest.raises(NoPagesRendered) as exc_info:
        OutputAssembler().assemble(results, mode)
    assert exc_info.value.attempted == 2


def test_no_results_raises():
    with pytest.raises(NoPagesRendered):
        OutputAssembler().assemble([])


def test_malformed_pdf_is_fatal(make_pdf):
    results = [ok("https://site.test/", make_pdf(1)), ok("https://site.test/bad", b"not a pdf")]

    with pytest.raises(MalformedPDF) as exc_info:
        OutputAssembler().assemble(results, OutputMode.COMBINED)
    assert exc_info.value.url == "https://site.test/bad"


def test_separate_tags_each_document(make_pdf):
    first, second = make_pdf(1), make_pdf(2)
    results = [ok("https://site.test/", first), failed("https://site.test/x"), ok("https://site.test/a", second)]

    output = OutputAssembler().assemble(results, OutputMode.SEPARATE)

    assert output.mode is OutputMode.SEPARATE
    assert [(d.source_url, d.data) for d in output.documents] == [
        ("https://site.test/", first),
        ("https://site.test/a", second),
    ]
