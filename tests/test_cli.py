# File: tests/test_cli.py
import pytest

from site2pdf import main as cli
from site2pdf.utils.constants import DEFAULT_CONCURRENCY, DEFAULT_OUTPUT_DIR


def test_parser_defaults():
    args = cli.build_parser().parse_args(["https://site.test/"])

    assert args.url == "https://site.test/"
    assert args.url_pattern is None
    assert args.separate is False
    assert args.output == DEFAULT_OUTPUT_DIR
    assert args.concurrency == DEFAULT_CONCURRENCY
    assert args.max_pages == 0
    assert args.fast is False


def test_parser_flags():
    args = cli.build_parser().parse_args(
        ["https://site.test/", r"^https://site\.test/docs/", "-s", "-o", "pdfs", "-c", "3", "--fast"]
    )

    assert args.url_pattern == r"^https://site\.test/docs/"
    assert args.separate is True
    assert args.output == "pdfs"
    assert args.concurrency == 3
    assert args.fast is True


@pytest.fixture()
def patched_renderer(monkeypatch, fake_renderer):
    """Make the CLI build the fake renderer instead of launching a browser."""
    captured = {}

    def factory(**kwargs):
        captured.update(kwargs)
        return fake_renderer

    monkeypatch.setattr("site2pdf.pipeline.PageRenderer", factory)
    return captured


@pytest.mark.asyncio()
async def test_missing_url_exits_with_error(patched_renderer, fake_renderer, capsys):
    assert await cli.main([]) == 1
    assert fake_renderer.start_count == 0
    assert "usage" in capsys.readouterr().err


@pytest.mark.asyncio()
async def test_invalid_pattern_exits_with_error(patched_renderer, fake_renderer):
    assert await cli.main(["https://site.test/", "[bad"]) == 1
    assert fake_renderer.start_count == 0


@pytest.mark.asyncio()
async def test_successful_run(patched_renderer, fake_renderer, tmp_path):
    code = await cli.main(["https://site.test/", "-o", str(tmp_path), "--fast", "-q"])

    assert code == 0
    assert (tmp_path / "site-test.pdf").exists()
    assert patched_renderer["high_quality"] is False
    assert fake_renderer.stop_count == 1


@pytest.mark.asyncio()
async def test_pipeline_error_exits_with_error(patched_renderer, fake_renderer, tmp_path):
    fake_renderer.failing_renders = {"https://site.test", "https://site.test/a", "https://site.test/b"}

    code = await cli.main(["https://site.test/", "-o", str(tmp_path), "-q"])

    assert code == 1
    assert fake_renderer.stop_count == 1
    assert list(tmp_path.iterdir()) == []


def test_headed_mode_is_not_offered():
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args(["https://site.test/", "--no-headless"])


@pytest.mark.asyncio()
async def test_cli_never_requests_a_headed_browser(patched_renderer, tmp_path):
    assert await cli.main(["https://site.test/", "-o", str(tmp_path), "-q"]) == 0
    assert "headless" not in patched_renderer


@pytest.mark.asyncio()
async def test_log_file_receives_page_warnings(patched_renderer, fake_renderer, tmp_path):
    fake_renderer.failing_renders = {"https://site.test/b"}
    log_path = tmp_path / "run.log"

    code = await cli.main(
        ["https://site.test/", "-o", str(tmp_path / "out"), "-q", "--log-file", str(log_path)]
    )

    assert code == 0
    content = log_path.read_text(encoding="utf-8")
    assert "WARNING" in content
    assert "Skipping https://site.test/b" in content


def test_ctrl_c_exits_cleanly(monkeypatch):
    def interrupted_run(coro):
        coro.close()
        raise KeyboardInterrupt

    monkeypatch.setattr("site2pdf.main.asyncio.run", interrupted_run)

    with pytest.raises(SystemExit) as exc_info:
        cli.run()

    assert exc_info.value.code == 130
