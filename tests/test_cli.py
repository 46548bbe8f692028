from __future__ import annotations

from ironman_crawler.adapters.base import Item
from ironman_crawler.engines.base import Category, CrawlEngine, CrawlReport
from ironman_crawler.errors import SeedUnreachable
from ironman_crawler.ui.cli import EXIT_BAD_CONFIG, EXIT_OK, EXIT_SEED_UNREACHABLE, run_cli


class StaticEngine(CrawlEngine):
    def __init__(self, config, registry=None) -> None:
        self.config = config

    async def crawl(self) -> CrawlReport:
        ai = Category(name="AI", source_url="https://example.com/ai")
        ai.records["https://example.com/s/1"] = Item("First", "https://example.com/s/1")
        return CrawlReport(categories=[ai], pages_requested=2, network_requests=3)


class UnreachableEngine(CrawlEngine):
    def __init__(self, config, registry=None) -> None:
        self.config = config

    async def crawl(self) -> CrawlReport:
        raise SeedUnreachable(self.config.seed_url, ConnectionError("refused"))


def test_cli_writes_markdown_report(tmp_path) -> None:
    output = tmp_path / "topics.md"
    code = run_cli(["--engine", "tests.test_cli:StaticEngine", "--output", str(output)])

    assert code == EXIT_OK
    text = output.read_text(encoding="utf-8")
    assert text.startswith("# Series by Category - iThome Ironman\n")
    assert "## AI\n\n- [First](https://example.com/s/1)\n" in text


def test_cli_honours_exporter_option(tmp_path) -> None:
    output = tmp_path / "topics.json"
    code = run_cli(
        [
            "--engine", "tests.test_cli:StaticEngine",
            "--exporter", "ironman_crawler.export.json_exporter:JSONExporter",
            "--output", str(output),
        ]
    )

    assert code == EXIT_OK
    assert '"name": "AI"' in output.read_text(encoding="utf-8")


def test_cli_reports_unreachable_seed(tmp_path, caplog) -> None:
    output = tmp_path / "topics.md"
    code = run_cli(["--engine", "tests.test_cli:UnreachableEngine", "--output", str(output)])

    assert code == EXIT_SEED_UNREACHABLE
    assert not output.exists()
    assert "refused" in caplog.text


def test_cli_rejects_invalid_config(tmp_path) -> None:
    code = run_cli(["--batch-size", "0", "--output", str(tmp_path / "topics.md")])
    assert code == EXIT_BAD_CONFIG


def test_cli_rejects_unknown_config_key(tmp_path) -> None:
    config = tmp_path / "config.json"
    config.write_text('{"seed_url": "https://example.com/", "max_depth": 3}', encoding="utf-8")

    code = run_cli(["--config", str(config), "--output", str(tmp_path / "topics.md")])

    assert code == EXIT_BAD_CONFIG


def test_cli_rejects_unloadable_engine_and_exporter(tmp_path) -> None:
    output = str(tmp_path / "topics.md")

    assert run_cli(["--engine", "no_such_module:Engine", "--output", output]) == EXIT_BAD_CONFIG
    assert run_cli(["--engine", "tests.test_cli:NoSuchEngine", "--output", output]) == EXIT_BAD_CONFIG
    assert run_cli(
        ["--engine", "tests.test_cli:StaticEngine", "--exporter", "ironman_crawler.export:Nope", "--output", output]
    ) == EXIT_BAD_CONFIG
