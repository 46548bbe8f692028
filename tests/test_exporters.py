import csv
import json

from ironman_crawler.adapters.base import Item
from ironman_crawler.engines.base import Category
from ironman_crawler.export.csv_exporter import CSVExporter
from ironman_crawler.export.json_exporter import JSONExporter
from ironman_crawler.export.markdown_exporter import MarkdownExporter


def tree():
    ai = Category(name="AI", source_url="https://example.com/ai")
    ai.records = {
        "https://example.com/s/2": Item("Second [draft]", "https://example.com/s/2"),
        "https://example.com/s/1": Item("First", "https://example.com/s/1"),
    }
    empty = Category(name="Empty", source_url="https://example.com/empty")
    return [ai, empty]


def test_markdown_layout(tmp_path):
    path = tmp_path / "out" / "topics.md"
    MarkdownExporter(title="Series").export(tree(), str(path))

    assert path.read_text(encoding="utf-8") == (
        "# Series\n"
        "\n"
        "## AI\n"
        "\n"
        "- [Second \\[draft\\]](https://example.com/s/2)\n"
        "- [First](https://example.com/s/1)\n"
        "\n"
        "## Empty\n"
        "\n"
    )


def test_json_export(tmp_path):
    path = tmp_path / "topics.json"
    JSONExporter().export(tree(), str(path))

    data = json.loads(path.read_text(encoding="utf-8"))
    assert [c["name"] for c in data["categories"]] == ["AI", "Empty"]
    assert data["categories"][0]["series"][0] == {"title": "Second [draft]", "url": "https://example.com/s/2"}


def test_csv_export(tmp_path):
    path = tmp_path / "topics.csv"
    CSVExporter().export(tree(), str(path))

    with open(path, encoding="utf-8", newline="") as f:
        rows = list(csv.reader(f))
    assert rows[0] == ["category", "category_url", "title", "url"]
    assert rows[1] == ["AI", "https://example.com/ai", "Second [draft]", "https://example.com/s/2"]
    assert len(rows) == 3
