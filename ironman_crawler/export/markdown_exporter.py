from __future__ import annotations

from typing import List
from pathlib import Path

from ..engines.base import Category


class MarkdownExporter:
    """
    Renders a heading per category and a link bullet per series, in crawl order.
    """

    def __init__(self, title: str = "Series by Category - iThome Ironman") -> None:
        self.title = title

    def render(self, categories: List[Category]) -> str:
        lines = [f"# {self.title}", ""]
        for category in categories:
            lines.append(f"## {category.name}")
            lines.append("")
            for item in category.items:
                lines.append(f"- [{_escape(item.title)}]({item.url})")
            lines.append("")
        return "\n".join(lines) + "\n"

    def export(self, categories: List[Category], path: str) -> None:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.render(categories))


def _escape(text: str) -> str:
    # Brackets would end the link label early.
    return text.replace("[", "\\[").replace("]", "\\]")
