from __future__ import annotations

import csv
from typing import List
from pathlib import Path

from ..engines.base import Category


class CSVExporter:
    """
    One row per series, prefixed with its category.
    """

    _headers = ["category", "category_url", "title", "url"]

    def export(self, categories: List[Category], path: str) -> None:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="") as f:
            w = csv.writer(f)
            w.writerow(self._headers)
            for category in categories:
                for item in category.items:
                    w.writerow([category.name, category.source_url, item.title, item.url])
