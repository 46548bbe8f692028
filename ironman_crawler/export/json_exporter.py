from __future__ import annotations

import json
from typing import List
from pathlib import Path

from ..engines.base import Category


class JSONExporter:
    def export(self, categories: List[Category], path: str) -> None:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            serializable = {"categories": [c.to_dict() for c in categories]}
            json.dump(serializable, f, indent=2, ensure_ascii=False)
