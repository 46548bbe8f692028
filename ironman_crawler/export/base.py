from __future__ import annotations

from typing import List, Protocol

from ..engines.base import Category


class Exporter(Protocol):
    def export(self, categories: List[Category], path: str) -> None:
        ...
