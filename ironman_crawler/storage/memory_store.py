from __future__ import annotations

from typing import Dict, Optional

from .base import key_for


class MemoryPageStore:
    """
    In-process page store. Used for --no-cache runs and as a test double.
    """

    def __init__(self) -> None:
        self.entries: Dict[str, str] = {}

    def get(self, url: str) -> Optional[str]:
        return self.entries.get(key_for(url))

    def put(self, url: str, body: str) -> None:
        self.entries[key_for(url)] = body

    def __len__(self) -> int:
        return len(self.entries)
