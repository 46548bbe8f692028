from .base import PageStore, key_for
from .file_store import FilePageStore
from .memory_store import MemoryPageStore

__all__ = ["PageStore", "key_for", "FilePageStore", "MemoryPageStore"]
