from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from .base import key_for
from ..errors import CacheUnavailable

logger = logging.getLogger(__name__)


class FilePageStore:
    """
    Directory of ``<md5(url)>.html`` files, each holding a page body verbatim.

    Entries persist across runs and are never evicted by the crawler. Writes go
    through a temp file and ``os.replace`` so concurrent writes to different
    keys cannot interleave and re-writing identical content is a no-op.
    """

    suffix = ".html"

    def __init__(self, directory: str | os.PathLike[str]) -> None:
        self.directory = Path(directory)
        self._ready = False

    def path_for(self, url: str) -> Path:
        return self.directory / f"{key_for(url)}{self.suffix}"

    def _ensure_directory(self) -> None:
        if self._ready:
            return
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise CacheUnavailable(str(self.directory), exc) from exc
        self._ready = True

    def get(self, url: str) -> Optional[str]:
        self._ensure_directory()
        path = self.path_for(url)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            raise CacheUnavailable(str(path), exc) from exc

    def put(self, url: str, body: str) -> None:
        self._ensure_directory()
        path = self.path_for(url)
        tmp_name: Optional[str] = None
        try:
            fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=".tmp-", suffix=self.suffix)
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(body)
            os.replace(tmp_name, path)
        except OSError as exc:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise CacheUnavailable(str(path), exc) from exc
        logger.debug("Cached %s as %s", url, path.name)
