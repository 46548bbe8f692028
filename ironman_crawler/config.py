from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import List, Dict, Any
from pathlib import Path
from urllib.parse import urlparse
import os
import json

from .version import CONFIG_SCHEMA_VERSION

DEFAULT_SEED_URL = "https://ithelp.ithome.com.tw/2024ironman/"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


def default_headers(user_agent: str = DEFAULT_USER_AGENT) -> Dict[str, str]:
    return {
        "User-Agent": user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.5",
        "Referer": "https://ithelp.ithome.com.tw/",
    }


@dataclass
class CrawlConfig:
    """
    Canonical configuration object passed throughout the system.
    Keep it dataclass-only (no heavy deps) to stay upgrade-friendly.
    """
    schema_version: int = CONFIG_SCHEMA_VERSION
    seed_url: str = DEFAULT_SEED_URL
    # Page-round size; doubles as the concurrency ceiling of a round.
    batch_size: int = 15
    seed_timeout: float = 5.0
    request_timeout: float = 30.0
    headers: Dict[str, str] = field(default_factory=default_headers)
    cache_dir: str = "cache"
    use_cache: bool = True
    fragment_suffixes: List[str] = field(default_factory=lambda: ["#ir-list"])
    page_param: str = "page"
    reserved_category: str = "ALL"
    report_title: str = "Series by Category - iThome Ironman"
    # Dotted paths for engine/exporter to allow runtime swapping without code changes.
    engine: str = "ironman_crawler.engines.orchestrator:CrawlOrchestrator"
    exporter: str = "ironman_crawler.export.markdown_exporter:MarkdownExporter"
    # Extra adapters (dotted class paths) to register at startup
    extra_adapters: List[str] = field(default_factory=list)
    output_path: str = "topics.md"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    # ---------- Loaders ----------

    @classmethod
    def from_env(cls) -> "CrawlConfig":
        """
        Build config from environment variables (all optional).
        """
        def _get(name: str, default: str) -> str:
            return os.getenv(name, default)

        defaults = cls()
        user_agent = _get("CRAWLER_USER_AGENT", DEFAULT_USER_AGENT)

        return cls(
            seed_url=_get("CRAWLER_SEED_URL", defaults.seed_url),
            batch_size=int(_get("CRAWLER_BATCH_SIZE", str(defaults.batch_size))),
            seed_timeout=float(_get("CRAWLER_SEED_TIMEOUT", str(defaults.seed_timeout))),
            request_timeout=float(_get("CRAWLER_REQUEST_TIMEOUT", str(defaults.request_timeout))),
            headers=default_headers(user_agent),
            cache_dir=_get("CRAWLER_CACHE_DIR", defaults.cache_dir),
            use_cache=_get("CRAWLER_USE_CACHE", "1").strip().lower() not in ("0", "false", "no", "off"),
            engine=_get("CRAWLER_ENGINE", defaults.engine),
            exporter=_get("CRAWLER_EXPORTER", defaults.exporter),
            extra_adapters=[a.strip() for a in _get("CRAWLER_EXTRA_ADAPTERS", "").split(",") if a.strip()],
            output_path=_get("CRAWLER_OUTPUT_PATH", defaults.output_path),
        )

    @classmethod
    def from_file(cls, path: str | os.PathLike[str]) -> "CrawlConfig":
        """
        Load configuration from a JSON file. Supports schema migration for older versions.
        """
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        data = migrate_config(data)
        return cls(**data)

    # ---------- Validation ----------

    def validate(self) -> None:
        parsed = urlparse(self.seed_url or "")
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"seed_url must be an absolute http(s) URL, got {self.seed_url!r}")
        if self.batch_size <= 0:
            raise ValueError("batch_size must be > 0")
        if self.seed_timeout <= 0 or self.request_timeout <= 0:
            raise ValueError("timeouts must be > 0")
        if not self.page_param:
            raise ValueError("page_param cannot be empty")
        # Validate output path parent exists or is creatable
        parent = Path(self.output_path).parent
        parent.mkdir(parents=True, exist_ok=True)


def migrate_config(raw: Dict[str, Any]) -> Dict[str, Any]:
    """
    Migrate config dict to the latest schema version.
    Keep this pure and additive. Add migrations here as you bump schema.
    """
    raw = dict(raw)

    # Ensure a schema_version is present
    raw.setdefault("schema_version", CONFIG_SCHEMA_VERSION)
    return raw
