from __future__ import annotations

import argparse
import asyncio
import logging
from typing import List

from ..config import CrawlConfig
from ..errors import SeedUnreachable
from ..utils.logging import setup_logging
from ..utils.loader import load_symbol
from ..adapters.registry import AdapterRegistry
from ..engines.base import CrawlReport
from ..export.base import Exporter

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_BAD_CONFIG = 1
EXIT_SEED_UNREACHABLE = 2


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Crawl categorized series listings into a report")
    p.add_argument("--config", type=str, help="Path to config JSON", default=None)
    p.add_argument("--seed-url", type=str, default=None, help="Seed page listing the categories")
    p.add_argument("--batch-size", type=int, default=None,
                   help="Pages per round, also the concurrency ceiling (default from config)")
    p.add_argument("--cache-dir", type=str, default=None, help="Page cache directory")
    p.add_argument("--no-cache", action="store_true", help="Do not read or write the page cache")
    p.add_argument("--engine", type=str, default=None, help="Engine dotted path (module:ClassName)")
    p.add_argument("--exporter", type=str, default=None, help="Exporter dotted path (module:ClassName)")
    p.add_argument("--extra-adapters", type=str, default=None,
                   help="Comma-separated dotted paths for additional adapters")
    p.add_argument("--output", type=str, default=None, help="Output file path")
    p.add_argument("--log-level", type=str, default=None, help="Log level (DEBUG, INFO, WARNING, ERROR)")
    return p


def _load_config(args: argparse.Namespace) -> CrawlConfig:
    if args.config:
        cfg = CrawlConfig.from_file(args.config)
    else:
        cfg = CrawlConfig.from_env()

    if args.seed_url:
        cfg.seed_url = args.seed_url
    if args.batch_size is not None:
        cfg.batch_size = args.batch_size
    if args.cache_dir:
        cfg.cache_dir = args.cache_dir
    if args.no_cache:
        cfg.use_cache = False
    if args.engine:
        cfg.engine = args.engine
    if args.exporter:
        cfg.exporter = args.exporter
    if args.extra_adapters:
        cfg.extra_adapters = [a.strip() for a in args.extra_adapters.split(",") if a.strip()]
    if args.output:
        cfg.output_path = args.output

    cfg.validate()
    return cfg


def run_cli(argv: List[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        cfg = _load_config(args)
        # Dynamic engine + exporter loading so upgrades don't require code edits.
        engine_cls = load_symbol(cfg.engine)
        exporter_cls = load_symbol(cfg.exporter)
    except (OSError, ValueError, TypeError, ImportError) as exc:
        logger.error("Invalid configuration: %s", exc)
        return EXIT_BAD_CONFIG

    registry = AdapterRegistry()
    # Allow runtime registration of additional adapters
    for dotted in cfg.extra_adapters:
        try:
            adapter_cls = load_symbol(dotted)
            registry.register(adapter_cls())
        except Exception as exc:
            logger.warning("Failed to load adapter %s: %r", dotted, exc)

    async def _run() -> CrawlReport:
        engine = engine_cls(cfg, registry=registry)
        return await engine.crawl()

    try:
        report: CrawlReport = asyncio.run(_run())
    except SeedUnreachable as exc:
        logger.error("Cannot start crawl, seed page %s unreachable: %s", exc.url, exc.cause)
        return EXIT_SEED_UNREACHABLE

    exporter: Exporter = exporter_cls()
    if hasattr(exporter, "title"):
        exporter.title = cfg.report_title
    exporter.export(report.categories, cfg.output_path)

    logger.info("Categories: %s | Series: %s | Pages: %s | Network: %s | Cache hits: %s | Failures: %s",
                len(report.categories),
                report.item_count,
                report.pages_requested,
                report.network_requests,
                report.cache_hits,
                report.failures)
    logger.info("Report saved to %s", cfg.output_path)
    return EXIT_OK
