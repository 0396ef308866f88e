"""Command line entrypoint: scan source contexts and print a JSON report.

Usage:
  tsext --root packages/web [--root packages/api] [--project-root .]
        [--config tsext.yaml] [--ingest-url URL] [--dry-run] [--summary]
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

from .config import ConfigError, load_settings
from .core import ScanResult, scan_context
from .errors import ScanError
from .ingestion import get_ingestion_service
from .report import aggregate
from .summary import render_summary
from .utils.logging import configure_logging, enable_file_logging, get_logger

LOGGER = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_MISSING = 10


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Locate tsconfig.json and friends and publish them as virtual files.")
    parser.add_argument("--root", type=Path, action="append", dest="roots", help="Source context root (repeatable)")
    parser.add_argument("--project-root", type=Path, default=None, help="Owning project root (default: detect)")
    parser.add_argument("--config", type=Path, default=None, help="Settings file (JSON or YAML)")
    parser.add_argument("--ingest-url", type=str, default=None, help="Publish virtual files to this analyzer URL")
    parser.add_argument("--dry-run", action="store_true", help="Locate and resolve only, publish nothing")
    parser.add_argument("--summary", action="store_true", help="Print a Markdown summary instead of JSON")
    parser.add_argument("--fail-on-missing", action="store_true", help="Exit with 10 when required files are missing")
    parser.add_argument("--log-dir", type=Path, default=None, help="Also write logs to this folder")
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    level = logging.DEBUG if args.verbose else logging.INFO
    configure_logging(level)
    if args.log_dir is not None:
        enable_file_logging(args.log_dir, level=level)

    try:
        settings = load_settings(args.config)
    except ConfigError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    ingest_url = None if args.dry_run else (args.ingest_url or settings.ingest_url)
    try:
        if ingest_url:
            settings = replace(settings, ingest_url=ingest_url)
        ingestion = get_ingestion_service("http" if ingest_url else "memory", settings)
    except ValueError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    results: list[ScanResult] = []
    for root in args.roots or [Path(".")]:
        try:
            results.append(
                scan_context(
                    root,
                    project_root=args.project_root,
                    settings=settings,
                    ingestion=ingestion,
                    publish=not args.dry_run,
                )
            )
        except (ScanError, ValueError) as exc:
            LOGGER.error("Scan of %s failed: %s", root, exc)
            print(f"ERROR: scan of {root} failed: {exc}", file=sys.stderr)
            return EXIT_FAILURE

    report = aggregate(results)
    if args.summary:
        print(render_summary(report), end="")
    else:
        print(json.dumps(report, indent=2))

    if report["hasMissing"] and args.fail_on_missing:
        return EXIT_MISSING
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
