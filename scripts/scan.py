#!/usr/bin/env python3
"""Local entrypoint to run the scanner from a checkout.

Usage:
  python scripts/scan.py --root packages/web [--project-root .] [--dry-run]

This calls the same scan_context used by the ``tsext`` console script.
"""

from __future__ import annotations

from tsext.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
