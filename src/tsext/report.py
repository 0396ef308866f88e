"""Report aggregation and schema-friendly output."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from .core import ScanResult


def aggregate(results: Iterable[ScanResult]) -> dict[str, Any]:
    """Aggregate per-context scan results into a single JSON-friendly report.

    Computes totals and top-level flags and passes each context's own
    ``to_dict()`` through.
    """
    contexts = [result.to_dict() for result in results]

    total_missing = sum(len(c["missing"]) for c in contexts)
    report: dict[str, Any] = {
        "version": "1",
        "hasMissing": total_missing > 0,
        "contexts": contexts,
        "totals": {
            "contexts": len(contexts),
            "tsContexts": sum(1 for c in contexts if c["tsContext"]),
            "external": sum(len(c["external"]) for c in contexts),
            "virtualFiles": sum(len(c["virtualFiles"]) for c in contexts),
            "missing": total_missing,
        },
    }

    return report
