"""Human-readable Markdown summary of a scan report."""

from __future__ import annotations

from typing import Any


def render_summary(report: dict[str, Any]) -> str:
    """Return a Markdown string with totals and a table of virtual files."""
    totals = report.get("totals", {})
    contexts = report.get("contexts", [])

    lines = []
    lines.append("# tsext Summary")
    lines.append("")
    lines.append(
        f"Contexts: {totals.get('contexts', 0)} | TS contexts: {totals.get('tsContexts', 0)}"
        f" | Virtual files: {totals.get('virtualFiles', 0)} | Missing: {totals.get('missing', 0)}"
    )
    lines.append("")
    lines.append("| Context | Virtual path | Real location |")
    lines.append("| --- | --- | --- |")

    has_rows = False

    for ctx in contexts:
        root = ctx.get("root") or "(unknown context)"
        if not ctx.get("tsContext"):
            lines.append(f"| {root} | Not a TypeScript context | n/a |")
            has_rows = True
            continue

        virtual_files = ctx.get("virtualFiles") or {}
        if not virtual_files:
            lines.append(f"| {root} | No external files | n/a |")
            has_rows = True

        for virtual_path, real in virtual_files.items():
            lines.append(f"| {root} | {virtual_path} | {real} |")
            has_rows = True

        missing = ctx.get("missing") or []
        if missing:
            lines.append(f"| {root} | Missing: {', '.join(missing)} | n/a |")

    if not has_rows:
        lines.append("| (no contexts scanned) | n/a | n/a |")

    return "\n".join(lines) + "\n"
