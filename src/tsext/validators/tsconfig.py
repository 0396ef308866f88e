"""Structural validation of tsconfig.json documents, with a CLI entrypoint."""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Iterable
from functools import lru_cache
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator

from ..errors import ManifestError

_DEFAULT_SCHEMA = Path(__file__).resolve().with_name("tsconfig.schema.json")


@lru_cache(maxsize=None)
def _validator(schema_path: Path = _DEFAULT_SCHEMA) -> Draft202012Validator:
    schema = json.loads(schema_path.read_text(encoding="utf-8"))
    return Draft202012Validator(schema)


def _format_errors(errors: Iterable) -> str:
    messages = []
    for error in errors:
        pointer = "/".join(str(p) for p in error.path)
        messages.append(f"- {pointer or '<root>'}: {error.message}")
    return "\n".join(messages)


def iter_manifest_errors(document: Any, schema_path: Path = _DEFAULT_SCHEMA) -> list:
    validator = _validator(schema_path)
    return sorted(validator.iter_errors(document), key=lambda e: list(e.path))


def validate_manifest(document: Any, schema_path: Path = _DEFAULT_SCHEMA) -> None:
    """Raise ManifestError if ``document`` does not match the tsconfig schema."""
    errors = iter_manifest_errors(document, schema_path)
    if errors:
        raise ManifestError("tsconfig.json failed validation:\n" + _format_errors(errors))


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("input", type=Path, help="Path to the tsconfig.json to validate")
    parser.add_argument(
        "--schema",
        type=Path,
        default=_DEFAULT_SCHEMA,
        help="Path to the JSON schema used for validation",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        document = json.loads(args.input.read_text(encoding="utf-8"))
        validate_manifest(document, args.schema)
    except FileNotFoundError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    except json.JSONDecodeError as exc:
        print(f"ERROR: Failed to read JSON: {exc}", file=sys.stderr)
        return 1
    except ManifestError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    print(f"{args.input} is valid against {args.schema}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
