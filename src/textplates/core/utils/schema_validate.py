from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator

SCHEMA_DIR = Path(__file__).resolve().parents[1] / "schemas"


def load_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def schema_path(name: str) -> Path:
    """Return the bundled schema file for ``name`` (e.g. ``"settings"``)."""
    return SCHEMA_DIR / f"{name}.schema.json"


def _format_path(error_path: Any) -> str:
    path = "$"
    for p in error_path:
        path += f"[{p!r}]" if isinstance(p, str) else f"[{p}]"
    return path


def schema_errors(schema: Path | dict[str, Any], instance: Any) -> list[str]:
    """
    Validate an in-memory JSON instance against a JSON schema.
    Returns a list of human-readable error strings (empty if valid).
    Each error is formatted as: "<jsonpath>: <message>"
    """
    if isinstance(schema, Path):
        schema = load_json(schema)
    v = Draft202012Validator(schema)
    errors = sorted(v.iter_errors(instance), key=lambda e: list(e.path))
    return [f"{_format_path(e.path)}: {e.message}" for e in errors]


def validate_instance(
    *,
    schema_path: Path,
    instance: Any,
    label: str,
    error_cls: type[Exception] = ValueError,
) -> None:
    """Raise ``error_cls`` listing every schema violation of ``instance``."""
    errors = schema_errors(schema_path, instance)
    if not errors:
        return
    shown = errors[:30]
    detail = "\n".join(f"  - {m}" for m in shown)
    if len(errors) > len(shown):
        detail += f"\n  ... ({len(errors)} errors)"
    raise error_cls(f"{label} does not conform to {schema_path.name}:\n{detail}")


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="schema_validate")
    ap.add_argument("--schema", required=True, help="schema name (settings, characters) or path to *.schema.json")
    ap.add_argument("--instance", required=True, help="path to json to validate")
    args = ap.parse_args(argv)

    schema_file = Path(args.schema)
    if not schema_file.suffix:
        schema_file = schema_path(args.schema)
    instance_path = Path(args.instance)

    if not schema_file.exists():
        print(f"[ERR] schema not found: {schema_file}")
        return 2
    if not instance_path.exists():
        print(f"[ERR] instance not found: {instance_path}")
        return 2

    errors = schema_errors(schema_file, load_json(instance_path))
    if not errors:
        print(f"[OK] {instance_path} conforms to {schema_file}")
        return 0
    print(f"[NG] {instance_path} does NOT conform to {schema_file}")
    for err in errors:
        print(f"- {err}")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
