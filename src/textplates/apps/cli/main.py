from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from dataclasses import fields
from pathlib import Path
from typing import Any

from textplates.core.blueprint import generate_blueprint
from textplates.core.charmap import TABLE, strip_unsupported, unsupported_characters
from textplates.core.charmap.characters import CHARACTERS_PATH
from textplates.core.codec import DEFAULT_WIRE_VERSION, decode_blueprint, encode_blueprint
from textplates.core.errors import ConfigurationError, TextPlatesError
from textplates.core.settings import (
    LABEL_MAX_LENGTH,
    MATERIALS,
    SIZES,
    TEXT_DIRECTIONS,
    TextPlateSettings,
    config_dir,
    default_settings_path,
    load_or_init_settings,
)
from textplates.core.utils.schema_validate import SCHEMA_DIR

LOG = logging.getLogger("textplates.cli")

_DEBUG_ENV = "TEXTPLATES_DEBUG"


def _setup_logging(verbosity: int) -> None:
    if os.getenv(_DEBUG_ENV, "").strip().lower() in {"1", "true", "yes", "on"}:
        verbosity = max(verbosity, 2)
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbosity, logging.DEBUG)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _settings_path(args: argparse.Namespace) -> Path:
    return Path(args.settings).resolve() if args.settings else default_settings_path()


def _parse_bool(raw: str) -> bool:
    token = raw.strip().lower()
    if token in {"1", "true", "yes", "on"}:
        return True
    if token in {"0", "false", "no", "off"}:
        return False
    raise ConfigurationError(f"expected a boolean (true/false), got {raw!r}")


def _check_label(label: str) -> None:
    if len(label) > LABEL_MAX_LENGTH:
        raise ConfigurationError(f"label must be at most {LABEL_MAX_LENGTH} characters, got {len(label)}")


def _coerce_setting(key: str, raw: str) -> Any:
    defaults = TextPlateSettings()
    known = {f.name for f in fields(TextPlateSettings)}
    if key not in known:
        raise ConfigurationError(f"unknown setting: {key} (choose from {', '.join(sorted(known))})")
    current = getattr(defaults, key)
    if key == "label":
        _check_label(raw)
    if isinstance(current, bool):
        return _parse_bool(raw)
    if isinstance(current, int):
        try:
            return int(raw.strip())
        except ValueError as exc:
            raise ConfigurationError(f"{key} must be an integer, got {raw!r}") from exc
    return raw


def _read_input(args: argparse.Namespace) -> str | None:
    if args.file:
        in_path = Path(args.file).resolve()
        if not in_path.exists():
            print(f"[NG] input not found: {in_path}")
            return None
        try:
            return in_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            print(f"[NG] cannot read input: {in_path}")
            print(f"      detail: {e}")
            return None
    if args.text is None:
        print("[NG] pass the text as an argument or use --file")
        return None
    return args.text


def _write_or_print(content: str, out: str | None, what: str) -> None:
    if not out:
        print(content)
        return
    out_path = Path(out).resolve()
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(content, encoding="utf-8")
    print(f"[OK] {what} written: {out_path}")


def cmd_create(args: argparse.Namespace) -> int:
    """Create a text plate blueprint string from a string or a text file."""

    text = _read_input(args)
    if text is None:
        return 2
    if not args.file:
        # typed input uses a literal "\n" for line breaks
        text = text.replace("\\n", "\n")

    unsupported = unsupported_characters(text)
    if unsupported:
        action = "removed" if args.strip_unsupported else f"shown as {TABLE.fallback.char!r}"
        LOG.warning(
            "%d unsupported character(s) will be %s: %s",
            len(unsupported),
            action,
            " ".join(unsupported),
        )
        if args.strip_unsupported:
            text = strip_unsupported(text)

    if not 0 <= args.wire_version <= 255:
        print(f"[NG] --wire-version must be within 0-255, got {args.wire_version}")
        return 2

    try:
        if args.label is not None:
            _check_label(args.label)
        settings = load_or_init_settings(_settings_path(args)).merged(
            size=args.size,
            material=args.material,
            line_spacing=args.line_spacing,
            text_direction=args.direction,
            max_line_length=args.max_line_length,
            label=args.label,
            preserve_line_breaks=args.preserve_line_breaks,
        )
        blueprint = generate_blueprint(text, settings)
        encoded = encode_blueprint(blueprint, args.wire_version)
    except TextPlatesError as e:
        print("[NG] create failed")
        print(f"      detail: {e}")
        return 2

    LOG.info("blueprint with %d plates (%s)", len(blueprint.entities), settings.entity_name)
    _write_or_print(encoded, args.out, "blueprint string")
    return 0


def cmd_decode(args: argparse.Namespace) -> int:
    """Decode a blueprint string into pretty-printed JSON."""

    raw = _read_input(args)
    if raw is None:
        return 2

    try:
        version, payload = decode_blueprint(raw.rstrip())
    except TextPlatesError as e:
        print("[NG] decode failed")
        print(f"      detail: {e}")
        if e.__cause__ is not None:
            print(f"      cause: {e.__cause__}")
        return 2

    decoded = {"version": version, **payload}
    _write_or_print(json.dumps(decoded, ensure_ascii=False, indent=2), args.out, "decoded blueprint")
    return 0


def cmd_settings(args: argparse.Namespace) -> int:
    path = _settings_path(args)

    if args.action == "reset":
        TextPlateSettings().dump(path)
        print(f"[OK] settings reset to defaults: {path}")
        return 0

    settings = load_or_init_settings(path)

    if args.action == "set":
        if args.key is None or args.value is None:
            print("[NG] usage: textplates settings set KEY VALUE")
            return 2
        try:
            settings = settings.merged({args.key: _coerce_setting(args.key, args.value)})
        except ConfigurationError as e:
            print("[NG] invalid setting")
            print(f"      detail: {e}")
            return 2
        settings.dump(path)
        print(f"[OK] {args.key} = {getattr(settings, args.key)!r}")
        return 0

    print(f"settings: {path}")
    for k, v in settings.to_mapping().items():
        print(f"  {k}: {v!r}")
    return 0


def cmd_chars(_: argparse.Namespace) -> int:
    for entry in sorted(TABLE.entries, key=lambda e: e.variant):
        alternates = " ".join(entry.replacements)
        suffix = f"  ({alternates})" if alternates else ""
        print(f"{entry.variant:>3} {entry.name:<14} {entry.char!r}{suffix}")
    print(f"fallback: {TABLE.fallback.name} ({TABLE.fallback.variant})")
    return 0


def cmd_paths(args: argparse.Namespace) -> int:
    print(f"config_dir: {config_dir()}")
    print(f"settings: {_settings_path(args)}")
    print(f"characters: {CHARACTERS_PATH}")
    for schema in sorted(SCHEMA_DIR.glob("*.schema.json")):
        print(f"schema.{schema.name.split('.')[0]}: {schema}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="textplates")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="-v for info, -vv for debug logging")
    parser.add_argument("--settings", help="settings file (default: <config dir>/settings.json)")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_create = sub.add_parser("create", help="create a text plate blueprint string")
    p_create.add_argument("text", nargs="?", help="text to lay out (\\n for a line break)")
    p_create.add_argument("--file", help="read the text from a file instead")
    p_create.add_argument("--out", help="write the blueprint string to this path instead of stdout")
    p_create.add_argument("--size", choices=SIZES)
    p_create.add_argument("--material", choices=MATERIALS)
    p_create.add_argument("--line-spacing", type=int, help="tiles between lines, negative reverses vertically")
    p_create.add_argument("--direction", choices=TEXT_DIRECTIONS)
    p_create.add_argument("--max-line-length", type=int, help="0 for infinite")
    p_create.add_argument("--label", help="blueprint label")
    p_create.add_argument(
        "--no-preserve-line-breaks",
        dest="preserve_line_breaks",
        action="store_const",
        const=False,
        default=None,
        help="collapse existing line breaks before wrapping",
    )
    p_create.add_argument(
        "--wire-version",
        type=int,
        default=DEFAULT_WIRE_VERSION,
        help=f"leading version byte of the blueprint string (default: {DEFAULT_WIRE_VERSION})",
    )
    p_create.add_argument("--strip-unsupported", action="store_true", help="remove characters without a plate")
    p_create.set_defaults(func=cmd_create)

    p_decode = sub.add_parser("decode", help="decode a blueprint string into JSON")
    p_decode.add_argument("text", nargs="?", help="blueprint string")
    p_decode.add_argument("--file", help="read the blueprint string from a file instead")
    p_decode.add_argument("--out", help="write the JSON to this path instead of stdout")
    p_decode.set_defaults(func=cmd_decode)

    p_set = sub.add_parser("settings", help="show, change or reset the saved settings")
    p_set.add_argument("action", choices=("show", "set", "reset"), nargs="?", default="show")
    p_set.add_argument("key", nargs="?")
    p_set.add_argument("value", nargs="?")
    p_set.set_defaults(func=cmd_settings)

    p_chars = sub.add_parser("chars", help="list supported characters and their plate variants")
    p_chars.set_defaults(func=cmd_chars)

    p_paths = sub.add_parser("paths", help="show config and data file paths")
    p_paths.set_defaults(func=cmd_paths)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)
    raise SystemExit(args.func(args))


if __name__ == "__main__":
    main()
