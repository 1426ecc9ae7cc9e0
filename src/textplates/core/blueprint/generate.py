from __future__ import annotations

import logging
import re
from typing import Any, Mapping

from textplates.core.charmap import resolve_variant
from textplates.core.errors import EmptyInputError
from textplates.core.layout import PlacedChar, layout, wrap
from textplates.core.settings import TextPlateSettings

from .models import Blueprint, Entity, Icon, Position, Signal

LOG = logging.getLogger(__name__)

PROJECT_URL = "https://mods.factorio.com/mod/textplates"
DESCRIPTION_MAX_LENGTH = 499
ELLIPSIS = "..."
MAX_ICONS = 4

_NOT_ALNUM_RE = re.compile(r"[^a-zA-Z0-9]")


def _resolve_settings(settings: TextPlateSettings | Mapping[str, Any] | None, overrides: Mapping[str, Any]) -> TextPlateSettings:
    if settings is None:
        base = TextPlateSettings()
    elif isinstance(settings, TextPlateSettings):
        base = settings
    else:
        base = TextPlateSettings().merged(settings)
    return base.merged(overrides)


def _position(cell: PlacedChar, settings: TextPlateSettings) -> Position:
    """Grid cell -> world position, centred on the tile (+0.5)."""
    size_mult = 2 if settings.size == "large" else 1
    dir_mult = -1 if settings.text_direction == "rtl" else 1
    x = cell.col * size_mult * dir_mult + 0.5
    y = (cell.row * size_mult + cell.row * settings.line_spacing) * dir_mult + 0.5
    return Position(x=x, y=y)


def _icons(text: str, entity_name: str) -> tuple[Icon, ...]:
    """First four ASCII letters/digits as virtual signals, else the plate item itself."""
    letters = _NOT_ALNUM_RE.sub("", text)[:MAX_ICONS]
    if not letters:
        return (Icon(signal=Signal(name=entity_name), index=1),)
    return tuple(
        Icon(signal=Signal(name=f"signal-{ch.upper()}", type="virtual"), index=i)
        for i, ch in enumerate(letters, start=1)
    )


def truncate_description(text: str) -> str:
    if len(text) <= DESCRIPTION_MAX_LENGTH:
        return text
    return text[: DESCRIPTION_MAX_LENGTH - len(ELLIPSIS)] + ELLIPSIS


def _description(text: str, entity_name: str) -> str:
    item = f"[item={entity_name}]"
    return truncate_description(f"{item} {PROJECT_URL}\n{text} {item}")


def generate_blueprint(
    text: str,
    settings: TextPlateSettings | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> Blueprint:
    """Build a text plate blueprint for ``text``.

    Contract:
    - One entity per non-whitespace character after wrapping, numbered 1..N
      in row-major order.
    - ``settings`` may be a full TextPlateSettings, a partial mapping merged
      over the defaults, or None; keyword ``overrides`` are applied last.
    - Raises EmptyInputError for ``""``. Nothing is returned on failure.
    """
    if len(text) == 0:
        raise EmptyInputError("cannot create a blueprint from empty text")

    resolved = _resolve_settings(settings, overrides)
    name = resolved.entity_name

    lines = wrap(text, resolved.max_line_length, resolved.preserve_line_breaks)
    cells = layout(lines)

    entities = tuple(
        Entity(
            entity_number=number,
            name=name,
            position=_position(cell, resolved),
            variation=resolve_variant(cell.char),
        )
        for number, cell in enumerate(cells, start=1)
    )

    blueprint = Blueprint(
        label=resolved.label,
        description=_description(text, name),
        version=resolved.version,
        icons=_icons(text, name),
        entities=entities,
    )
    LOG.debug("generated %s blueprint: %d lines, %d entities", name, len(lines), len(entities))
    return blueprint


__all__ = [
    "PROJECT_URL",
    "generate_blueprint",
    "truncate_description",
]
