"""Settings for text plate blueprint generation."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Final, Mapping, MutableMapping, Optional

from textplates.core.errors import ConfigurationError
from textplates.core.utils.schema_validate import load_json, schema_errors, schema_path

LOG = logging.getLogger(__name__)

SIZES: Final[tuple[str, ...]] = ("small", "large")
MATERIALS: Final[tuple[str, ...]] = (
    "concrete",
    "copper",
    "glass",
    "gold",
    "iron",
    "plastic",
    "steel",
    "stone",
    "uranium",
)
TEXT_DIRECTIONS: Final[tuple[str, ...]] = ("ltr", "rtl")

DEFAULT_LABEL: Final[str] = "Text plates"
DEFAULT_BLUEPRINT_VERSION: Final[int] = 562949954207746
# enforced by the CLI only
LABEL_MAX_LENGTH: Final[int] = 199

_CONFIG_DIR_ENV: Final[str] = "TEXTPLATES_CONFIG_DIR"
_SETTINGS_FILENAME: Final[str] = "settings.json"
_SETTINGS_SCHEMA: Final[dict[str, Any]] = load_json(schema_path("settings"))


def config_dir(env: Optional[Mapping[str, str]] = None) -> Path:
    """Directory holding persisted settings (``$TEXTPLATES_CONFIG_DIR`` or ``~/.textplates``)."""
    env = os.environ if env is None else env
    raw = env.get(_CONFIG_DIR_ENV)
    if raw:
        return Path(raw).expanduser().resolve()
    return Path.home() / ".textplates"


def default_settings_path(env: Optional[Mapping[str, str]] = None) -> Path:
    return config_dir(env) / _SETTINGS_FILENAME


@dataclass(frozen=True)
class TextPlateSettings:
    """Everything that shapes a generated blueprint besides the text itself."""

    # "small" plates are 1x1 tiles, "large" plates 2x2
    size: str = "small"
    material: str = "copper"
    # tiles of space between lines, negative values flip the text vertically
    line_spacing: int = 1
    # "rtl" mirrors the grid on both axes
    text_direction: str = "ltr"
    # 0 or less means lines are never wrapped
    max_line_length: int = 0
    label: str = DEFAULT_LABEL
    # blueprint format revision written into the blueprint, not the wire version byte
    version: int = DEFAULT_BLUEPRINT_VERSION
    # keep explicit line breaks when max_line_length wraps the text
    preserve_line_breaks: bool = True

    def __post_init__(self) -> None:
        errors = schema_errors(_SETTINGS_SCHEMA, self.to_mapping())
        if errors:
            raise ConfigurationError("invalid settings:\n" + "\n".join(f"  - {e}" for e in errors))

    @property
    def entity_name(self) -> str:
        return f"textplate-{self.size}-{self.material}"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "TextPlateSettings":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"unknown settings: {', '.join(unknown)}")
        return cls(**dict(data))

    def merged(self, overrides: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> "TextPlateSettings":
        """Return a copy with ``overrides`` applied; ``None`` values keep the current value."""
        changes = {**(overrides or {}), **kwargs}
        changes = {k: v for k, v in changes.items() if v is not None}
        if not changes:
            return self
        known = {f.name for f in fields(self)}
        unknown = sorted(set(changes) - known)
        if unknown:
            raise ConfigurationError(f"unknown settings: {', '.join(unknown)}")
        return replace(self, **changes)

    def to_mapping(self) -> MutableMapping[str, Any]:
        return asdict(self)

    def dump(self, destination: Path | None = None) -> Path:
        destination = destination or default_settings_path()
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(json.dumps(self.to_mapping(), indent=2) + "\n", encoding="utf-8")
        return destination

    @classmethod
    def load(cls, source: Path | None = None) -> "TextPlateSettings":
        """Strict load: raise if the file is missing or does not hold valid settings."""
        source = source or default_settings_path()
        if not source.exists():
            raise FileNotFoundError(f"settings file not found: {source}")
        try:
            data = json.loads(source.read_text(encoding="utf-8"))
        except ValueError as exc:
            raise ConfigurationError(f"settings file is not valid JSON: {source}") from exc
        if not isinstance(data, dict):
            raise ConfigurationError(f"expected settings in {source} to be a JSON object")
        return cls.from_mapping(data)


def load_or_init_settings(source: Path | None = None) -> TextPlateSettings:
    """Load persisted settings, creating or repairing the file with defaults when needed.

    A missing file is created. An unreadable or invalid file is reported and
    the defaults are used for this run. Loaded settings are written back so
    keys added in newer versions show up in the file.
    """
    source = source or default_settings_path()
    settings = TextPlateSettings()
    try:
        settings = TextPlateSettings.load(source)
    except FileNotFoundError:
        LOG.info("no settings file at %s, writing defaults", source)
    except (ConfigurationError, OSError) as exc:
        LOG.warning("failed to load settings from %s, using the defaults: %s", source, exc)
        return settings

    try:
        settings.dump(source)
    except OSError as exc:
        LOG.warning("failed to write settings to %s: %s", source, exc)
    return settings
