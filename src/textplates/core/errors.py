"""Exception hierarchy for textplates."""

from __future__ import annotations


class TextPlatesError(RuntimeError):
    """Base exception for textplates failures."""


class EmptyInputError(TextPlatesError):
    """Raised when a blueprint is requested for zero-length text."""


class EncodeError(TextPlatesError):
    """Raised when a blueprint cannot be serialized or compressed."""


class DecodeError(TextPlatesError):
    """Raised when a blueprint string cannot be turned back into blueprint data."""


class ConfigurationError(TextPlatesError):
    """Raised when settings contain unknown keys or invalid values."""


class CharacterTableError(TextPlatesError):
    """Raised when the bundled character table breaks its load-time invariants."""
