"""Blueprint generation package.

This package is responsible for converting input text plus settings into a
text plate blueprint (deterministic, one entity per visible character).

Public API:
- `generate_blueprint(text, settings=None, **overrides)`
- `Blueprint` and its parts (`Entity`, `Icon`, `Position`, `Signal`)

Keep this module as a thin re-export layer so callers can import a stable path:

    from textplates.core.blueprint import generate_blueprint
"""

from __future__ import annotations

from .generate import PROJECT_URL, generate_blueprint, truncate_description
from .models import Blueprint, Entity, Icon, Position, Signal

__all__ = [
    "PROJECT_URL",
    "Blueprint",
    "Entity",
    "Icon",
    "Position",
    "Signal",
    "generate_blueprint",
    "truncate_description",
]
