"""Blueprint string codec.

    from textplates.core.codec import decode_blueprint, encode_blueprint
"""

from __future__ import annotations

from .encoding import DEFAULT_WIRE_VERSION, decode_blueprint, encode_blueprint

__all__ = [
    "DEFAULT_WIRE_VERSION",
    "decode_blueprint",
    "encode_blueprint",
]
