"""
encoding.py — Blueprint string codec.

Wire format (one string):

    chr(version) + base64(zlib.compress(json_utf8, level=9))

The leading character's code point (0–255) is the wire version; the game
writes "0" (48). The version is passed through untouched on decode, no
upgrade or repair is attempted.
"""
from __future__ import annotations

import base64
import binascii
import logging
import zlib
from typing import Any, Mapping

import orjson

from textplates.core.blueprint.models import Blueprint
from textplates.core.errors import DecodeError, EncodeError

LOG = logging.getLogger(__name__)

DEFAULT_WIRE_VERSION = 48
COMPRESSION_LEVEL = 9
REQUIRED_KEY = "blueprint"


def encode_blueprint(blueprint: Blueprint | Mapping[str, Any], version: int = DEFAULT_WIRE_VERSION) -> str:
    """Serialize ``blueprint`` into a blueprint string prefixed with ``chr(version)``.

    ``version`` must be in 0–255; callers are responsible for that. A plain
    mapping is copied into a dict at the top level; nested values must already
    be JSON-native (dict, list, str, int, float, bool, None).
    """
    try:
        payload = blueprint.as_dict() if isinstance(blueprint, Blueprint) else dict(blueprint)
        data = orjson.dumps(payload)
        deflated = zlib.compress(data, COMPRESSION_LEVEL)
    except (orjson.JSONEncodeError, zlib.error, TypeError) as exc:
        raise EncodeError("Failed to encode blueprint data.") from exc

    encoded = base64.b64encode(deflated).decode("ascii")
    LOG.debug("encoded blueprint: %d json bytes -> %d deflated bytes", len(data), len(deflated))
    return chr(version) + encoded


def decode_blueprint(blueprint_string: str) -> tuple[int, dict[str, Any]]:
    """Parse a blueprint string into ``(wire_version, payload)``.

    ``payload`` is the parsed JSON object as-is (game strings carry many
    fields beyond the ones textplates writes); use ``Blueprint.from_dict``
    for the typed view.
    """
    if not blueprint_string:
        raise DecodeError("Failed to decode blueprint string: empty input.")

    version = ord(blueprint_string[0])
    try:
        deflated = base64.b64decode(blueprint_string[1:])
        inflated = zlib.decompress(deflated)
    except (binascii.Error, ValueError, zlib.error) as exc:
        raise DecodeError("Failed to decode blueprint string.") from exc

    try:
        data = orjson.loads(inflated)
    except orjson.JSONDecodeError as exc:
        raise DecodeError("Failed to parse blueprint data.") from exc

    if not isinstance(data, dict) or REQUIRED_KEY not in data:
        raise DecodeError("Blueprint string does not contain valid blueprint data.")

    LOG.debug("decoded blueprint string: version %d, %d inflated bytes", version, len(inflated))
    return version, data
