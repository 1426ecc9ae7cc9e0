"""Blueprint data model.

Mirrors the JSON representation of a single game blueprint:

    {"blueprint": {"item": "blueprint", "label": ..., "description": ...,
                   "version": ..., "icons": [...], "entities": [...]}}

`as_dict()` produces exactly that shape (key order included), `from_dict()`
reads it back.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class Signal:
    name: str
    type: Optional[str] = None  # "virtual" for letter/digit signals, omitted for items

    def as_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.type is not None:
            out["type"] = self.type
        out["name"] = self.name
        return out


@dataclass(frozen=True)
class Icon:
    signal: Signal
    index: int

    def as_dict(self) -> dict[str, Any]:
        return {"signal": self.signal.as_dict(), "index": self.index}


@dataclass(frozen=True)
class Position:
    x: float
    y: float

    def as_dict(self) -> dict[str, Any]:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class Entity:
    entity_number: int
    name: str
    position: Position
    variation: int

    def as_dict(self) -> dict[str, Any]:
        return {
            "entity_number": self.entity_number,
            "name": self.name,
            "position": self.position.as_dict(),
            "variation": self.variation,
        }


@dataclass(frozen=True)
class Blueprint:
    label: str
    description: str
    version: int
    icons: tuple[Icon, ...]
    entities: tuple[Entity, ...]
    item: str = "blueprint"

    def as_dict(self) -> dict[str, Any]:
        return {
            "blueprint": {
                "item": self.item,
                "label": self.label,
                "description": self.description,
                "version": self.version,
                "icons": [icon.as_dict() for icon in self.icons],
                "entities": [entity.as_dict() for entity in self.entities],
            }
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Blueprint":
        """Build a Blueprint from its JSON form (with or without the outer ``blueprint`` key).

        Only the fields modelled here are read; anything else the game wrote is ignored.
        """
        bp = data.get("blueprint", data)
        icons = tuple(
            Icon(
                signal=Signal(name=i["signal"]["name"], type=i["signal"].get("type")),
                index=int(i["index"]),
            )
            for i in bp.get("icons", [])
        )
        entities = tuple(
            Entity(
                entity_number=int(e["entity_number"]),
                name=e["name"],
                position=Position(x=e["position"]["x"], y=e["position"]["y"]),
                variation=int(e.get("variation", 1)),
            )
            for e in bp.get("entities", [])
        )
        return cls(
            label=bp.get("label", ""),
            description=bp.get("description", ""),
            version=int(bp.get("version", 0)),
            icons=icons,
            entities=entities,
            item=bp.get("item", "blueprint"),
        )
