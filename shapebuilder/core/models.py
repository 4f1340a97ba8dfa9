# File: shapebuilder/core/models.py
# Project: ShapeBuilder (SHB)
# Version: 0.1.0
# Status: stable
# Date: 2026-10-18
# Purpose: Modelo de datos: Point / Anchor / Shape (inmutables).
# Notes: Toda mutación devuelve una instancia nueva; snapshots viejos no se alteran.
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Iterator

from shapebuilder.utils.errors import ShbValidationError


@dataclass(frozen=True)
class Point:
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def scaled(self, k: float) -> "Point":
        return Point(self.x * k, self.y * k)

    def dist_sq(self, other: "Point") -> float:
        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy

    def as_tuple(self) -> tuple[float, float]:
        return (float(self.x), float(self.y))


class HandleKey(str, Enum):
    """Handle de control de un ancla.

    - handle_in: controla la tangente del segmento que LLEGA al ancla.
    - handle_out: controla la tangente del segmento que SALE del ancla.
    """

    IN = "handle_in"
    OUT = "handle_out"

    @property
    def opposite(self) -> "HandleKey":
        return HandleKey.OUT if self is HandleKey.IN else HandleKey.IN


_HANDLE_ALIASES = {
    "handle_in": HandleKey.IN,
    "handlein": HandleKey.IN,
    "in": HandleKey.IN,
    "handle_out": HandleKey.OUT,
    "handleout": HandleKey.OUT,
    "out": HandleKey.OUT,
}


def coerce_handle_key(v: object) -> HandleKey:
    """Acepta HandleKey o alias de texto ('handleOut', 'out', ...)."""
    if isinstance(v, HandleKey):
        return v
    s = str(v or "").strip().lower()
    try:
        return _HANDLE_ALIASES[s]
    except KeyError:
        raise ShbValidationError(f"Handle inválido: {v!r}") from None


@dataclass(frozen=True)
class Anchor:
    # Los handles son puntos absolutos (no offsets respecto del ancla).
    x: float
    y: float
    handle_in: Point
    handle_out: Point

    @staticmethod
    def at(p: Point) -> "Anchor":
        """Ancla nueva: ambos handles coinciden con la posición."""
        return Anchor(x=p.x, y=p.y, handle_in=p, handle_out=p)

    @property
    def pos(self) -> Point:
        return Point(self.x, self.y)

    def handle(self, which: HandleKey) -> Point:
        return self.handle_in if which is HandleKey.IN else self.handle_out

    def with_handle(self, which: HandleKey, p: Point, *, symmetric: bool) -> "Anchor":
        out = replace(self, **{which.value: p})
        if symmetric:
            # reflejo por el ancla: 2*anchor - p
            mirror = Point(2.0 * self.x - p.x, 2.0 * self.y - p.y)
            out = replace(out, **{which.opposite.value: mirror})
        return out

    def translated(self, delta: Point) -> "Anchor":
        return Anchor(
            x=self.x + delta.x,
            y=self.y + delta.y,
            handle_in=self.handle_in + delta,
            handle_out=self.handle_out + delta,
        )

    def mapped(self, fn: Callable[[Point], Point]) -> "Anchor":
        """Aplica fn a posición y handles (transformaciones afines)."""
        p = fn(self.pos)
        return Anchor(x=p.x, y=p.y, handle_in=fn(self.handle_in), handle_out=fn(self.handle_out))

    def to_dict(self) -> dict[str, Any]:
        return {
            "x": float(self.x),
            "y": float(self.y),
            "handle_in": {"x": float(self.handle_in.x), "y": float(self.handle_in.y)},
            "handle_out": {"x": float(self.handle_out.x), "y": float(self.handle_out.y)},
        }


@dataclass(frozen=True)
class Shape:
    anchors: tuple[Anchor, ...] = ()
    closed: bool = False

    def __len__(self) -> int:
        return len(self.anchors)

    def __getitem__(self, index: int) -> Anchor:
        return self.anchors[index]

    def has_index(self, index: int) -> bool:
        return 0 <= index < len(self.anchors)

    def control_points(self) -> Iterator[Point]:
        """Posiciones + handles de todas las anclas (bbox 'completo')."""
        for a in self.anchors:
            yield a.pos
            yield a.handle_in
            yield a.handle_out

    def to_dict(self) -> dict[str, Any]:
        # Solo debug/logging: las formas no se persisten.
        return {"closed": bool(self.closed), "anchors": [a.to_dict() for a in self.anchors]}
