# File: shapebuilder/core/store.py
# Project: ShapeBuilder (SHB)
# Version: 0.1.0
# Status: stable
# Date: 2026-10-18
# Purpose: Store de anclas/handles: fuente única de la geometría de la forma.
# Notes: Mutación por reemplazo. Índices viejos (ancla ya removida) -> no-op silencioso.
from __future__ import annotations

from typing import Callable

from shapebuilder.core.models import Anchor, HandleKey, Point, Shape, coerce_handle_key
from shapebuilder.utils.log import get_logger

log = get_logger(__name__)

# Mínimo de anclas para poder cerrar la forma.
MIN_CLOSED_ANCHORS = 3


class AnchorStore:
    """Secuencia ordenada de anclas + flag closed.

    Cada operación reemplaza `self.shape` por un snapshot nuevo y lo devuelve.
    Quien guardó un snapshot anterior lo sigue viendo intacto.
    """

    def __init__(self, shape: Shape | None = None) -> None:
        self._shape = shape or Shape()

    @property
    def shape(self) -> Shape:
        return self._shape

    def __len__(self) -> int:
        return len(self._shape)

    def _commit(self, shape: Shape) -> Shape:
        self._shape = shape
        return shape

    # ----------------------------
    # Operaciones
    # ----------------------------
    def append(self, p: Point) -> Shape:
        if self._shape.closed:
            log.debug("append ignorado: la forma está cerrada")
            return self._shape
        return self._commit(Shape(self._shape.anchors + (Anchor.at(p),), self._shape.closed))

    def set_handle(self, index: int, which: HandleKey | str, p: Point, symmetric: bool) -> Shape:
        key = coerce_handle_key(which)
        if not self._shape.has_index(index):
            log.debug("set_handle ignorado: índice %s fuera de rango (n=%s)", index, len(self._shape))
            return self._shape
        anchors = list(self._shape.anchors)
        anchors[index] = anchors[index].with_handle(key, p, symmetric=symmetric)
        return self._commit(Shape(tuple(anchors), self._shape.closed))

    def translate_anchor(self, index: int, delta: Point) -> Shape:
        if not self._shape.has_index(index):
            log.debug("translate_anchor ignorado: índice %s fuera de rango (n=%s)", index, len(self._shape))
            return self._shape
        anchors = list(self._shape.anchors)
        anchors[index] = anchors[index].translated(delta)
        return self._commit(Shape(tuple(anchors), self._shape.closed))

    def pop_last(self) -> Shape:
        if not self._shape.anchors:
            return self._shape
        return self._commit(Shape(self._shape.anchors[:-1], self._shape.closed))

    def clear(self) -> Shape:
        return self._commit(Shape())

    def set_closed(self, closed: bool) -> Shape:
        closed = bool(closed)
        if closed and len(self._shape) < MIN_CLOSED_ANCHORS:
            log.debug("set_closed(True) ignorado: %s anclas (< %s)", len(self._shape), MIN_CLOSED_ANCHORS)
            return self._shape
        if closed == self._shape.closed:
            return self._shape
        return self._commit(Shape(self._shape.anchors, closed))

    def map_points(self, fn: Callable[[Point], Point]) -> Shape:
        """Aplica fn a cada posición y handle (transformaciones de la forma entera)."""
        if not self._shape.anchors:
            return self._shape
        return self._commit(Shape(tuple(a.mapped(fn) for a in self._shape.anchors), self._shape.closed))

    def replace_anchors(self, anchors: tuple[Anchor, ...]) -> Shape:
        """Reemplaza las anclas conservando `closed` (usado por escala contra baseline)."""
        return self._commit(Shape(tuple(anchors), self._shape.closed))
