# File: shapebuilder/geom/mapper.py
# Project: ShapeBuilder (SHB)
# Version: 0.1.0
# Status: stable
# Date: 2026-10-18
# Purpose: Coordenadas de dispositivo -> coordenadas locales del lienzo.
# Notes: Nunca falla: sin lienzo (o transform no invertible) devuelve las coords tal cual.
from __future__ import annotations

from typing import Protocol

from PySide6.QtCore import QPointF
from PySide6.QtGui import QTransform

from shapebuilder.core.models import Point
from shapebuilder.utils.log import get_logger

log = get_logger(__name__)


class ScreenMappedCanvas(Protocol):
    def screen_transform(self) -> QTransform:
        """Transform lienzo -> dispositivo vigente (zoom/pan incluidos)."""
        ...


def map_to_canvas(x: float, y: float, canvas: ScreenMappedCanvas | None) -> Point:
    if canvas is None:
        return Point(float(x), float(y))

    inv, ok = canvas.screen_transform().inverted()
    if not ok:
        log.debug("screen_transform no invertible: se usan coords de dispositivo")
        return Point(float(x), float(y))

    p = inv.map(QPointF(float(x), float(y)))
    return Point(p.x(), p.y())
