# File: shapebuilder/ui/qpath_render.py
# Project: ShapeBuilder (SHB)
# Version: 0.1.0
# Status: stable
# Date: 2026-10-18
# Purpose: svgelements.Path / polilínea -> QPainterPath para el preview del lienzo.
# Notes: Solo dibujo; la geometría vive en el core.
from __future__ import annotations

from typing import Sequence

from PySide6.QtGui import QPainterPath
from svgelements import Close, CubicBezier, Line, Move

from shapebuilder.core.models import Point, Shape
from shapebuilder.geom.path_compiler import to_svg_path


def svgpath_to_qpath(sp) -> QPainterPath:
    """Convierte un svgelements.Path (M/L/C/Z) a QPainterPath."""
    q = QPainterPath()
    current_set = False

    for seg in sp:
        if isinstance(seg, Move):
            q.moveTo(float(seg.end.x), float(seg.end.y))
            current_set = True
            continue

        # si no hubo move previo, anclamos en el start
        if not current_set and seg.start is not None:
            q.moveTo(float(seg.start.x), float(seg.start.y))
            current_set = True

        if isinstance(seg, CubicBezier):
            q.cubicTo(
                float(seg.control1.x), float(seg.control1.y),
                float(seg.control2.x), float(seg.control2.y),
                float(seg.end.x), float(seg.end.y),
            )
        elif isinstance(seg, Close):
            q.closeSubpath()
        elif isinstance(seg, Line):
            q.lineTo(float(seg.end.x), float(seg.end.y))

    return q


def shape_to_qpath(shape: Shape) -> QPainterPath:
    return svgpath_to_qpath(to_svg_path(shape))


def polyline_to_qpath(points: Sequence[Point]) -> QPainterPath:
    """Polilínea aplanada (debug: comparar contra la curva)."""
    q = QPainterPath()
    if not points:
        return q
    q.moveTo(points[0].x, points[0].y)
    for p in points[1:]:
        q.lineTo(p.x, p.y)
    return q
