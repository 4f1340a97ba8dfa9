# File: shapebuilder/geom/path_compiler.py
# Project: ShapeBuilder (SHB)
# Version: 0.1.0
# Status: stable
# Date: 2026-10-18
# Purpose: Shape -> lista ordenada de segmentos cúbicos (+ atributo d de SVG para preview).
# Notes: El d se arma con svgelements para no formatear comandos a mano.
from __future__ import annotations

from typing import NamedTuple

from svgelements import Path as SvgPath
from svgelements import Point as SvgPoint

from shapebuilder.core.models import Point, Shape


class CubicSegment(NamedTuple):
    p0: Point
    c1: Point
    c2: Point
    p3: Point


def compile_segments(shape: Shape) -> list[CubicSegment]:
    """Un segmento por par consecutivo de anclas + cierre (si closed y >= 2 anclas)."""
    anchors = shape.anchors
    if len(anchors) < 2:
        return []

    out = [
        CubicSegment(a.pos, a.handle_out, b.handle_in, b.pos)
        for a, b in zip(anchors, anchors[1:])
    ]
    if shape.closed:
        last, first = anchors[-1], anchors[0]
        out.append(CubicSegment(last.pos, last.handle_out, first.handle_in, first.pos))
    return out


def _svg_pt(p: Point) -> SvgPoint:
    return SvgPoint(p.x, p.y)


def to_svg_path(shape: Shape) -> SvgPath:
    """Shape como svgelements.Path (M + C... [+ Z])."""
    path = SvgPath()
    if not shape.anchors:
        return path
    path.move(_svg_pt(shape.anchors[0].pos))
    for seg in compile_segments(shape):
        path.cubic(_svg_pt(seg.c1), _svg_pt(seg.c2), _svg_pt(seg.p3))
    if shape.closed and len(shape) >= 2:
        path.closed()
    return path


def to_svg_d(shape: Shape) -> str:
    """Atributo d del path de preview. Forma vacía -> ''."""
    if not shape.anchors:
        return ""
    return to_svg_path(shape).d()
