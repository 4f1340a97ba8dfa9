# File: shapebuilder/geom/flatten.py
# Project: ShapeBuilder (SHB)
# Version: 0.1.0
# Status: stable
# Date: 2026-10-18
# Purpose: Aproximación de segmentos cúbicos por polilíneas.
# Notes:
#   - adaptive (canónico): subdivisión de de Casteljau hasta que los controles quedan
#     a <= tolerancia de la cuerda. Pocos puntos, error acotado.
#   - uniform: muestreo con paso fijo de t (svgelements). Más puntos, sin cota de error.
from __future__ import annotations

from svgelements import CubicBezier

from shapebuilder.core.models import Point, Shape
from shapebuilder.core.version import (
    DEFAULT_FLATNESS_TOLERANCE,
    DEFAULT_MAX_SUBDIVISION_DEPTH,
    DEFAULT_UNIFORM_STEPS,
)
from shapebuilder.geom.path_compiler import CubicSegment, compile_segments
from shapebuilder.utils.errors import ShbValidationError


def dist_point_to_line_sq(p: Point, a: Point, b: Point) -> float:
    """Distancia^2 de p a la recta (a, b). Cuerda degenerada (a == b) -> distancia a `a`."""
    cx = b.x - a.x
    cy = b.y - a.y
    len_sq = cx * cx + cy * cy
    if len_sq == 0.0:
        return p.dist_sq(a)
    t = ((p.x - a.x) * cx + (p.y - a.y) * cy) / len_sq
    dx = p.x - (a.x + t * cx)
    dy = p.y - (a.y + t * cy)
    return dx * dx + dy * dy


def is_flat_enough(seg: CubicSegment, tol_sq: float) -> bool:
    return (
        dist_point_to_line_sq(seg.c1, seg.p0, seg.p3) <= tol_sq
        and dist_point_to_line_sq(seg.c2, seg.p0, seg.p3) <= tol_sq
    )


def _mid(a: Point, b: Point) -> Point:
    return Point((a.x + b.x) / 2.0, (a.y + b.y) / 2.0)


def subdivide(seg: CubicSegment) -> tuple[CubicSegment, CubicSegment]:
    """de Casteljau en t=0.5."""
    p01 = _mid(seg.p0, seg.c1)
    p12 = _mid(seg.c1, seg.c2)
    p23 = _mid(seg.c2, seg.p3)
    p012 = _mid(p01, p12)
    p123 = _mid(p12, p23)
    p0123 = _mid(p012, p123)
    return (
        CubicSegment(seg.p0, p01, p012, p0123),
        CubicSegment(p0123, p123, p23, seg.p3),
    )


def _flatten_adaptive(seg: CubicSegment, tol_sq: float, depth: int, max_depth: int, out: list[Point]) -> None:
    # p0 ya fue emitido por el paso anterior; solo se agrega el extremo final.
    if depth >= max_depth or is_flat_enough(seg, tol_sq):
        out.append(seg.p3)
        return
    left, right = subdivide(seg)
    _flatten_adaptive(left, tol_sq, depth + 1, max_depth, out)
    _flatten_adaptive(right, tol_sq, depth + 1, max_depth, out)


def flatten_segment(
    seg: CubicSegment,
    tolerance: float = DEFAULT_FLATNESS_TOLERANCE,
    *,
    max_depth: int = DEFAULT_MAX_SUBDIVISION_DEPTH,
) -> list[Point]:
    """Vértices de la polilínea de `seg` SIN el punto inicial."""
    if not tolerance > 0:
        raise ShbValidationError(f"Tolerancia de planitud inválida: {tolerance!r} (debe ser > 0)")
    out: list[Point] = []
    _flatten_adaptive(seg, tolerance * tolerance, 0, int(max_depth), out)
    return out


def sample_segment_uniform(seg: CubicSegment, steps: int = DEFAULT_UNIFORM_STEPS) -> list[Point]:
    """Muestreo con paso fijo (t = i/steps, i=1..steps). SIN el punto inicial."""
    if steps < 1:
        raise ShbValidationError(f"uniform_steps inválido: {steps!r} (debe ser >= 1)")
    curve = CubicBezier(seg.p0.as_tuple(), seg.c1.as_tuple(), seg.c2.as_tuple(), seg.p3.as_tuple())
    out: list[Point] = []
    for i in range(1, steps):
        pt = curve.point(i / steps)
        out.append(Point(float(pt.x), float(pt.y)))
    # extremo exacto (sin error de evaluación en t=1)
    out.append(seg.p3)
    return out


def flatten_shape(
    shape: Shape,
    *,
    mode: str = "adaptive",
    tolerance: float = DEFAULT_FLATNESS_TOLERANCE,
    max_depth: int = DEFAULT_MAX_SUBDIVISION_DEPTH,
    uniform_steps: int = DEFAULT_UNIFORM_STEPS,
) -> list[Point]:
    """Polilínea completa de la forma: ancla 0 + vértices de cada segmento en orden."""
    if not shape.anchors:
        return []
    if mode not in ("adaptive", "uniform"):
        raise ShbValidationError(f"Modo de aplanado inválido: {mode!r}")

    pts: list[Point] = [shape.anchors[0].pos]
    for seg in compile_segments(shape):
        if mode == "uniform":
            pts.extend(sample_segment_uniform(seg, uniform_steps))
        else:
            pts.extend(flatten_segment(seg, tolerance, max_depth=max_depth))
    return pts
