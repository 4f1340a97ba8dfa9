# File: shapebuilder/geom/normalize.py
# Project: ShapeBuilder (SHB)
# Version: 0.1.0
# Status: stable
# Date: 2026-10-18
# Purpose: Normalización de la polilínea a [-1, 1] + serialización "x y x y ...".
# Notes: Función pura de la forma; se recalcula tras cada mutación (sin estado propio).
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Sequence

from shapebuilder.core.models import Point, Shape
from shapebuilder.core.version import DEFAULT_EXPORT_DECIMALS
from shapebuilder.geom.flatten import flatten_shape


def bbox(points: Iterable[Point]) -> tuple[float, float, float, float] | None:
    """(min_x, min_y, max_x, max_y) o None si no hay puntos."""
    it = iter(points)
    first = next(it, None)
    if first is None:
        return None
    x0 = x1 = first.x
    y0 = y1 = first.y
    for p in it:
        x0 = min(x0, p.x)
        x1 = max(x1, p.x)
        y0 = min(y0, p.y)
        y1 = max(y1, p.y)
    return (x0, y0, x1, y1)


def _quantize(v: float, decimals: int) -> Decimal:
    # Empates lejos del cero, sobre el valor binario exacto (como Number#toFixed).
    return Decimal(float(v)).quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP)


def normalize_points(points: Sequence[Point], *, decimals: int = DEFAULT_EXPORT_DECIMALS) -> list[tuple[float, float]]:
    """Centra el bbox en el origen y escala el lado mayor a 2 (rango ~[-1, 1])."""
    box = bbox(points)
    if box is None:
        return []
    x0, y0, x1, y1 = box
    cx = (x0 + x1) / 2.0
    cy = (y0 + y1) / 2.0
    # forma de un solo punto: divisor 1 (evita /0)
    size = max(x1 - x0, y1 - y0) or 1.0
    return [
        (
            float(_quantize((p.x - cx) * 2.0 / size, decimals)),
            float(_quantize((p.y - cy) * 2.0 / size, decimals)),
        )
        for p in points
    ]


def format_coord(v: float, decimals: int = DEFAULT_EXPORT_DECIMALS) -> str:
    """Número compacto: sin ceros finales ni '-0' (1.0 -> '1', -0.50 -> '-0.5')."""
    q = _quantize(v, decimals)
    if q == 0:
        return "0"
    s = f"{q:f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    return s


def serialize(pairs: Iterable[tuple[float, float]], *, decimals: int = DEFAULT_EXPORT_DECIMALS) -> str:
    return " ".join(format_coord(v, decimals) for pair in pairs for v in pair)


def export_points(points: Sequence[Point], *, decimals: int = DEFAULT_EXPORT_DECIMALS) -> str:
    """Polilínea -> string de export. Sin puntos -> ''."""
    return serialize(normalize_points(points, decimals=decimals), decimals=decimals)


def export_string(shape: Shape, config=None) -> str:
    """normalize(flatten(shape)) con los parámetros de `config` (EditorConfig) si se pasa."""
    if config is None:
        return export_points(flatten_shape(shape))
    pts = flatten_shape(
        shape,
        mode=config.flatten_mode,
        tolerance=config.flatness_tolerance,
        max_depth=config.max_depth,
        uniform_steps=config.uniform_steps,
    )
    return export_points(pts, decimals=config.export_decimals)
