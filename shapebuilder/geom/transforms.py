# File: shapebuilder/geom/transforms.py
# Project: ShapeBuilder (SHB)
# Version: 0.1.0
# Status: stable
# Date: 2026-10-18
# Purpose: Escala respecto del centro (contra baseline fijo) y maximizar-al-tamaño.
# Notes: Operan sobre el AnchorStore. Forma vacía / bbox degenerado -> no-op.
from __future__ import annotations

import math

from shapebuilder.core.models import Anchor, Point, Shape
from shapebuilder.core.store import AnchorStore
from shapebuilder.core.version import DEFAULT_MAXIMIZE_TARGET
from shapebuilder.geom.normalize import bbox
from shapebuilder.utils.errors import ShbValidationError
from shapebuilder.utils.log import get_logger

log = get_logger(__name__)


class ScaleSession:
    """Escala multiplicativa contra un baseline capturado en la primera llamada.

    Cada llamada multiplica el factor acumulado (`multiplier`) y las posiciones se
    recalculan SIEMPRE desde el baseline con ese producto: scale(2.0) seguido de
    scale(0.5) devuelve el baseline exacto, sin acumular error sobre la geometría
    intermedia. `reset()` descarta el baseline; la próxima escala parte de la
    geometría vigente.
    """

    def __init__(self) -> None:
        self._baseline: tuple[Anchor, ...] | None = None
        self._centroid: Point | None = None
        self.multiplier = 1.0

    @property
    def active(self) -> bool:
        return self._baseline is not None

    @property
    def centroid(self) -> Point | None:
        return self._centroid

    def reset(self) -> None:
        self._baseline = None
        self._centroid = None
        self.multiplier = 1.0

    def _capture(self, shape: Shape) -> None:
        box = bbox(shape.control_points())
        if box is None:
            return
        x0, y0, x1, y1 = box
        self._baseline = shape.anchors
        self._centroid = Point((x0 + x1) / 2.0, (y0 + y1) / 2.0)
        log.debug("Baseline de escala capturado: %s anclas, centro=%s", len(shape), self._centroid)

    def apply(self, store: AnchorStore, multiplier: float) -> Shape:
        if self._baseline is None:
            self._capture(store.shape)
        if self._baseline is None or self._centroid is None:
            return store.shape

        step = float(multiplier)
        if not step > 0:
            raise ShbValidationError(f"Multiplicador de escala inválido: {multiplier!r} (debe ser > 0)")
        k = self.multiplier * step
        if math.isclose(k, 1.0, rel_tol=1e-12):
            k = 1.0
        c = self._centroid
        self.multiplier = k
        if k == 1.0:
            # baseline exacto (sin error de redondeo c + (p - c))
            return store.replace_anchors(self._baseline)

        def _scale(p: Point) -> Point:
            return c + (p - c).scaled(k)

        return store.replace_anchors(tuple(a.mapped(_scale) for a in self._baseline))


def maximize(store: AnchorStore, target: float = DEFAULT_MAXIMIZE_TARGET) -> Shape:
    """Lleva el bbox (anclas + handles) a (0,0) y lo escala para que entre en target x target."""
    box = bbox(store.shape.control_points())
    if box is None:
        return store.shape
    x0, y0, x1, y1 = box
    w = x1 - x0
    h = y1 - y0
    if w == 0 or h == 0:
        log.debug("maximize ignorado: bbox degenerado (%s x %s)", w, h)
        return store.shape

    k = min(float(target) / w, float(target) / h)
    origin = Point(x0, y0)
    log.info("Maximizar: bbox %.2f x %.2f -> escala %.4f", w, h, k)
    out = store.map_points(lambda p: (p - origin).scaled(k))
    log.debug("Forma maximizada: %s", out.to_dict())
    return out
