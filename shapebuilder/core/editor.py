# File: shapebuilder/core/editor.py
# Project: ShapeBuilder (SHB)
# Version: 0.1.0
# Status: stable
# Date: 2026-10-18
# Purpose: Fachada del editor: entrada (puntero/teclado), controles y superficies de datos.
# Notes:
#   - Cada instancia tiene su propia forma y estado; nada se comparte entre editores.
#   - El export se recalcula con una llamada directa después de cada mutación.
from __future__ import annotations

from typing import NamedTuple

from shapebuilder.core.interaction import (
    BUTTON_PRIMARY,
    InteractionMachine,
    InteractionState,
    PointerCapture,
)
from shapebuilder.core.models import Point, Shape
from shapebuilder.core.settings import EditorConfig
from shapebuilder.core.store import AnchorStore
from shapebuilder.geom.flatten import flatten_shape
from shapebuilder.geom.mapper import ScreenMappedCanvas, map_to_canvas
from shapebuilder.geom.normalize import export_points
from shapebuilder.geom.path_compiler import CubicSegment, compile_segments, to_svg_d
from shapebuilder.geom.transforms import ScaleSession, maximize
from shapebuilder.utils.log import get_logger

log = get_logger(__name__)


class HoverInfo(NamedTuple):
    pointer: Point | None
    near_first: bool


class ShapeEditor:
    def __init__(
        self,
        canvas: ScreenMappedCanvas | None = None,
        config: EditorConfig | None = None,
        capture: PointerCapture | None = None,
    ) -> None:
        self.canvas = canvas
        self.config = config or EditorConfig()
        self._store = AnchorStore()
        self._machine = InteractionMachine(self._store, self.config, capture)
        self._scale = ScaleSession()
        self._export = ""
        self._svg_d = ""

    # ----------------------------
    # Superficies de datos
    # ----------------------------
    @property
    def shape(self) -> Shape:
        return self._store.shape

    @property
    def state(self) -> InteractionState:
        return self._machine.state

    @property
    def capture(self) -> PointerCapture:
        return self._machine.capture

    @property
    def hover(self) -> HoverInfo:
        p = self._machine.pointer
        return HoverInfo(p, self._machine.is_near_first(p))

    @property
    def export(self) -> str:
        return self._export

    @property
    def svg_d(self) -> str:
        return self._svg_d

    @property
    def scale_multiplier(self) -> float:
        return self._scale.multiplier

    def segments(self) -> list[CubicSegment]:
        return compile_segments(self.shape)

    def polyline(self) -> list[Point]:
        cfg = self.config
        return flatten_shape(
            self.shape,
            mode=cfg.flatten_mode,
            tolerance=cfg.flatness_tolerance,
            max_depth=cfg.max_depth,
            uniform_steps=cfg.uniform_steps,
        )

    # ----------------------------
    # Recalculo derivado
    # ----------------------------
    def _refresh(self, *, keep_scale: bool = False) -> None:
        if not keep_scale:
            # cualquier edición que no sea la escala invalida el baseline
            self._scale.reset()
        self._export = export_points(self.polyline(), decimals=self.config.export_decimals)
        self._svg_d = to_svg_d(self.shape)

    def _after(self, changed: bool) -> bool:
        if changed:
            self._refresh()
        return changed

    def _map(self, x: float, y: float) -> Point:
        return map_to_canvas(x, y, self.canvas)

    # ----------------------------
    # Entrada (coords de dispositivo)
    # ----------------------------
    def press(self, x: float, y: float, button: int = BUTTON_PRIMARY, *, decouple: bool = False) -> bool:
        return self._after(self._machine.on_press(self._map(x, y), button, decouple=decouple))

    def move(self, x: float, y: float) -> bool:
        return self._after(self._machine.on_move(self._map(x, y)))

    def release(self, x: float | None = None, y: float | None = None, button: int = BUTTON_PRIMARY) -> bool:
        p = self._map(x, y) if x is not None and y is not None else None
        return self._after(self._machine.on_release(p, button))

    def double_click(self) -> bool:
        return self._after(self._machine.on_double_click())

    def key_press(self, key: str, *, ctrl: bool = False, meta: bool = False) -> bool:
        return self._after(self._machine.on_key(key, ctrl=ctrl, meta=meta))

    # ----------------------------
    # Controles del host
    # ----------------------------
    def clear(self) -> None:
        self._machine.end_drag()
        self._store.clear()
        self._refresh()
        log.info("Forma limpiada")

    def request_close(self) -> bool:
        return self._after(self._machine.request_close())

    def set_scale(self, multiplier: float) -> None:
        """Multiplica la escala acumulada; `scale_multiplier` queda con el producto."""
        before = self.shape
        self._scale.apply(self._store, multiplier)
        if self.shape is not before:
            self._refresh(keep_scale=True)

    def maximize(self, target: float | None = None) -> bool:
        before = self.shape
        maximize(self._store, self.config.maximize_target if target is None else target)
        return self._after(self.shape is not before)

    def teardown(self) -> None:
        """Libera la captura del puntero si quedó un drag abierto."""
        self._machine.end_drag()
