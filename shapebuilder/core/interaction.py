# File: shapebuilder/core/interaction.py
# Project: ShapeBuilder (SHB)
# Version: 0.1.0
# Status: stable
# Date: 2026-10-18
# Purpose: Máquina de estados puntero/teclado que gobierna las mutaciones del Store.
# Notes:
#   - Un solo drag activo por editor. Marcadores (ancla/handle) tienen prioridad sobre el lienzo.
#   - La captura del puntero se toma al entrar a un drag y se libera en TODA salida.
#   - Escape corta el drag sin deshacer lo ya aplicado.
from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Union

from shapebuilder.core.models import HandleKey, Point, Shape
from shapebuilder.core.settings import EditorConfig
from shapebuilder.core.store import MIN_CLOSED_ANCHORS, AnchorStore
from shapebuilder.utils.log import get_logger

log = get_logger(__name__)

# Ids de botón de dispositivo (0 = primario).
BUTTON_PRIMARY = 0
BUTTON_MIDDLE = 1
BUTTON_SECONDARY = 2

KEY_ENTER = "Enter"
KEY_ESCAPE = "Escape"
KEY_UNDO = "z"


# ----------------------------
# Estados
# ----------------------------

@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class PlacingAnchor:
    index: int


@dataclass(frozen=True)
class DraggingHandle:
    index: int
    which: HandleKey
    symmetric: bool


@dataclass(frozen=True)
class MovingAnchor:
    index: int
    last_pos: Point


InteractionState = Union[Idle, PlacingAnchor, DraggingHandle, MovingAnchor]

IDLE = Idle()


class PointerCapture:
    """Suscripción "seguir al puntero fuera del lienzo" mientras dura un drag.

    Base no-op; el host la especializa (ej. grabMouse/releaseMouse en Qt).
    """

    def __init__(self) -> None:
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def acquire(self) -> None:
        if self._active:
            return
        self._active = True
        self._on_acquire()

    def release(self) -> None:
        if not self._active:
            return
        self._active = False
        self._on_release()

    def _on_acquire(self) -> None:
        pass

    def _on_release(self) -> None:
        pass


# ----------------------------
# Hit-test de marcadores
# ----------------------------

class Hit(NamedTuple):
    index: int
    which: HandleKey | None  # None = marcador del ancla


def hit_test(shape: Shape, p: Point, *, anchor_radius: float, handle_radius: float) -> Hit | None:
    """Marcador bajo p, el de más arriba primero.

    Orden de pintado: por ancla handle_in, handle_out, ancla; anclas posteriores encima.
    """
    ar_sq = anchor_radius * anchor_radius
    hr_sq = handle_radius * handle_radius
    for index in range(len(shape) - 1, -1, -1):
        a = shape[index]
        if p.dist_sq(a.pos) <= ar_sq:
            return Hit(index, None)
        if p.dist_sq(a.handle_out) <= hr_sq:
            return Hit(index, HandleKey.OUT)
        if p.dist_sq(a.handle_in) <= hr_sq:
            return Hit(index, HandleKey.IN)
    return None


class InteractionMachine:
    """Consume eventos (ya en coords de lienzo) y muta el Store.

    Cada handler devuelve True si la forma cambió (el llamador recalcula el export).
    """

    def __init__(self, store: AnchorStore, config: EditorConfig, capture: PointerCapture | None = None) -> None:
        self._store = store
        self._config = config
        self.capture = capture or PointerCapture()
        self.state: InteractionState = IDLE
        self.pointer: Point | None = None

    # ----------------------------
    # Helpers
    # ----------------------------
    @property
    def dragging(self) -> bool:
        return not isinstance(self.state, Idle)

    def is_near_first(self, p: Point | None) -> bool:
        shape = self._store.shape
        if p is None or shape.closed or len(shape) < MIN_CLOSED_ANCHORS:
            return False
        r = self._config.close_radius_px
        return p.dist_sq(shape[0].pos) <= r * r

    def _begin_drag(self, state: InteractionState) -> None:
        self.state = state
        self.capture.acquire()
        log.debug("Drag iniciado: %s", state)

    def end_drag(self) -> None:
        """Vuelve a Idle y libera la captura (release, Escape, clear, teardown)."""
        if self.dragging:
            log.debug("Drag terminado: %s", self.state)
        self.state = IDLE
        self.capture.release()

    def _close(self) -> bool:
        before = self._store.shape
        after = self._store.set_closed(True)
        if after is not before:
            log.info("Forma cerrada (%s anclas)", len(after))
            log.debug("Snapshot al cerrar: %s", after.to_dict())
        return after is not before

    # ----------------------------
    # Eventos
    # ----------------------------
    def on_press(self, p: Point, button: int = BUTTON_PRIMARY, *, decouple: bool = False) -> bool:
        if button != BUTTON_PRIMARY or self.dragging:
            return False

        shape = self._store.shape
        hit = hit_test(
            shape,
            p,
            anchor_radius=self._config.anchor_hit_radius_px,
            handle_radius=self._config.handle_hit_radius_px,
        )

        if hit is not None and hit.which is None:
            # Click directo en el ancla 0 con la forma abierta: cierra en vez de mover.
            if not shape.closed and hit.index == 0 and len(shape) >= MIN_CLOSED_ANCHORS:
                return self._close()
            self._begin_drag(MovingAnchor(hit.index, p))
            return False

        if hit is not None:
            self._begin_drag(DraggingHandle(hit.index, hit.which, symmetric=not decouple))
            return False

        # Press de lienzo
        if shape.closed:
            return False
        if self.is_near_first(p):
            return self._close()
        self._store.append(p)
        self._begin_drag(PlacingAnchor(len(self._store) - 1))
        return True

    def on_move(self, p: Point) -> bool:
        self.pointer = p
        state = self.state
        before = self._store.shape

        if isinstance(state, PlacingAnchor):
            self._store.set_handle(state.index, HandleKey.OUT, p, symmetric=True)
        elif isinstance(state, DraggingHandle):
            self._store.set_handle(state.index, state.which, p, symmetric=state.symmetric)
        elif isinstance(state, MovingAnchor):
            self._store.translate_anchor(state.index, p - state.last_pos)
            self.state = MovingAnchor(state.index, p)

        return self._store.shape is not before

    def on_release(self, p: Point | None = None, button: int = BUTTON_PRIMARY) -> bool:
        if button != BUTTON_PRIMARY:
            return False
        if p is not None:
            self.pointer = p
        self.end_drag()
        return False

    def request_close(self) -> bool:
        """Cierre pedido por el host (botón). Con < 3 anclas no hace nada."""
        return self._close()

    def on_double_click(self) -> bool:
        if self.dragging:
            return False
        return self._close()

    def on_key(self, key: str, *, ctrl: bool = False, meta: bool = False) -> bool:
        if key in ("Return", KEY_ENTER):
            if len(self._store) >= MIN_CLOSED_ANCHORS:
                return self._close()
            return False

        if key == KEY_ESCAPE:
            changed = False
            if len(self._store) >= MIN_CLOSED_ANCHORS:
                changed = self._close()
            self.end_drag()
            return changed

        if (ctrl or meta) and key.lower() == KEY_UNDO:
            before = self._store.shape
            self._store.pop_last()
            self._store.set_closed(False)
            after = self._store.shape
            if after is not before:
                log.debug("Deshacer: quedan %s anclas", len(after))
            return after is not before

        return False
