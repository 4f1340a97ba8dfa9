# File: shapebuilder/ui/canvas_view.py
# Project: ShapeBuilder (SHB)
# Version: 0.1.0
# Status: stable
# Date: 2026-10-18
# Purpose: Lienzo (QGraphicsView): traduce eventos Qt al ShapeEditor y dibuja el preview.
# Notes: El lienzo no guarda geometría; todo sale de editor.shape / editor.hover.
from __future__ import annotations

import os

from PySide6.QtCore import QPointF, QRectF, Qt, Signal
from PySide6.QtGui import QBrush, QColor, QKeySequence, QPainter, QPen, QTransform
from PySide6.QtWidgets import QGraphicsScene, QGraphicsView

from shapebuilder.core.editor import ShapeEditor
from shapebuilder.core.interaction import (
    BUTTON_MIDDLE,
    BUTTON_PRIMARY,
    BUTTON_SECONDARY,
    KEY_ENTER,
    KEY_ESCAPE,
    KEY_UNDO,
    PointerCapture,
)
from shapebuilder.core.settings import EditorConfig
from shapebuilder.ui.qpath_render import polyline_to_qpath, shape_to_qpath
from shapebuilder.utils.log import get_logger

log = get_logger(__name__)

STROKE_COLOR = QColor("#00B39F")
GRID_COLOR = QColor("#797d7a")
GRID_STEP_PX = 16.0
CANVAS_SIZE_PX = (640.0, 640.0)


def _env_bool(name: str, default: bool) -> bool:
    """Lee un booleano desde env (tolerante)."""
    raw = os.getenv(name)
    if raw is None:
        return bool(default)
    s = str(raw).strip().lower()
    if s in ("1", "true", "yes", "y", "on"):
        return True
    if s in ("0", "false", "no", "n", "off"):
        return False
    return bool(default)


class QtPointerCapture(PointerCapture):
    """Captura del mouse sobre el viewport mientras dura el drag."""

    def __init__(self, view: QGraphicsView) -> None:
        super().__init__()
        self._view = view

    def _on_acquire(self) -> None:
        self._view.viewport().grabMouse()

    def _on_release(self) -> None:
        self._view.viewport().releaseMouse()


def _button_id(btn) -> int | None:
    if btn == Qt.LeftButton:
        return BUTTON_PRIMARY
    if btn == Qt.MiddleButton:
        return BUTTON_MIDDLE
    if btn == Qt.RightButton:
        return BUTTON_SECONDARY
    return None


class CanvasView(QGraphicsView):
    shape_changed = Signal(str)  # export string

    def __init__(self, config: EditorConfig | None = None, parent=None) -> None:
        super().__init__(parent)

        self._scene = QGraphicsScene(self)
        self._scene.setSceneRect(QRectF(0.0, 0.0, *CANVAS_SIZE_PX))
        self.setScene(self._scene)
        self.setAlignment(Qt.AlignLeft | Qt.AlignTop)
        self.setRenderHint(QPainter.Antialiasing, True)
        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.StrongFocus)
        self.setViewportUpdateMode(QGraphicsView.FullViewportUpdate)

        self._show_polyline = _env_bool("SHB_CANVAS_SHOW_POLYLINE", False)
        self.editor = ShapeEditor(canvas=self, config=config, capture=QtPointerCapture(self))

    # ----------------------------
    # Mapper
    # ----------------------------
    def screen_transform(self) -> QTransform:
        """Escena (lienzo) -> viewport (coords de evento)."""
        return self.viewportTransform()

    # ----------------------------
    # Controles
    # ----------------------------
    def _changed(self, changed: bool) -> None:
        if changed:
            self.shape_changed.emit(self.editor.export)
        self.viewport().update()

    def clear_shape(self) -> None:
        self.editor.clear()
        self._changed(True)

    def request_close(self) -> None:
        self._changed(self.editor.request_close())

    def maximize(self) -> None:
        self._changed(self.editor.maximize())

    def set_shape_scale(self, multiplier: float) -> None:
        before = self.editor.shape
        self.editor.set_scale(multiplier)
        self._changed(self.editor.shape is not before)

    def teardown(self) -> None:
        if self.editor.capture.active:
            log.debug("Teardown con drag activo: se libera la captura")
        self.editor.teardown()

    # ----------------------------
    # Eventos Qt
    # ----------------------------
    def mousePressEvent(self, event) -> None:
        btn = _button_id(event.button())
        if btn is None:
            super().mousePressEvent(event)
            return
        pos = event.position()
        decouple = bool(event.modifiers() & Qt.ShiftModifier)
        self.setFocus()
        self._changed(self.editor.press(pos.x(), pos.y(), btn, decouple=decouple))
        event.accept()

    def mouseMoveEvent(self, event) -> None:
        pos = event.position()
        self._changed(self.editor.move(pos.x(), pos.y()))
        event.accept()

    def mouseReleaseEvent(self, event) -> None:
        btn = _button_id(event.button())
        if btn is None:
            super().mouseReleaseEvent(event)
            return
        pos = event.position()
        self._changed(self.editor.release(pos.x(), pos.y(), btn))
        event.accept()

    def mouseDoubleClickEvent(self, event) -> None:
        if event.button() == Qt.LeftButton:
            self._changed(self.editor.double_click())
            event.accept()
            return
        super().mouseDoubleClickEvent(event)

    def keyPressEvent(self, event) -> None:
        if event.key() in (Qt.Key_Return, Qt.Key_Enter):
            self._changed(self.editor.key_press(KEY_ENTER))
            event.accept()
            return
        if event.key() == Qt.Key_Escape:
            self._changed(self.editor.key_press(KEY_ESCAPE))
            event.accept()
            return
        # Ctrl+Z / Cmd+Z (Qt mapea Cmd a ControlModifier en mac)
        if event.matches(QKeySequence.StandardKey.Undo):
            self._changed(self.editor.key_press(KEY_UNDO, ctrl=True))
            event.accept()
            return
        super().keyPressEvent(event)

    # ----------------------------
    # Dibujo
    # ----------------------------
    def drawBackground(self, painter: QPainter, rect: QRectF) -> None:
        painter.save()
        painter.fillRect(rect, QColor(30, 30, 30))

        # Grilla nítida: sin antialias + líneas cosméticas.
        painter.setRenderHint(QPainter.Antialiasing, False)
        pen = QPen(GRID_COLOR)
        pen.setCosmetic(True)
        pen.setWidthF(0.0)
        painter.setPen(pen)

        step = GRID_STEP_PX
        x = int(rect.left() // step) * step
        while x < rect.right():
            painter.drawLine(QPointF(x, rect.top()), QPointF(x, rect.bottom()))
            x += step
        y = int(rect.top() // step) * step
        while y < rect.bottom():
            painter.drawLine(QPointF(rect.left(), y), QPointF(rect.right(), y))
            y += step
        painter.restore()

    def drawForeground(self, painter: QPainter, rect: QRectF) -> None:
        _ = rect
        shape = self.editor.shape
        hover = self.editor.hover
        painter.save()
        painter.setRenderHint(QPainter.Antialiasing, True)

        # Path de preview (relleno 30% si está cerrada)
        path_pen = QPen(STROKE_COLOR, 2.0)
        painter.setPen(path_pen)
        if shape.closed:
            fill = QColor(STROKE_COLOR)
            fill.setAlphaF(0.3)
            painter.setBrush(QBrush(fill))
        else:
            painter.setBrush(Qt.NoBrush)
        painter.drawPath(shape_to_qpath(shape))
        painter.setBrush(Qt.NoBrush)

        if self._show_polyline:
            dbg = QPen(QColor(255, 160, 0), 1.0)
            dbg.setCosmetic(True)
            painter.setPen(dbg)
            painter.drawPath(polyline_to_qpath(self.editor.polyline()))

        # Halo de cierre sobre el ancla 0
        if hover.near_first and len(shape) > 0:
            halo = QPen(STROKE_COLOR, 2.0)
            halo.setDashPattern([2.0, 2.0])
            painter.setPen(halo)
            painter.drawEllipse(QPointF(shape[0].x, shape[0].y), 9.0, 9.0)

        # Línea guía último ancla -> puntero + punto del puntero
        if hover.pointer is not None and not shape.closed:
            if len(shape) > 0:
                guide = QPen(STROKE_COLOR, 1.0)
                guide.setDashPattern([4.0, 2.0])
                painter.setPen(guide)
                last = shape[len(shape) - 1]
                painter.drawLine(QPointF(last.x, last.y), QPointF(hover.pointer.x, hover.pointer.y))
            dot = QColor(STROKE_COLOR)
            dot.setAlphaF(0.6)
            painter.setPen(Qt.NoPen)
            painter.setBrush(QBrush(dot))
            painter.drawEllipse(QPointF(hover.pointer.x, hover.pointer.y), 4.0, 4.0)

        # Anclas + handles (mismo orden que el hit-test)
        hr = self.editor.config.handle_hit_radius_px
        ar = self.editor.config.anchor_hit_radius_px
        for a in shape.anchors:
            painter.setPen(QPen(QColor("#bbbbbb"), 1.0))
            painter.drawLine(QPointF(a.x, a.y), QPointF(a.handle_in.x, a.handle_in.y))
            painter.drawLine(QPointF(a.x, a.y), QPointF(a.handle_out.x, a.handle_out.y))

            painter.setPen(QPen(QColor("#666666"), 1.0))
            painter.setBrush(QBrush(QColor("#ffffff")))
            painter.drawEllipse(QPointF(a.handle_in.x, a.handle_in.y), hr, hr)
            painter.drawEllipse(QPointF(a.handle_out.x, a.handle_out.y), hr, hr)

            painter.setPen(QPen(QColor("#003333"), 1.0))
            painter.setBrush(QBrush(STROKE_COLOR))
            painter.drawEllipse(QPointF(a.x, a.y), ar, ar)

        painter.restore()
