# File: shapebuilder/ui/canvas_container.py
# Project: ShapeBuilder (SHB)
# Version: 0.1.0
# Status: stable
# Date: 2026-10-18
# Purpose: Contenedor del lienzo: CanvasView + barra inferior de escala de la forma.
# Notes: La barra escala la FORMA respecto de su centro (no es zoom del view).

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QHBoxLayout, QLabel, QSlider, QVBoxLayout, QWidget

from shapebuilder.ui.canvas_view import CanvasView

SCALE_MIN_PCT = 10
SCALE_MAX_PCT = 400


class CanvasContainer(QWidget):
    """Widget central: lienzo + slider de escala inferior."""

    def __init__(self, canvas: CanvasView, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.canvas = canvas

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.setSpacing(2)
        root.addWidget(self.canvas, 1)

        bar = QWidget(self)
        bl = QHBoxLayout(bar)
        bl.setContentsMargins(6, 0, 6, 0)
        bl.setSpacing(8)

        self._lbl = QLabel("Escala", bar)
        self._lbl.setAlignment(Qt.AlignVCenter | Qt.AlignLeft)
        bl.addWidget(self._lbl, 0)

        self._slider = QSlider(Qt.Horizontal, bar)
        self._slider.setRange(SCALE_MIN_PCT, SCALE_MAX_PCT)
        self._slider.setSingleStep(5)
        self._slider.setPageStep(25)
        self._slider.setValue(100)
        self._slider.valueChanged.connect(self._on_slider)
        bl.addWidget(self._slider, 1)

        self._pct = QLabel("100%", bar)
        self._pct.setAlignment(Qt.AlignVCenter | Qt.AlignRight)
        self._pct.setMinimumWidth(60)
        bl.addWidget(self._pct, 0)

        root.addWidget(bar, 0)

        # Una edición que no es escala descarta el baseline: el slider vuelve a 100%.
        self.canvas.shape_changed.connect(self._on_shape_changed)

    def _on_slider(self, v: int) -> None:
        # El slider es absoluto; la sesión acumula factores relativos.
        current = self.canvas.editor.scale_multiplier
        self.canvas.set_shape_scale((float(v) / 100.0) / current)
        self._pct.setText(f"{int(v)}%")

    def _on_shape_changed(self, _export: str) -> None:
        v = int(round(self.canvas.editor.scale_multiplier * 100.0))
        v = max(SCALE_MIN_PCT, min(SCALE_MAX_PCT, v))
        if self._slider.value() != v:
            self._slider.blockSignals(True)
            self._slider.setValue(v)
            self._slider.blockSignals(False)
        self._pct.setText(f"{v}%")
