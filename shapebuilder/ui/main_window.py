# File: shapebuilder/ui/main_window.py
# Project: ShapeBuilder (SHB)
# Version: 0.1.0
# Status: stable
# Date: 2026-10-18
# Purpose: Ventana principal: lienzo + controles (limpiar/cerrar/maximizar) + export y copia.
# Notes: La ventana no calcula nada: muestra editor.export / editor.svg_d tras cada cambio.
from __future__ import annotations

from PySide6.QtCore import QTimer
from PySide6.QtGui import QCloseEvent, QFontDatabase
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QPlainTextEdit,
    QPushButton,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from shapebuilder.core.settings import EditorConfig
from shapebuilder.core.version import APP_NAME, APP_VERSION
from shapebuilder.ui.canvas_container import CanvasContainer
from shapebuilder.ui.canvas_view import CanvasView
from shapebuilder.ui.clipboard import copy_text
from shapebuilder.utils.errors import ShbClipboardError
from shapebuilder.utils.log import get_logger

log = get_logger(__name__)

COPIED_NOTICE_MS = 2000


class MainWindow(QMainWindow):
    def __init__(self, config: EditorConfig | None = None) -> None:
        super().__init__()
        self.setWindowTitle("{} v{}".format(APP_NAME, APP_VERSION))
        self.resize(900, 900)

        self._build_ui(config)
        self._on_shape_changed(self._canvas.editor.export)

    def _build_ui(self, config: EditorConfig | None) -> None:
        central = QWidget(self)
        root = QVBoxLayout(central)

        self._canvas = CanvasView(config, central)
        self._canvas.shape_changed.connect(self._on_shape_changed)
        self._canvas_container = CanvasContainer(self._canvas, central)
        root.addWidget(self._canvas_container, 1)

        # Controles
        row = QHBoxLayout()
        self._btn_clear = QPushButton("Limpiar", central)
        self._btn_clear.clicked.connect(self._canvas.clear_shape)
        self._btn_close = QPushButton("Cerrar forma", central)
        self._btn_close.clicked.connect(self._canvas.request_close)
        self._btn_max = QPushButton("Maximizar", central)
        self._btn_max.clicked.connect(self._canvas.maximize)
        for b in (self._btn_clear, self._btn_close, self._btn_max):
            row.addWidget(b)
        row.addStretch(1)
        root.addLayout(row)

        mono = QFontDatabase.systemFont(QFontDatabase.FixedFont)

        root.addWidget(QLabel("Path SVG (d):", central))
        self._svg_d = QLineEdit(central)
        self._svg_d.setReadOnly(True)
        self._svg_d.setFont(mono)
        root.addWidget(self._svg_d)

        root.addWidget(QLabel("Export (x y normalizado):", central))
        self._export = QPlainTextEdit(central)
        self._export.setReadOnly(True)
        self._export.setFont(mono)
        self._export.setMaximumHeight(120)
        root.addWidget(self._export)

        copy_row = QHBoxLayout()
        self._btn_copy = QPushButton("Copiar", central)
        self._btn_copy.clicked.connect(self._on_copy)
        copy_row.addWidget(self._btn_copy)
        copy_row.addStretch(1)
        root.addLayout(copy_row)

        self.setCentralWidget(central)

        sb = QStatusBar(self)
        self.setStatusBar(sb)
        self._status_label = QLabel("Listo", self)
        sb.addPermanentWidget(self._status_label)

    # ----------------------------
    # Slots
    # ----------------------------
    def _on_shape_changed(self, export: str) -> None:
        editor = self._canvas.editor
        self._export.setPlainText(export)
        self._svg_d.setText(editor.svg_d)
        shape = editor.shape
        estado = "cerrada" if shape.closed else "abierta"
        self._status_label.setText(f"{len(shape)} anclas ({estado})")

    def _on_copy(self) -> None:
        try:
            if copy_text(self._canvas.editor.export):
                self.statusBar().showMessage("¡Copiado!", COPIED_NOTICE_MS)
        except ShbClipboardError as e:
            log.warning("No se pudo copiar al portapapeles: %s", e)
            self.statusBar().showMessage(f"No se pudo copiar: {e}", COPIED_NOTICE_MS)
        # devolver el foco al lienzo para que sigan llegando Enter/Escape/Ctrl+Z
        QTimer.singleShot(0, self._canvas.setFocus)

    def closeEvent(self, event: QCloseEvent) -> None:
        self._canvas.teardown()
        super().closeEvent(event)
