# File: shapebuilder/ui/clipboard.py
# Project: ShapeBuilder (SHB)
# Version: 0.1.0
# Status: stable
# Date: 2026-10-18
# Purpose: Copia del export al portapapeles del sistema.
# Notes: Falla -> ShbClipboardError; el llamador lo muestra como aviso transitorio.
from __future__ import annotations

from PySide6.QtGui import QGuiApplication

from shapebuilder.utils.errors import ShbClipboardError


def copy_text(text: str) -> bool:
    """Copia `text`. Devuelve False si no había nada que copiar."""
    if not text.strip():
        return False
    cb = QGuiApplication.clipboard()
    if cb is None:
        raise ShbClipboardError("No hay portapapeles disponible")
    cb.setText(text)
    # QClipboard no reporta errores: verificamos leyendo de vuelta.
    if cb.text() != text:
        raise ShbClipboardError("El portapapeles rechazó el texto")
    return True
