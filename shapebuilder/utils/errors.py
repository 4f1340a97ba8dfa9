# File: shapebuilder/utils/errors.py
# Project: ShapeBuilder (SHB)
# Version: 0.1.0
# Status: stable
# Date: 2026-10-18
# Purpose: Errores tipados del proyecto.
# Notes: Los casos degenerados de geometría NO son errores (no-op / export vacío).
from __future__ import annotations


class ShbError(Exception):
    """Error base del proyecto."""


class ShbValidationError(ShbError):
    """Argumento o configuración inválida (error de programación o de settings)."""


class ShbClipboardError(ShbError):
    """Falló la escritura al portapapeles del host (no afecta al editor)."""
