"""Host Qt (PySide6): lienzo, controles y portapapeles."""
