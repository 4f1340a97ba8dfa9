# File: shapebuilder/app.py
# Project: ShapeBuilder (SHB)
# Version: 0.1.0
# Status: stable
# Date: 2026-10-18
# Purpose: Entry-point de la aplicación.
# Notes: Config: shb_settings.json (repo-local) + env SHB_* (env gana).
from __future__ import annotations

import sys

from PySide6.QtWidgets import QApplication

from shapebuilder.core.settings import load_editor_config
from shapebuilder.core.version import APP_VERSION
from shapebuilder.ui.main_window import MainWindow
from shapebuilder.utils.log import get_logger, setup_logging

log = get_logger(__name__)


def main() -> int:
    setup_logging()
    config = load_editor_config(logger=log)
    app = QApplication(sys.argv)
    w = MainWindow(config)
    w.show()
    log.info("SHB iniciado (v%s, aplanado=%s)", APP_VERSION, config.flatten_mode)
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
