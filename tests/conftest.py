"""Shared pytest fixtures for the ShapeBuilder test suite.

Fixtures:
    triangle: closed Shape (0,0) (100,0) (50,100), handles on the anchors
    editor: ShapeEditor without canvas (device coords == canvas coords)
    capture: PointerCapture that counts acquire/release calls
    clean_env: removes every SHB_* variable for the duration of a test
"""

import pytest

from shapebuilder.core.editor import ShapeEditor
from shapebuilder.core.interaction import PointerCapture
from shapebuilder.core.models import Anchor, Point, Shape

SHB_ENV_VARS = (
    "SHB_CLOSE_RADIUS",
    "SHB_ANCHOR_HIT_RADIUS",
    "SHB_HANDLE_HIT_RADIUS",
    "SHB_FLATTEN_MODE",
    "SHB_FLATNESS_TOLERANCE",
    "SHB_MAX_DEPTH",
    "SHB_UNIFORM_STEPS",
    "SHB_MAXIMIZE_TARGET",
    "SHB_EXPORT_DECIMALS",
)


class CountingCapture(PointerCapture):
    def __init__(self):
        super().__init__()
        self.acquired = 0
        self.released = 0

    def _on_acquire(self):
        self.acquired += 1

    def _on_release(self):
        self.released += 1


def make_shape(points, closed=False):
    """Shape with handles coincident with each anchor."""
    return Shape(tuple(Anchor.at(Point(x, y)) for x, y in points), closed)


def place(editor, x, y, drag_to=None):
    """Click (and optionally drag) on empty canvas to add an anchor."""
    editor.press(x, y)
    if drag_to is not None:
        editor.move(*drag_to)
    editor.release(*(drag_to or (x, y)))


@pytest.fixture
def triangle():
    return make_shape([(0, 0), (100, 0), (50, 100)], closed=True)


@pytest.fixture
def capture():
    return CountingCapture()


@pytest.fixture
def editor(capture):
    return ShapeEditor(capture=capture)


@pytest.fixture
def clean_env(monkeypatch):
    for name in SHB_ENV_VARS:
        # setenv first so the deletion is recorded and undone after the test
        monkeypatch.setenv(name, "x")
        monkeypatch.delenv(name)
    return monkeypatch
