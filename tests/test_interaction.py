"""Tests for the pointer/keyboard state machine, driven through ShapeEditor.

The editor has no canvas, so device coordinates are canvas coordinates.
"""

import logging

import pytest

from conftest import make_shape, place
from shapebuilder.core.editor import ShapeEditor
from shapebuilder.core.interaction import (
    BUTTON_SECONDARY,
    DraggingHandle,
    Idle,
    MovingAnchor,
    PlacingAnchor,
    hit_test,
)
from shapebuilder.core.models import HandleKey, Point
from shapebuilder.geom.normalize import export_string


def _triangle(editor):
    place(editor, 0, 0)
    place(editor, 100, 0)
    place(editor, 50, 100)


class TestPlacing:
    """Idle -> PlacingAnchor -> Idle."""

    def test_press_appends_and_starts_placing(self, editor, capture):
        assert editor.press(10, 10) is True
        assert len(editor.shape) == 1
        assert editor.state == PlacingAnchor(0)
        assert capture.active

    def test_move_drags_symmetric_handles(self, editor):
        editor.press(10, 10)
        editor.move(30, 10)
        a = editor.shape[0]
        assert a.handle_out == Point(30, 10)
        assert a.handle_in == Point(-10, 10)

    def test_release_returns_to_idle_and_releases_capture(self, editor, capture):
        editor.press(10, 10)
        editor.release(10, 10)
        assert editor.state == Idle()
        assert not capture.active
        assert capture.acquired == capture.released == 1

    def test_secondary_button_is_ignored(self, editor):
        assert editor.press(10, 10, BUTTON_SECONDARY) is False
        assert len(editor.shape) == 0

    def test_press_during_drag_is_ignored(self, editor):
        editor.press(10, 10)
        editor.press(200, 200)
        assert len(editor.shape) == 1
        assert editor.state == PlacingAnchor(0)


class TestClosing:
    """Closing via canvas radius, anchor 0, keys and double click."""

    def test_hover_and_press_near_first_closes(self, editor, capture):
        # handles of anchor 0 pulled away so only the closing radius is under the pointer
        place(editor, 0, 0, drag_to=(-40, 0))
        place(editor, 100, 0)
        place(editor, 50, 100)

        editor.move(5, 2)
        assert editor.hover.near_first is True

        assert editor.press(5, 2) is True
        assert editor.shape.closed is True
        assert len(editor.shape) == 3
        assert editor.state == Idle()
        assert not capture.active
        assert editor.hover.near_first is False

    def test_press_far_from_first_appends(self, editor):
        _triangle(editor)
        editor.press(200, 200)
        assert len(editor.shape) == 4
        assert editor.shape.closed is False

    def test_press_on_anchor_zero_closes_instead_of_moving(self, editor):
        _triangle(editor)
        editor.press(0, 0)
        assert editor.shape.closed is True
        assert editor.state == Idle()
        assert editor.shape[0].pos == Point(0, 0)

    def test_anchor_zero_with_two_anchors_starts_move(self, editor):
        place(editor, 0, 0)
        place(editor, 100, 0)
        editor.press(0, 0)
        assert editor.state == MovingAnchor(0, Point(0, 0))
        assert editor.shape.closed is False

    def test_closed_shape_ignores_canvas_press(self, editor):
        _triangle(editor)
        editor.request_close()
        before = editor.shape
        assert editor.press(300, 300) is False
        assert editor.shape is before
        assert editor.state == Idle()

    def test_enter_closes_with_three(self, editor):
        _triangle(editor)
        assert editor.key_press("Enter") is True
        assert editor.shape.closed is True

    @pytest.mark.parametrize("n", [0, 1, 2])
    def test_close_guard(self, editor, n):
        for i in range(n):
            place(editor, i * 50, 0)
        editor.key_press("Enter")
        editor.request_close()
        editor.double_click()
        assert editor.shape.closed is False

    def test_close_logs_snapshot(self, editor, caplog):
        _triangle(editor)
        with caplog.at_level(logging.DEBUG, logger="shapebuilder.core.interaction"):
            editor.request_close()
        assert "'closed': True" in caplog.text
        assert "'handle_out'" in caplog.text

    def test_double_click_closes(self, editor):
        _triangle(editor)
        assert editor.double_click() is True
        assert editor.shape.closed is True


class TestEscape:
    """Escape closes (>= 3 anchors) and always cancels the drag."""

    def test_escape_closes_and_cancels_drag_without_rollback(self, editor, capture):
        _triangle(editor)
        editor.press(100, 0)
        editor.move(110, 10)
        editor.key_press("Escape")
        assert editor.shape.closed is True
        assert editor.state == Idle()
        assert not capture.active
        # the move applied before Escape stays
        assert editor.shape[1].pos == Point(110, 10)

    def test_escape_with_two_only_cancels(self, editor, capture):
        place(editor, 0, 0)
        editor.press(100, 0)
        assert capture.active
        editor.key_press("Escape")
        assert editor.shape.closed is False
        assert editor.state == Idle()
        assert not capture.active


class TestMovingAnchor:
    """Pressing an anchor marker drags it with its handles."""

    def test_move_follows_pointer_deltas(self, editor):
        _triangle(editor)
        editor.press(100, 0)
        assert editor.state == MovingAnchor(1, Point(100, 0))
        editor.move(110, 5)
        editor.move(120, 5)
        a = editor.shape[1]
        assert a.pos == Point(120, 5)
        assert a.handle_in == Point(120, 5)
        assert a.handle_out == Point(120, 5)
        assert editor.state == MovingAnchor(1, Point(120, 5))
        editor.release(120, 5)
        assert editor.state == Idle()

    def test_moving_works_on_closed_shape(self, editor):
        _triangle(editor)
        editor.request_close()
        editor.press(50, 100)
        editor.move(50, 120)
        assert editor.shape[2].pos == Point(50, 120)


class TestDraggingHandle:
    """Pressing a handle marker drags it, symmetric unless decoupled."""

    def test_symmetric_handle_drag(self, editor):
        place(editor, 0, 0, drag_to=(30, 0))
        editor.press(30, 0)
        assert editor.state == DraggingHandle(0, HandleKey.OUT, True)
        editor.move(0, 30)
        a = editor.shape[0]
        assert a.handle_out == Point(0, 30)
        assert a.handle_in == Point(0, -30)

    def test_decoupled_handle_drag(self, editor):
        place(editor, 0, 0, drag_to=(30, 0))
        editor.press(-30, 0, decouple=True)
        assert editor.state == DraggingHandle(0, HandleKey.IN, False)
        editor.move(0, 30)
        a = editor.shape[0]
        assert a.handle_in == Point(0, 30)
        assert a.handle_out == Point(30, 0)


class TestUndo:
    """Ctrl/Cmd+Z drops the last anchor and reopens the shape."""

    def test_undo_after_close_reopens_and_drops_last(self, editor):
        """Close a 4-anchor shape, undo -> open, last removed, rest unchanged."""
        _triangle(editor)
        place(editor, 0, 60)
        editor.request_close()
        first_three = editor.shape.anchors[:3]

        assert editor.key_press("z", ctrl=True) is True
        assert editor.shape.closed is False
        assert len(editor.shape) == 3
        assert editor.shape.anchors == first_three

    def test_cmd_z(self, editor):
        _triangle(editor)
        editor.key_press("Z", meta=True)
        assert len(editor.shape) == 2

    def test_plain_z_does_nothing(self, editor):
        _triangle(editor)
        assert editor.key_press("z") is False
        assert len(editor.shape) == 3

    def test_undo_mid_drag_leaves_stale_index_noop(self, editor, capture):
        place(editor, 0, 0)
        editor.press(100, 0)
        editor.key_press("z", ctrl=True)
        assert len(editor.shape) == 1
        before = editor.shape
        assert editor.move(120, 20) is False
        assert editor.shape is before
        editor.release(120, 20)
        assert not capture.active


class TestEditorSurface:
    """Export recomputation, clear, teardown and independence."""

    def test_export_follows_every_mutation(self, editor):
        _triangle(editor)
        assert editor.export == export_string(editor.shape)
        editor.request_close()
        assert editor.export == export_string(editor.shape)
        assert editor.export.endswith("-1 -1")

    def test_clear_mid_drag_releases_capture(self, editor, capture):
        _triangle(editor)
        editor.press(200, 200)
        editor.clear()
        assert len(editor.shape) == 0
        assert editor.export == ""
        assert editor.svg_d == ""
        assert editor.state == Idle()
        assert not capture.active

    def test_teardown_releases_capture(self, editor, capture):
        editor.press(10, 10)
        editor.teardown()
        assert not capture.active
        assert capture.released == 1

    def test_editors_are_independent(self):
        a = ShapeEditor()
        b = ShapeEditor()
        a.press(10, 10)
        assert len(b.shape) == 0
        assert b.state == Idle()


class TestHitTest:
    """Marker picking order."""

    def test_anchor_marker_wins_over_coincident_handles(self):
        shape = make_shape([(0, 0)])
        assert hit_test(shape, Point(1, 1), anchor_radius=5, handle_radius=6).which is None

    def test_later_anchor_is_on_top(self):
        shape = make_shape([(0, 0), (3, 0)])
        assert hit_test(shape, Point(2, 0), anchor_radius=5, handle_radius=6).index == 1

    def test_miss(self):
        shape = make_shape([(0, 0)])
        assert hit_test(shape, Point(50, 50), anchor_radius=5, handle_radius=6) is None
