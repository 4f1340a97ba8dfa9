"""Tests for Shape -> cubic segments and the SVG preview path."""

from svgelements import Close, CubicBezier, Move

from conftest import make_shape
from shapebuilder.core.models import Anchor, HandleKey, Point, Shape
from shapebuilder.geom.path_compiler import CubicSegment, compile_segments, to_svg_d, to_svg_path


def _cubic_commands(d):
    # svgelements may write a smooth cubic as S
    return sum(d.upper().count(c) for c in "CS")


class TestCompileSegments:
    """Tests for compile_segments."""

    def test_fewer_than_two_anchors(self):
        assert compile_segments(Shape()) == []
        assert compile_segments(make_shape([(1, 2)])) == []
        assert compile_segments(make_shape([(1, 2)], closed=True)) == []

    def test_open_shape_has_n_minus_one_segments(self):
        shape = make_shape([(0, 0), (10, 0), (10, 10), (0, 10)])
        assert len(compile_segments(shape)) == 3

    def test_closed_shape_wraps_to_first(self, triangle):
        segs = compile_segments(triangle)
        assert len(segs) == 3
        assert segs[-1].p0 == Point(50, 100)
        assert segs[-1].p3 == Point(0, 0)

    def test_segment_uses_out_then_in_handles(self):
        a = Anchor.at(Point(0, 0)).with_handle(HandleKey.OUT, Point(5, 5), symmetric=True)
        b = Anchor.at(Point(20, 0)).with_handle(HandleKey.IN, Point(15, 5), symmetric=False)
        seg = compile_segments(Shape((a, b)))[0]
        assert seg == CubicSegment(Point(0, 0), Point(5, 5), Point(15, 5), Point(20, 0))

    def test_closed_pair_gets_wrap_segment(self):
        shape = Shape((Anchor.at(Point(0, 0)), Anchor.at(Point(10, 0))), closed=True)
        segs = compile_segments(shape)
        assert len(segs) == 2
        assert segs[1].p3 == Point(0, 0)


class TestSvgPath:
    """Tests for the preview path built with svgelements."""

    def test_empty_shape(self):
        assert to_svg_d(Shape()) == ""

    def test_single_anchor_is_a_move(self):
        d = to_svg_d(make_shape([(10, 10)]))
        assert d.upper().startswith("M")
        assert _cubic_commands(d) == 0

    def test_open_path(self):
        d = to_svg_d(make_shape([(0, 0), (10, 0), (10, 10)]))
        assert d.upper().startswith("M")
        assert _cubic_commands(d) == 2
        assert "Z" not in d.upper()

    def test_closed_path(self, triangle):
        d = to_svg_d(triangle)
        assert _cubic_commands(d) == 3
        assert d.upper().rstrip().endswith("Z")

    def test_segment_types(self, triangle):
        segs = list(to_svg_path(triangle))
        assert isinstance(segs[0], Move)
        assert sum(isinstance(s, CubicBezier) for s in segs) == 3
        assert isinstance(segs[-1], Close)
