"""Unit tests for normalization and export serialization."""

import pytest

from conftest import make_shape
from shapebuilder.core.models import Point, Shape
from shapebuilder.core.settings import EditorConfig
from shapebuilder.geom.flatten import flatten_shape
from shapebuilder.geom.normalize import (
    bbox,
    export_points,
    export_string,
    format_coord,
    normalize_points,
)


class TestBBox:
    def test_empty(self):
        assert bbox([]) is None

    def test_bounds(self):
        assert bbox([Point(3, -1), Point(-2, 4), Point(0, 0)]) == (-2, -1, 3, 4)


class TestFormatCoord:
    """Number formatting of exported coordinates."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (1.0, "1"),
            (-1.0, "-1"),
            (0.5, "0.5"),
            (-0.0, "0"),
            (0.00004, "0"),
            (-0.00004, "0"),
            (0.123456, "0.1235"),
            (-0.333333, "-0.3333"),
            (0.03125, "0.0313"),
            (-0.03125, "-0.0313"),
            (0.00005, "0.0001"),
        ],
    )
    def test_format(self, value, expected):
        assert format_coord(value) == expected

    def test_zero_decimals(self):
        assert format_coord(2.6, 0) == "3"


class TestNormalize:
    """Tests for normalize_points."""

    def test_empty(self):
        assert normalize_points([]) == []

    def test_triangle_is_centered_in_unit_box(self, triangle):
        """Scenario: closed triangle -> bbox centered at origin, coords in [-1, 1]."""
        norm = normalize_points(flatten_shape(triangle))
        assert norm == [(-1.0, -1.0), (1.0, -1.0), (0.0, 1.0), (-1.0, -1.0)]
        xs = [x for x, _ in norm]
        ys = [y for _, y in norm]
        assert (min(xs) + max(xs)) / 2 == 0
        assert (min(ys) + max(ys)) / 2 == 0

    def test_single_point_uses_divisor_one(self):
        """One anchor at (10,10): zero-size bbox, no division by zero."""
        assert normalize_points([Point(10, 10)]) == [(0.0, 0.0)]

    def test_aspect_ratio_is_preserved(self):
        norm = normalize_points([Point(0, 0), Point(200, 100)])
        assert norm == [(-1.0, -0.5), (1.0, 0.5)]

    def test_independent_of_position_and_size(self):
        a = normalize_points([Point(0, 0), Point(10, 0), Point(5, 8)])
        b = normalize_points([Point(100, 100), Point(130, 100), Point(115, 124)])
        assert a == b

    def test_rounding_to_four_decimals(self):
        norm = normalize_points([Point(0, 0), Point(3, 1)])
        assert norm == [(-1.0, -0.3333), (1.0, 0.3333)]


class TestExport:
    """Tests for the export string."""

    def test_empty_shape_exports_empty_string(self):
        assert export_string(Shape()) == ""

    def test_single_anchor(self):
        assert export_string(make_shape([(10, 10)])) == "0 0"

    def test_triangle_string(self, triangle):
        assert export_string(triangle) == "-1 -1 1 -1 0 1 -1 -1"

    def test_alternating_pairs(self):
        s = export_points([Point(0, 0), Point(3, 1)])
        assert s == "-1 -0.3333 1 0.3333"
        assert len(s.split(" ")) == 4

    def test_ties_round_away_from_zero(self):
        # 1 * 2 / 64 = 0.03125 exactly in binary
        assert export_points([Point(0, 0), Point(33, 0), Point(64, 0)]) == "-1 0 0.0313 0 1 0"
        assert normalize_points([Point(0, 0), Point(31, 0), Point(64, 0)])[1] == (-0.0313, 0.0)

    def test_idempotent(self, triangle):
        assert export_string(triangle) == export_string(triangle)

    def test_config_decimals_and_mode(self, triangle):
        cfg = EditorConfig(export_decimals=2, flatten_mode="uniform", uniform_steps=2)
        parts = export_string(triangle, cfg).split(" ")
        # 1 + 3 segments * 2 samples, two numbers each
        assert len(parts) == 14
        assert all(len(p.split(".")[-1]) <= 2 for p in parts if "." in p)
