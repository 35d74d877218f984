"""Tests for the boundary loop topology normalizer."""

import copy

import pytest

from geojson_h3.exceptions import InternalInvariantViolation, UnsupportedTopology
from geojson_h3.topology import normalize_polygons


def square(x0, y0, x1, y1, clockwise=False):
    ring = [[x0, y0], [x1, y0], [x1, y1], [x0, y1], [x0, y0]]
    return list(reversed(ring)) if clockwise else ring


OUTER_A = square(0, 0, 10, 10)
HOLE_A1 = square(2, 2, 4, 4, clockwise=True)
HOLE_A2 = square(6, 6, 8, 8, clockwise=True)
OUTER_B = square(20, 0, 30, 10)
HOLE_B = square(22, 2, 28, 8, clockwise=True)


class TestNormalizePolygons:
    def test_empty(self):
        assert normalize_polygons([]) == []

    def test_single_outer_ring(self):
        assert normalize_polygons([[OUTER_A]]) == [[OUTER_A]]

    def test_hole_listed_before_outer(self):
        result = normalize_polygons([[HOLE_A1], [OUTER_A]])
        assert result == [[OUTER_A, HOLE_A1]]

    def test_holes_assigned_to_their_outer_ring(self):
        result = normalize_polygons([[HOLE_B], [OUTER_A], [HOLE_A1], [OUTER_B], [HOLE_A2]])
        assert result == [
            [OUTER_A, HOLE_A1, HOLE_A2],
            [OUTER_B, HOLE_B],
        ]

    def test_outer_rings_keep_first_seen_order(self):
        result = normalize_polygons([[OUTER_B], [OUTER_A]])
        assert [polygon[0] for polygon in result] == [OUTER_B, OUTER_A]

    def test_rings_grouped_in_one_input_polygon(self):
        result = normalize_polygons([[HOLE_A1, OUTER_A, OUTER_B]])
        assert result == [[OUTER_A, HOLE_A1], [OUTER_B]]

    def test_island_inside_hole(self):
        outer = square(0, 0, 20, 20)
        hole = square(2, 2, 18, 18, clockwise=True)
        island = square(6, 6, 14, 14)
        result = normalize_polygons([[island], [hole], [outer]])
        assert result == [[island], [outer, hole]]

    def test_idempotent(self):
        normalized = normalize_polygons([[HOLE_A1], [OUTER_A], [OUTER_B], [HOLE_B]])
        assert normalize_polygons(normalized) == normalized

    def test_input_is_not_mutated(self):
        loops = [[HOLE_A1], [OUTER_A]]
        before = copy.deepcopy(loops)
        normalize_polygons(loops)
        assert loops == before


class TestNormalizePolygonsErrors:
    def test_nested_donut_raises(self):
        outer = square(0, 0, 20, 20)
        hole = square(2, 2, 18, 18, clockwise=True)
        island = square(4, 4, 16, 16)
        island_hole = square(6, 6, 14, 14, clockwise=True)
        with pytest.raises(UnsupportedTopology, match="Unsupported MultiPolygon topology"):
            normalize_polygons([[outer], [hole], [island], [island_hole]])

    def test_orphan_hole_raises(self):
        with pytest.raises(InternalInvariantViolation):
            normalize_polygons([[OUTER_A], [square(40, 40, 42, 42, clockwise=True)]])

    def test_hole_without_any_outer_raises(self):
        with pytest.raises(InternalInvariantViolation):
            normalize_polygons([[HOLE_A1]])

    def test_error_types(self):
        assert issubclass(UnsupportedTopology, ValueError)
        assert issubclass(InternalInvariantViolation, RuntimeError)
