"""Tests for ring orientation and point-in-polygon predicates."""

from geojson_h3.predicates import is_clockwise, point_in_polygon

SQUARE_CCW = [[0, 0], [10, 0], [10, 10], [0, 10], [0, 0]]
SQUARE_CW = list(reversed(SQUARE_CCW))
HOLE_CW = [[4, 4], [4, 6], [6, 6], [6, 4], [4, 4]]


class TestIsClockwise:
    def test_counter_clockwise_ring(self):
        assert is_clockwise(SQUARE_CCW) is False

    def test_clockwise_ring(self):
        assert is_clockwise(SQUARE_CW) is True

    def test_open_ring_is_accepted(self):
        assert is_clockwise(SQUARE_CW[:-1]) is True

    def test_accepts_tuples(self):
        assert is_clockwise(tuple(tuple(c) for c in SQUARE_CCW)) is False


class TestPointInPolygon:
    def test_point_inside(self):
        assert point_in_polygon([1, 1], [SQUARE_CCW])

    def test_point_outside(self):
        assert not point_in_polygon([11, 1], [SQUARE_CCW])

    def test_point_on_boundary_is_not_inside(self):
        assert not point_in_polygon([0, 5], [SQUARE_CCW])

    def test_point_in_hole_is_not_inside(self):
        assert not point_in_polygon([5, 5], [SQUARE_CCW, HOLE_CW])
        assert point_in_polygon([2, 2], [SQUARE_CCW, HOLE_CW])

    def test_orientation_does_not_matter(self):
        assert point_in_polygon([1, 1], [SQUARE_CW])

    def test_empty_polygon(self):
        assert not point_in_polygon([1, 1], [])
