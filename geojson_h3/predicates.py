"""
Geometric predicates on GeoJSON rings.

Rings are sequences of [lng, lat] pairs, closed or open. Both predicates
delegate to shapely and work in planar lng/lat space. Loops that cross the
antimeridian are not supported.
"""

from typing import Sequence

from shapely.geometry import LinearRing, Point, Polygon

Ring = Sequence[Sequence[float]]


def is_clockwise(ring: Ring) -> bool:
    """
    Test the winding order of a ring.

    Args:
        ring: Sequence of [lng, lat] pairs (at least three distinct points)

    Returns:
        True if the ring runs clockwise, False if counter-clockwise

    Example:
        >>> is_clockwise([[0, 0], [0, 1], [1, 1], [1, 0], [0, 0]])
        True
    """
    return not LinearRing(ring).is_ccw


def point_in_polygon(point: Sequence[float], polygon: Sequence[Ring]) -> bool:
    """
    Test if a point lies strictly inside a polygon.

    The first ring is the outer boundary, any further rings are holes.
    Points on the boundary are not contained.

    Args:
        point: [lng, lat] pair
        polygon: List of rings

    Returns:
        True if the point is in the polygon interior, False otherwise
    """
    if not polygon:
        return False
    shell, *holes = polygon
    return Polygon(shell, holes).contains(Point(point[0], point[1]))
