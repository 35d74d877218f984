"""
Polygon topology normalization for H3 boundary loops.

The loop set returned for a group of H3 cells carries no ring roles: every
boundary loop may arrive on its own, outer loops and holes in any order.
normalize_polygons() rebuilds GeoJSON polygon structure from winding order
and point containment:

  - counter-clockwise loops are outer rings, each one starts a new polygon
  - clockwise loops are holes, assigned to the single outer ring containing
    one of their vertices

Cell boundaries never overlap, so a single vertex is a reliable test point.
"""

import logging
from typing import List, Sequence

from .exceptions import InternalInvariantViolation, UnsupportedTopology
from .predicates import is_clockwise, point_in_polygon

logger = logging.getLogger(__name__)


def _find_polygon_for_hole(hole: Sequence, polygons: List[list]) -> list:
    """
    Return the single polygon whose outer ring contains the hole.

    Raises:
        UnsupportedTopology: Hole is inside more than one outer ring
        InternalInvariantViolation: Hole is inside no outer ring
    """
    test_point = hole[0]
    candidates = [polygon for polygon in polygons if point_in_polygon(test_point, [polygon[0]])]

    if len(candidates) > 1:
        # Donut within a donut: the hole cannot be attributed unambiguously
        raise UnsupportedTopology(
            f"Unsupported MultiPolygon topology: hole at {list(test_point)} "
            f"is contained by {len(candidates)} outer rings"
        )
    if not candidates:
        raise InternalInvariantViolation(
            f"Could not find parent polygon for hole at {list(test_point)}"
        )
    return candidates[0]


def normalize_polygons(loop_polygons: Sequence[Sequence[Sequence]]) -> List[list]:
    """
    Normalize raw boundary loops into GeoJSON MultiPolygon coordinates.

    Args:
        loop_polygons: List of polygons, each a list of rings with
            unresolved roles ([lng, lat] coordinates)

    Returns:
        List of polygons, each [outer, hole, hole, ...]. Outer rings keep
        their first-seen order, holes follow in the order they were assigned.

    Raises:
        UnsupportedTopology: A hole is contained in several outer rings
        InternalInvariantViolation: A hole is contained in no outer ring

    Example:
        >>> outer = [[0, 0], [4, 0], [4, 4], [0, 4], [0, 0]]
        >>> hole = [[1, 1], [1, 2], [2, 2], [2, 1], [1, 1]]
        >>> normalize_polygons([[hole], [outer]])
        [[[[0, 0], [4, 0], [4, 4], [0, 4], [0, 0]], [[1, 1], [1, 2], [2, 2], [2, 1], [1, 1]]]]
    """
    polygons: List[list] = []
    holes: List[Sequence] = []

    # Step 1: split by winding order
    for loops in loop_polygons:
        for ring in loops:
            if is_clockwise(ring):
                holes.append(ring)
            else:
                polygons.append([ring])

    # Step 2: attach each hole to its outer ring
    for hole in holes:
        _find_polygon_for_hole(hole, polygons).append(hole)

    logger.debug("[normalize_polygons] %d outer rings, %d holes", len(polygons), len(holes))

    return polygons
