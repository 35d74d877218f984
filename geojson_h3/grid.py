"""
H3 grid operations used by the GeoJSON converter.

Thin wrapper around the h3 v4 API that speaks GeoJSON coordinate order
([lng, lat]) on the outside and h3's (lat, lng) on the inside. All rings
returned from this module are closed.
"""

from enum import Enum
from typing import List, Sequence

import h3

from .exceptions import UnsupportedInput
from .predicates import is_clockwise

# H3 resolution range
MIN_RESOLUTION = 0
MAX_RESOLUTION = 15


class ContainmentMode(Enum):
    """
    H3 containment modes for polygon rasterization.

    The experimental API (h3shape_to_cells_experimental) supports all 4 modes.
    The standard API (polygon_to_cells) only supports CENTER.
    """
    CENTER = "center"              # Cell center must be inside polygon (default classic)
    FULL = "full"                  # Cell must be fully contained in polygon
    OVERLAPPING = "overlap"        # Cell overlaps polygon at any point
    OVERLAPPING_BBOX = "bbox_overlap"  # Cell bounding box overlaps polygon


def _to_latlng(ring: Sequence[Sequence[float]]) -> List[tuple]:
    # H3 expects (lat, lng) but GeoJSON uses (lng, lat)
    return [(coord[1], coord[0]) for coord in ring]


def _to_geojson_ring(loop: Sequence[Sequence[float]]) -> List[List[float]]:
    ring = [[lng, lat] for lat, lng in loop]
    if ring and ring[0] != ring[-1]:
        ring.append(list(ring[0]))
    return ring


def _oriented(ring: List[List[float]], clockwise: bool) -> List[List[float]]:
    if is_clockwise(ring) != clockwise:
        ring.reverse()
    return ring


def cells_covering_polygon(
    rings: Sequence[Sequence[Sequence[float]]],
    resolution: int,
    containment_mode: ContainmentMode = ContainmentMode.CENTER
) -> List[str]:
    """
    Rasterize one GeoJSON polygon (outer ring plus holes) to H3 cells.

    Args:
        rings: Polygon coordinates, [outer, hole, ...] in [lng, lat]
        resolution: H3 resolution (0-15)
        containment_mode: ContainmentMode enum (default: CENTER)

    Returns:
        List of H3 cell IDs, empty if the polygon has no rings or no cell
        qualifies under the containment mode
    """
    if not rings or not rings[0]:
        return []

    exterior, *holes = rings
    try:
        h3_poly = h3.LatLngPoly(_to_latlng(exterior), *[_to_latlng(hole) for hole in holes])

        if containment_mode == ContainmentMode.CENTER:
            return list(h3.polygon_to_cells(h3_poly, resolution))
        return list(h3.h3shape_to_cells_experimental(h3_poly, resolution, contain=containment_mode.value))
    except (ValueError, h3.H3BaseException) as e:
        raise UnsupportedInput(f"Cannot rasterize polygon at resolution {resolution}: {e}", e) from e


def cell_to_boundary_ring(cell: str) -> List[List[float]]:
    """
    Get the closed [lng, lat] boundary ring of a single H3 cell.

    Raises:
        UnsupportedInput: If the cell ID is not valid
    """
    try:
        boundary = h3.cell_to_boundary(cell)
    except (ValueError, h3.H3BaseException) as e:
        raise UnsupportedInput(f"Invalid H3 cell: {cell!r}", e) from e
    return _to_geojson_ring(boundary)


def cell_set_to_loop_polygons(cells: Sequence[str]) -> List[List[List[List[float]]]]:
    """
    Trace the boundary loops of a set of H3 cells.

    Every loop is returned as its own single-ring polygon without any role
    information, oriented with GeoJSON winding: outer boundaries run
    counter-clockwise, boundaries of uncovered gaps run clockwise.

    Args:
        cells: H3 cell IDs, all at the same resolution (duplicates allowed)

    Returns:
        List of [ring] entries

    Raises:
        UnsupportedInput: If cells are invalid or of mixed resolution
    """
    unique_cells = list(dict.fromkeys(cells))
    if not unique_cells:
        return []

    try:
        shape = h3.cells_to_h3shape(unique_cells, tight=False)
    except (ValueError, h3.H3BaseException) as e:
        raise UnsupportedInput(f"Cannot trace outline of {len(unique_cells)} cells: {e}", e) from e

    loops = []
    for poly in shape:
        loops.append([_oriented(_to_geojson_ring(poly.outer), clockwise=False)])
        for hole in poly.holes:
            loops.append([_oriented(_to_geojson_ring(hole), clockwise=True)])
    return loops


def cell_containing_point(lng: float, lat: float, resolution: int) -> str:
    """Get the H3 cell containing a point at the given resolution."""
    try:
        return h3.latlng_to_cell(lat, lng, resolution)
    except h3.H3BaseException as e:
        raise UnsupportedInput(f"Cannot index point ({lng}, {lat}): {e}", e) from e
