"""
GeoJSON to DGGS (H3) conversion functions.

Converts GeoJSON Polygon / MultiPolygon features to sets of H3 cells and
H3 cell sets back to GeoJSON features, with helpers for shapely geometries
and GeoDataFrames.
"""

import logging
import operator
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from pyproj import CRS, Transformer
from shapely.geometry import MultiPolygon, Polygon, mapping, shape
from shapely.ops import transform

from . import grid
from .exceptions import UnsupportedInput
from .grid import ContainmentMode
from .topology import normalize_polygons

logger = logging.getLogger(__name__)

try:
    import geopandas as gpd
    HAS_GEOPANDAS = True
except ImportError:
    HAS_GEOPANDAS = False


# =============================================================================
# CONSTANTS
# =============================================================================

class EnvelopeType(str, Enum):
    """Top-level GeoJSON object types accepted by feature_to_cells."""
    FEATURE = "Feature"
    FEATURE_COLLECTION = "FeatureCollection"


class GeometryType(str, Enum):
    """GeoJSON geometry types the converter can rasterize."""
    POLYGON = "Polygon"
    MULTI_POLYGON = "MultiPolygon"


WGS84 = "EPSG:4326"

PropertiesFn = Callable[[str], Dict[str, Any]]


# =============================================================================
# HELPERS
# =============================================================================

def _merge_unique(cell_lists: Iterable[Sequence[str]]) -> List[str]:
    """
    Concatenate cell lists and drop duplicates, keeping first occurrence.

    Always returns a new list; the input lists are left untouched.
    """
    merged: Dict[str, None] = {}
    for cells in cell_lists:
        merged.update(dict.fromkeys(cells))
    return list(merged)


def _ring_centroid(ring: Sequence[Sequence[float]]) -> tuple:
    """Arithmetic mean of the ring vertices as (lng, lat)."""
    lng_sum = sum(coord[0] for coord in ring)
    lat_sum = sum(coord[1] for coord in ring)
    return lng_sum / len(ring), lat_sum / len(ring)


def _as_mapping(obj: Any) -> Mapping:
    if hasattr(obj, "__geo_interface__"):
        obj = obj.__geo_interface__
    if not isinstance(obj, Mapping):
        raise UnsupportedInput(f"Unhandled type: {type(obj).__name__}")
    return obj


def _envelope_type(obj: Mapping) -> EnvelopeType:
    try:
        return EnvelopeType(obj.get("type"))
    except ValueError:
        raise UnsupportedInput(f"Unhandled type: {obj.get('type')}") from None


def _geometry_type(geometry: Optional[Mapping]) -> GeometryType:
    geometry_type = geometry.get("type") if isinstance(geometry, Mapping) else None
    try:
        return GeometryType(geometry_type)
    except ValueError:
        raise UnsupportedInput(f"Unhandled geometry type: {geometry_type}") from None


def _check_resolution(resolution: Any) -> int:
    """Return the resolution as a plain int; any integral type except bool is accepted."""
    try:
        value = operator.index(resolution)
    except TypeError:
        value = None
    if (
        value is None
        or isinstance(resolution, bool)
        or not grid.MIN_RESOLUTION <= value <= grid.MAX_RESOLUTION
    ):
        raise UnsupportedInput(
            f"Resolution must be an integer between {grid.MIN_RESOLUTION} "
            f"and {grid.MAX_RESOLUTION}, got {resolution!r}"
        )
    return value


def _polygon_to_cells(
    rings: Sequence[Sequence[Sequence[float]]],
    resolution: int,
    ensure_output: bool,
    containment_mode: ContainmentMode
) -> List[str]:
    """
    Rasterize one polygon, falling back to its centroid cell if requested.

    The fallback only applies to polygons that have an outer ring.
    """
    cells = grid.cells_covering_polygon(rings, resolution, containment_mode)
    if cells or not ensure_output or not rings or not rings[0]:
        return cells

    # Polygon smaller than a cell: index the centroid of the outer ring
    lng, lat = _ring_centroid(rings[0])
    logger.debug("[_polygon_to_cells] No cells at res %d, using centroid (%.6f, %.6f)",
                 resolution, lng, lat)
    return [grid.cell_containing_point(lng, lat, resolution)]


def _feature_collection_to_cells(
    collection: Mapping,
    resolution: int,
    ensure_output: bool,
    containment_mode: ContainmentMode
) -> List[str]:
    features = collection.get("features")
    if features is None:
        raise UnsupportedInput("No features found")
    return _merge_unique(
        feature_to_cells(feature, resolution, ensure_output, containment_mode)
        for feature in features
    )


# =============================================================================
# GEOJSON -> H3
# =============================================================================

def feature_to_cells(
    feature: Any,
    resolution: int,
    ensure_output: bool = False,
    containment_mode: ContainmentMode = ContainmentMode.CENTER
) -> List[str]:
    """
    Convert a GeoJSON Feature or FeatureCollection to a set of H3 cells.

    Only cells whose centers fall within the feature are included (with the
    default CENTER containment). The conversion is lossy: the cell set only
    approximates the original shape, at a precision given by the resolution.

    Each polygon of a MultiPolygon is rasterized independently. A polygon that
    is small compared to the cells may contain no cell center at all; with
    ensure_output=True such a polygon contributes the single cell containing
    the centroid of its outer ring instead.

    Args:
        feature: GeoJSON Feature or FeatureCollection (dict, or any object
            with __geo_interface__). Geometry must be Polygon or MultiPolygon.
        resolution: H3 resolution (0-15)
        ensure_output: Fall back to the centroid cell for empty polygons
        containment_mode: ContainmentMode enum (default: CENTER)

    Returns:
        List of unique H3 cell IDs (order carries no meaning)

    Raises:
        UnsupportedInput: Unhandled type or geometry type, missing features,
            or invalid resolution

    Example:
        >>> feature = {
        ...     "type": "Feature",
        ...     "properties": {},
        ...     "geometry": {"type": "Polygon", "coordinates": [ring]},
        ... }
        >>> cells = feature_to_cells(feature, 9)
        >>> print(f"Feature covers {len(cells)} cells")
    """
    feature = _as_mapping(feature)
    resolution = _check_resolution(resolution)

    if _envelope_type(feature) == EnvelopeType.FEATURE_COLLECTION:
        return _feature_collection_to_cells(feature, resolution, ensure_output, containment_mode)

    geometry = feature.get("geometry")

    # Normalize to MultiPolygon
    if _geometry_type(geometry) == GeometryType.POLYGON:
        polygons = [geometry.get("coordinates") or []]
    else:
        polygons = geometry.get("coordinates") or []

    cells = _merge_unique(
        _polygon_to_cells(polygon, resolution, ensure_output, containment_mode)
        for polygon in polygons
    )
    logger.debug("[feature_to_cells] %d polygons -> %d cells at res %d",
                 len(polygons), len(cells), resolution)
    return cells


# =============================================================================
# H3 -> GEOJSON
# =============================================================================

def cell_to_feature(cell: str, properties: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Convert a single H3 cell to a GeoJSON Polygon feature.

    Args:
        cell: H3 cell ID
        properties: Optional feature properties (default: empty dict)

    Returns:
        GeoJSON Feature with id set to the cell ID
    """
    return {
        "type": EnvelopeType.FEATURE.value,
        "id": cell,
        "properties": {} if properties is None else properties,
        "geometry": {
            "type": GeometryType.POLYGON.value,
            # single-loop polygon
            "coordinates": [grid.cell_to_boundary_ring(cell)],
        },
    }


def cells_to_feature(cells: Sequence[str], properties: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Convert a set of H3 cells to a GeoJSON feature with the set outline(s).

    Adjacent cells are merged into one outline; uncovered gaps become holes.
    The geometry is a Polygon if the cells form one outline and a
    MultiPolygon otherwise. An empty cell set yields a Polygon with empty
    coordinates.

    Args:
        cells: H3 cell IDs at a single resolution
        properties: Optional feature properties (default: empty dict)

    Returns:
        GeoJSON Feature

    Raises:
        UnsupportedInput: Invalid cells or mixed resolutions
        UnsupportedTopology: Cells form a donut nested inside another donut's hole

    Example:
        >>> feature = cells_to_feature(h3.grid_disk('89283082837ffff', 1))
        >>> feature["geometry"]["type"]
        'Polygon'
    """
    polygons = normalize_polygons(grid.cell_set_to_loop_polygons(cells))

    if len(polygons) > 1:
        geometry_type, coordinates = GeometryType.MULTI_POLYGON, polygons
    else:
        geometry_type, coordinates = GeometryType.POLYGON, (polygons[0] if polygons else [])

    return {
        "type": EnvelopeType.FEATURE.value,
        "properties": {} if properties is None else properties,
        "geometry": {
            "type": geometry_type.value,
            "coordinates": coordinates,
        },
    }


def cells_to_multipolygon_feature(
    cells: Sequence[str],
    properties: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    Convert a set of H3 cells to a MultiPolygon feature of individual cell outlines.

    No outlines are merged, so no hole detection is needed.
    """
    return {
        "type": EnvelopeType.FEATURE.value,
        "properties": {} if properties is None else properties,
        "geometry": {
            "type": GeometryType.MULTI_POLYGON.value,
            "coordinates": [[grid.cell_to_boundary_ring(cell)] for cell in cells],
        },
    }


def cells_to_feature_collection(
    cells: Sequence[str],
    get_properties: Optional[PropertiesFn] = None
) -> Dict[str, Any]:
    """
    Convert a set of H3 cells to a FeatureCollection with one Polygon feature per cell.

    Args:
        cells: H3 cell IDs
        get_properties: Optional function returning the properties for a
            cell, f(cell) -> dict. Without it every feature gets an empty dict.

    Returns:
        GeoJSON FeatureCollection

    Example:
        >>> counts = {'89283085507ffff': 3, '892830855b3ffff': 5}
        >>> fc = cells_to_feature_collection(counts, lambda c: {"count": counts[c]})
        >>> len(fc["features"])
        2
    """
    features = []
    for cell in cells:
        properties = get_properties(cell) if get_properties else {}
        features.append(cell_to_feature(cell, properties))
    return {
        "type": EnvelopeType.FEATURE_COLLECTION.value,
        "features": features,
    }


# =============================================================================
# SHAPELY / GEOPANDAS
# =============================================================================

def _ensure_wgs84(geometry, source_crs: Optional[Union[str, int]] = None):
    """
    Transform geometry to WGS84 if needed.

    Args:
        geometry: Shapely geometry object
        source_crs: Source CRS (EPSG code as int, string like 'EPSG:2056', or None for WGS84)

    Returns:
        Transformed geometry in WGS84
    """
    if source_crs is None:
        return geometry

    if isinstance(source_crs, int):
        source_crs = f"EPSG:{source_crs}"

    transformer = Transformer.from_crs(
        CRS.from_user_input(source_crs),
        CRS.from_user_input(WGS84),
        always_xy=True
    )
    return transform(transformer.transform, geometry)


def geometry_to_cells(
    geometry: Union[Polygon, MultiPolygon],
    resolution: int,
    source_crs: Optional[Union[str, int]] = None,
    ensure_output: bool = False,
    containment_mode: ContainmentMode = ContainmentMode.CENTER
) -> List[str]:
    """
    Convert a shapely Polygon or MultiPolygon to H3 cells.

    Args:
        geometry: Shapely Polygon or MultiPolygon
        resolution: H3 resolution (0-15)
        source_crs: Source CRS (e.g., 2056 for LV95, None for WGS84)
        ensure_output: Fall back to the centroid cell for empty polygons
        containment_mode: ContainmentMode enum (default: CENTER)

    Returns:
        List of unique H3 cell IDs

    Raises:
        UnsupportedInput: If the geometry is not a Polygon or MultiPolygon

    Example:
        >>> polygon = Polygon([(7.5, 47.5), (7.6, 47.5), (7.6, 47.6), (7.5, 47.6)])
        >>> cells = geometry_to_cells(polygon, 9)

        >>> # Swiss LV95 input
        >>> cells = geometry_to_cells(lv95_polygon, 9, source_crs=2056)
    """
    if not isinstance(geometry, (Polygon, MultiPolygon)):
        raise UnsupportedInput(f"Unhandled geometry type: {getattr(geometry, 'geom_type', type(geometry).__name__)}")

    geometry_wgs84 = _ensure_wgs84(geometry, source_crs)
    feature = {"type": EnvelopeType.FEATURE.value, "properties": {}, "geometry": mapping(geometry_wgs84)}
    return feature_to_cells(feature, resolution, ensure_output, containment_mode)


def cells_to_geometry(cells: Sequence[str]) -> Union[Polygon, MultiPolygon]:
    """Convert a set of H3 cells to a shapely Polygon or MultiPolygon outline."""
    geometry = cells_to_feature(cells)["geometry"]
    if not geometry["coordinates"]:
        return Polygon()
    return shape(geometry)


def geodataframe_to_cells(
    gdf: Any,
    resolution: int,
    geometry_column: str = 'geometry',
    ensure_output: bool = False,
    containment_mode: ContainmentMode = ContainmentMode.CENTER
) -> List[List[str]]:
    """
    Batch conversion of GeoDataFrame polygons to H3 cells.

    All geometries are transformed to WGS84 in one operation before
    conversion, which is much faster than per-row transformation.

    Args:
        gdf: GeoDataFrame with Polygon / MultiPolygon geometries
        resolution: H3 resolution (0-15)
        geometry_column: Name of the geometry column, default 'geometry'
        ensure_output: Fall back to the centroid cell for empty polygons
        containment_mode: ContainmentMode enum (default: CENTER)

    Returns:
        List of H3 cell lists, one per row

    Example:
        >>> import geopandas as gpd
        >>> gdf = gpd.read_file('data.gpkg')
        >>> gdf['h3_cells'] = geodataframe_to_cells(gdf, resolution=9)
    """
    if not HAS_GEOPANDAS:
        raise ImportError("geopandas is required for geodataframe_to_cells")
    resolution = _check_resolution(resolution)

    # Batch transform to WGS84 once
    gdf_wgs84 = gdf.to_crs(WGS84) if gdf.crs is not None else gdf

    cell_lists = [
        geometry_to_cells(geom, resolution, ensure_output=ensure_output, containment_mode=containment_mode)
        for geom in gdf_wgs84[geometry_column]
    ]
    logger.debug("[geodataframe_to_cells] Converted %d rows at res %d", len(cell_lists), resolution)
    return cell_lists


def cells_to_geodataframe(cells: Sequence[str], get_properties: Optional[PropertiesFn] = None) -> Any:
    """
    Convert H3 cells to a GeoDataFrame with one row per cell.

    Args:
        cells: H3 cell IDs
        get_properties: Optional function returning extra columns for a cell

    Returns:
        GeoDataFrame (EPSG:4326) with a 'cell' column, the property columns
        and the cell polygons as geometry
    """
    if not HAS_GEOPANDAS:
        raise ImportError("geopandas is required for cells_to_geodataframe")

    features = cells_to_feature_collection(cells, get_properties)["features"]
    # The cell ID column wins over a "cell" property
    records = [{**feature["properties"], "cell": feature["id"]} for feature in features]
    geometries = [shape(feature["geometry"]) for feature in features]

    if not records:
        return gpd.GeoDataFrame({"cell": []}, geometry=[], crs=WGS84)
    return gpd.GeoDataFrame(records, geometry=geometries, crs=WGS84)
