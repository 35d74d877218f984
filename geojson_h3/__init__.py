"""
GeoJSON <-> H3 DGGS conversion module.
"""

from .converter import (
    feature_to_cells,
    cell_to_feature,
    cells_to_feature,
    cells_to_multipolygon_feature,
    cells_to_feature_collection,
    geometry_to_cells,
    cells_to_geometry,
    geodataframe_to_cells,
    cells_to_geodataframe,
    EnvelopeType,
    GeometryType,
)

from .grid import (
    ContainmentMode,
    MIN_RESOLUTION,
    MAX_RESOLUTION,
)

from .topology import normalize_polygons

from .exceptions import (
    GeoJSONH3Error,
    UnsupportedInput,
    UnsupportedTopology,
    InternalInvariantViolation,
)

__all__ = [
    "feature_to_cells",
    "cell_to_feature",
    "cells_to_feature",
    "cells_to_multipolygon_feature",
    "cells_to_feature_collection",
    "geometry_to_cells",
    "cells_to_geometry",
    "geodataframe_to_cells",
    "cells_to_geodataframe",
    "EnvelopeType",
    "GeometryType",
    "ContainmentMode",
    "MIN_RESOLUTION",
    "MAX_RESOLUTION",
    "normalize_polygons",
    "GeoJSONH3Error",
    "UnsupportedInput",
    "UnsupportedTopology",
    "InternalInvariantViolation",
]
