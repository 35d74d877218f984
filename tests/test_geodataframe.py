"""Tests for GeoDataFrame conversion helpers."""

import pytest
from shapely.geometry import Point, Polygon

gpd = pytest.importorskip("geopandas")

from geojson_h3 import UnsupportedInput, cells_to_geodataframe, geodataframe_to_cells

from conftest import DEFAULT_RES, HEX_OUTLINE_1, HEX_OUTLINE_2

CELL_1 = "89283085507ffff"
CELL_2 = "892830855b3ffff"


@pytest.fixture
def hex_gdf():
    return gpd.GeoDataFrame(
        {"name": ["a", "b"]},
        geometry=[Polygon(HEX_OUTLINE_1[0]), Polygon(HEX_OUTLINE_2[0])],
        crs="EPSG:4326",
    )


class TestGeoDataFrameToCells:
    def test_one_list_per_row(self, hex_gdf):
        assert geodataframe_to_cells(hex_gdf, DEFAULT_RES) == [[CELL_1], [CELL_2]]

    def test_projected_input(self, hex_gdf):
        projected = hex_gdf.to_crs("EPSG:3857")
        assert geodataframe_to_cells(projected, DEFAULT_RES) == [[CELL_1], [CELL_2]]

    def test_rejects_non_polygons(self):
        gdf = gpd.GeoDataFrame(geometry=[Point(-122.4, 37.8)], crs="EPSG:4326")
        with pytest.raises(UnsupportedInput):
            geodataframe_to_cells(gdf, DEFAULT_RES)


class TestCellsToGeoDataFrame:
    def test_rows_and_columns(self):
        counts = {CELL_1: 3, CELL_2: 5}
        gdf = cells_to_geodataframe([CELL_1, CELL_2], lambda cell: {"count": counts[cell]})
        assert list(gdf["cell"]) == [CELL_1, CELL_2]
        assert list(gdf["count"]) == [3, 5]
        assert gdf.crs.to_epsg() == 4326
        assert all(gdf.geometry.geom_type == "Polygon")

    def test_round_trip(self):
        gdf = cells_to_geodataframe([CELL_1, CELL_2])
        assert geodataframe_to_cells(gdf, DEFAULT_RES) == [[CELL_1], [CELL_2]]

    def test_empty(self):
        gdf = cells_to_geodataframe([])
        assert len(gdf) == 0
        assert "cell" in gdf.columns

    def test_cell_column_not_overwritten_by_properties(self):
        gdf = cells_to_geodataframe([CELL_1], lambda cell: {"cell": "other", "count": 1})
        assert list(gdf["cell"]) == [CELL_1]
        assert list(gdf["count"]) == [1]
