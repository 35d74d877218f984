"""Shared fixtures: known H3 cells and polygons around San Francisco (res 9)."""

import sys
from pathlib import Path

import pytest

# Repo root on the import path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

DEFAULT_RES = 9

# 89283085507ffff
HEX_OUTLINE_1 = [
    [
        [-122.47485823276713, 37.85878356045377],
        [-122.47378734444064, 37.860465621984154],
        [-122.47504834087829, 37.86196795698972],
        [-122.47738022442019, 37.861788207189115],
        [-122.47845104316997, 37.86010614563313],
        [-122.4771900479571, 37.85860383390307],
        [-122.47485823276713, 37.85878356045377],
    ]
]

# 892830855b3ffff
HEX_OUTLINE_2 = [
    [
        [-122.48147295617736, 37.85187534491365],
        [-122.48040229236011, 37.85355749750206],
        [-122.48166324644575, 37.85505983954851],
        [-122.48399486310532, 37.85488000572598],
        [-122.48506545734224, 37.85319785312151],
        [-122.48380450450253, 37.851695534355315],
        [-122.48147295617736, 37.85187534491365],
    ]
]

POLYGON = [
    [
        [-122.26184837431902, 37.8346695948541],
        [-122.26299146613795, 37.8315769200876],
        [-122.26690391101923, 37.830681442651134],
        [-122.2696734085486, 37.83287856171719],
        [-122.26853055028259, 37.835971208076515],
        [-122.26461796082103, 37.83686676365336],
        [-122.26184837431902, 37.8346695948541],
    ]
]

POLYGON_CONTIGUOUS = [
    [
        [-122.25793560913665, 37.835564941293676],
        [-122.26184837431902, 37.8346695948541],
        [-122.26299146613795, 37.8315769200876],
        [-122.26022202614566, 37.82937956347423],
        [-122.25630940542779, 37.830274831952494],
        [-122.25516608024519, 37.83336753500189],
        [-122.25793560913665, 37.835564941293676],
    ]
]

POLYGON_NONCONTIGUOUS = [
    [
        [-122.23511849129424, 37.829458676659385],
        [-122.23788784659696, 37.831656795184344],
        [-122.24180113856318, 37.83076207598435],
        [-122.24294493056115, 37.827669316312495],
        [-122.24017566397347, 37.825471247577006],
        [-122.2362625166653, 37.82636588872747],
        [-122.23511849129424, 37.829458676659385],
    ]
]

# No res 8 cell center falls inside this triangle
TINY_TRIANGLE = [
    [
        [-122.26985598997341, 37.83598006884068],
        [-122.26836960154117, 37.83702107154188],
        [-122.26741606933939, 37.835426338014386],
        [-122.26985598997341, 37.83598006884068],
    ]
]

CENTER_CELL = "89283082837ffff"


def make_feature(geometry_type, coordinates, properties=None):
    return {
        "type": "Feature",
        "properties": {} if properties is None else properties,
        "geometry": {"type": geometry_type, "coordinates": coordinates},
    }


def rounded_vertices(ring, digits=8):
    """Vertex set of a ring, independent of start vertex and closing point."""
    return {(round(lng, digits), round(lat, digits)) for lng, lat in ring}


@pytest.fixture
def center_cell():
    return CENTER_CELL
