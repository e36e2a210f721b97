"""
Pytest configuration and shared fixtures for trajpress tests
"""

import random
from typing import List

import pytest

from trajpress.context.encoding.point_codec import snap_to_grid
from trajpress.models import Point

PLT_HEADER = (
    "Geolife trajectory\n"
    "WGS 84\n"
    "Altitude is in Feet\n"
    "Reserved 3\n"
    "0,2,255,My Track,0,0,2,8421376\n"
    "0\n"
)

PLT_RECORDS_A = (
    "39.984702,116.318417,0,492,39744.1201851852,2008-10-23,02:53:04\n"
    "39.984683,116.31845,0,492,39744.1202546296,2008-10-23,02:53:10\n"
    "39.984686,116.318417,0,492,39744.1203125,2008-10-23,02:53:15\n"
    "39.984688,116.318385,0,492,39744.1203703704,2008-10-23,02:53:20\n"
    "39.984655,116.318263,0,-777,39744.1204282407,2008-10-23,02:53:25\n"
)

# Recorded earlier the same day, stored in a file that sorts after A
PLT_RECORDS_B = (
    "39.974294,116.399741,0,-777,39744.0833333333,2008-10-23,02:00:00\n"
    "39.974292,116.399592,0,-777,39744.0833912037,2008-10-23,02:00:05\n"
)


def make_point(t: int, lat: float, lon: float, alt: float = 0.0) -> Point:
    """Shorthand used across tests: Point(timestamp, lat, lon, alt)."""
    return Point(timestamp=t, latitude=lat, longitude=lon, altitude=alt)


def geolife_like(count: int, seed: int = 42) -> List[Point]:
    """Random walk around Beijing with 1-5 s sampling, snapped to the codec grid."""
    rng = random.Random(seed)
    t = 1_224_730_384_000
    lat, lon, alt = 39.984702, 116.318417, 492.0
    points = []
    for _ in range(count):
        # Geolife marks missing altitude with -777
        recorded = -777.0 if rng.random() < 0.1 else alt
        points.append(snap_to_grid(Point(t, lat, lon, recorded)))
        t += rng.randint(1, 5) * 1000
        lat += rng.uniform(-0.0002, 0.0002)
        lon += rng.uniform(-0.0002, 0.0002)
        alt = round(alt + rng.uniform(-3, 3), 3)
    return points


@pytest.fixture
def sample_trajectory() -> List[Point]:
    """Geolife-like trajectory of 500 points"""
    return geolife_like(500)


@pytest.fixture
def small_trajectory() -> List[Point]:
    """Four points with timestamps [0, 1, 3, 10] and small coordinate steps"""
    return [
        make_point(0, 39.984702, 116.318417, 492.0),
        make_point(1, 39.984683, 116.318450, 492.0),
        make_point(3, 39.984686, 116.318417, 491.5),
        make_point(10, 39.984688, 116.318385, 491.0),
    ]


@pytest.fixture
def plt_text() -> str:
    """Contents of a single Geolife .plt file"""
    return PLT_HEADER + PLT_RECORDS_A


@pytest.fixture
def test_data_dir(tmp_path):
    """Directory with two Geolife .plt files and one unrelated file"""
    data_dir = tmp_path / "geolife"
    data_dir.mkdir()
    (data_dir / "20081023025304.plt").write_text(PLT_HEADER + PLT_RECORDS_A)
    (data_dir / "20081023090000.plt").write_text(PLT_HEADER + PLT_RECORDS_B)
    (data_dir / "notes.txt").write_text("not a trajectory")
    return data_dir


@pytest.fixture
def test_output_dir(tmp_path):
    """Temporary output directory for archives"""
    output_dir = tmp_path / "compressed"
    output_dir.mkdir()
    return output_dir
