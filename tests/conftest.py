"""Shared pytest fixtures for the GeoProtec test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from geoprotec.geocoding.base import GeocodeFailureReason, GeocoderConfig, GeocodingGateway
from geoprotec.models.feature import GeocodedPoint
from geoprotec.models.geometry import LonLat

# ---------------------------------------------------------------------------
# Path fixtures
# ---------------------------------------------------------------------------

TESTS_DIR = Path(__file__).parent
DATA_DIR = TESTS_DIR / "data"


@pytest.fixture()
def data_dir() -> Path:
    """Return the path to the test data directory."""
    return DATA_DIR


# ---------------------------------------------------------------------------
# Sample GeoJSON file fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def square_geojson(data_dir: Path) -> str:
    """Feature with a 10 x 10 Polygon from (0, 0) to (10, 10)."""
    return (data_dir / "01_feature_polygon_square.geojson").read_text(encoding="utf-8")


@pytest.fixture()
def mixed_collection_geojson(data_dir: Path) -> str:
    """FeatureCollection: Point, LineString, then two Polygons (first is index 2)."""
    return (data_dir / "02_feature_collection_mixed.geojson").read_text(encoding="utf-8")


@pytest.fixture()
def multipolygon_geojson(data_dir: Path) -> str:
    """Feature with two disjoint 10 x 10 squares at x=0..10 and x=20..30."""
    return (data_dir / "03_feature_multipolygon.geojson").read_text(encoding="utf-8")


@pytest.fixture()
def polygon_with_hole_geojson(data_dir: Path) -> str:
    """Square (0..10) with a hole (4..6)."""
    return (data_dir / "04_feature_polygon_with_hole.geojson").read_text(encoding="utf-8")


@pytest.fixture()
def linestring_geojson(data_dir: Path) -> str:
    """Feature with a LineString geometry."""
    return (data_dir / "05_feature_linestring.geojson").read_text(encoding="utf-8")


@pytest.fixture()
def malformed_geojson(data_dir: Path) -> bytes:
    """Truncated JSON, read as raw bytes."""
    return (data_dir / "06_malformed_truncated.geojson").read_bytes()


@pytest.fixture()
def unclosed_ring_geojson(data_dir: Path) -> str:
    """Square whose ring does not repeat its first position; properties null."""
    return (data_dir / "07_feature_unclosed_ring.geojson").read_text(encoding="utf-8")


# ---------------------------------------------------------------------------
# Geocoder doubles
# ---------------------------------------------------------------------------


class FixedGeocoder(GeocodingGateway):
    """Resolves every address to the same position."""

    def __init__(self, lon: float, lat: float) -> None:
        super().__init__(GeocoderConfig(name="fixed"))
        self.position = LonLat(lon, lat)
        self.calls: list[str] = []

    def geocode(self, address: str) -> GeocodedPoint:
        self.calls.append(address)
        return GeocodedPoint(position=self.position, query=address, full_address=f"{address}, Test")


class FailingGeocoder(GeocodingGateway):
    """Fails every lookup with the given reason."""

    def __init__(self, reason: GeocodeFailureReason, message: str = "lookup failed") -> None:
        super().__init__(GeocoderConfig(name="failing"))
        self.reason = reason
        self.message = message

    def geocode(self, address: str) -> GeocodedPoint:
        raise self._fail(self.reason, self.message)


@pytest.fixture()
def inside_geocoder() -> FixedGeocoder:
    """Geocoder placing every address at (5, 5), inside the square fixture."""
    return FixedGeocoder(5.0, 5.0)


@pytest.fixture()
def outside_geocoder() -> FixedGeocoder:
    """Geocoder placing every address at (15, 5), outside the square fixture."""
    return FixedGeocoder(15.0, 5.0)


@pytest.fixture()
def failing_geocoder() -> type[FailingGeocoder]:
    """The ``FailingGeocoder`` class, for tests that pick a failure reason."""
    return FailingGeocoder
