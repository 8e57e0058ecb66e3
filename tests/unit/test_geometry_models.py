"""Tests for the typed geometry model.

Covers:
- LonLat finiteness and position parsing (altitude ignored)
- Storage vs display order (to_display is the only axis swap)
- Polygon / MultiPolygon construction from GeoJSON coordinates
- shape_from_geometry dispatch
"""

from __future__ import annotations

import math

import pytest

from geoprotec.models.geometry import (
    LatLon,
    LonLat,
    ModelValidationError,
    MultiPolygon,
    Polygon,
    is_number,
    iter_polygons,
    ring_from_positions,
    shape_from_geometry,
    to_display,
)

SQUARE = [[[0, 0], [10, 0], [10, 10], [0, 10], [0, 0]]]


class TestIsNumber:
    def test_numbers(self) -> None:
        assert is_number(1)
        assert is_number(1.5)

    def test_not_numbers(self) -> None:
        assert not is_number(True)
        assert not is_number("1")
        assert not is_number(None)


class TestLonLat:
    """LonLat holds storage-order positions."""

    def test_fields(self) -> None:
        p = LonLat(-58.38, -34.60)
        assert p.lon == -58.38
        assert p.lat == -34.60

    @pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
    def test_rejects_non_finite(self, bad: float) -> None:
        with pytest.raises(ModelValidationError, match="finite"):
            LonLat(bad, 0.0)

    def test_rejects_non_numeric(self) -> None:
        with pytest.raises(ModelValidationError):
            LonLat("1", 0.0)  # type: ignore[arg-type]

    def test_from_position_ignores_altitude(self) -> None:
        assert LonLat.from_position([1.0, 2.0, 300.0]) == LonLat(1.0, 2.0)

    @pytest.mark.parametrize("bad", [[1.0], "1,2", None, {"lon": 1, "lat": 2}])
    def test_from_position_rejects_non_pairs(self, bad: object) -> None:
        with pytest.raises(ModelValidationError):
            LonLat.from_position(bad)

    def test_out_of_range_is_representable(self) -> None:
        p = LonLat(200.0, 95.0)
        assert not p.in_wgs84_bounds()

    def test_bounds_inclusive(self) -> None:
        assert LonLat(180.0, -90.0).in_wgs84_bounds()
        assert LonLat(-180.0, 90.0).in_wgs84_bounds()

    def test_to_position(self) -> None:
        assert LonLat(3.0, 4.0).to_position() == [3.0, 4.0]


class TestDisplayOrder:
    """to_display swaps storage order into display order."""

    def test_swap(self) -> None:
        display = to_display(LonLat(lon=-58.38, lat=-34.60))
        assert display == LatLon(lat=-34.60, lon=-58.38)
        assert display.to_list() == [-34.60, -58.38]

    def test_types_are_distinct(self) -> None:
        assert LonLat(1.0, 2.0) != LatLon(1.0, 2.0)


class TestPolygon:
    """Polygon construction from GeoJSON coordinates."""

    def test_from_coordinates(self) -> None:
        poly = Polygon.from_coordinates(SQUARE)
        assert len(poly.exterior) == 5
        assert poly.exterior[1] == LonLat(10, 0)
        assert poly.holes == ()

    def test_holes(self) -> None:
        hole = [[4, 4], [6, 4], [6, 6], [4, 6], [4, 4]]
        poly = Polygon.from_coordinates([*SQUARE, hole])
        assert len(poly.rings) == 2
        assert poly.holes[0][0] == LonLat(4, 4)

    def test_unclosed_ring_not_repaired(self) -> None:
        poly = Polygon.from_coordinates([[[0, 0], [1, 0], [1, 1]]])
        assert len(poly.exterior) == 3

    @pytest.mark.parametrize("bad", [[], None, "x", [[["a", "b"]]]])
    def test_rejects_bad_coordinates(self, bad: object) -> None:
        with pytest.raises(ModelValidationError):
            Polygon.from_coordinates(bad)

    def test_ring_from_positions_rejects_non_list(self) -> None:
        with pytest.raises(ModelValidationError, match="list of positions"):
            ring_from_positions("ring")


class TestMultiPolygon:
    """MultiPolygon holds at least one polygon."""

    def test_from_coordinates(self) -> None:
        mp = MultiPolygon.from_coordinates([SQUARE, SQUARE])
        assert len(mp.polygons) == 2
        assert mp.polygons[1].exterior[2] == LonLat(10, 10)

    def test_empty_rejected(self) -> None:
        with pytest.raises(ModelValidationError, match="must not be empty"):
            MultiPolygon.from_coordinates([])


class TestShapeFromGeometry:
    """shape_from_geometry dispatches on geometry type."""

    def test_polygon(self) -> None:
        shape = shape_from_geometry({"type": "Polygon", "coordinates": SQUARE})
        assert isinstance(shape, Polygon)
        assert iter_polygons(shape) == (shape,)

    def test_multipolygon(self) -> None:
        shape = shape_from_geometry({"type": "MultiPolygon", "coordinates": [SQUARE]})
        assert isinstance(shape, MultiPolygon)
        assert len(iter_polygons(shape)) == 1

    def test_other_type_rejected(self) -> None:
        with pytest.raises(ModelValidationError, match="Polygon or MultiPolygon"):
            shape_from_geometry({"type": "Point", "coordinates": [0, 0]})
