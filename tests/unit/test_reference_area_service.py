"""Tests for the reference-area service.

Covers:
- Active area slot: load, replace, clear, describe
- Failed loads keep the previous area
- verify_address outcomes for every status
- Wiring from AppConfig (initial area file, geocoder construction)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import pytest

from geoprotec.core.config import AppConfig, ConfigValidationError
from geoprotec.geocoding.base import GeocodeFailureReason
from geoprotec.geojson import GeoJsonValidationError, ValidationErrorKind
from geoprotec.models.feature import Feature
from geoprotec.models.geometry import LatLon, LonLat
from geoprotec.service.reference_area import (
    ReferenceAreaService,
    VerificationStatus,
    build_service,
    default_reference_feature,
    load_initial_area,
)


class TestActiveArea:
    """The service holds exactly one active Feature."""

    def test_starts_empty(self) -> None:
        service = ReferenceAreaService()
        assert service.active is None
        assert service.describe() is None

    def test_load(self, square_geojson: str) -> None:
        service = ReferenceAreaService()
        feature = service.load(square_geojson)
        assert service.active is feature
        assert feature.properties == {"name": "Unit square"}

    def test_validate_does_not_swap(self, square_geojson: str, unclosed_ring_geojson: str) -> None:
        service = ReferenceAreaService(strict=True)
        feature = service.validate(square_geojson)
        assert feature.geometry_type == "Polygon"
        assert service.active is None
        with pytest.raises(GeoJsonValidationError):
            service.validate(unclosed_ring_geojson)

    def test_failed_load_keeps_previous(self, square_geojson: str, linestring_geojson: str) -> None:
        service = ReferenceAreaService()
        previous = service.load(square_geojson)
        with pytest.raises(GeoJsonValidationError) as exc_info:
            service.load(linestring_geojson)
        assert exc_info.value.kind is ValidationErrorKind.UNSUPPORTED_GEOMETRY_TYPE
        assert service.active is previous

    def test_strict_service(self, unclosed_ring_geojson: str) -> None:
        service = ReferenceAreaService(strict=True)
        with pytest.raises(GeoJsonValidationError) as exc_info:
            service.load(unclosed_ring_geojson)
        assert exc_info.value.kind is ValidationErrorKind.UNCLOSED_RING
        assert service.active is None

    def test_replace_and_clear(self) -> None:
        service = ReferenceAreaService()
        feature = default_reference_feature()
        service.replace(feature)
        assert service.active is feature
        service.clear()
        assert service.active is None

    def test_describe(self, mixed_collection_geojson: str) -> None:
        service = ReferenceAreaService()
        service.load(mixed_collection_geojson)
        described = service.describe()
        assert described is not None
        assert described["feature"]["id"] == "microcentro"
        assert described["center"] == [-34.6000, -58.3850]


class TestVerifyAddress:
    """Every outcome is a VerificationResult with a status."""

    def test_inside(self, square_geojson: str, inside_geocoder: Any) -> None:
        service = ReferenceAreaService(inside_geocoder)
        service.load(square_geojson)
        result = service.verify_address("Calle 1")
        assert result.status is VerificationStatus.INSIDE
        assert result.is_inside
        assert result.point is not None
        assert result.point.position == LonLat(5.0, 5.0)
        assert result.center == LatLon(lat=5.0, lon=5.0)
        assert result.error is None
        assert inside_geocoder.calls == ["Calle 1"]

    def test_outside(self, square_geojson: str, outside_geocoder: Any) -> None:
        service = ReferenceAreaService(outside_geocoder)
        service.load(square_geojson)
        result = service.verify_address("Calle 2")
        assert result.status is VerificationStatus.OUTSIDE
        assert not result.is_inside
        assert result.center == LatLon(lat=5.0, lon=15.0)

    def test_no_polygon(self, inside_geocoder: Any) -> None:
        result = ReferenceAreaService(inside_geocoder).verify_address("Calle 1")
        assert result.status is VerificationStatus.NO_POLYGON
        assert inside_geocoder.calls == []

    def test_blank_address(self, square_geojson: str, inside_geocoder: Any) -> None:
        service = ReferenceAreaService(inside_geocoder)
        service.load(square_geojson)
        result = service.verify_address("   ")
        assert result.status is VerificationStatus.ERROR
        assert "street" in result.message
        assert inside_geocoder.calls == []

    def test_no_geocoder(self, square_geojson: str) -> None:
        service = ReferenceAreaService(geocoder_unavailable="Geocoding is down.")
        service.load(square_geojson)
        result = service.verify_address("Calle 1")
        assert result.status is VerificationStatus.ERROR
        assert result.message == "Geocoding is down."

    @pytest.mark.parametrize(
        ("reason", "status"),
        [
            (GeocodeFailureReason.NOT_FOUND, VerificationStatus.ADDRESS_NOT_FOUND),
            (
                GeocodeFailureReason.AMBIGUOUS_OR_INVALID_RESPONSE,
                VerificationStatus.ADDRESS_NOT_FOUND,
            ),
            (GeocodeFailureReason.SERVICE_UNAVAILABLE, VerificationStatus.ERROR),
            (GeocodeFailureReason.NETWORK, VerificationStatus.ERROR),
        ],
    )
    def test_geocoding_failures(
        self,
        square_geojson: str,
        failing_geocoder: Any,
        reason: GeocodeFailureReason,
        status: VerificationStatus,
    ) -> None:
        service = ReferenceAreaService(failing_geocoder(reason, "nope"))
        service.load(square_geojson)
        result = service.verify_address("Calle 1")
        assert result.status is status
        assert result.message == "nope"
        assert result.point is None
        assert result.error is not None
        assert result.error["reason"] == reason.value

    def test_unevaluable_area(self, inside_geocoder: Any) -> None:
        broken = Feature(geometry={"type": "Polygon", "coordinates": [[[0, 0], [1, 1]]]})
        service = ReferenceAreaService(inside_geocoder, initial=broken)
        result = service.verify_address("Calle 1")
        assert result.status is VerificationStatus.ERROR
        assert result.error is not None
        assert result.error["code"] == "CONTAINMENT_FAILED"
        assert result.point is not None

    def test_hole(self, polygon_with_hole_geojson: str, inside_geocoder: Any) -> None:
        service = ReferenceAreaService(inside_geocoder)
        service.load(polygon_with_hole_geojson)
        assert service.verify_address("Patio").status is VerificationStatus.OUTSIDE

    def test_to_dict(self, square_geojson: str, inside_geocoder: Any) -> None:
        service = ReferenceAreaService(inside_geocoder)
        service.load(square_geojson)
        payload = service.verify_address("Calle 1").to_dict()
        assert payload["status"] == "inside"
        assert payload["center"] == [5.0, 5.0]
        assert payload["point"]["geometry"]["coordinates"] == [5.0, 5.0]
        assert payload["error"] is None


class TestDefaultArea:
    def test_default_feature(self) -> None:
        feature = default_reference_feature()
        assert feature.geometry_type == "Polygon"
        assert feature.properties == {"name": "San Francisco"}

    def test_default_copies_independent(self) -> None:
        first = default_reference_feature()
        first.geometry["coordinates"][0][0][0] = 0.0
        assert default_reference_feature().geometry["coordinates"][0][0][0] != 0.0


class TestLoadInitialArea:
    def test_default_when_unset(self) -> None:
        assert load_initial_area(AppConfig()) == default_reference_feature()

    def test_from_file(self, data_dir: Path) -> None:
        path = data_dir / "03_feature_multipolygon.geojson"
        feature = load_initial_area(AppConfig(reference_area_path=str(path)))
        assert feature.geometry_type == "MultiPolygon"

    def test_missing_file(self, tmp_path: Path) -> None:
        path = tmp_path / "missing.geojson"
        with pytest.raises(ConfigValidationError, match="cannot be read") as exc_info:
            load_initial_area(AppConfig(reference_area_path=str(path)))
        assert exc_info.value.key == "REFERENCE_AREA_PATH"

    def test_invalid_file(self, data_dir: Path) -> None:
        path = data_dir / "05_feature_linestring.geojson"
        with pytest.raises(GeoJsonValidationError):
            load_initial_area(AppConfig(reference_area_path=str(path)))

    def test_strict_flag_applied(self, data_dir: Path) -> None:
        path = data_dir / "07_feature_unclosed_ring.geojson"
        assert load_initial_area(AppConfig(reference_area_path=str(path))).geometry_type == "Polygon"
        with pytest.raises(GeoJsonValidationError):
            load_initial_area(AppConfig(reference_area_path=str(path), strict_rings=True))


class TestBuildService:
    def test_injected_geocoder(self, outside_geocoder: Any) -> None:
        service = build_service(AppConfig(), geocoder=outside_geocoder)
        assert service.active == default_reference_feature()
        assert service.verify_address("Market St").status is VerificationStatus.OUTSIDE

    def test_missing_api_key_still_starts(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.ERROR, logger="geoprotec.service.reference_area"):
            service = build_service(AppConfig(geocoding_api_key=""))
        assert service.active is not None
        assert "Geocoder unavailable" in caplog.text
        result = service.verify_address("Market St")
        assert result.status is VerificationStatus.ERROR
        assert "API key" in result.message

    def test_unknown_provider_still_starts(self) -> None:
        service = build_service(AppConfig(geocoding_provider="nominatim"))
        result = service.verify_address("Market St")
        assert result.status is VerificationStatus.ERROR
        assert "Unknown geocoding provider" in result.message

    def test_gemini_configured(self) -> None:
        service = build_service(AppConfig(geocoding_api_key="k"))
        assert service.active is not None
