"""Shared constants for GeoJSON validation."""

from __future__ import annotations

import enum


class ValidationErrorKind(enum.Enum):
    """Closed set of reasons operator GeoJSON can be rejected.

    The first nine kinds are structural and always checked. The last
    three are only raised when strict ring validation is enabled.
    """

    MALFORMED_JSON = "malformed_json"
    UNSUPPORTED_ROOT_TYPE = "unsupported_root_type"
    EMPTY_COLLECTION = "empty_collection"
    NO_POLYGON_FEATURE = "no_polygon_feature"
    MISSING_GEOMETRY = "missing_geometry"
    UNSUPPORTED_GEOMETRY_TYPE = "unsupported_geometry_type"
    MISSING_COORDINATES = "missing_coordinates"
    MALFORMED_POLYGON_COORDINATES = "malformed_polygon_coordinates"
    MALFORMED_MULTIPOLYGON_COORDINATES = "malformed_multipolygon_coordinates"
    # strict mode
    COORDINATE_OUT_OF_RANGE = "coordinate_out_of_range"
    DEGENERATE_RING = "degenerate_ring"
    UNCLOSED_RING = "unclosed_ring"

    @property
    def code(self) -> str:
        """Stable machine-readable error code (e.g. ``GEOJSON_MALFORMED_JSON``)."""
        return f"GEOJSON_{self.name}"


# Default operator-facing messages, one per kind. Call sites may append
# context (feature index, ring index) to these.
DEFAULT_MESSAGES: dict[ValidationErrorKind, str] = {
    ValidationErrorKind.MALFORMED_JSON: "The file is not valid JSON.",
    ValidationErrorKind.UNSUPPORTED_ROOT_TYPE: (
        "GeoJSON must be a 'Feature' (with Polygon/MultiPolygon geometry) or a "
        "'FeatureCollection' containing at least one such Feature."
    ),
    ValidationErrorKind.EMPTY_COLLECTION: (
        "A GeoJSON 'FeatureCollection' must have a 'features' property that is a "
        "non-empty array of Features."
    ),
    ValidationErrorKind.NO_POLYGON_FEATURE: (
        "The 'FeatureCollection' does not contain any 'Feature' with a 'Polygon' "
        "or 'MultiPolygon' geometry."
    ),
    ValidationErrorKind.MISSING_GEOMETRY: "The selected 'Feature' must have a 'geometry' property.",
    ValidationErrorKind.UNSUPPORTED_GEOMETRY_TYPE: (
        "The geometry of the selected 'Feature' must be of type 'Polygon' or 'MultiPolygon'."
    ),
    ValidationErrorKind.MISSING_COORDINATES: (
        "The geometry of the selected 'Feature' must have coordinates."
    ),
    ValidationErrorKind.MALFORMED_POLYGON_COORDINATES: (
        "The Polygon coordinates of the selected 'Feature' are malformed."
    ),
    ValidationErrorKind.MALFORMED_MULTIPOLYGON_COORDINATES: (
        "The MultiPolygon coordinates of the selected 'Feature' are malformed."
    ),
    ValidationErrorKind.COORDINATE_OUT_OF_RANGE: (
        "A coordinate lies outside WGS 84 bounds (longitude [-180, 180], latitude [-90, 90])."
    ),
    ValidationErrorKind.DEGENERATE_RING: (
        "A ring has fewer than 4 positions or fewer than 3 distinct positions."
    ),
    ValidationErrorKind.UNCLOSED_RING: "A ring is not closed (first and last positions differ).",
}

# Deepest array/object nesting accepted in an uploaded document. A
# FeatureCollection holding a MultiPolygon needs 8; the rest is headroom
# for nested properties.
MAX_NESTING_DEPTH = 64
