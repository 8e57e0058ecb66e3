"""Validation helpers for GeoJSON reference areas.

Responsibilities:
- Geometry presence, type and coordinate-nesting checks (always on)
- Ring closure, ring size and WGS 84 bounds checks (strict mode only)

Structural checks look only as deep as the first position: they prove
the document *looks like* a Polygon or MultiPolygon, not that every ring
is usable. Strict mode walks every position. Neither mode repairs or
auto-closes anything.
"""

from __future__ import annotations

import math
from typing import Any

from geoprotec.core.constants import (
    MAX_LATITUDE,
    MAX_LONGITUDE,
    MIN_LATITUDE,
    MIN_LONGITUDE,
    MIN_RING_POSITIONS,
    MULTI_POLYGON,
    POLYGON,
    POLYGONAL_TYPES,
)
from geoprotec.core.exceptions import ValidationError
from geoprotec.geojson._constants import DEFAULT_MESSAGES, ValidationErrorKind
from geoprotec.models.geometry import is_number

# ---------------------------------------------------------------------------
# Exceptions (public API, re-exported from __init__)
# ---------------------------------------------------------------------------


class GeoJsonValidationError(ValidationError):
    """Raised when operator GeoJSON cannot become the reference area.

    Attributes:
        kind: Which check failed.
        message: Operator-facing description, specific enough to fix the file.
    """

    default_stage = "validate_geojson"

    def __init__(self, kind: ValidationErrorKind, message: str = "", **kwargs: object) -> None:
        self.kind = kind
        kwargs.setdefault("code", kind.code)
        super().__init__(message or DEFAULT_MESSAGES[kind], **kwargs)

    def to_error_dict(self) -> dict[str, object]:
        """Structured payload, including the ``kind`` value."""
        payload = super().to_error_dict()
        payload["kind"] = self.kind.value
        return payload


def _fail(kind: ValidationErrorKind, detail: str = "") -> GeoJsonValidationError:
    message = DEFAULT_MESSAGES[kind]
    if detail:
        message = f"{message} {detail}"
    return GeoJsonValidationError(kind, message)


def _is_position(value: object) -> bool:
    return isinstance(value, list) and len(value) >= 2


# ---------------------------------------------------------------------------
# Structural checks
# ---------------------------------------------------------------------------


def validate_geometry(candidate: dict[str, Any]) -> dict[str, Any]:
    """Check geometry presence, type and coordinate nesting on a Feature.

    Returns the geometry mapping.

    Raises:
        GeoJsonValidationError: ``MISSING_GEOMETRY``,
            ``UNSUPPORTED_GEOMETRY_TYPE``, ``MISSING_COORDINATES``,
            ``MALFORMED_POLYGON_COORDINATES`` or
            ``MALFORMED_MULTIPOLYGON_COORDINATES``.
    """
    geometry = candidate.get("geometry")
    if geometry is None:
        raise _fail(ValidationErrorKind.MISSING_GEOMETRY)
    if not isinstance(geometry, dict):
        raise _fail(
            ValidationErrorKind.UNSUPPORTED_GEOMETRY_TYPE,
            f"Got a {type(geometry).__name__} instead of a geometry object.",
        )

    geometry_type = geometry.get("type")
    if geometry_type not in POLYGONAL_TYPES:
        raise _fail(ValidationErrorKind.UNSUPPORTED_GEOMETRY_TYPE, f"Got {geometry_type!r}.")

    coordinates = geometry.get("coordinates")
    if not coordinates:
        raise _fail(ValidationErrorKind.MISSING_COORDINATES)

    if geometry_type == POLYGON:
        _check_polygon_depth(coordinates)
    else:
        _check_multipolygon_depth(coordinates)
    return geometry


def _check_polygon_depth(coordinates: object) -> None:
    """``coordinates[0][0]`` must be a position."""
    ok = (
        isinstance(coordinates, list)
        and isinstance(coordinates[0], list)
        and len(coordinates[0]) > 0
        and _is_position(coordinates[0][0])
    )
    if not ok:
        raise _fail(ValidationErrorKind.MALFORMED_POLYGON_COORDINATES)


def _check_multipolygon_depth(coordinates: object) -> None:
    """``coordinates[0][0][0]`` must be a position."""
    ok = (
        isinstance(coordinates, list)
        and isinstance(coordinates[0], list)
        and len(coordinates[0]) > 0
        and isinstance(coordinates[0][0], list)
        and len(coordinates[0][0]) > 0
        and _is_position(coordinates[0][0][0])
    )
    if not ok:
        raise _fail(ValidationErrorKind.MALFORMED_MULTIPOLYGON_COORDINATES)


# ---------------------------------------------------------------------------
# Strict ring checks
# ---------------------------------------------------------------------------


def validate_rings_strict(geometry: dict[str, Any]) -> None:
    """Walk every ring of a structurally valid geometry.

    Raises:
        GeoJsonValidationError: ``MALFORMED_*_COORDINATES`` for a bad
            position or nesting, ``COORDINATE_OUT_OF_RANGE``,
            ``DEGENERATE_RING`` or ``UNCLOSED_RING``.
    """
    if geometry["type"] == MULTI_POLYGON:
        malformed = ValidationErrorKind.MALFORMED_MULTIPOLYGON_COORDINATES
        polygons = geometry["coordinates"]
    else:
        malformed = ValidationErrorKind.MALFORMED_POLYGON_COORDINATES
        polygons = [geometry["coordinates"]]

    for p_idx, rings in enumerate(polygons):
        if not isinstance(rings, list) or not rings:
            raise _fail(malformed, f"Polygon {p_idx} has no rings.")
        for r_idx, ring in enumerate(rings):
            where = f"(polygon {p_idx}, ring {r_idx})"
            if not isinstance(ring, list):
                raise _fail(malformed, f"Ring is not an array {where}.")
            validate_ring(ring, malformed=malformed, where=where)


def validate_ring(
    ring: list[Any],
    *,
    malformed: ValidationErrorKind = ValidationErrorKind.MALFORMED_POLYGON_COORDINATES,
    where: str = "",
) -> None:
    """Validate a single ring's positions, bounds, size and closure.

    Raises:
        GeoJsonValidationError: On the first failing check.
    """
    suffix = f" {where}" if where else ""
    pairs: list[tuple[float, float]] = []
    for position in ring:
        if not (
            _is_position(position)
            and is_number(position[0])
            and is_number(position[1])
            and math.isfinite(position[0])
            and math.isfinite(position[1])
        ):
            raise _fail(malformed, f"Invalid position {position!r}{suffix}.")
        lon, lat = position[0], position[1]
        if not (MIN_LONGITUDE <= lon <= MAX_LONGITUDE and MIN_LATITUDE <= lat <= MAX_LATITUDE):
            raise _fail(
                ValidationErrorKind.COORDINATE_OUT_OF_RANGE,
                f"Got [{lon}, {lat}]{suffix}.",
            )
        pairs.append((float(lon), float(lat)))

    if len(pairs) < MIN_RING_POSITIONS or len(set(pairs)) < 3:
        raise _fail(
            ValidationErrorKind.DEGENERATE_RING,
            f"Got {len(pairs)} position(s), {len(set(pairs))} distinct{suffix}.",
        )

    if pairs[0] != pairs[-1]:
        raise _fail(ValidationErrorKind.UNCLOSED_RING, f"{pairs[0]} != {pairs[-1]}{suffix}.")
