"""Typed geometry model: positions, rings, polygons, multipolygons.

Two coordinate types exist on purpose:

- ``LonLat`` is *storage* order: the order of GeoJSON positions and the
  only order the validator and the containment engine ever see.
- ``LatLon`` is *display* order: what map widgets expect.

The only way to get from one to the other is ``to_display()``. Nothing
else in the package swaps axes.

Rings are plain tuples of ``LonLat`` (``LinearRing``). Ring closure and
minimum size are *not* enforced by the model; see the strict checks in
``geoprotec.geojson._validation``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, TypeAlias

from geoprotec.core.constants import (
    MAX_LATITUDE,
    MAX_LONGITUDE,
    MIN_LATITUDE,
    MIN_LONGITUDE,
    MULTI_POLYGON,
    POLYGON,
)
from geoprotec.core.exceptions import GeoProtecError

# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class ModelValidationError(ValueError, GeoProtecError):
    """Raised when a geometry model is constructed with invalid values.

    Attributes:
        model: Name of the model class that failed validation.
        field_name: The field that violated the invariant.
        value: The invalid value.
    """

    default_stage = "model_validation"
    default_code = "MODEL_VALIDATION_FAILED"

    def __init__(self, model: str, field_name: str, value: object, message: str) -> None:
        self.model = model
        self.field_name = field_name
        self.value = value
        formatted = f"{model}.{field_name}={value!r}: {message}"
        GeoProtecError.__init__(self, formatted)


def is_number(value: object) -> bool:
    """Return True for ints and floats (``bool`` is not a coordinate)."""
    return isinstance(value, int | float) and not isinstance(value, bool)


# ---------------------------------------------------------------------------
# Coordinates
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class LonLat:
    """A position in storage order ``(longitude, latitude)``.

    Both components must be finite. WGS 84 bounds are *not* enforced
    here (see ``in_wgs84_bounds``) so that planar test fixtures and
    out-of-range operator data can still be represented and reported.
    """

    lon: float
    lat: float

    def __post_init__(self) -> None:
        for name in ("lon", "lat"):
            value = getattr(self, name)
            if not is_number(value) or not math.isfinite(value):
                raise ModelValidationError("LonLat", name, value, "must be a finite number")

    @classmethod
    def from_position(cls, position: object) -> LonLat:
        """Build from a GeoJSON position ``[lon, lat, (alt)]``.

        Extra elements (altitude) are ignored.

        Raises:
            ModelValidationError: If the position is not a sequence of at
                least two finite numbers.
        """
        if not isinstance(position, list | tuple) or len(position) < 2:
            raise ModelValidationError(
                "LonLat", "position", position, "must be a [lon, lat] pair"
            )
        return cls(lon=position[0], lat=position[1])

    def in_wgs84_bounds(self) -> bool:
        """Whether the position lies within WGS 84 longitude/latitude ranges."""
        return MIN_LONGITUDE <= self.lon <= MAX_LONGITUDE and MIN_LATITUDE <= self.lat <= MAX_LATITUDE

    def to_position(self) -> list[float]:
        """Return the GeoJSON position ``[lon, lat]``."""
        return [self.lon, self.lat]


@dataclass(frozen=True, slots=True)
class LatLon:
    """A position in display order ``(latitude, longitude)``."""

    lat: float
    lon: float

    def to_list(self) -> list[float]:
        """Return ``[lat, lon]`` as map widgets expect it."""
        return [self.lat, self.lon]


def to_display(point: LonLat) -> LatLon:
    """Convert a storage-order position to display order."""
    return LatLon(lat=point.lat, lon=point.lon)


LinearRing: TypeAlias = tuple[LonLat, ...]


def ring_from_positions(positions: object, *, model: str = "LinearRing") -> LinearRing:
    """Convert a raw GeoJSON ring (list of positions) to a ``LinearRing``.

    Raises:
        ModelValidationError: If the ring is not a list or any position is invalid.
    """
    if not isinstance(positions, list | tuple):
        raise ModelValidationError(model, "ring", positions, "must be a list of positions")
    return tuple(LonLat.from_position(p) for p in positions)


# ---------------------------------------------------------------------------
# Polygons
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Polygon:
    """One exterior ring plus zero or more hole rings.

    Attributes:
        exterior: Outer boundary.
        holes: Interior rings, each nested inside ``exterior``.
    """

    exterior: LinearRing
    holes: tuple[LinearRing, ...] = field(default_factory=tuple)

    @property
    def rings(self) -> tuple[LinearRing, ...]:
        """Exterior ring followed by the holes."""
        return (self.exterior, *self.holes)

    @classmethod
    def from_coordinates(cls, coordinates: object) -> Polygon:
        """Build from GeoJSON Polygon ``coordinates`` (list of rings).

        Raises:
            ModelValidationError: If the nesting or any position is invalid.
        """
        if not isinstance(coordinates, list | tuple) or not coordinates:
            raise ModelValidationError(
                "Polygon", "coordinates", coordinates, "must be a non-empty list of rings"
            )
        rings = [ring_from_positions(r, model="Polygon") for r in coordinates]
        return cls(exterior=rings[0], holes=tuple(rings[1:]))


@dataclass(frozen=True, slots=True)
class MultiPolygon:
    """A non-empty set of polygons."""

    polygons: tuple[Polygon, ...]

    def __post_init__(self) -> None:
        if not self.polygons:
            raise ModelValidationError("MultiPolygon", "polygons", self.polygons, "must not be empty")

    @classmethod
    def from_coordinates(cls, coordinates: object) -> MultiPolygon:
        """Build from GeoJSON MultiPolygon ``coordinates`` (list of polygons).

        Raises:
            ModelValidationError: If the nesting or any position is invalid.
        """
        if not isinstance(coordinates, list | tuple):
            raise ModelValidationError(
                "MultiPolygon", "coordinates", coordinates, "must be a list of polygons"
            )
        return cls(polygons=tuple(Polygon.from_coordinates(c) for c in coordinates))


Shape: TypeAlias = Polygon | MultiPolygon


def shape_from_geometry(geometry: dict[str, Any]) -> Shape:
    """Build a typed shape from a GeoJSON geometry mapping.

    Raises:
        ModelValidationError: If the type is not Polygon/MultiPolygon or
            the coordinates are structurally invalid.
    """
    geometry_type = geometry.get("type") if isinstance(geometry, dict) else None
    if geometry_type == POLYGON:
        return Polygon.from_coordinates(geometry.get("coordinates"))
    if geometry_type == MULTI_POLYGON:
        return MultiPolygon.from_coordinates(geometry.get("coordinates"))
    raise ModelValidationError("Shape", "type", geometry_type, "must be Polygon or MultiPolygon")


def iter_polygons(shape: Shape) -> tuple[Polygon, ...]:
    """Return the member polygons of a shape (a Polygon is its own single member)."""
    if isinstance(shape, MultiPolygon):
        return shape.polygons
    return (shape,)
