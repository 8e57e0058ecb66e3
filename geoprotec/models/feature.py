"""GeoJSON Feature models.

``Feature`` is what the validator returns and what the reference-area
service holds as the active area: a Polygon or MultiPolygon geometry,
kept exactly as the operator supplied it, plus its properties.

``GeocodedPoint`` is the result of resolving an address: a storage-order
position plus the address strings the geocoder echoed back.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any

from geoprotec.core.constants import FEATURE, POINT
from geoprotec.models.geometry import LonLat, Shape, shape_from_geometry

_RESERVED_MEMBERS = frozenset({"type", "geometry", "properties"})


@dataclass(frozen=True, slots=True)
class Feature:
    """A GeoJSON Feature whose geometry is a Polygon or MultiPolygon.

    The geometry mapping is stored as parsed; the validator checks its
    shape but never rewrites it. ``shape`` builds the typed model on
    demand.

    Attributes:
        geometry: GeoJSON geometry object (``type`` + ``coordinates``).
        properties: Open-ended properties, normally a mapping (``{}`` when
            absent or null). Other JSON values are kept as supplied.
        foreign_members: Any other top-level members (``id``, ``bbox``, ...).
    """

    geometry: dict[str, Any]
    properties: Any = field(default_factory=dict)
    foreign_members: dict[str, Any] = field(default_factory=dict)

    @property
    def geometry_type(self) -> str:
        """The geometry ``type`` (``"Polygon"`` or ``"MultiPolygon"``)."""
        return str(self.geometry.get("type", ""))

    @property
    def shape(self) -> Shape:
        """Typed Polygon/MultiPolygon built from the geometry coordinates.

        Raises:
            ModelValidationError: If the coordinates cannot be converted.
        """
        return shape_from_geometry(self.geometry)

    def to_dict(self) -> dict[str, Any]:
        """Serialise back to a GeoJSON Feature object."""
        return {
            "type": FEATURE,
            **copy.deepcopy(self.foreign_members),
            "geometry": copy.deepcopy(self.geometry),
            "properties": copy.deepcopy(self.properties),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Feature:
        """Build from a parsed GeoJSON Feature object.

        The caller is responsible for having validated the geometry.

        Raises:
            TypeError: If ``geometry`` is not an object.
        """
        geometry = data.get("geometry")
        if not isinstance(geometry, dict):
            msg = f"geometry must be an object, got {type(geometry).__name__}"
            raise TypeError(msg)

        properties = data.get("properties")
        if properties is None:
            properties = {}

        return cls(
            geometry=geometry,
            properties=properties,
            foreign_members={k: v for k, v in data.items() if k not in _RESERVED_MEMBERS},
        )


@dataclass(frozen=True, slots=True)
class GeocodedPoint:
    """An address resolved to a position.

    Attributes:
        position: Storage-order ``(lon, lat)`` position.
        query: The address text that was looked up.
        full_address: The normalised address reported by the geocoder.
    """

    position: LonLat
    query: str = ""
    full_address: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Serialise as a GeoJSON Point Feature."""
        return {
            "type": FEATURE,
            "geometry": {"type": POINT, "coordinates": self.position.to_position()},
            "properties": {"query": self.query, "fullAddress": self.full_address},
        }
