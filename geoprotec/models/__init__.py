"""Data models.

Defines the data structures used throughout the package:
- LonLat / LatLon: storage-order and display-order positions
- Polygon / MultiPolygon: typed reference-area geometry
- Feature: validated GeoJSON Feature holding the reference area
- GeocodedPoint: an address resolved to a position
"""

from geoprotec.models.feature import Feature, GeocodedPoint
from geoprotec.models.geometry import (
    LatLon,
    LinearRing,
    LonLat,
    ModelValidationError,
    MultiPolygon,
    Polygon,
    Shape,
    iter_polygons,
    shape_from_geometry,
    to_display,
)

__all__ = [
    "Feature",
    "GeocodedPoint",
    "LatLon",
    "LinearRing",
    "LonLat",
    "ModelValidationError",
    "MultiPolygon",
    "Polygon",
    "Shape",
    "iter_polygons",
    "shape_from_geometry",
    "to_display",
]
