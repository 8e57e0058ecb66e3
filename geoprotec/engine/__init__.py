"""Geometry engine.

- containment: boundary-inclusive ray-casting point-in-polygon test
- center: representative point for map centering
"""

from geoprotec.engine.center import display_center, representative_point
from geoprotec.engine.containment import (
    EDGE_EPSILON,
    ContainmentError,
    RingLocation,
    contains,
    locate_in_ring,
    polygon_contains,
)

__all__ = [
    "EDGE_EPSILON",
    "ContainmentError",
    "RingLocation",
    "contains",
    "display_center",
    "locate_in_ring",
    "polygon_contains",
    "representative_point",
]
