"""Representative point of a reference area, for map centering only.

The representative point is simply the first position of the first ring
of the first polygon. It is a display hint and never takes part in a
containment decision, so a structurally absent path falls back to
``(0, 0)`` with a warning instead of raising.
"""

from __future__ import annotations

import logging
from typing import Any

from geoprotec.core.constants import FALLBACK_CENTER, MULTI_POLYGON, POLYGON
from geoprotec.models.feature import Feature
from geoprotec.models.geometry import (
    LatLon,
    LonLat,
    ModelValidationError,
    MultiPolygon,
    Polygon,
    to_display,
)

logger = logging.getLogger("geoprotec.engine.center")


def representative_point(shape: Polygon | MultiPolygon | Feature | dict[str, Any]) -> LonLat:
    """Return the first position of the first ring of the first polygon.

    Accepts a typed shape, a ``Feature`` or a raw GeoJSON geometry.
    Returns ``(0, 0)`` when that position does not exist or is not a
    pair of finite numbers.
    """
    if isinstance(shape, Polygon):
        if shape.exterior:
            return shape.exterior[0]
    elif isinstance(shape, MultiPolygon):
        first = shape.polygons[0].exterior
        if first:
            return first[0]
    else:
        geometry = shape.geometry if isinstance(shape, Feature) else shape
        point = _first_raw_position(geometry)
        if point is not None:
            return point

    logger.warning(
        "Could not determine representative point, using fallback %s | shape=%s",
        FALLBACK_CENTER,
        type(shape).__name__,
    )
    return LonLat(*FALLBACK_CENTER)


def display_center(shape: Polygon | MultiPolygon | Feature | dict[str, Any]) -> LatLon:
    """Representative point in display order ``(lat, lon)``."""
    return to_display(representative_point(shape))


def _first_raw_position(geometry: object) -> LonLat | None:
    if not isinstance(geometry, dict):
        return None
    geometry_type = geometry.get("type")
    node: Any = geometry.get("coordinates")
    if geometry_type == POLYGON:
        depth = 2
    elif geometry_type == MULTI_POLYGON:
        depth = 3
    else:
        return None

    for _ in range(depth):
        if not isinstance(node, list) or not node:
            return None
        node = node[0]
    try:
        return LonLat.from_position(node)
    except ModelValidationError:
        return None
