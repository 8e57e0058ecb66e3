"""Point-in-polygon containment.

Ray casting with the even-odd rule, evaluated per ring: a horizontal ray
is cast from the point towards increasing longitude and edge crossings
are counted; an odd count means the point is inside the ring.

Boundary policy is *inclusive*. Before counting crossings every edge is
tested for the point lying on it (within ``EDGE_EPSILON`` degrees), and
such a point is reported as inside. This applies to hole rings too: a
point on a hole's edge lies on the polygon boundary and is inside.

Arithmetic is planar: longitude and latitude are treated as Cartesian
x and y. That is accurate enough at city/metro scale but wrong near the
poles and for shapes that cross the antimeridian.
"""

from __future__ import annotations

import enum
import math
from typing import Any

from geoprotec.core.constants import MIN_EVALUABLE_RING_POSITIONS
from geoprotec.core.exceptions import ContractError
from geoprotec.models.feature import Feature
from geoprotec.models.geometry import (
    LinearRing,
    LonLat,
    ModelValidationError,
    MultiPolygon,
    Polygon,
    Shape,
    iter_polygons,
    shape_from_geometry,
)

# Maximum perpendicular distance (degrees) at which a point counts as on an edge.
EDGE_EPSILON = 1e-12


class ContainmentError(ContractError):
    """Raised when a shape cannot be evaluated (structurally invalid geometry)."""

    default_stage = "containment"
    default_code = "CONTAINMENT_FAILED"


class RingLocation(enum.Enum):
    """Where a point lies relative to a single ring."""

    INSIDE = "inside"
    OUTSIDE = "outside"
    BOUNDARY = "boundary"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def contains(point: LonLat | tuple[float, float] | list[float], shape: object) -> bool:
    """Return True if *point* lies inside or on the boundary of *shape*.

    Args:
        point: Storage-order ``LonLat`` (or a ``(lon, lat)`` pair).
        shape: A ``Polygon``, ``MultiPolygon``, ``Feature`` or raw GeoJSON
            geometry mapping.

    Raises:
        ContainmentError: If the point or shape is structurally invalid,
            e.g. a ring with fewer than 3 positions.
    """
    target = _coerce_point(point)
    for polygon in iter_polygons(_coerce_shape(shape)):
        if polygon_contains(target, polygon):
            return True
    return False


def polygon_contains(point: LonLat, polygon: Polygon) -> bool:
    """Inside (or on) the exterior ring and not strictly inside any hole.

    Raises:
        ContainmentError: If any ring has fewer than 3 positions.
    """
    location = locate_in_ring(point, polygon.exterior)
    if location is RingLocation.OUTSIDE:
        return False
    if location is RingLocation.BOUNDARY:
        return True
    return all(locate_in_ring(point, hole) is not RingLocation.INSIDE for hole in polygon.holes)


def locate_in_ring(point: LonLat, ring: LinearRing) -> RingLocation:
    """Classify *point* against a single ring.

    The ring is treated as closed whether or not its last position
    repeats the first.

    Raises:
        ContainmentError: If the ring has fewer than 3 positions.
    """
    n = len(ring)
    if n < MIN_EVALUABLE_RING_POSITIONS:
        msg = f"Ring has {n} position(s), need at least {MIN_EVALUABLE_RING_POSITIONS}"
        raise ContainmentError(msg)

    px, py = point.lon, point.lat
    inside = False
    for i in range(n):
        a = ring[i]
        b = ring[(i + 1) % n]
        if _on_segment(px, py, a.lon, a.lat, b.lon, b.lat):
            return RingLocation.BOUNDARY
        if (a.lat > py) != (b.lat > py):
            x_cross = a.lon + (py - a.lat) * (b.lon - a.lon) / (b.lat - a.lat)
            if px < x_cross:
                inside = not inside
    return RingLocation.INSIDE if inside else RingLocation.OUTSIDE


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _on_segment(px: float, py: float, ax: float, ay: float, bx: float, by: float) -> bool:
    dx, dy = bx - ax, by - ay
    length = math.hypot(dx, dy)
    if length == 0.0:
        return abs(px - ax) <= EDGE_EPSILON and abs(py - ay) <= EDGE_EPSILON
    # cross product = length * perpendicular distance
    if abs(dx * (py - ay) - dy * (px - ax)) > EDGE_EPSILON * length:
        return False
    return (
        min(ax, bx) - EDGE_EPSILON <= px <= max(ax, bx) + EDGE_EPSILON
        and min(ay, by) - EDGE_EPSILON <= py <= max(ay, by) + EDGE_EPSILON
    )


def _coerce_point(point: object) -> LonLat:
    if isinstance(point, LonLat):
        return point
    try:
        return LonLat.from_position(point)
    except ModelValidationError as exc:
        msg = f"Invalid point: {exc}"
        raise ContainmentError(msg) from exc


def _coerce_shape(shape: object) -> Shape:
    if isinstance(shape, Polygon | MultiPolygon):
        return shape
    geometry: Any = shape.geometry if isinstance(shape, Feature) else shape
    try:
        return shape_from_geometry(geometry)
    except ModelValidationError as exc:
        msg = f"Invalid shape: {exc}"
        raise ContainmentError(msg) from exc
