"""Shared constants: single source of truth.

Centralises GeoJSON type names, coordinate bounds and display
fallbacks that would otherwise be repeated across the validator, the
engine and the service layer.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# GeoJSON type names (RFC 7946)
# ---------------------------------------------------------------------------

FEATURE = "Feature"
FEATURE_COLLECTION = "FeatureCollection"
POLYGON = "Polygon"
MULTI_POLYGON = "MultiPolygon"
POINT = "Point"

POLYGONAL_TYPES: frozenset[str] = frozenset({POLYGON, MULTI_POLYGON})
"""Geometry types accepted as a reference area."""

# ---------------------------------------------------------------------------
# WGS 84 coordinate bounds
# ---------------------------------------------------------------------------

MIN_LONGITUDE = -180.0
MAX_LONGITUDE = 180.0
MIN_LATITUDE = -90.0
MAX_LATITUDE = 90.0

# Minimum positions for a closed ring (3 distinct + closing = 4)
MIN_RING_POSITIONS = 4

# Minimum positions the containment engine can evaluate
MIN_EVALUABLE_RING_POSITIONS = 3

# ---------------------------------------------------------------------------
# Display
# ---------------------------------------------------------------------------

FALLBACK_CENTER: tuple[float, float] = (0.0, 0.0)
"""Representative point used when a shape has no reachable first coordinate."""
