"""GeoJSON reference-area validation.

Turns untrusted operator text into a ``Feature`` holding a Polygon or
MultiPolygon, or fails with a ``GeoJsonValidationError`` whose ``kind``
names exactly what is wrong.

The validation pipeline is split into focused stages:
- **_normalization**: bytes/str decoding and strict JSON parsing
- **_selection**: root-type dispatch and first-match Feature selection
- **_validation**: geometry type, coordinate nesting, optional strict rings

Known limitations (default mode):
- Shape checking only: ring closure, minimum ring size, coordinate
  ranges and self-intersection are not checked. Enable ``strict`` to
  get ``UNCLOSED_RING``, ``DEGENERATE_RING`` and
  ``COORDINATE_OUT_OF_RANGE`` errors; self-intersection is never checked.
- Documents nested deeper than ``MAX_NESTING_DEPTH`` are rejected as
  ``MALFORMED_JSON``.
- Nothing is repaired: the returned Feature holds the geometry exactly
  as supplied.
"""

from __future__ import annotations

import logging

from geoprotec.geojson._constants import DEFAULT_MESSAGES, MAX_NESTING_DEPTH, ValidationErrorKind
from geoprotec.geojson._normalization import decode_text, nesting_depth, parse_json
from geoprotec.geojson._selection import is_polygonal_feature, select_candidate
from geoprotec.geojson._validation import (
    GeoJsonValidationError,
    validate_geometry,
    validate_ring,
    validate_rings_strict,
)
from geoprotec.models.feature import Feature

logger = logging.getLogger("geoprotec.geojson")

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    "DEFAULT_MESSAGES",
    "GeoJsonValidationError",
    "MAX_NESTING_DEPTH",
    "ValidationErrorKind",
    "decode_text",
    "is_polygonal_feature",
    "nesting_depth",
    "parse_json",
    "select_candidate",
    "validate_geojson",
    "validate_geometry",
    "validate_ring",
    "validate_rings_strict",
]


def validate_geojson(text: str | bytes | bytearray, *, strict: bool = False) -> Feature:
    """Validate operator GeoJSON and return the reference-area Feature.

    Args:
        text: Raw file contents (``bytes`` are decoded as UTF-8).
        strict: Also check every ring for closure, size and WGS 84 bounds.

    Returns:
        The selected Feature, geometry unchanged. Missing or null
        ``properties`` become ``{}``; any other value is kept as supplied.

    Raises:
        GeoJsonValidationError: On the first failing check; ``kind``
            identifies which.
    """
    document = parse_json(text)
    candidate, index = select_candidate(document)
    geometry = validate_geometry(candidate)
    if strict:
        validate_rings_strict(geometry)

    feature = Feature.from_dict(candidate)

    logger.info(
        "GeoJSON validated | geometry=%s | parts=%d | feature_index=%s | strict=%s",
        feature.geometry_type,
        len(geometry["coordinates"]),
        "root" if index is None else index,
        strict,
    )
    return feature
