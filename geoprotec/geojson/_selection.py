"""Candidate selection: which Feature in the document is the reference area.

A bare ``Feature`` is its own candidate. In a ``FeatureCollection`` the
candidate is the *first* member, in array order, that is a Feature with
a Polygon or MultiPolygon geometry. There is no "best match" heuristic;
later members are never looked at once a candidate is found, even if
the candidate then fails the coordinate checks.
"""

from __future__ import annotations

import logging
from typing import Any

from geoprotec.core.constants import FEATURE, FEATURE_COLLECTION, POLYGONAL_TYPES
from geoprotec.geojson._constants import DEFAULT_MESSAGES, ValidationErrorKind
from geoprotec.geojson._validation import GeoJsonValidationError

logger = logging.getLogger("geoprotec.geojson")


def is_polygonal_feature(item: object) -> bool:
    """Whether *item* is a Feature whose geometry type is Polygon or MultiPolygon."""
    if not isinstance(item, dict) or item.get("type") != FEATURE:
        return False
    geometry = item.get("geometry")
    return isinstance(geometry, dict) and geometry.get("type") in POLYGONAL_TYPES


def select_candidate(document: Any) -> tuple[dict[str, Any], int | None]:
    """Pick the Feature to validate from a parsed GeoJSON document.

    Returns:
        ``(feature, index)`` where ``index`` is the position in the
        collection, or ``None`` when the root itself is the Feature.

    Raises:
        GeoJsonValidationError: ``UNSUPPORTED_ROOT_TYPE``,
            ``EMPTY_COLLECTION`` or ``NO_POLYGON_FEATURE``.
    """
    root_type = document.get("type") if isinstance(document, dict) else None

    if root_type == FEATURE:
        return document, None

    if root_type == FEATURE_COLLECTION:
        features = document.get("features")
        if not isinstance(features, list) or not features:
            raise GeoJsonValidationError(ValidationErrorKind.EMPTY_COLLECTION)

        for index, item in enumerate(features):
            if is_polygonal_feature(item):
                if index:
                    logger.info(
                        "Selected feature %d of %d from FeatureCollection",
                        index,
                        len(features),
                    )
                return item, index

        raise GeoJsonValidationError(
            ValidationErrorKind.NO_POLYGON_FEATURE,
            f"{DEFAULT_MESSAGES[ValidationErrorKind.NO_POLYGON_FEATURE]} "
            f"Scanned {len(features)} feature(s).",
        )

    got = root_type if root_type is not None else type(document).__name__
    raise GeoJsonValidationError(
        ValidationErrorKind.UNSUPPORTED_ROOT_TYPE,
        f"{DEFAULT_MESSAGES[ValidationErrorKind.UNSUPPORTED_ROOT_TYPE]} Got {got!r}.",
    )
