"""Reference-area service: the active area slot and address verification.

Holds exactly one active reference ``Feature``. ``load()`` validates
operator GeoJSON and swaps the whole value in one assignment; a failed
load leaves the previous area in place. ``verify_address()`` geocodes an
address through the injected ``GeocodingGateway`` and tests the point
against the area snapshot taken at the start of the call.

Every outcome of a verification, including failures, is reported as a
``VerificationResult`` with a ``VerificationStatus``; callers never need
to catch exceptions or read message text to decide what to show.
"""

from __future__ import annotations

import copy
import enum
import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from geoprotec.core.config import ConfigValidationError
from geoprotec.engine.center import display_center
from geoprotec.engine.containment import ContainmentError, contains
from geoprotec.geocoding.base import GeocodeFailureReason, GeocodingConfigError, GeocodingError
from geoprotec.geocoding.factory import get_geocoder
from geoprotec.geojson import validate_geojson
from geoprotec.models.feature import Feature
from geoprotec.models.geometry import to_display
from geoprotec.utils.helpers import build_geocoder_config

if TYPE_CHECKING:
    from geoprotec.core.config import AppConfig
    from geoprotec.geocoding.base import GeocodingGateway
    from geoprotec.models.feature import GeocodedPoint
    from geoprotec.models.geometry import LatLon

logger = logging.getLogger("geoprotec.service.reference_area")

# Reasons that mean "the address could not be placed" rather than "the service failed".
_ADDRESS_REASONS = frozenset(
    {GeocodeFailureReason.NOT_FOUND, GeocodeFailureReason.AMBIGUOUS_OR_INVALID_RESPONSE}
)


class VerificationStatus(enum.Enum):
    """Outcome of one address verification."""

    INSIDE = "inside"
    OUTSIDE = "outside"
    ADDRESS_NOT_FOUND = "address_not_found"
    NO_POLYGON = "no_polygon"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class VerificationResult:
    """Result of ``ReferenceAreaService.verify_address``.

    Attributes:
        status: What happened.
        message: User-facing explanation (empty for INSIDE/OUTSIDE).
        point: The geocoded point, when geocoding succeeded.
        center: Display-order map center for the result (the point).
        error: Structured error payload for failures, if any.
    """

    status: VerificationStatus
    message: str = ""
    point: GeocodedPoint | None = None
    center: LatLon | None = None
    error: dict[str, object] | None = None

    @property
    def is_inside(self) -> bool:
        return self.status is VerificationStatus.INSIDE

    def to_dict(self) -> dict[str, Any]:
        """Serialise for an HTTP response."""
        return {
            "status": self.status.value,
            "message": self.message,
            "point": self.point.to_dict() if self.point is not None else None,
            "center": self.center.to_list() if self.center is not None else None,
            "error": self.error,
        }


class ReferenceAreaService:
    """Owns the single active reference area.

    Args:
        geocoder: Address resolver; ``None`` when geocoding is not
            configured, in which case verifications report ``ERROR``.
        initial: Area active from construction (may be ``None``).
        strict: Apply strict ring validation to loaded GeoJSON.
        geocoder_unavailable: Explanation reported when ``geocoder`` is ``None``.
    """

    def __init__(
        self,
        geocoder: GeocodingGateway | None = None,
        *,
        initial: Feature | None = None,
        strict: bool = False,
        geocoder_unavailable: str = "",
    ) -> None:
        self._geocoder = geocoder
        self._strict = strict
        self._geocoder_unavailable = geocoder_unavailable or "Geocoding service is not configured."
        self._active: Feature | None = initial
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Active area
    # ------------------------------------------------------------------

    @property
    def active(self) -> Feature | None:
        """The active reference area, or ``None``."""
        with self._lock:
            return self._active

    def validate(self, text: str | bytes) -> Feature:
        """Validate operator GeoJSON with this service's ring policy; nothing is swapped.

        Raises:
            GeoJsonValidationError: If *text* is not an acceptable area.
        """
        return validate_geojson(text, strict=self._strict)

    def load(self, text: str | bytes) -> Feature:
        """Validate operator GeoJSON and make it the active area.

        Raises:
            GeoJsonValidationError: The previous area stays active.
        """
        feature = self.validate(text)
        self.replace(feature)
        return feature

    def replace(self, feature: Feature) -> None:
        """Swap in an already validated Feature."""
        with self._lock:
            self._active = feature
        logger.info(
            "Reference area replaced | geometry=%s | parts=%d",
            feature.geometry_type,
            len(feature.geometry.get("coordinates", [])),
        )

    def clear(self) -> None:
        """Drop the active area."""
        with self._lock:
            self._active = None
        logger.info("Reference area cleared")

    @staticmethod
    def summarize(feature: Feature) -> dict[str, Any]:
        """*feature* as GeoJSON plus its display-order map center."""
        return {"feature": feature.to_dict(), "center": display_center(feature).to_list()}

    def describe(self) -> dict[str, Any] | None:
        """Summary of the active area, or ``None``."""
        area = self.active
        if area is None:
            return None
        return self.summarize(area)

    # ------------------------------------------------------------------
    # Verification
    # ------------------------------------------------------------------

    def verify_address(self, address: str) -> VerificationResult:
        """Geocode *address* and test it against the active area."""
        area = self.active
        if area is None:
            return VerificationResult(
                VerificationStatus.NO_POLYGON,
                "No reference area is loaded. Please contact the administrator.",
            )
        if not address.strip():
            return VerificationResult(
                VerificationStatus.ERROR,
                "Please enter a street name and number.",
            )
        if self._geocoder is None:
            return VerificationResult(VerificationStatus.ERROR, self._geocoder_unavailable)

        try:
            point = self._geocoder.geocode(address)
        except GeocodingError as exc:
            status = (
                VerificationStatus.ADDRESS_NOT_FOUND
                if exc.reason in _ADDRESS_REASONS
                else VerificationStatus.ERROR
            )
            logger.warning(
                "Verification failed at geocoding | status=%s | reason=%s",
                status.value,
                exc.reason.value,
            )
            return VerificationResult(status, exc.message, error=exc.to_error_dict())

        center = to_display(point.position)
        try:
            inside = contains(point.position, area)
        except ContainmentError as exc:
            logger.error("Containment check failed | error=%s", exc.message)
            return VerificationResult(
                VerificationStatus.ERROR,
                "The reference area could not be evaluated. Please contact the administrator.",
                point=point,
                center=center,
                error=exc.to_error_dict(),
            )

        status = VerificationStatus.INSIDE if inside else VerificationStatus.OUTSIDE
        logger.info(
            "Address verified | status=%s | lon=%.6f | lat=%.6f",
            status.value,
            point.position.lon,
            point.position.lat,
        )
        return VerificationResult(status, point=point, center=center)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

_DEFAULT_AREA: dict[str, Any] = {
    "type": "Feature",
    "properties": {"name": "San Francisco"},
    "geometry": {
        "type": "Polygon",
        "coordinates": [
            [
                [-122.51821015840398, 37.77864696973343],
                [-122.38500092988835, 37.81093199859016],
                [-122.36836884981023, 37.71618731302061],
                [-122.48425935273992, 37.70660609049008],
                [-122.51821015840398, 37.77864696973343],
            ]
        ],
    },
}


def default_reference_feature() -> Feature:
    """The built-in initial reference area (central San Francisco)."""
    return Feature.from_dict(copy.deepcopy(_DEFAULT_AREA))


def load_initial_area(config: AppConfig) -> Feature:
    """Initial area from ``REFERENCE_AREA_PATH``, or the built-in default.

    Raises:
        ConfigValidationError: If the configured file cannot be read.
        GeoJsonValidationError: If the configured file is not a valid area.
    """
    if not config.reference_area_path:
        return default_reference_feature()

    path = Path(config.reference_area_path)
    try:
        content = path.read_bytes()
    except OSError as exc:
        raise ConfigValidationError(
            "REFERENCE_AREA_PATH", config.reference_area_path, f"cannot be read: {exc}"
        ) from exc
    feature = validate_geojson(content, strict=config.strict_rings)
    logger.info("Initial reference area loaded | path=%s", path.name)
    return feature


def build_service(
    config: AppConfig,
    *,
    geocoder: GeocodingGateway | None = None,
) -> ReferenceAreaService:
    """Wire a ``ReferenceAreaService`` from configuration.

    A geocoder that cannot be constructed does not prevent the service
    from starting: the configuration error is logged once here and every
    verification reports it as ``ERROR``.
    """
    unavailable = ""
    if geocoder is None:
        try:
            geocoder = get_geocoder(config.geocoding_provider, build_geocoder_config(config))
        except GeocodingConfigError as exc:
            logger.error("Geocoder unavailable | provider=%s | error=%s", exc.provider, exc.message)
            unavailable = f"Geocoding service is unavailable: {exc.message}"

    return ReferenceAreaService(
        geocoder,
        initial=load_initial_area(config),
        strict=config.strict_rings,
        geocoder_unavailable=unavailable,
    )
