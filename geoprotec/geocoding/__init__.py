"""Geocoding adapters.

Implements the adapter pattern for address resolution:
- GeocodingGateway: Abstract base class defining the interface
- GeminiGeocoder: Google Gemini model prompted for a GeoJSON Point

The active adapter is selected via configuration and injected into the
reference-area service; nothing in the package holds a global client.
"""

from geoprotec.geocoding.base import (
    GeocodeFailureReason,
    GeocoderConfig,
    GeocodingConfigError,
    GeocodingError,
    GeocodingGateway,
)
from geoprotec.geocoding.factory import (
    GEMINI,
    get_geocoder,
    list_geocoders,
    register_geocoder,
)

__all__ = [
    "GEMINI",
    "GeocodeFailureReason",
    "GeocoderConfig",
    "GeocodingConfigError",
    "GeocodingError",
    "GeocodingGateway",
    "get_geocoder",
    "list_geocoders",
    "register_geocoder",
]
