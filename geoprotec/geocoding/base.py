"""GeocodingGateway abstract base class.

Defines the contract every geocoding adapter implements. The reference
area service interacts exclusively with this interface: it never sees
provider response shapes, only a ``GeocodedPoint`` or a
``GeocodingError`` whose ``reason`` is one of a closed set.

Adapters are constructed explicitly with a ``GeocoderConfig`` and must
report missing or unusable configuration from ``__init__`` by raising
``GeocodingConfigError``, never lazily on the first lookup.
"""

from __future__ import annotations

import abc
import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING

from geoprotec.core.exceptions import GeoProtecError, PermanentError

if TYPE_CHECKING:
    from geoprotec.models.feature import GeocodedPoint


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class GeocoderConfig:
    """Configuration for a specific geocoding adapter.

    Attributes:
        name: Registered adapter name (e.g. ``"gemini"``).
        api_key: Provider API key.
        api_base_url: Override for the provider endpoint (empty = adapter default).
        model: Model identifier, for model-backed geocoders.
        region_hint: Country/region the lookup is biased towards.
        timeout_s: HTTP timeout for one lookup, in seconds.
    """

    name: str
    api_key: str = ""
    api_base_url: str = ""
    model: str = ""
    region_hint: str = ""
    timeout_s: float = 20.0


# ---------------------------------------------------------------------------
# Failure taxonomy
# ---------------------------------------------------------------------------


class GeocodeFailureReason(enum.Enum):
    """Why an address could not be resolved.

    Values:
        NOT_FOUND: The provider answered but could not place the address.
        AMBIGUOUS_OR_INVALID_RESPONSE: The provider reply was unusable.
        SERVICE_UNAVAILABLE: The provider refused or failed the request
            (auth, quota, 5xx).
        NETWORK: The provider could not be reached.
    """

    NOT_FOUND = "not_found"
    AMBIGUOUS_OR_INVALID_RESPONSE = "ambiguous_or_invalid_response"
    SERVICE_UNAVAILABLE = "service_unavailable"
    NETWORK = "network"


_RETRYABLE_REASONS = frozenset(
    {GeocodeFailureReason.SERVICE_UNAVAILABLE, GeocodeFailureReason.NETWORK}
)


class GeocodingError(GeoProtecError):
    """A single geocoding lookup failed.

    ``retryable`` is informational (set for ``SERVICE_UNAVAILABLE`` and
    ``NETWORK``); nothing in this package retries automatically.

    Attributes:
        provider: Name of the adapter that raised the error.
        reason: Closed failure classification callers branch on.
    """

    default_stage = "geocoding"

    def __init__(self, provider: str, reason: GeocodeFailureReason, message: str) -> None:
        self.provider = provider
        self.reason = reason
        super().__init__(
            message,
            code=f"GEOCODE_{reason.name}",
            retryable=reason in _RETRYABLE_REASONS,
        )

    def __str__(self) -> str:
        return f"[{self.provider}] {self.message}"

    def to_error_dict(self) -> dict[str, object]:
        """Structured payload, including the ``reason`` value."""
        payload = super().to_error_dict()
        payload["reason"] = self.reason.value
        return payload


class GeocodingConfigError(PermanentError):
    """Raised at construction when an adapter is not usable as configured."""

    default_stage = "geocoding"
    default_code = "GEOCODING_CONFIG_INVALID"

    def __init__(self, provider: str, message: str) -> None:
        self.provider = provider
        super().__init__(message)

    def __str__(self) -> str:
        return f"[{self.provider}] {self.message}"


# ---------------------------------------------------------------------------
# Gateway
# ---------------------------------------------------------------------------


class GeocodingGateway(abc.ABC):
    """Abstract base class for geocoding adapters.

    Example usage::

        geocoder = get_geocoder("gemini", config)
        point = geocoder.geocode("Av. Corrientes 1234")
    """

    def __init__(self, config: GeocoderConfig) -> None:
        self._config = config

    @property
    def name(self) -> str:
        """Return the adapter name from configuration."""
        return self._config.name

    @property
    def config(self) -> GeocoderConfig:
        """Return the adapter configuration (read-only)."""
        return self._config

    @abc.abstractmethod
    def geocode(self, address: str) -> GeocodedPoint:
        """Resolve free-text *address* to a storage-order position.

        Returns:
            The resolved ``GeocodedPoint``.

        Raises:
            GeocodingError: With a ``GeocodeFailureReason`` on any failure.
        """

    def _fail(self, reason: GeocodeFailureReason, message: str) -> GeocodingError:
        return GeocodingError(provider=self.name, reason=reason, message=message)
