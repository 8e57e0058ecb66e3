"""Geocoder factory: selects the active geocoding adapter by name.

Adapters live in a name-keyed registry whose entries import the
adapter module only when that adapter is requested. Third-party
adapters plug in through ``register_geocoder``.

Example::

    from geoprotec.geocoding.factory import get_geocoder

    geocoder = get_geocoder("gemini", config)
    point = geocoder.geocode("Av. Corrientes 1234")

The adapter name is read from the ``GEOCODING_PROVIDER`` environment
variable via ``AppConfig.geocoding_provider``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from geoprotec.geocoding.base import GeocoderConfig, GeocodingConfigError, GeocodingGateway

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Adapter name constants
# ---------------------------------------------------------------------------

GEMINI = "gemini"

# ---------------------------------------------------------------------------
# Lazy-import adapter registry
# ---------------------------------------------------------------------------

# Each entry maps an adapter name to a callable that returns the adapter
# *class*, so that an adapter's HTTP dependencies are only imported when
# that adapter is selected.

_GEOCODER_REGISTRY: dict[str, Callable[[], type[GeocodingGateway]]] = {}


def _register_builtin_adapters() -> None:
    """Register the built-in geocoding adapters."""

    def _gemini() -> type[GeocodingGateway]:
        from geoprotec.geocoding.gemini import GeminiGeocoder

        return GeminiGeocoder

    _GEOCODER_REGISTRY[GEMINI] = _gemini


def _ensure_registry() -> None:
    """Initialise the adapter registry once (idempotent)."""
    if not _GEOCODER_REGISTRY:
        _register_builtin_adapters()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def register_geocoder(
    name: str,
    loader: Callable[[], type[GeocodingGateway]],
) -> None:
    """Register a custom geocoding adapter.

    Args:
        name: Adapter name (e.g. ``"nominatim"``).
        loader: A zero-argument callable that returns the adapter class.

    Raises:
        ValueError: If the name is empty.
    """
    if not name:
        msg = "Geocoder name must be non-empty"
        raise ValueError(msg)
    _ensure_registry()
    _GEOCODER_REGISTRY[name] = loader
    logger.debug("Registered geocoder adapter: %s", name)


def get_geocoder(
    name: str,
    config: GeocoderConfig | None = None,
) -> GeocodingGateway:
    """Create and return a geocoding adapter instance.

    Args:
        name: Adapter identifier (e.g. ``"gemini"``).
        config: Optional ``GeocoderConfig``. If ``None``, a config with
            just the adapter name is used.

    Returns:
        A configured ``GeocodingGateway``.

    Raises:
        GeocodingConfigError: If the name is not registered, the config
            belongs to another adapter, or the adapter rejects the config.
    """
    _ensure_registry()

    loader = _GEOCODER_REGISTRY.get(name)
    if loader is None:
        available = ", ".join(sorted(_GEOCODER_REGISTRY))
        msg = f"Unknown geocoding provider: {name!r}. Available: {available}"
        raise GeocodingConfigError(name, msg)

    if config is None:
        config = GeocoderConfig(name=name)
    elif config.name != name:
        msg = f"GeocoderConfig.name {config.name!r} does not match requested geocoder {name!r}"
        raise GeocodingConfigError(name, msg)

    adapter_cls = loader()
    logger.info("Creating geocoder: %s", name)
    return adapter_cls(config)


def list_geocoders() -> list[str]:
    """Return the names of all registered geocoding adapters."""
    _ensure_registry()
    return sorted(_GEOCODER_REGISTRY)
