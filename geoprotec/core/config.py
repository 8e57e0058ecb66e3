"""Application configuration loaded from environment variables.

Azure Functions app settings (or ``local.settings.json`` for local dev)
are the source of truth.

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if any value is out
    of its valid range. The geocoding API key is *not* required here;
    its absence is reported by the geocoder constructor so that the
    reference-area endpoints keep working without geocoding configured.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from geoprotec.core.exceptions import GeoProtecError

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"", "0", "false", "no", "off"})


class ConfigValidationError(GeoProtecError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
        message: Human-readable description of the valid range.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Immutable application configuration.

    Loaded once at function startup and handed to the service layer.

    Attributes:
        geocoding_provider: Registered geocoder name (``gemini``).
        geocoding_api_key: API key for the geocoding provider.
        geocoding_model: Model identifier sent to the provider.
        geocoding_region_hint: Country/region the prompt biases towards.
        geocoding_timeout_s: HTTP timeout for one geocoding call, in seconds.
        strict_rings: Enforce ring closure, minimum size and WGS 84 bounds
            when validating operator GeoJSON.
        reference_area_path: Optional GeoJSON file loaded as the initial
            reference area (empty means the built-in default area).
    """

    geocoding_provider: str = "gemini"
    geocoding_api_key: str = ""
    geocoding_model: str = "gemini-2.5-flash"
    geocoding_region_hint: str = "Argentina"
    geocoding_timeout_s: float = 20.0
    strict_rings: bool = False
    reference_area_path: str = ""

    @classmethod
    def from_env(cls) -> AppConfig:
        """Load and validate configuration from environment variables.

        ``GEOCODING_API_KEY`` takes precedence over the legacy ``API_KEY``.

        Raises:
            ConfigValidationError: If a value is out of range or a
                boolean flag is not recognised.
            ValueError: If ``GEOCODING_TIMEOUT_S`` cannot be parsed.
        """
        config = cls(
            geocoding_provider=os.getenv("GEOCODING_PROVIDER", "gemini").strip(),
            geocoding_api_key=(os.getenv("GEOCODING_API_KEY") or os.getenv("API_KEY", "")).strip(),
            geocoding_model=os.getenv("GEOCODING_MODEL", "gemini-2.5-flash").strip(),
            geocoding_region_hint=os.getenv("GEOCODING_REGION_HINT", "Argentina").strip(),
            geocoding_timeout_s=float(os.getenv("GEOCODING_TIMEOUT_S", "20")),
            strict_rings=_parse_bool("GEOJSON_STRICT_RINGS", os.getenv("GEOJSON_STRICT_RINGS", "")),
            reference_area_path=os.getenv("REFERENCE_AREA_PATH", "").strip(),
        )
        _validate(config)
        return config


def _parse_bool(key: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ConfigValidationError(key, raw, "must be a boolean (true/false)")


def _validate(config: AppConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if not config.geocoding_provider:
        raise ConfigValidationError(
            "GEOCODING_PROVIDER",
            config.geocoding_provider,
            "must not be empty",
        )

    if not config.geocoding_model:
        raise ConfigValidationError(
            "GEOCODING_MODEL",
            config.geocoding_model,
            "must not be empty",
        )

    if config.geocoding_timeout_s <= 0:
        raise ConfigValidationError(
            "GEOCODING_TIMEOUT_S",
            config.geocoding_timeout_s,
            "must be > 0 (seconds)",
        )
