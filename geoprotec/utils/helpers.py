"""Shared helper functions used across modules."""

from __future__ import annotations

import re

from geoprotec.core.config import AppConfig
from geoprotec.geocoding.base import GeocoderConfig

# ```json\n{...}\n``` with or without a language tag
_FENCE_RE = re.compile(r"^```(\w*)?\s*\n?(.*?)\n?\s*```$", re.DOTALL)


def strip_code_fences(text: str) -> str:
    """Remove a surrounding Markdown code fence, if any, and trim whitespace."""
    stripped = text.strip()
    match = _FENCE_RE.match(stripped)
    if match and match.group(2):
        return match.group(2).strip()
    return stripped


def build_geocoder_config(config: AppConfig) -> GeocoderConfig:
    """Build a ``GeocoderConfig`` from the application configuration.

    Args:
        config: Loaded application configuration.

    Returns:
        A populated ``GeocoderConfig`` for ``config.geocoding_provider``.
    """
    return GeocoderConfig(
        name=config.geocoding_provider,
        api_key=config.geocoding_api_key,
        model=config.geocoding_model,
        region_hint=config.geocoding_region_hint,
        timeout_s=config.geocoding_timeout_s,
    )
