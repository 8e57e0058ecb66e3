"""Pydantic schema for the GeoJSON Point Feature a geocoder replies with.

The model-backed geocoder is asked to answer with::

    {
      "type": "Feature",
      "geometry": {"type": "Point", "coordinates": [lon, lat]},
      "properties": {"fullAddress": "...", "query": "...", "error": "..."}
    }

``properties.error`` is present only when the address could not be placed.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class PointGeometry(BaseModel):
    """GeoJSON Point geometry; ``coordinates`` is ``[lon, lat]`` (altitude tolerated)."""

    type: Literal["Point"]
    coordinates: list[float] = Field(min_length=2, max_length=3)


class PointProperties(BaseModel):
    """Properties echoed back by the geocoder."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    full_address: str = Field(default="", alias="fullAddress")
    query: str = ""
    error: str | None = None


class PointFeatureResponse(BaseModel):
    """A GeoJSON Point Feature."""

    type: Literal["Feature"]
    geometry: PointGeometry
    properties: PointProperties | None = None

    @property
    def error(self) -> str:
        """The reported lookup error, or ``""``."""
        if self.properties is None or not self.properties.error:
            return ""
        return self.properties.error
