"""GeoProtec reference-area address verification.

Lets an operator publish a reference area (a GeoJSON Polygon or
MultiPolygon) and lets end users check whether a street address falls
inside it: the address is geocoded to a point and tested against the
active area with a boundary-inclusive point-in-polygon engine.
"""

__version__ = "0.1.0"
