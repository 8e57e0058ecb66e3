"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: WGS 84 bounds, GeoJSON type names, display fallbacks
- exceptions: Custom exception hierarchy
- ingress: HTTP request body decoding and status mapping
"""
