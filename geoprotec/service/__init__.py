"""Reference-area service layer."""

from geoprotec.service.reference_area import (
    ReferenceAreaService,
    VerificationResult,
    VerificationStatus,
    build_service,
    default_reference_feature,
    load_initial_area,
)

__all__ = [
    "ReferenceAreaService",
    "VerificationResult",
    "VerificationStatus",
    "build_service",
    "default_reference_feature",
    "load_initial_area",
]
