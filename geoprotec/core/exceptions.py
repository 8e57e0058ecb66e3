"""Domain exception hierarchy.

Validation, containment, geocoding and configuration failures all derive
from ``GeoProtecError``. Each carries a stable ``code`` and the ``stage``
that raised it, so the HTTP layer and the reference-area service branch
on fields, never on message text.

Categories (class attribute ``category_name``):

- ``ValidationError``: bad operator or user input. Not retryable.
- ``TransientError``: network hiccups, throttling. Retryable.
- ``PermanentError``: broken configuration and similar. Not retryable.
- ``ContractError``: a value reached a stage in a shape it cannot handle.

``to_error_dict()`` renders any of them as a JSON-ready payload.
"""

from __future__ import annotations

_PAYLOAD_FIELDS = ("code", "stage", "message", "retryable", "correlation_id")


class GeoProtecError(Exception):
    """Root of all GeoProtec errors.

    Attributes:
        message: What went wrong, readable by an operator.
        stage: Where it went wrong (``"validate_geojson"``, ``"geocoding"``, ...).
        code: Stable machine-readable identifier.
        retryable: Whether repeating the same call could succeed.
        correlation_id: Request identifier, when one is known.
    """

    #: Stage used when none is passed.
    default_stage: str = ""
    #: Code used when none is passed.
    default_code: str = ""
    #: Retry hint used when ``retryable`` is not passed.
    default_retryable: bool = False
    #: Fixed category for the category base classes; empty on the root.
    category_name: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
        retryable: bool | None = None,
        correlation_id: str = "",
    ) -> None:
        super().__init__(message)
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.retryable = self.default_retryable if retryable is None else retryable
        self.correlation_id = correlation_id

    @property
    def category(self) -> str:
        """``category_name`` of the class, else derived from ``retryable``."""
        if self.category_name:
            return self.category_name
        return "transient" if self.retryable else "permanent"

    def to_error_dict(self) -> dict[str, object]:
        """Structured payload with stable keys."""
        payload: dict[str, object] = {"category": self.category}
        payload.update((name, getattr(self, name)) for name in _PAYLOAD_FIELDS)
        return payload


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------


class ValidationError(GeoProtecError):
    """Rejected input. Fixing the input is the only remedy."""

    category_name = "validation"


class TransientError(GeoProtecError):
    """A failure that may clear up by itself."""

    category_name = "transient"
    default_retryable = True


class PermanentError(GeoProtecError):
    """A failure that will repeat until something is reconfigured."""

    category_name = "permanent"


class ContractError(GeoProtecError):
    """A stage received a value it cannot process."""

    category_name = "contract"
