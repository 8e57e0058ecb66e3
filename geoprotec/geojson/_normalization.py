"""Input decoding for GeoJSON validation.

Turns the raw operator payload (``str`` or ``bytes``) into parsed JSON.
Everything that prevents that is reported as ``MALFORMED_JSON``.
"""

from __future__ import annotations

import json
from typing import Any

from geoprotec.geojson._constants import DEFAULT_MESSAGES, MAX_NESTING_DEPTH, ValidationErrorKind
from geoprotec.geojson._validation import GeoJsonValidationError

_UTF8_BOM = "\ufeff"


def _reject_constant(name: str) -> float:
    # json.loads accepts NaN/Infinity; RFC 8259 does not.
    msg = f"non-standard JSON constant {name}"
    raise ValueError(msg)


def _malformed(detail: str) -> GeoJsonValidationError:
    return GeoJsonValidationError(
        ValidationErrorKind.MALFORMED_JSON,
        f"{DEFAULT_MESSAGES[ValidationErrorKind.MALFORMED_JSON]} {detail}",
    )


def decode_text(payload: str | bytes | bytearray) -> str:
    """Return the payload as text, decoding bytes as UTF-8.

    A leading byte-order mark is dropped.

    Raises:
        GeoJsonValidationError: ``MALFORMED_JSON`` if the bytes are not UTF-8.
    """
    if isinstance(payload, bytes | bytearray):
        try:
            payload = bytes(payload).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise _malformed(f"The file is not UTF-8 encoded: {exc.reason}") from exc
    return payload.removeprefix(_UTF8_BOM)


def nesting_depth(document: Any, limit: int = MAX_NESTING_DEPTH) -> int:
    """Depth of array/object nesting in *document*, scanning no deeper than *limit* + 1.

    Scalars have depth 0. The walk is iterative, so arbitrarily deep
    input cannot exhaust the interpreter stack.
    """
    deepest = 0
    pending: list[tuple[Any, int]] = [(document, 1)]
    while pending:
        value, depth = pending.pop()
        if isinstance(value, dict):
            children: Any = value.values()
        elif isinstance(value, list):
            children = value
        else:
            continue
        deepest = max(deepest, depth)
        if deepest > limit:
            break
        pending.extend((child, depth + 1) for child in children)
    return deepest


def parse_json(payload: str | bytes | bytearray) -> Any:
    """Parse operator input as strict JSON.

    Raises:
        GeoJsonValidationError: ``MALFORMED_JSON`` on any parse failure,
            including ``NaN``/``Infinity`` literals and nesting deeper
            than ``MAX_NESTING_DEPTH``.
    """
    text = decode_text(payload)
    try:
        document = json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as exc:
        raise _malformed(str(exc)) from exc

    if nesting_depth(document) > MAX_NESTING_DEPTH:
        raise _malformed(f"Arrays and objects are nested deeper than {MAX_NESTING_DEPTH} levels.")
    return document
