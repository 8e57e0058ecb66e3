"""Tests for shared helper functions."""

from __future__ import annotations

import pytest

from geoprotec.utils.helpers import strip_code_fences


class TestStripCodeFences:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ('{"a": 1}', '{"a": 1}'),
            ('  {"a": 1}\n', '{"a": 1}'),
            ('```json\n{"a": 1}\n```', '{"a": 1}'),
            ('```\n{"a": 1}\n```', '{"a": 1}'),
            ('```JSON\n{\n  "a": 1\n}\n```\n', '{\n  "a": 1\n}'),
            ('```{"a": 1}```', '{"a": 1}'),
        ],
    )
    def test_strip(self, text: str, expected: str) -> None:
        assert strip_code_fences(text) == expected

    def test_unterminated_fence_left_alone(self) -> None:
        assert strip_code_fences('```json\n{"a": 1}') == '```json\n{"a": 1}'

    def test_empty_fence(self) -> None:
        assert strip_code_fences("``````") == "``````"
