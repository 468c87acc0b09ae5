"""Testes de screening e sanitização."""

from __future__ import annotations

import pytest

from api.validators import find_suspicious_pattern, sanitize_string, sanitize_value


@pytest.mark.parametrize(
    "text",
    [
        "../../etc/passwd",
        "<SCRIPT>alert(1)</SCRIPT>",
        "1 union all select *",
        "JavaScript:alert(1)",
        "vbscript:msgbox",
        "data:text/html;base64,xyz",
    ],
)
def test_detects_suspicious_patterns(text: str) -> None:
    assert find_suspicious_pattern(text) is not None


def test_clean_input_passes() -> None:
    assert find_suspicious_pattern('{"baseId": "appAbCdEfGhIjKlMn"}', "/api", "Mozilla/5.0") is None


def test_patterns_spanning_parts_are_detected() -> None:
    assert find_suspicious_pattern("body", "/path?q=<script") is not None


class TestSanitize:
    def test_removes_angle_brackets_and_js_protocol(self) -> None:
        assert sanitize_string("  <b>hello</b> javascript:x ") == "bhello/b x"

    def test_removes_event_handlers(self) -> None:
        assert sanitize_string('img onerror="x"') == 'img "x"'

    def test_recurses_into_structures(self) -> None:
        value = {"a": [" <x> ", {"b": "ok "}], "n": 3, "flag": True}

        assert sanitize_value(value) == {"a": ["x", {"b": "ok"}], "n": 3, "flag": True}
