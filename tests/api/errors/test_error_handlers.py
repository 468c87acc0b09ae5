"""Testes do tradutor de erros."""

from __future__ import annotations

from types import SimpleNamespace

import pytest
from starlette.requests import Request

from api.errors.handlers import build_envelope, client_ip
from utils.errors import (
    ApiError,
    ErrorCode,
    RateLimitExceededError,
    ValidationFailedError,
)


def _request(headers: dict[str, str], host: str = "10.0.0.1") -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/api",
        "query_string": b"",
        "headers": [(k.lower().encode(), v.encode()) for k, v in headers.items()],
        "client": (host, 1234),
        "state": {},
        "app": SimpleNamespace(state=SimpleNamespace()),
    }
    return Request(scope)


class TestBuildEnvelope:
    def test_base_fields(self) -> None:
        envelope = build_envelope(ApiError("Boom", 400, ErrorCode.VALIDATION_ERROR, "bad"))

        assert envelope["error"] == "Boom"
        assert envelope["code"] == "VALIDATION_ERROR"
        assert envelope["details"] == "bad"
        assert envelope["timestamp"].endswith("Z")
        assert "stack" not in envelope

    def test_fields_and_retry_after(self) -> None:
        validation = build_envelope(ValidationFailedError([{"field": "baseId", "message": "m", "value": "x"}]))
        limited = build_envelope(
            RateLimitExceededError("Too many requests", ErrorCode.RATE_LIMIT_EXCEEDED, "d", 12)
        )

        assert validation["fields"][0]["field"] == "baseId"
        assert limited["retryAfter"] == 12

    def test_stack_only_when_exception_given(self) -> None:
        try:
            raise RuntimeError("kaboom")
        except RuntimeError as exc:
            envelope = build_envelope(ApiError("Internal server error"), exc)

        assert "kaboom" in envelope["stack"]


def test_append_request_id_is_idempotent() -> None:
    error = ApiError("x", 404, ErrorCode.NOT_FOUND, "missing")

    error.append_request_id("req-1")
    error.append_request_id("req-1")

    assert error.details == "missing (Request ID: req-1)"


class TestClientIp:
    def test_ignores_forwarded_for_by_default(self) -> None:
        request = _request({"X-Forwarded-For": "1.1.1.1, 2.2.2.2"})

        assert client_ip(request) == "10.0.0.1"

    def test_uses_first_hop_when_trusting_proxy(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TRUST_PROXY", "true")

        request = _request({"X-Forwarded-For": "1.1.1.1, 2.2.2.2"})

        assert client_ip(request) == "1.1.1.1"
