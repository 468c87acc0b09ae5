"""Testes das settings carregadas do ambiente."""

from __future__ import annotations

import pytest

from config.settings import (
    AirtableSettings,
    BaseSettings,
    NotionSettings,
    RateLimitSettings,
    get_base_settings,
    get_notion_settings,
    get_rate_limit_settings,
)


class TestBaseSettings:
    def test_defaults_from_env(self) -> None:
        settings = get_base_settings()

        assert settings.environment == "test"
        assert settings.is_development is True
        assert settings.max_request_bytes == 1024 * 1024
        assert settings.trust_proxy is False

    @pytest.mark.parametrize(("raw", "expected"), [("prod", "production"), ("stage", "staging"), ("x", "development")])
    def test_environment_aliases(self, monkeypatch: pytest.MonkeyPatch, raw: str, expected: str) -> None:
        monkeypatch.setenv("ENVIRONMENT", raw)

        assert get_base_settings().environment == expected

    def test_origins_are_split(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example, https://b.example,")

        assert get_base_settings().allowed_origins == ("https://a.example", "https://b.example")

    def test_is_cached(self) -> None:
        assert get_base_settings() is get_base_settings()

    def test_validate_rejects_non_positive_size(self) -> None:
        errors = BaseSettings(max_request_bytes=0).validate()

        assert errors == ["MAX_REQUEST_BYTES deve ser > 0"]


class TestNotionSettings:
    @pytest.mark.parametrize("token", ["secret_abc", "ntn_abc"])
    def test_valid_prefixes(self, token: str) -> None:
        assert NotionSettings(token=token).validate() == []

    def test_missing_token(self) -> None:
        assert NotionSettings().validate() == ["NOTION_TOKEN não configurado"]

    def test_bad_prefix(self) -> None:
        errors = NotionSettings(token="abc").validate()

        assert len(errors) == 1
        assert errors[0].startswith("NOTION_TOKEN inválido")

    def test_env_loading(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NOTION_TOKEN", "ntn_env")
        monkeypatch.setenv("PROVIDER_TIMEOUT_SECONDS", "5")

        settings = get_notion_settings()

        assert settings.token == "ntn_env"
        assert settings.api_version == "2022-06-28"
        assert settings.request_timeout_seconds == 5.0


class TestAirtableSettings:
    def test_valid_token(self) -> None:
        assert AirtableSettings(token="patXYZ.123").validate() == []

    def test_bad_prefix(self) -> None:
        assert AirtableSettings(token="key123").validate()[0].startswith("AIRTABLE_TOKEN inválido")

    def test_base_url(self) -> None:
        assert AirtableSettings().base_url("appX") == "https://airtable.com/appX"


class TestRateLimitSettings:
    def test_defaults(self) -> None:
        settings = get_rate_limit_settings()

        assert settings.backend == "memory"
        assert (settings.window_seconds, settings.max_requests) == (60, 60)
        assert (settings.provisioning_window_seconds, settings.provisioning_max_requests) == (900, 10)

    def test_redis_backend_requires_url(self) -> None:
        errors = RateLimitSettings(backend="redis").validate(BaseSettings(redis_url=""))

        assert any("REDIS_URL" in error for error in errors)
