"""Testes dos modelos de requisição de provisionamento."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from api.validators import ProvisionAirtableRequest, ProvisionNotionRequest, sanitized
from app.domain.build_config import Priority

PAGE_ID = "0123456789abcdef0123456789abcdef"

CONFIG = {
    "platform": "notion",
    "priorities": ["analytics"],
    "features": ["tags"],
    "teamSize": "just-me",
    "complexity": "simple",
}


def _error_locations(exc: ValidationError) -> set[tuple[str | int, ...]]:
    return {tuple(error["loc"]) for error in exc.errors()}


class TestProvisionNotionRequest:
    def test_valid_payload(self) -> None:
        request = ProvisionNotionRequest.model_validate({"parentPageId": PAGE_ID, "config": CONFIG})

        assert request.parent_page_id == PAGE_ID
        assert request.config.priorities == frozenset({Priority.ANALYTICS})

    def test_dashed_page_id_of_32_chars_is_accepted(self) -> None:
        page_id = "0123-4567-89ab-cdef-0123456789ab"

        request = ProvisionNotionRequest.model_validate({"parentPageId": page_id, "config": CONFIG})

        assert request.parent_page_id == page_id

    @pytest.mark.parametrize(
        ("page_id", "message"),
        [
            ("abc", "exactly 32 characters"),
            ("0123456789abcdef0123456789abcde!", "invalid characters"),
        ],
    )
    def test_invalid_page_id(self, page_id: str, message: str) -> None:
        with pytest.raises(ValidationError) as exc_info:
            ProvisionNotionRequest.model_validate({"parentPageId": page_id, "config": CONFIG})

        assert message in str(exc_info.value)

    def test_collects_every_violation(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            ProvisionNotionRequest.model_validate(
                {
                    "parentPageId": "x",
                    "config": {"platform": "paper", "priorities": [], "features": ["magic"]},
                }
            )

        locations = _error_locations(exc_info.value)
        assert ("parentPageId",) in locations
        assert ("config", "platform") in locations
        assert ("config", "priorities") in locations
        assert ("config", "teamSize") in locations
        assert ("config", "complexity") in locations

    def test_scalar_priorities_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ProvisionNotionRequest.model_validate(
                {"parentPageId": PAGE_ID, "config": {**CONFIG, "priorities": "analytics"}}
            )

    def test_unknown_keys_ignored(self) -> None:
        request = ProvisionNotionRequest.model_validate(
            {"parentPageId": PAGE_ID, "config": {**CONFIG, "extra": 1}, "other": True}
        )

        assert request.parent_page_id == PAGE_ID


class TestProvisionAirtableRequest:
    def test_defaults(self) -> None:
        request = ProvisionAirtableRequest.model_validate({"baseId": "appAbCdEfGhIjKlMn"})

        assert request.seed_sample is False
        assert request.config is None

    @pytest.mark.parametrize("base_id", ["appShort", "tblAbCdEfGhIjKlMn", "appAbCdEfGhIjKlM!"])
    def test_invalid_base_id(self, base_id: str) -> None:
        with pytest.raises(ValidationError):
            ProvisionAirtableRequest.model_validate({"baseId": base_id})


def test_sanitized_keeps_valid_model() -> None:
    request = ProvisionNotionRequest.model_validate({"parentPageId": PAGE_ID, "config": CONFIG})

    clean = sanitized(request)

    assert clean == request
