"""Testes das métricas emitidas como log estruturado."""

from __future__ import annotations

import logging

import pytest

from app.observability.metrics import record_latency, record_provisioning


def test_record_latency_rounds_and_tags(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="app.observability.metrics"):
        record_latency("notion_client", "create_database", 12.3456)

    record = caplog.records[-1]
    assert record.getMessage() == "metric_latency"
    assert record.latency_ms == 12.35
    assert record.component == "notion_client"


def test_record_latency_accepts_explicit_request_id(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="app.observability.metrics"):
        record_latency("airtable_base", "provision", 1.0, correlation_id="req-0001")

    assert caplog.records[-1].correlation_id == "req-0001"


def test_record_provisioning_outcome(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="app.observability.metrics"):
        record_provisioning("airtable", "success", warnings=1)

    record = caplog.records[-1]
    assert record.getMessage() == "metric_provisioning"
    assert record.platform == "airtable"
    assert record.outcome == "success"
    assert record.warning_count == 1
