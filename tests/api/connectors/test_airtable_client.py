"""Testes do AirtableClient com httpx.MockTransport."""

from __future__ import annotations

import json
from collections.abc import Callable

import httpx
import pytest

from api.connectors.airtable import AirtableClient, parse_airtable_error
from app.domain.result import Err, FailureKind, Ok
from config.settings import AirtableSettings

BASE_ID = "appAbCdEfGhIjKlMn"

Handler = Callable[[httpx.Request], httpx.Response]


def _client(handler: Handler) -> AirtableClient:
    return AirtableClient(AirtableSettings(token="pat_test"), transport=httpx.MockTransport(handler))


def _table_not_found() -> httpx.Response:
    return httpx.Response(
        404,
        json={"error": {"type": "TABLE_NOT_FOUND", "message": "Could not find table"}},
    )


def test_requires_token() -> None:
    with pytest.raises(ValueError):
        AirtableClient(AirtableSettings(token=""))


@pytest.mark.asyncio
async def test_table_name_is_url_encoded() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"records": []})

    result = await _client(handler).get_records(BASE_ID, "Chat Sessions", max_records=5)

    assert result == Ok([])
    assert seen[0].url.raw_path.decode().startswith(f"/v0/{BASE_ID}/Chat%20Sessions")
    assert seen[0].url.params["maxRecords"] == "5"
    assert seen[0].headers["Authorization"] == "Bearer pat_test"


class TestTestConnection:
    @pytest.mark.asyncio
    async def test_ok_response_is_connected(self) -> None:
        client = _client(lambda _: httpx.Response(200, json={"records": []}))

        assert await client.test_connection(BASE_ID) is True

    @pytest.mark.asyncio
    async def test_missing_table_still_connected(self) -> None:
        client = _client(lambda _: _table_not_found())

        assert await client.test_connection(BASE_ID) is True

    @pytest.mark.asyncio
    async def test_unknown_base_is_not_connected(self) -> None:
        client = _client(lambda _: httpx.Response(404, json={"error": "NOT_FOUND"}))

        assert await client.test_connection(BASE_ID) is False

    @pytest.mark.asyncio
    async def test_unauthorized_is_not_connected(self) -> None:
        client = _client(
            lambda _: httpx.Response(401, json={"error": {"type": "AUTHENTICATION_REQUIRED"}})
        )

        assert await client.test_connection(BASE_ID) is False


@pytest.mark.asyncio
async def test_check_base_keeps_failure_kind() -> None:
    client = _client(
        lambda _: httpx.Response(429, json={"errors": [{"error": "RATE_LIMIT_REACHED"}]})
    )

    result = await client.check_base(BASE_ID)

    assert isinstance(result, Err)
    assert result.error.kind is FailureKind.RATE_LIMITED


@pytest.mark.asyncio
async def test_check_base_ok_when_table_missing() -> None:
    assert await _client(lambda _: _table_not_found()).check_base(BASE_ID) == Ok(True)


@pytest.mark.asyncio
async def test_table_exists_false_on_not_found() -> None:
    result = await _client(lambda _: _table_not_found()).table_exists(BASE_ID, "Chat Sessions")

    assert result == Ok(False)


@pytest.mark.asyncio
async def test_table_exists_propagates_forbidden() -> None:
    client = _client(lambda _: httpx.Response(403, json={"error": {"type": "INVALID_PERMISSIONS"}}))

    result = await client.table_exists(BASE_ID, "Chat Sessions")

    assert isinstance(result, Err)
    assert result.error.kind is FailureKind.FORBIDDEN


@pytest.mark.asyncio
async def test_get_table_fields_from_first_record() -> None:
    body = {"records": [{"id": "rec1", "fields": {"Title": "a", "Date": "2026-01-01"}}]}

    result = await _client(lambda _: httpx.Response(200, json=body)).get_table_fields(
        BASE_ID, "Chat Sessions"
    )

    assert result == Ok(["Title", "Date"])


@pytest.mark.asyncio
async def test_get_table_fields_empty_table() -> None:
    result = await _client(lambda _: httpx.Response(200, json={"records": []})).get_table_fields(
        BASE_ID, "Chat Sessions"
    )

    assert result == Ok([])


@pytest.mark.asyncio
async def test_list_tables_probes_candidates() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if "Chat%20Sessions" in request.url.raw_path.decode():
            return httpx.Response(200, json={"records": []})
        return _table_not_found()

    result = await _client(handler).list_tables(BASE_ID)

    assert result == Ok(["Chat Sessions"])


@pytest.mark.asyncio
async def test_list_tables_stops_on_unauthorized() -> None:
    calls: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url.path)
        return httpx.Response(401, json={"error": {"type": "AUTHENTICATION_REQUIRED"}})

    result = await _client(handler).list_tables(BASE_ID)

    assert isinstance(result, Err)
    assert result.error.kind is FailureKind.UNAUTHORIZED
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_create_record_uses_typecast_and_returns_first() -> None:
    captured: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"records": [{"id": "recNew", "fields": {}}]})

    result = await _client(handler).create_record(BASE_ID, "Chat Sessions", {"Title": "x"})

    assert result == Ok({"id": "recNew", "fields": {}})
    assert captured["body"] == {"records": [{"fields": {"Title": "x"}}], "typecast": True}


@pytest.mark.asyncio
async def test_update_and_delete_record() -> None:
    methods: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        methods.append(request.method)
        if request.method == "DELETE":
            return httpx.Response(200, json={"id": "rec1", "deleted": True})
        return httpx.Response(200, json={"id": "rec1", "fields": {"Status": "Paused"}})

    client = _client(handler)
    updated = await client.update_record(BASE_ID, "Chat Sessions", "rec1", {"Status": "Paused"})
    deleted = await client.delete_record(BASE_ID, "Chat Sessions", "rec1")

    assert updated.is_ok
    assert deleted == Ok(True)
    assert methods == ["PATCH", "DELETE"]


@pytest.mark.asyncio
async def test_invalid_record_data_is_unprocessable() -> None:
    client = _client(
        lambda _: httpx.Response(422, json={"error": {"type": "INVALID_VALUE_FOR_COLUMN"}})
    )

    result = await client.create_record(BASE_ID, "Chat Sessions", {"Rating": "abc"})

    assert isinstance(result, Err)
    assert result.error.kind is FailureKind.UNPROCESSABLE


class TestParseAirtableError:
    def test_unknown_status_with_not_found_type(self) -> None:
        failure = parse_airtable_error(400, {"error": {"type": "TABLE_NOT_FOUND"}})

        assert failure.kind is FailureKind.NOT_FOUND
        assert failure.message == "Table not found"

    def test_provider_error_uses_default_message(self) -> None:
        failure = parse_airtable_error(
            500,
            {"error": {"type": "SERVER_ERROR", "message": "try later"}},
            "Failed to retrieve records",
        )

        assert failure.kind is FailureKind.PROVIDER_ERROR
        assert failure.message == "Failed to retrieve records"
        assert failure.details == "try later"

    def test_rate_limit(self) -> None:
        assert parse_airtable_error(429, {}).kind is FailureKind.RATE_LIMITED
