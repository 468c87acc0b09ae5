"""Testes do NotionClient com httpx.MockTransport."""

from __future__ import annotations

import json
from collections.abc import Callable

import httpx
import pytest

from api.connectors.notion import NotionClient, parse_notion_error
from app.domain.result import Err, FailureKind, Ok
from config.settings import NotionSettings

PAGE_ID = "0123456789abcdef0123456789abcdef"

Handler = Callable[[httpx.Request], httpx.Response]


def _client(handler: Handler) -> NotionClient:
    settings = NotionSettings(token="secret_test")
    return NotionClient(settings, transport=httpx.MockTransport(handler))


def _error(status: int, code: str, message: str) -> httpx.Response:
    return httpx.Response(
        status,
        json={"object": "error", "status": status, "code": code, "message": message},
    )


def test_requires_token() -> None:
    with pytest.raises(ValueError):
        NotionClient(NotionSettings(token=""))


@pytest.mark.asyncio
async def test_sends_auth_and_version_headers() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"id": PAGE_ID, "object": "page"})

    client = _client(handler)
    result = await client.get_page(PAGE_ID)
    await client.aclose()

    assert result == Ok({"id": PAGE_ID, "object": "page"})
    request = seen[0]
    assert str(request.url) == f"https://api.notion.com/v1/pages/{PAGE_ID}"
    assert request.headers["Authorization"] == "Bearer secret_test"
    assert request.headers["Notion-Version"] == "2022-06-28"


@pytest.mark.asyncio
async def test_create_database_payload() -> None:
    captured: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["path"] = request.url.path
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"id": "db-1", "url": "https://www.notion.so/db1"})

    client = _client(handler)
    properties = {"Title": {"type": "title", "title": {}}}
    result = await client.create_database(PAGE_ID, "Chat Session Management", properties)

    assert result.is_ok
    assert captured["path"] == "/v1/databases"
    body = captured["body"]
    assert isinstance(body, dict)
    assert body["parent"] == {"type": "page_id", "page_id": PAGE_ID}
    assert body["title"][0]["text"]["content"] == "Chat Session Management"
    assert body["properties"] == properties


@pytest.mark.asyncio
async def test_object_not_found_is_not_found() -> None:
    client = _client(lambda _: _error(404, "object_not_found", "Could not find page"))

    result = await client.get_page(PAGE_ID)

    assert isinstance(result, Err)
    assert result.error.kind is FailureKind.NOT_FOUND
    assert result.error.details == "Could not find page"
    assert result.error.provider_code == "object_not_found"


@pytest.mark.asyncio
async def test_validation_error_is_unprocessable() -> None:
    client = _client(lambda _: _error(400, "validation_error", "body failed validation"))

    result = await client.create_page("db-1", {})

    assert isinstance(result, Err)
    assert result.error.kind is FailureKind.UNPROCESSABLE


@pytest.mark.asyncio
async def test_transport_error_is_provider_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = _client(handler)
    result = await client.get_database("db-1")

    assert isinstance(result, Err)
    assert result.error.kind is FailureKind.PROVIDER_ERROR
    assert result.error.status_code is None
    assert "connection refused" in result.error.details


@pytest.mark.asyncio
async def test_timeout_is_provider_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("read timed out", request=request)

    result = await _client(handler).query_database("db-1")

    assert isinstance(result, Err)
    assert result.error.message == "Notion API unreachable"


@pytest.mark.asyncio
async def test_test_connection() -> None:
    ok_client = _client(lambda _: httpx.Response(200, json={"results": []}))
    bad_client = _client(lambda _: _error(401, "unauthorized", "API token is invalid."))

    assert await ok_client.test_connection() is True
    assert await bad_client.test_connection() is False


class TestParseNotionError:
    def test_code_takes_precedence_over_status(self) -> None:
        failure = parse_notion_error(400, {"code": "restricted_resource", "message": "no"})

        assert failure.kind is FailureKind.FORBIDDEN

    @pytest.mark.parametrize("code", ["invalid_request", "invalid_json", "invalid_request_url"])
    def test_other_bad_requests_are_provider_errors(self, code: str) -> None:
        failure = parse_notion_error(400, {"code": code, "message": "raw notion msg"})

        assert failure.kind is FailureKind.PROVIDER_ERROR
        assert failure.details == "raw notion msg"

    def test_bare_400_is_provider_error(self) -> None:
        assert parse_notion_error(400, {}).kind is FailureKind.PROVIDER_ERROR

    def test_status_used_without_code(self) -> None:
        failure = parse_notion_error(429, {})

        assert failure.kind is FailureKind.RATE_LIMITED
        assert failure.details

    def test_unknown_status_keeps_provider_message(self) -> None:
        failure = parse_notion_error(502, {"message": "Bad gateway"})

        assert failure.kind is FailureKind.PROVIDER_ERROR
        assert failure.details == "Bad gateway"

    def test_unknown_status_without_message(self) -> None:
        failure = parse_notion_error(503, {})

        assert failure.details == "Notion API returned HTTP 503"
