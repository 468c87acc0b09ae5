"""Cliente HTTP da API do Airtable.

A API pública de registros não lista tabelas nem schema; os métodos
list_tables e get_table_fields são aproximações por sondagem.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from api.connectors.airtable.errors import (
    PROVIDER,
    TABLE_NOT_FOUND,
    parse_airtable_error,
    transport_failure,
)
from api.connectors.http_base import HttpClient, HttpClientConfig, HttpError, safe_json
from api.connectors.provider_logging import log_provider_error, log_success
from app.domain.result import Err, FailureKind, Ok, ProviderResult
from app.observability import record_latency
from app.protocols.provider_clients import AirtableClientProtocol, JsonObject

if TYPE_CHECKING:
    import httpx

    from config.settings import AirtableSettings

logger = logging.getLogger(__name__)

CHAT_SESSIONS_TABLE = "Chat Sessions"

# Candidatos sondados por list_tables; tabelas com outros nomes não aparecem
CANDIDATE_TABLE_NAMES: tuple[str, ...] = ("Chat Sessions", "Sessions", "Chats", "Table 1")

DEFAULT_MAX_RECORDS = 100

# Falhas que dizem respeito à base inteira, não à tabela sondada
_BASE_LEVEL_FAILURES = frozenset({FailureKind.UNAUTHORIZED, FailureKind.FORBIDDEN})


def _table_path(base_id: str, table_name: str, record_id: str | None = None) -> str:
    path = f"/{base_id}/{quote(table_name, safe='')}"
    if record_id:
        path = f"{path}/{record_id}"
    return path


class AirtableClient(HttpClient, AirtableClientProtocol):
    """Cliente da API REST do Airtable.

    Args:
        settings: AirtableSettings com token e URL base.
        transport: Transport httpx alternativo (testes).
    """

    def __init__(
        self,
        settings: AirtableSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not settings.token:
            raise ValueError("AIRTABLE_TOKEN é obrigatório para o cliente Airtable")
        config = HttpClientConfig(
            base_url=settings.api_base_url,
            timeout_seconds=settings.request_timeout_seconds,
            default_headers={
                "Authorization": f"Bearer {settings.token}",
                "Content-Type": "application/json",
            },
        )
        super().__init__(config, transport)

    async def _call(
        self,
        operation: str,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        default_message: str = "Airtable API error",
    ) -> ProviderResult[JsonObject]:
        start = time.perf_counter()
        try:
            response = await self.request(method, path, json=json, params=params)
        except HttpError as exc:
            failure = transport_failure(exc.details)
            log_provider_error(failure, operation, method, path)
            return Err(failure)
        finally:
            record_latency("airtable_client", operation, (time.perf_counter() - start) * 1000)

        body = safe_json(response)
        if response.is_success:
            log_success(PROVIDER, operation, method, path, response.status_code)
            return Ok(body)

        failure = parse_airtable_error(response.status_code, body, default_message)
        log_provider_error(failure, operation, method, path)
        return Err(failure)

    async def _probe(self, base_id: str, table_name: str, operation: str) -> ProviderResult[JsonObject]:
        return await self._call(
            operation,
            "GET",
            _table_path(base_id, table_name),
            params={"maxRecords": 1},
        )

    async def check_base(self, base_id: str) -> ProviderResult[bool]:
        """Sonda a base pela tabela Chat Sessions.

        Ok(True) quando a base responde, mesmo sem a tabela. Err traz a
        classificação da falha (token inválido, throttling, sem acesso).
        """
        result = await self._probe(base_id, CHAT_SESSIONS_TABLE, "test_connection")
        if result.is_ok:
            logger.info("airtable_connection_ok", extra={"base_id": base_id})
            return Ok(True)
        failure = result.error
        if failure.kind is FailureKind.NOT_FOUND and failure.provider_code == TABLE_NOT_FOUND:
            logger.info("airtable_connection_ok", extra={"base_id": base_id, "table_missing": True})
            return Ok(True)
        logger.warning(
            "airtable_connection_failed",
            extra={"base_id": base_id, "failure_kind": failure.kind.value},
        )
        return Err(failure)

    async def test_connection(self, base_id: str) -> bool:
        """True se a base responde para o token atual."""
        return (await self.check_base(base_id)).is_ok

    async def list_tables(self, base_id: str) -> ProviderResult[list[str]]:
        """Sonda nomes comuns de tabela. Resultado aproximado."""
        found: list[str] = []
        for table_name in CANDIDATE_TABLE_NAMES:
            result = await self._probe(base_id, table_name, "list_tables")
            if result.is_ok:
                found.append(table_name)
            elif result.error.kind in _BASE_LEVEL_FAILURES:
                return Err(result.error)
        return Ok(found)

    async def table_exists(self, base_id: str, table_name: str) -> ProviderResult[bool]:
        result = await self._probe(base_id, table_name, "table_exists")
        if result.is_ok:
            return Ok(True)
        if result.error.kind is FailureKind.NOT_FOUND:
            return Ok(False)
        return Err(result.error)

    async def get_table_fields(self, base_id: str, table_name: str) -> ProviderResult[list[str]]:
        """Nomes de campo do primeiro registro (tabela vazia: lista vazia).

        Campos vazios não vêm no JSON do Airtable, então a lista pode
        ser menor que o schema real.
        """
        result = await self._call(
            "get_table_fields",
            "GET",
            _table_path(base_id, table_name),
            params={"maxRecords": 1},
            default_message="Failed to get table fields",
        )
        if not result.is_ok:
            return result
        records = result.value.get("records") or []
        if not records:
            return Ok([])
        return Ok(list((records[0].get("fields") or {}).keys()))

    async def get_records(
        self,
        base_id: str,
        table_name: str,
        max_records: int = DEFAULT_MAX_RECORDS,
    ) -> ProviderResult[list[JsonObject]]:
        result = await self._call(
            "get_records",
            "GET",
            _table_path(base_id, table_name),
            params={"maxRecords": max_records},
            default_message="Failed to retrieve records",
        )
        if not result.is_ok:
            return result
        return Ok(list(result.value.get("records") or []))

    async def create_record(
        self,
        base_id: str,
        table_name: str,
        fields: JsonObject,
    ) -> ProviderResult[JsonObject]:
        result = await self._call(
            "create_record",
            "POST",
            _table_path(base_id, table_name),
            json={"records": [{"fields": fields}], "typecast": True},
            default_message="Failed to create record",
        )
        if not result.is_ok:
            return result
        records = result.value.get("records") or [result.value]
        return Ok(records[0])

    async def update_record(
        self,
        base_id: str,
        table_name: str,
        record_id: str,
        fields: JsonObject,
    ) -> ProviderResult[JsonObject]:
        return await self._call(
            "update_record",
            "PATCH",
            _table_path(base_id, table_name, record_id),
            json={"fields": fields, "typecast": True},
            default_message="Failed to update record",
        )

    async def delete_record(
        self,
        base_id: str,
        table_name: str,
        record_id: str,
    ) -> ProviderResult[bool]:
        result = await self._call(
            "delete_record",
            "DELETE",
            _table_path(base_id, table_name, record_id),
            default_message="Failed to delete record",
        )
        if not result.is_ok:
            return result
        return Ok(bool(result.value.get("deleted", True)))
