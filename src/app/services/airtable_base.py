"""Serviço de validação e seed de base Airtable.

O schema da tabela pertence ao usuário: o serviço só confere a tabela
Chat Sessions contra o checklist, conta registros e opcionalmente cria
um registro de exemplo. Campos nunca são criados nem alterados.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from app.domain.result import Err, FailureKind, Ok, ProviderFailure, Result
from app.domain.schema import AirtableProvisionResult, AirtableValidationResult
from app.observability import record_latency
from app.services.provider_errors import to_provider_error, unwrap
from app.services.schema_mapper import (
    build_airtable_sample_record,
    map_config_to_airtable_checklist,
)
from utils.errors import ErrorCode, ProviderError

if TYPE_CHECKING:
    from app.domain.build_config import BuildConfig
    from app.protocols.provider_clients import AirtableClientProtocol
    from config.settings import AirtableSettings

logger = logging.getLogger(__name__)

REQUIRED_TABLE_NAME = "Chat Sessions"
AIRTABLE_WEB_URL = "https://airtable.com"
MAX_COUNTED_RECORDS = 100

_FIELDS_MESSAGES = {FailureKind.PROVIDER_ERROR: "Failed to get table fields"}
_RECORDS_MESSAGES = {FailureKind.PROVIDER_ERROR: "Failed to retrieve records"}
_TABLES_MESSAGES = {FailureKind.PROVIDER_ERROR: "Failed to list tables"}

# Falhas da sondagem que mantêm o próprio código; as demais viram FORBIDDEN
_SURFACED_PROBE_FAILURES = frozenset({FailureKind.UNAUTHORIZED, FailureKind.RATE_LIMITED})


def base_url(base_id: str, settings: AirtableSettings | None = None) -> str:
    if settings is not None:
        return settings.base_url(base_id)
    return f"{AIRTABLE_WEB_URL}/{base_id}"


def missing_fields_warning(missing: list[str]) -> str:
    return f"Missing recommended fields: {', '.join(missing)}"


class AirtableBaseService:
    """Confere e semeia a tabela Chat Sessions de uma base do usuário."""

    def __init__(
        self,
        client: AirtableClientProtocol,
        settings: AirtableSettings | None = None,
    ) -> None:
        self._client = client
        self._settings = settings

    async def test_connection(self, base_id: str) -> bool:
        return await self._client.test_connection(base_id)

    async def validate_base(
        self,
        base_id: str,
        config: BuildConfig | None = None,
    ) -> AirtableValidationResult:
        """Valida acesso, tabela e campos. Não escreve nada na base.

        Raises:
            ProviderError: FORBIDDEN se a base não responde, NOT_FOUND se a
                tabela Chat Sessions não existe, ou a falha do provider.
        """
        probe = await self._client.check_base(base_id)
        if isinstance(probe, Err):
            if probe.error.kind in _SURFACED_PROBE_FAILURES:
                raise to_provider_error(probe.error)
            raise ProviderError(
                message="Unable to connect to Airtable base",
                status_code=403,
                code=ErrorCode.FORBIDDEN,
                details="Check that the base ID is correct and the integration has access",
                provider="airtable",
            )

        if not unwrap(await self._client.table_exists(base_id, REQUIRED_TABLE_NAME)):
            raise ProviderError(
                message=f"Table '{REQUIRED_TABLE_NAME}' not found in base",
                status_code=404,
                code=ErrorCode.NOT_FOUND,
                details=f"Please create a table named '{REQUIRED_TABLE_NAME}' in your Airtable base",
                provider="airtable",
            )

        fields = unwrap(
            await self._client.get_table_fields(base_id, REQUIRED_TABLE_NAME),
            _FIELDS_MESSAGES,
        )
        checklist = map_config_to_airtable_checklist(config)
        missing = checklist.missing_required(fields)
        if missing:
            logger.warning(
                "airtable_required_fields_missing",
                extra={"base_id": base_id, "missing_fields": missing},
            )

        records = unwrap(
            await self._client.get_records(base_id, REQUIRED_TABLE_NAME, MAX_COUNTED_RECORDS),
            _RECORDS_MESSAGES,
        )

        logger.info(
            "airtable_base_validated",
            extra={
                "base_id": base_id,
                "record_count": len(records),
                "missing_field_count": len(missing),
            },
        )
        return AirtableValidationResult(
            valid=True,
            table=REQUIRED_TABLE_NAME,
            fields=list(fields),
            record_count=len(records),
            missing_fields=missing,
            warnings=[missing_fields_warning(missing)] if missing else [],
        )

    async def seed_sample(
        self,
        base_id: str,
        config: BuildConfig | None = None,
    ) -> Result[str, ProviderFailure]:
        """Cria um registro de exemplo. Nunca levanta: exceções viram Err."""
        fields = build_airtable_sample_record(config)
        try:
            created = await self._client.create_record(base_id, REQUIRED_TABLE_NAME, fields)
        except Exception as exc:
            logger.exception("airtable_sample_seed_exception", extra={"base_id": base_id})
            return Err(
                ProviderFailure(
                    kind=FailureKind.PROVIDER_ERROR,
                    provider="airtable",
                    message="Failed to create sample record",
                    details=str(exc) or type(exc).__name__,
                )
            )
        if isinstance(created, Err):
            return created
        return Ok(str(created.value.get("id", "")))

    async def provision(
        self,
        base_id: str,
        config: BuildConfig | None = None,
        seed_sample: bool = False,
    ) -> AirtableProvisionResult:
        """Valida a base e, se pedido, semeia um registro.

        Raises:
            ProviderError: Falhas terminais de validate_base.
        """
        start = time.perf_counter()
        validation = await self.validate_base(base_id, config)

        sample_record_id: str | None = None
        if seed_sample:
            seeded = await self.seed_sample(base_id, config)
            if isinstance(seeded, Ok):
                sample_record_id = seeded.value
                logger.info(
                    "airtable_sample_seeded",
                    extra={"base_id": base_id, "record_id": sample_record_id},
                )
            else:
                logger.info(
                    "airtable_sample_seed_failed",
                    extra={
                        "base_id": base_id,
                        "failure_kind": seeded.error.kind.value,
                        "details": seeded.error.details,
                    },
                )

        record_count = validation.record_count + (1 if sample_record_id else 0)
        record_latency("airtable_base", "provision", (time.perf_counter() - start) * 1000)
        return AirtableProvisionResult(
            url=base_url(base_id, self._settings),
            table=validation.table,
            fields=validation.fields,
            record_count=record_count,
            warnings=validation.warnings,
            sample_record_id=sample_record_id,
        )

    async def get_base_info(self, base_id: str) -> dict[str, Any]:
        """Resumo da base: tabelas sondadas e estado da tabela Chat Sessions.

        A lista de tabelas vem de sondagem por nomes conhecidos, por isso
        a resposta marca tablesApproximate.
        """
        tables = unwrap(await self._client.list_tables(base_id), _TABLES_MESSAGES)
        validation = await self.validate_base(base_id)
        return {
            "id": base_id,
            "url": base_url(base_id, self._settings),
            "tables": tables,
            "tablesApproximate": True,
            "chatSessionsTable": {
                "exists": validation.valid,
                "fields": validation.fields,
                "recordCount": validation.record_count,
                "missingFields": validation.missing_fields,
            },
        }

    def recommend_structure(self, base_id: str, config: BuildConfig | None) -> dict[str, Any]:
        """Campos opcionais recomendados. A API não cria campos, então é só texto."""
        optional = list(map_config_to_airtable_checklist(config).optional)
        recommendations = [
            "Consider adding these optional fields to enhance your Chat Sessions table:",
            *(f"  - {name}" for name in optional),
            "",
            "These fields will help you better organize and analyze your chat sessions.",
        ]
        logger.info(
            "airtable_structure_recommended",
            extra={"base_id": base_id, "optional_field_count": len(optional)},
        )
        return {"recommendations": recommendations, "optionalFields": optional}
