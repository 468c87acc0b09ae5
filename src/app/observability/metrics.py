"""Registro de métricas via structured logging.

As métricas são registradas como logs estruturados e podem ser agregadas
posteriormente (CloudWatch Insights, BigQuery etc.).

Métricas suportadas:
- Latência: tempo de cada chamada a provider e de cada provisionamento
- Provisionamento: contador de resultados por plataforma

Uso:
    start = time.perf_counter()
    # ... operação ...
    record_latency("notion_client", "create_database", (time.perf_counter() - start) * 1000)
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "notion_client", "airtable_base")
        operation: Nome da operação (ex: "create_database", "provision")
        latency_ms: Latência em milissegundos
        correlation_id: Sobrescreve o request id do contexto, se informado
    """
    extra: dict[str, object] = {
        "metric_type": "latency",
        "component": component,
        "operation": operation,
        "latency_ms": round(latency_ms, 2),
    }
    if correlation_id:
        extra["correlation_id"] = correlation_id
    logger.info("metric_latency", extra=extra)


def record_provisioning(
    platform: str,
    outcome: str,
    warnings: int = 0,
) -> None:
    """Registra resultado de um provisionamento.

    Args:
        platform: "notion" ou "airtable"
        outcome: "success" ou o código de erro retornado
        warnings: Quantidade de avisos anexados à resposta
    """
    logger.info(
        "metric_provisioning",
        extra={
            "metric_type": "counter",
            "component": "provisioning",
            "platform": platform,
            "outcome": outcome,
            "warning_count": warnings,
        },
    )
