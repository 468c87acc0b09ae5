"""Observabilidade: request id em contexto e métricas via logs.

Uso:
    from app.observability import get_correlation_id, set_correlation_id
    from app.observability import record_latency, record_provisioning
"""

from app.observability.correlation import (
    generate_correlation_id,
    get_correlation_id,
    is_acceptable_inbound_id,
    reset_correlation_id,
    set_correlation_id,
)
from app.observability.metrics import record_latency, record_provisioning

__all__ = [
    "generate_correlation_id",
    "get_correlation_id",
    "is_acceptable_inbound_id",
    "record_latency",
    "record_provisioning",
    "reset_correlation_id",
    "set_correlation_id",
]
