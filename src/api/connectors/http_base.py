"""Cliente HTTP base para conectores da camada API.

Uma chamada de provider é exatamente uma requisição: sem retry nem
backoff. Falhas de transporte viram HttpError com a mensagem do httpx.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

logger = logging.getLogger(__name__)


@dataclass
class HttpClientConfig:
    """Configuração do cliente HTTP."""

    base_url: str
    timeout_seconds: float = 30.0
    default_headers: dict[str, str] = field(default_factory=dict)
    verify_ssl: bool = True


class HttpError(Exception):
    """Erro de transporte (timeout, conexão) sem dados sensíveis."""

    def __init__(self, message: str, details: str = "") -> None:
        super().__init__(message)
        self.details = details


class HttpClient:
    """Cliente HTTP com um httpx.AsyncClient compartilhado.

    Args:
        config: URL base, timeout e headers padrão.
        transport: Transport alternativo (httpx.MockTransport em testes).
    """

    def __init__(
        self,
        config: HttpClientConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._config.base_url,
                headers=self._config.default_headers,
                timeout=self._config.timeout_seconds,
                verify=self._config.verify_ssl,
                transport=self._transport,
            )
        return self._client

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Executa uma requisição. Status de erro não levanta exceção."""
        try:
            return await self._get_client().request(method, path, json=json, params=params)
        except httpx.TimeoutException as exc:
            raise HttpError("http_timeout", details=str(exc) or "Request timed out") from exc
        except httpx.HTTPError as exc:
            raise HttpError("http_connection_error", details=str(exc) or type(exc).__name__) from exc

    async def aclose(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            logger.debug("http_client_closed", extra={"base_url": self._config.base_url})


def safe_json(response: httpx.Response) -> dict[str, Any]:
    """Body JSON como dict; corpo vazio ou inválido vira {}."""
    if not response.content:
        return {}
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {"data": data}
