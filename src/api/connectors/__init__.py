"""Connectors — adapters de borda para as APIs dos providers.

Estrutura:
- http_base: cliente httpx compartilhado (uma requisição por chamada)
- notion/: API REST do Notion
- airtable/: API REST do Airtable

Cada provider classifica as próprias falhas em ProviderFailure.
"""

__all__: list[str] = []
