"""App — núcleo do serviço: orquestração de provisionamento e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- domain/: BuildConfig, SessionSchema e Result
- services/: mapeamento de schema e provisionamento Notion/Airtable
- infra/: implementações concretas de IO (stores de rate limit)
- protocols/: contratos/interfaces
- observability/: request id e métricas via logs

Padrão: app executa; api adapta; utils apoia.
"""
