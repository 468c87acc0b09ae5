"""API — camada de borda HTTP e adapters dos providers.

Responsabilidades:
- Receber requests de provisionamento e diagnóstico
- Aplicar guardas de entrada (content type, tamanho, padrões suspeitos)
- Aplicar rate limiting geral e de provisionamento
- Validar payloads e traduzir erros para o envelope HTTP
- Falar com as APIs do Notion e do Airtable

Subpastas:
- connectors/: clientes HTTP por provider
- middleware/: pipeline de requisição
- validators/: validação de payloads e screening de segurança
- errors/: tradutor terminal de exceções
- routes/: endpoints HTTP (provisionamento, health, índice)

NÃO PODE conter: mapeamento de schema nem orquestração de provisionamento.
"""
