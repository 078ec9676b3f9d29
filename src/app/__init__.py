"""App: núcleo: credenciais, assinatura, composição e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- services/: aplicações por produto (Open Platform, Mini Program, VeGame)
- domain/: contas, credenciais, mensagens e usuários
- infra/: implementações concretas (crypto, cache, http, tokens, signing, oauth)
- protocols/: contratos/interfaces
- observability/: correlation_id para logs estruturados

Padrão: app executa; api adapta; config configura; utils apoia.
"""
