"""API: camada de borda.

Responsabilidades:
- Receber callbacks da plataforma (webhooks)
- Validar assinaturas antes de qualquer descriptografia
- Converter corpos XML/JSON em mensagens do domínio

Subpastas:
- connectors/: codec e servidor de webhook por canal
- routes/: endpoints HTTP (webhooks, health)
"""
