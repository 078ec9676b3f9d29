"""Connectors: adapters de borda para APIs externas.

Estrutura:
- douyin/: webhook do Open Platform e do mini-program
"""

__all__: list[str] = []
