"""Serviços de aplicação.

Composition roots por produto: cada aplicação recebe conta, cache e
transporte, e monta tokens, clientes e servidor de webhook sob demanda.
"""

from app.services.mini_program import MiniProgramApplication
from app.services.open_platform import OpenPlatformApplication
from app.services.vegame import VeGameApplication, VeGameClient

__all__ = [
    "MiniProgramApplication",
    "OpenPlatformApplication",
    "VeGameApplication",
    "VeGameClient",
]
