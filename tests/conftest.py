"""Configuração do pytest para o projeto douyin-connect."""

import sys
from pathlib import Path

import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from app.infra.stores import MemoryCredentialCache  # noqa: E402


@pytest.fixture
def memory_cache() -> MemoryCredentialCache:
    return MemoryCredentialCache()
