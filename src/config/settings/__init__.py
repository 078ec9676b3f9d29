"""Agregador de settings do douyin-connect.

Re-exporta todas as settings e funções de cada módulo.
Organização por produto para isolamento de mudanças.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    BaseSettings,
    CacheBackend,
    CacheSettings,
    Environment,
    get_base_settings,
    get_cache_settings,
)

# Product settings
from config.settings.douyin import (
    DEVELOPER_API_BASE_URL,
    OPEN_API_BASE_URL,
    SANDBOX_API_BASE_URL,
    MiniProgramSettings,
    OpenPlatformSettings,
    get_mini_program_settings,
    get_open_platform_settings,
)
from config.settings.http import HttpSettings, get_http_settings
from config.settings.vegame import VeGameSettings, get_vegame_settings

__all__ = [
    # Constants
    "DEVELOPER_API_BASE_URL",
    "OPEN_API_BASE_URL",
    "SANDBOX_API_BASE_URL",
    # Base
    "BaseSettings",
    "CacheBackend",
    "CacheSettings",
    "Environment",
    "HttpSettings",
    # Products
    "MiniProgramSettings",
    "OpenPlatformSettings",
    "VeGameSettings",
    "get_base_settings",
    "get_cache_settings",
    "get_http_settings",
    "get_mini_program_settings",
    "get_open_platform_settings",
    "get_vegame_settings",
]
