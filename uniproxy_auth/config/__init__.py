"""
Config Module - Black Box Interface

Purpose: Panel connection settings
Interface: PanelConfig, ConfigProvider and its env/file/static implementations
Hidden: Config sources, validation logic, environment parsing
"""

from .provider import (
    ConfigProvider,
    EnvConfigProvider,
    FileConfigProvider,
    PanelConfig,
    StaticConfigProvider,
)

__all__ = [
    "ConfigProvider",
    "EnvConfigProvider",
    "FileConfigProvider",
    "PanelConfig",
    "StaticConfigProvider",
]
