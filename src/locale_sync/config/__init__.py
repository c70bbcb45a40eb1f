"""Configuration loading and schema."""

from .manager import ConfigManager
from .schema import (
    ExtractionConfig,
    LocalesConfig,
    ProviderConfig,
    ResourcesConfig,
    SyncConfig,
)

__all__ = [
    "ConfigManager",
    "ExtractionConfig",
    "LocalesConfig",
    "ProviderConfig",
    "ResourcesConfig",
    "SyncConfig",
]
