"""Synchronization engine: locale store, dispatcher, scanner, patcher, orchestrator."""

from .dispatcher import FillReport, TranslationDispatcher, TranslationJob
from .exceptions import (
    ConfigurationError,
    ErrorCategory,
    ErrorSeverity,
    LocaleIOError,
    LocaleParseError,
    LocaleSyncError,
    ProviderError,
    StructuralError,
)
from .locale_store import LocaleRecord
from .orchestrator import LanguageReport, SyncOrchestrator, SyncSummary
from .patcher import PatchResult, ResourceBlockPatcher

__all__ = [
    "ConfigurationError",
    "ErrorCategory",
    "ErrorSeverity",
    "FillReport",
    "LanguageReport",
    "LocaleIOError",
    "LocaleParseError",
    "LocaleRecord",
    "LocaleSyncError",
    "PatchResult",
    "ProviderError",
    "ResourceBlockPatcher",
    "StructuralError",
    "SyncOrchestrator",
    "SyncSummary",
    "TranslationDispatcher",
    "TranslationJob",
]
