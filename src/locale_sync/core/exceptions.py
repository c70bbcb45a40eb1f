"""
Exception classes for locale-sync.

Every error raised by the synchronization engine derives from
LocaleSyncError and carries a category, a severity and a recoverable flag.
The orchestrator uses these to decide whether a failure aborts the run,
skips one language, or is merely logged.
"""

from __future__ import annotations

from enum import Enum


class ErrorSeverity(Enum):
    """Error severity levels for classification and handling."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Categories of errors for appropriate handling strategies."""

    CONFIGURATION = "configuration"
    IO = "io"
    PARSE = "parse"
    PROVIDER = "provider"
    STRUCTURE = "structure"
    UNKNOWN = "unknown"


class LocaleSyncError(Exception):
    """Base exception class for locale-sync specific errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        context: object | None = None,
        recoverable: bool = True,
    ) -> None:
        super().__init__(message)
        self.category: ErrorCategory = category
        self.severity: ErrorSeverity = severity
        self.context: object | None = context
        self.recoverable: bool = recoverable


class ConfigurationError(LocaleSyncError):
    """Missing or invalid configuration; aborts the whole run."""

    def __init__(self, message: str, context: object | None = None) -> None:
        super().__init__(
            message,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.CRITICAL,
            context=context,
            recoverable=False,
        )


class LocaleIOError(LocaleSyncError):
    """A required file could not be read or written."""

    def __init__(self, message: str, context: object | None = None) -> None:
        super().__init__(
            message,
            category=ErrorCategory.IO,
            severity=ErrorSeverity.HIGH,
            context=context,
            recoverable=False,
        )


class LocaleParseError(LocaleSyncError):
    """Locale file or embedded block content is malformed."""

    def __init__(
        self,
        message: str,
        context: object | None = None,
        recoverable: bool = False,
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.PARSE,
            severity=ErrorSeverity.MEDIUM,
            context=context,
            recoverable=recoverable,
        )


class ProviderError(LocaleSyncError):
    """A single translation call failed (network, quota, auth)."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        context: object | None = None,
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.PROVIDER,
            severity=ErrorSeverity.LOW,
            context=context,
            recoverable=True,
        )
        self.status_code: int | None = status_code


class StructuralError(LocaleSyncError):
    """Delimiters in the resource artifact cannot be matched."""

    def __init__(self, message: str, context: object | None = None) -> None:
        super().__init__(
            message,
            category=ErrorCategory.STRUCTURE,
            severity=ErrorSeverity.HIGH,
            context=context,
            recoverable=False,
        )
