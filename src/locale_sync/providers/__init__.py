"""Translation providers."""

from .base import TranslationProvider
from .http_provider import HttpTranslationProvider

__all__ = ["HttpTranslationProvider", "TranslationProvider"]
