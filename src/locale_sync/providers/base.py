"""Translation provider interface."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class TranslationProvider(Protocol):
    """
    Machine translation backend.

    Implementations raise ProviderError when a single call fails for
    network, quota or authentication reasons.
    """

    async def translate_text(
        self, source_language: str, target_language: str, text: str
    ) -> str:
        """Translate ``text`` from ``source_language`` into ``target_language``."""
        ...
