"""
Per-language synchronization pipeline.

For each language, in a deterministic order, the orchestrator runs
load -> merge -> fill -> save -> patch. Languages are processed one after
another; concurrency only exists inside a single language's translation
batch. Errors for one language are recorded and the run moves on, except
for configuration errors which abort before any language is touched.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing_extensions import override

from ..config.schema import SyncConfig
from ..providers.base import TranslationProvider
from . import locale_store
from .dispatcher import TranslationDispatcher
from .exceptions import ConfigurationError, LocaleSyncError
from .patcher import ResourceBlockPatcher

logger = logging.getLogger(__name__)


class LanguageReport:
    """What happened to one language during a run."""

    def __init__(self, language: str, locale_path: Path) -> None:
        self.language: str = language
        self.locale_path: Path = locale_path
        self.keys_added: int = 0
        self.translated: list[str] = []
        self.pending: list[str] = []
        self.saved: bool = False
        self.block_action: str | None = None
        self.conflicts: list[str] = []
        self.warnings: list[str] = []
        self.error: LocaleSyncError | None = None

    @property
    def failed(self) -> bool:
        """True if a fatal error stopped this language."""
        return self.error is not None

    @override
    def __str__(self) -> str:
        status = f"FAILED ({self.error})" if self.error else "ok"
        return (
            f"[{self.language}] {self.keys_added} added, "
            f"{len(self.translated)} translated, {len(self.pending)} pending, "
            f"block {self.block_action or 'untouched'}: {status}"
        )


class SyncSummary:
    """Result of a whole synchronization run."""

    def __init__(self) -> None:
        self.languages: list[LanguageReport] = []
        self.patch_failures: list[tuple[str, Path, LocaleSyncError]] = []

    @property
    def keys_added(self) -> int:
        """Total keys added across languages."""
        return sum(report.keys_added for report in self.languages)

    @property
    def keys_translated(self) -> int:
        """Total keys translated across languages."""
        return sum(len(report.translated) for report in self.languages)

    @property
    def keys_pending(self) -> int:
        """Total keys still pending across languages."""
        return sum(len(report.pending) for report in self.languages)

    @property
    def failed_languages(self) -> list[str]:
        """Languages stopped by a fatal error."""
        return [report.language for report in self.languages if report.failed]

    @property
    def success(self) -> bool:
        """True if every language completed."""
        return not self.failed_languages

    @override
    def __str__(self) -> str:
        return (
            f"Sync Results: {len(self.languages)} language(s), "
            f"{self.keys_added} added, {self.keys_translated} translated, "
            f"{self.keys_pending} pending, "
            f"{len(self.failed_languages)} failed"
        )


class SyncOrchestrator:
    """Runs the merge/translate/patch pipeline for every configured language."""

    def __init__(
        self,
        config: SyncConfig,
        provider: TranslationProvider | None = None,
        patcher: ResourceBlockPatcher | None = None,
    ) -> None:
        self.config: SyncConfig = config
        self.provider: TranslationProvider | None = provider
        self.patcher: ResourceBlockPatcher = patcher or ResourceBlockPatcher(
            collection_label=config.resources.collection_label,
            indent=config.resources.indent,
        )

    def resolve_languages(self) -> list[str]:
        """
        Languages to process: the configured list in order, else discovered files.

        Raises:
            ConfigurationError: If auto-discovery is used and the locales
                directory does not exist
        """
        if self.config.locales.languages:
            return list(self.config.locales.languages)

        locales_dir = self.config.locales.directory
        if not locales_dir.is_dir():
            raise ConfigurationError(
                f'Locales directory "{locales_dir}" not found. '
                f"Create it and add locale JSON files, or list languages explicitly.",
                context=locales_dir,
            )
        languages = locale_store.discover_languages(locales_dir)
        if not languages:
            logger.warning(f"No locale files found in {locales_dir}")
        return languages

    def locale_path(self, language: str) -> Path:
        """Path of the locale file for ``language``."""
        return self.config.locales.directory / f"{language}{locale_store.LOCALE_FILE_SUFFIX}"

    def _check_configuration(self, translate: bool, patch: bool) -> None:
        if translate and self.provider is None:
            raise ConfigurationError("Translation requested but no provider configured")
        if patch and not self.config.resources.path.is_file():
            raise ConfigurationError(
                f"Resource artifact not found: {self.config.resources.path}",
                context=self.config.resources.path,
            )

    async def run(
        self,
        keys: Sequence[str] | None = None,
        translate: bool = True,
        patch: bool = True,
    ) -> SyncSummary:
        """
        Synchronize every language.

        Args:
            keys: Extracted keys to merge in; None skips the merge step
            translate: Whether to fill pending keys with the provider
            patch: Whether to update the resource artifact

        Returns:
            SyncSummary with one report per language

        Raises:
            ConfigurationError: Before any language is processed, if the
                configuration cannot support the requested steps
        """
        self._check_configuration(translate, patch)
        languages = self.resolve_languages()

        dispatcher = (
            TranslationDispatcher(self.provider, self.config.provider.concurrency)
            if translate and self.provider is not None
            else None
        )

        summary = SyncSummary()
        for language in languages:
            report = await self.sync_language(language, keys, dispatcher, patch)
            summary.languages.append(report)
            if report.error is not None and report.block_action == "failed":
                summary.patch_failures.append(
                    (language, self.config.resources.path, report.error)
                )
            logger.info(str(report))

        logger.info(str(summary))
        return summary

    async def sync_language(
        self,
        language: str,
        keys: Sequence[str] | None,
        dispatcher: TranslationDispatcher | None,
        patch: bool,
    ) -> LanguageReport:
        """Run the pipeline for one language; fatal errors land in the report."""
        path = self.locale_path(language)
        report = LanguageReport(language, path)
        logger.info(f"=== Processing locale: {path} (lang={language!r}) ===")

        try:
            record = locale_store.load(path, language)

            if keys is not None:
                report.keys_added = locale_store.merge(record, keys)
                if report.keys_added:
                    logger.info(f"[{language}] Added {report.keys_added} new key(s)")
                else:
                    logger.info(f"[{language}] No new keys to add")

            if dispatcher is not None:
                fill_report = await dispatcher.fill(
                    record, self.config.locales.source_language, language
                )
                report.translated = list(fill_report.translated)
                report.warnings.extend(
                    f"{key!r}: {message}" for key, message in fill_report.failed.items()
                )

            report.pending = record.pending_keys()
            report.saved = locale_store.save(path, record)
        except LocaleSyncError as e:
            logger.error(f"[{language}] {e}")
            report.error = e
            return report

        if patch:
            try:
                result = self.patcher.patch_file(
                    self.config.resources.path, language, record
                )
            except LocaleSyncError as e:
                logger.error(f"[{language}] Failed to patch {self.config.resources.path}: {e}")
                report.error = e
                report.block_action = "failed"
                return report

            report.block_action = result.action if result.changed else "unchanged"
            report.conflicts = result.conflicts
            if result.parse_warning:
                report.warnings.append(result.parse_warning)

        return report
