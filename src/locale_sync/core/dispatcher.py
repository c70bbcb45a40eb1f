"""
Bounded-concurrency translation of pending locale keys.

Each pending key becomes one translation job. Jobs run as asyncio tasks
gated by a semaphore and write to distinct keys of the owning record, so
completion order never affects the result.
"""

from __future__ import annotations

import asyncio
import logging
from typing import NamedTuple
from typing_extensions import override

from ..providers.base import TranslationProvider
from .exceptions import ProviderError
from .locale_store import LocaleRecord, is_pending

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY = 5


class TranslationJob(NamedTuple):
    """One provider call for a single pending key."""

    key: str
    source_language: str
    target_language: str


class FillReport:
    """Outcome of a fill run for one language."""

    def __init__(self, language: str) -> None:
        self.language: str = language
        self.scheduled: list[str] = []
        self.translated: list[str] = []
        self.failed: dict[str, str] = {}

    @property
    def scheduled_count(self) -> int:
        """Number of jobs that were scheduled."""
        return len(self.scheduled)

    @property
    def translated_count(self) -> int:
        """Number of keys resolved by this run."""
        return len(self.translated)

    @property
    def failure_count(self) -> int:
        """Number of keys left pending after a failed job."""
        return len(self.failed)

    @override
    def __str__(self) -> str:
        return (
            f"[{self.language}] {self.translated_count}/{self.scheduled_count} "
            f"translated, {self.failure_count} failed"
        )


class TranslationDispatcher:
    """Turns the pending keys of a record into concurrent provider calls."""

    def __init__(
        self,
        provider: TranslationProvider,
        concurrency: int = DEFAULT_CONCURRENCY,
    ) -> None:
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        self.provider: TranslationProvider = provider
        self.concurrency: int = concurrency

    async def fill(
        self,
        record: LocaleRecord,
        source_language: str,
        target_language: str | None = None,
    ) -> FillReport:
        """
        Translate every pending key of ``record`` in place.

        Returns only after every job has either succeeded or failed. A failed
        job leaves its key pending and never aborts the batch.

        Args:
            record: Record whose blank values should be filled
            source_language: Language of the keys
            target_language: Language to translate into (defaults to the
                record's language)

        Returns:
            FillReport listing translated and failed keys
        """
        target_language = target_language or record.language
        report = FillReport(target_language)

        jobs = [
            TranslationJob(key, source_language, target_language)
            for key in record.pending_keys()
        ]
        if not jobs:
            logger.info(f"[{target_language}] No pending keys to translate")
            return report

        report.scheduled = [job.key for job in jobs]
        logger.info(
            f"[{target_language}] Translating {len(jobs)} pending key(s) "
            f"with concurrency {self.concurrency}"
        )

        if source_language == target_language:
            for job in jobs:
                record[job.key] = job.key
                report.translated.append(job.key)
            return report

        semaphore = asyncio.Semaphore(self.concurrency)
        _ = await asyncio.gather(
            *(self._run_job(job, record, report, semaphore) for job in jobs)
        )

        logger.info(str(report))
        return report

    async def _run_job(
        self,
        job: TranslationJob,
        record: LocaleRecord,
        report: FillReport,
        semaphore: asyncio.Semaphore,
    ) -> None:
        """Run one job; failures are recorded, never raised."""
        async with semaphore:
            try:
                translated = await self.provider.translate_text(
                    job.source_language, job.target_language, job.key
                )
            except ProviderError as e:
                logger.warning(
                    f"[{job.target_language}] Error translating {job.key!r}: {e}"
                )
                report.failed[job.key] = str(e)
                return
            except Exception as e:
                logger.exception(
                    f"[{job.target_language}] Unexpected error translating {job.key!r}"
                )
                report.failed[job.key] = f"{type(e).__name__}: {e}"
                return

        if is_pending(translated):
            logger.warning(
                f"[{job.target_language}] Empty translation for {job.key!r}; left pending"
            )
            report.failed[job.key] = "empty translation"
            return

        record[job.key] = translated
        report.translated.append(job.key)
        logger.debug(f"[{job.target_language}] {job.key!r} -> {translated!r}")


async def fill(
    record: LocaleRecord,
    source_language: str,
    target_language: str,
    provider: TranslationProvider,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> FillReport:
    """Convenience wrapper around TranslationDispatcher.fill."""
    dispatcher = TranslationDispatcher(provider, concurrency)
    return await dispatcher.fill(record, source_language, target_language)
