"""
Global test fixtures for locale-sync tests.

Provides a scripted in-memory translation provider, a sample resource
artifact and a configuration rooted in a temporary project directory.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from locale_sync.config.schema import (
    ExtractionConfig,
    LocalesConfig,
    ProviderConfig,
    ResourcesConfig,
    SyncConfig,
)
from tests.utils.fakes import SAMPLE_ARTIFACT, FakeProvider


@pytest.fixture
def fake_provider() -> FakeProvider:
    """Provider that translates everything with a language prefix."""
    return FakeProvider()


@pytest.fixture
def sample_artifact() -> str:
    """A small i18n module with an English block."""
    return SAMPLE_ARTIFACT


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Temporary project with a locales directory and an i18n module."""
    (tmp_path / "locales").mkdir()
    (tmp_path / "src").mkdir()
    _ = (tmp_path / "src" / "i18n.ts").write_text(SAMPLE_ARTIFACT, encoding="utf-8")
    return tmp_path


@pytest.fixture
def sync_config(project_dir: Path) -> SyncConfig:
    """Configuration pointing at the temporary project."""
    return SyncConfig(
        extraction=ExtractionConfig(
            source_globs=["src/**/*.{ts,tsx}"],
            keys_path=project_dir / "temp" / "keys.json",
            blacklist_path=project_dir / "blacklist.json",
        ),
        locales=LocalesConfig(
            directory=project_dir / "locales",
            languages=["de", "fr"],
            source_language="en",
        ),
        resources=ResourcesConfig(path=project_dir / "src" / "i18n.ts"),
        provider=ProviderConfig(endpoint="https://translate.example.com", concurrency=3),
    )
