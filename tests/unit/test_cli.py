"""Tests for the locale-sync command-line interface."""

from __future__ import annotations

import json
from pathlib import Path
from types import TracebackType

import pytest

from locale_sync.config.schema import ProviderConfig
from locale_sync.main import DEFAULT_CONFIG_FILE, main, parse_arguments
from locale_sync.providers.http_provider import HttpTranslationProvider
from tests.utils.fakes import FakeProvider, count_blocks

CONFIG_YAML = """
extraction:
  source_globs: ["src/**/*.{ts,tsx}"]
  keys_path: temp/keys.json
  blacklist_path: null
locales:
  directory: locales
  languages: [de, fr]
resources:
  path: src/i18n.ts
provider:
  endpoint: https://translate.example.com
  concurrency: 2
"""


class ContextFakeProvider(FakeProvider):
    """FakeProvider usable as an async context manager."""

    async def __aenter__(self) -> ContextFakeProvider:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        return None


@pytest.fixture
def cli_project(project_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Project directory with a config file and one source file, as cwd."""
    for name in ("TRANSLATE_API_KEY", "TRANSLATE_REGION", "AWS_REGION", "TRANSLATE_ENDPOINT"):
        monkeypatch.delenv(name, raising=False)
    _ = (project_dir / "locale-sync.yml").write_text(CONFIG_YAML, encoding="utf-8")
    _ = (project_dir / "src" / "App.tsx").write_text(
        'export const App = () => <h1>{t("Hello")}</h1>;\n', encoding="utf-8"
    )
    monkeypatch.chdir(project_dir)
    return project_dir


@pytest.fixture
def cli_provider(monkeypatch: pytest.MonkeyPatch) -> ContextFakeProvider:
    """Replace the HTTP provider with an in-memory one."""
    provider = ContextFakeProvider()

    def factory(config: ProviderConfig) -> ContextFakeProvider:
        return provider

    monkeypatch.setattr(HttpTranslationProvider, "from_config", staticmethod(factory))
    return provider


def _read_json(path: Path) -> object:
    return json.loads(path.read_text(encoding="utf-8"))


class TestParseArguments:
    """Test argument parsing."""

    def test_defaults(self) -> None:
        """Only the command is required."""
        args = parse_arguments(["merge"])

        assert args.command == "merge"
        assert args.config == DEFAULT_CONFIG_FILE
        assert args.languages == []
        assert args.no_patch is False
        assert args.verbose is False

    def test_repeated_language(self) -> None:
        """--language can be given several times."""
        args = parse_arguments(
            ["sync", "--language", "fr", "--language", "de", "--no-patch", "--verbose"]
        )

        assert args.languages == ["fr", "de"]
        assert args.no_patch is True
        assert args.verbose is True

    def test_unknown_command(self) -> None:
        """Only the known stages are accepted."""
        with pytest.raises(SystemExit):
            _ = parse_arguments(["deploy"])


class TestMain:
    """Test the main entry point."""

    def test_missing_config(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """A missing configuration file exits with an error."""
        monkeypatch.chdir(tmp_path)

        assert main(["merge"]) == 1

    def test_extract(self, cli_project: Path) -> None:
        """The extract stage writes the keys file only."""
        assert main(["extract"]) == 0

        assert _read_json(cli_project / "temp" / "keys.json") == ["Hello"]
        assert list((cli_project / "locales").iterdir()) == []

    def test_merge_requires_extract(self, cli_project: Path) -> None:
        """Merging without a keys file is an error."""
        assert main(["merge"]) == 1

    def test_extract_then_merge(self, cli_project: Path) -> None:
        """Merged keys are added as pending values."""
        assert main(["extract"]) == 0
        assert main(["merge"]) == 0

        assert _read_json(cli_project / "locales" / "fr.json") == {"Hello": ""}
        assert _read_json(cli_project / "locales" / "de.json") == {"Hello": ""}

    def test_sync(self, cli_project: Path, cli_provider: ContextFakeProvider) -> None:
        """The sync command runs every stage."""
        assert main(["sync"]) == 0

        assert _read_json(cli_project / "locales" / "fr.json") == {"Hello": "fr:Hello"}
        artifact = (cli_project / "src" / "i18n.ts").read_text(encoding="utf-8")
        assert count_blocks(artifact, "fr") == 1
        assert count_blocks(artifact, "de") == 1
        assert len(cli_provider.calls) == 2

    def test_sync_single_language_without_patch(
        self, cli_project: Path, cli_provider: ContextFakeProvider
    ) -> None:
        """--language and --no-patch narrow the run."""
        before = (cli_project / "src" / "i18n.ts").read_text(encoding="utf-8")

        assert main(["sync", "--language", "fr", "--no-patch"]) == 0

        assert (cli_project / "locales" / "fr.json").exists()
        assert not (cli_project / "locales" / "de.json").exists()
        assert (cli_project / "src" / "i18n.ts").read_text(encoding="utf-8") == before

    def test_translate_requires_endpoint(
        self, cli_project: Path, cli_provider: ContextFakeProvider
    ) -> None:
        """Translation without an endpoint is a configuration error."""
        _ = (cli_project / "locale-sync.yml").write_text(
            CONFIG_YAML.replace("  endpoint: https://translate.example.com\n", ""),
            encoding="utf-8",
        )

        assert main(["translate"]) == 1
        assert cli_provider.calls == []

    def test_failed_language_sets_exit_code(
        self, cli_project: Path, cli_provider: ContextFakeProvider
    ) -> None:
        """A language that fails makes the run fail."""
        _ = (cli_project / "locales" / "de.json").write_text("[]", encoding="utf-8")

        assert main(["sync"]) == 1
        assert _read_json(cli_project / "locales" / "fr.json") == {"Hello": "fr:Hello"}

    def test_sync_checks_provider_before_extracting(
        self, cli_project: Path, cli_provider: ContextFakeProvider
    ) -> None:
        """A sync without an endpoint fails before writing the keys file."""
        _ = (cli_project / "locale-sync.yml").write_text(
            CONFIG_YAML.replace("  endpoint: https://translate.example.com\n", ""),
            encoding="utf-8",
        )

        assert main(["sync"]) == 1
        assert not (cli_project / "temp" / "keys.json").exists()
        assert cli_provider.calls == []

    def test_sync_requires_region_for_placeholder(
        self, cli_project: Path, cli_provider: ContextFakeProvider
    ) -> None:
        """A {region} endpoint without a region fails before extraction."""
        _ = (cli_project / "locale-sync.yml").write_text(
            CONFIG_YAML.replace(
                "https://translate.example.com", "https://translate.{region}.example.com"
            ),
            encoding="utf-8",
        )

        assert main(["sync"]) == 1
        assert not (cli_project / "temp" / "keys.json").exists()
