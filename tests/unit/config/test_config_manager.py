"""Tests for configuration loading and validation."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from locale_sync.config.manager import ConfigManager
from locale_sync.config.schema import LocalesConfig, ProviderConfig, SyncConfig
from locale_sync.core.exceptions import ConfigurationError


class TestSchema:
    """Test the configuration models."""

    def test_defaults(self) -> None:
        """An empty configuration is valid."""
        config = SyncConfig()

        assert config.locales.directory == Path("locales")
        assert config.locales.source_language == "en"
        assert config.resources.collection_label == "resources"
        assert config.provider.concurrency == 5
        assert config.extraction.functions == ["t"]

    @pytest.mark.parametrize("code", ["fr", "pt-BR", "zh-Hant", "fil"])
    def test_valid_language_codes(self, code: str) -> None:
        """Common language tags are accepted."""
        assert LocalesConfig(languages=[code]).languages == [code]

    @pytest.mark.parametrize("code", ["", "f", "fr_FR", "../etc", "fr/de"])
    def test_invalid_language_codes(self, code: str) -> None:
        """Codes that cannot be file names or labels are rejected."""
        with pytest.raises(ValueError):
            _ = LocalesConfig(languages=[code])

    def test_duplicate_languages(self) -> None:
        """Each language may only appear once."""
        with pytest.raises(ValueError, match="Duplicate"):
            _ = LocalesConfig(languages=["fr", "fr"])

    def test_concurrency_bounds(self) -> None:
        """Concurrency must be at least one."""
        with pytest.raises(ValueError):
            _ = ProviderConfig(concurrency=0)

    def test_endpoint_normalized(self) -> None:
        """Trailing slashes are removed and the scheme is checked."""
        assert ProviderConfig(endpoint="https://x.test/").endpoint == "https://x.test"
        with pytest.raises(ValueError):
            _ = ProviderConfig(endpoint="ftp://x.test")

    def test_region_placeholder(self) -> None:
        """The region is substituted into the endpoint."""
        config = ProviderConfig(
            endpoint="https://translate.{region}.example.com", region="eu-west-1"
        )

        assert config.resolved_endpoint() == "https://translate.eu-west-1.example.com"

    def test_api_key_not_in_repr(self) -> None:
        """Secrets are hidden from the repr."""
        assert "secret" not in repr(ProviderConfig(api_key="secret"))

    def test_unknown_fields_rejected(self) -> None:
        """Typos in the configuration are errors."""
        with pytest.raises(ValueError):
            _ = SyncConfig.model_validate({"locale": {}})

    def test_frozen(self) -> None:
        """Configuration is immutable."""
        config = SyncConfig()
        with pytest.raises(ValueError):
            config.locales = LocalesConfig()  # pyright: ignore[reportAttributeAccessIssue]


class TestLoadConfig:
    """Test ConfigManager.load_config."""

    def test_load_valid_file(self, tmp_path: Path) -> None:
        """A YAML file is validated into a SyncConfig."""
        path = tmp_path / "locale-sync.yml"
        _ = path.write_text(
            """
locales:
  directory: public/locales
  languages: [fr, de]
resources:
  path: src/i18n.ts
provider:
  endpoint: https://translate.example.com
  concurrency: 8
""",
            encoding="utf-8",
        )

        config = ConfigManager.load_config(path, environ={})

        assert config.locales.directory == Path("public/locales")
        assert config.locales.languages == ["fr", "de"]
        assert config.provider.concurrency == 8
        assert config.provider.api_key is None

    def test_empty_file_uses_defaults(self, tmp_path: Path) -> None:
        """An empty file is the default configuration."""
        path = tmp_path / "locale-sync.yml"
        _ = path.write_text("", encoding="utf-8")

        assert ConfigManager.load_config(path, environ={}) == SyncConfig()

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file is a configuration error."""
        with pytest.raises(ConfigurationError, match="not found"):
            _ = ConfigManager.load_config(tmp_path / "missing.yml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        """Broken YAML is reported."""
        path = tmp_path / "locale-sync.yml"
        _ = path.write_text("locales: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            _ = ConfigManager.load_config(path)

    def test_non_mapping(self, tmp_path: Path) -> None:
        """The top level must be a mapping."""
        path = tmp_path / "locale-sync.yml"
        _ = path.write_text("- fr\n- de\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="YAML dictionary"):
            _ = ConfigManager.load_config(path)

    def test_validation_error(self, tmp_path: Path) -> None:
        """Invalid values become configuration errors."""
        path = tmp_path / "locale-sync.yml"
        _ = path.write_text("provider:\n  concurrency: 0\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            _ = ConfigManager.load_config(path, environ={})


class TestEnvironment:
    """Test environment overrides."""

    def test_environment_fills_unset_values(self) -> None:
        """Credentials come from the environment when not configured."""
        config = ConfigManager.from_dict(
            {},
            environ={
                "TRANSLATE_API_KEY": "key-123",
                "AWS_REGION": "us-east-1",
                "TRANSLATE_ENDPOINT": "https://translate.example.com",
            },
        )

        assert config.provider.api_key == "key-123"
        assert config.provider.region == "us-east-1"
        assert config.provider.endpoint == "https://translate.example.com"

    def test_region_prefers_translate_region(self) -> None:
        """TRANSLATE_REGION wins over AWS_REGION."""
        config = ConfigManager.from_dict(
            {}, environ={"TRANSLATE_REGION": "eu-west-1", "AWS_REGION": "us-east-1"}
        )

        assert config.provider.region == "eu-west-1"

    def test_file_values_win(self) -> None:
        """Explicit configuration is not overridden."""
        config = ConfigManager.from_dict(
            {"provider": {"region": "ap-south-1"}},
            environ={"TRANSLATE_REGION": "eu-west-1"},
        )

        assert config.provider.region == "ap-south-1"

    def test_load_environment_reads_dotenv(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A .env file populates missing variables."""
        monkeypatch.delenv("TRANSLATE_API_KEY", raising=False)
        dotenv = tmp_path / ".env"
        _ = dotenv.write_text("TRANSLATE_API_KEY=from-dotenv\n", encoding="utf-8")

        try:
            assert ConfigManager.load_environment(dotenv) is True
            config = ConfigManager.from_dict({})
        finally:
            _ = os.environ.pop("TRANSLATE_API_KEY", None)

        assert config.provider.api_key == "from-dotenv"


class TestWithLanguages:
    """Test ConfigManager.with_languages."""

    def test_restricts_languages(self, sync_config: SyncConfig) -> None:
        """The override replaces the language list only."""
        config = ConfigManager.with_languages(sync_config, ["fr"])

        assert config.locales.languages == ["fr"]
        assert config.resources == sync_config.resources
        assert sync_config.locales.languages == ["de", "fr"]

    def test_invalid_override(self, sync_config: SyncConfig) -> None:
        """Invalid codes are configuration errors."""
        with pytest.raises(ConfigurationError):
            _ = ConfigManager.with_languages(sync_config, ["not a code"])
