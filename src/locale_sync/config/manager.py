"""Configuration loading for locale-sync.

This module reads the YAML configuration file, fills provider credentials
from the process environment, and validates the result into an immutable
SyncConfig.
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from ..core.exceptions import ConfigurationError
from .schema import SyncConfig

logger = logging.getLogger(__name__)

ENV_API_KEY = "TRANSLATE_API_KEY"
ENV_REGION = "TRANSLATE_REGION"
ENV_REGION_FALLBACK = "AWS_REGION"
ENV_ENDPOINT = "TRANSLATE_ENDPOINT"


class ConfigManager:
    """Loads and validates locale-sync configuration files."""

    @staticmethod
    def load_environment(dotenv_path: Path | None = None) -> bool:
        """
        Load variables from a .env file into the process environment.

        Existing environment variables take precedence.

        Returns:
            True if a .env file was found and loaded
        """
        return load_dotenv(dotenv_path=dotenv_path, override=False)

    @staticmethod
    def load_config(
        config_path: Path, environ: Mapping[str, str] | None = None
    ) -> SyncConfig:
        """
        Load and validate configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file
            environ: Environment used for provider credentials (defaults to
                os.environ)

        Returns:
            SyncConfig: Validated, immutable configuration object

        Raises:
            ConfigurationError: If the file is missing, is not valid YAML, or
                fails validation
        """
        if not config_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}", context=config_path
            )

        try:
            with config_path.open("r", encoding="utf-8") as f:
                raw_config_data: object = yaml.safe_load(f)  # pyright: ignore[reportAny]
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(
                f"Invalid YAML syntax in {config_path}: {e}", context=config_path
            ) from e

        if raw_config_data is None:
            config_data: dict[str, object] = {}
        elif isinstance(raw_config_data, dict):
            config_data = raw_config_data  # pyright: ignore[reportUnknownVariableType]
        else:
            raise ConfigurationError(
                f"Configuration file must contain a YAML dictionary, got {type(raw_config_data).__name__}",
                context=config_path,
            )

        return ConfigManager.from_dict(config_data, environ)

    @staticmethod
    def from_dict(
        config_data: Mapping[str, object], environ: Mapping[str, str] | None = None
    ) -> SyncConfig:
        """
        Validate a configuration mapping, applying environment overrides.

        Raises:
            ConfigurationError: If the configuration fails validation
        """
        env = os.environ if environ is None else environ
        parsed_data = ConfigManager._apply_environment(dict(config_data), env)

        try:
            return SyncConfig.model_validate(parsed_data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    @staticmethod
    def _apply_environment(
        config_data: dict[str, object], environ: Mapping[str, str]
    ) -> dict[str, object]:
        """Fill unset provider settings from environment variables."""
        provider_raw = config_data.get("provider") or {}
        if not isinstance(provider_raw, dict):
            return config_data

        provider: dict[str, object] = dict(provider_raw)  # pyright: ignore[reportUnknownArgumentType]

        for field, names in (
            ("api_key", (ENV_API_KEY,)),
            ("region", (ENV_REGION, ENV_REGION_FALLBACK)),
            ("endpoint", (ENV_ENDPOINT,)),
        ):
            if provider.get(field):
                continue
            for name in names:
                value = environ.get(name)
                if value:
                    provider[field] = value
                    logger.debug(f"Using {name} for provider.{field}")
                    break

        config_data["provider"] = provider
        return config_data

    @staticmethod
    def with_languages(config: SyncConfig, languages: list[str]) -> SyncConfig:
        """
        Return a copy of ``config`` restricted to ``languages``.

        Raises:
            ConfigurationError: If a language code is invalid
        """
        data = config.model_dump()
        data["locales"]["languages"] = languages
        try:
            return SyncConfig.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid language override: {e}") from e
