"""Configuration schema for locale-sync using nested Pydantic models."""

import re
from pathlib import Path
from typing import Annotated, ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

LANGUAGE_CODE_PATTERN = r"^[A-Za-z]{2,3}(-[A-Za-z0-9]{2,8})*$"


def _validate_language_code(v: str) -> str:
    if not re.match(LANGUAGE_CODE_PATTERN, v):
        raise ValueError(f"Invalid language code: {v!r}")
    return v


class ExtractionConfig(BaseModel):
    """Source scanning configuration."""

    source_globs: list[str] = Field(
        default_factory=lambda: ["src/**/*.{ts,tsx,js,jsx}"],
        description="Glob patterns of source files to scan for translatable strings",
        min_length=1,
    )
    keys_path: Path = Field(
        default=Path("temp/keys.json"),
        description="Where the extracted keys JSON array is written",
    )
    blacklist_path: Path | None = Field(
        default=Path("scripts/blacklist.json"),
        description="JSON array of keys that must never be extracted",
    )
    functions: list[str] = Field(
        default_factory=lambda: ["t"],
        description="Names of translation functions whose literal arguments are keys",
        min_length=1,
    )

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")


class LocalesConfig(BaseModel):
    """Locale file configuration."""

    directory: Path = Field(
        default=Path("locales"),
        description="Directory holding one <lang>.json file per language",
    )
    languages: list[str] = Field(
        default_factory=list,
        description="Explicit language list; leave empty to auto-discover locale files",
    )
    source_language: str = Field(
        default="en",
        description="Language the translation keys are written in",
    )

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    @field_validator("languages")
    @classmethod
    def validate_languages(cls, v: list[str]) -> list[str]:
        """Validate language codes and reject duplicates."""
        for code in v:
            _ = _validate_language_code(code)
        if len(set(v)) != len(v):
            raise ValueError("Duplicate language codes in languages list")
        return v

    @field_validator("source_language")
    @classmethod
    def validate_source_language(cls, v: str) -> str:
        """Validate the source language code."""
        return _validate_language_code(v)


class ResourcesConfig(BaseModel):
    """Generated i18n module configuration."""

    path: Path = Field(
        default=Path("src/i18n.ts"),
        description="Module containing the 'const resources = { ... }' collection",
    )
    collection_label: str = Field(
        default="resources",
        description="Name of the top-level collection holding language blocks",
        pattern=r"^[A-Za-z_$][\w$]*$",
    )
    indent: str = Field(
        default="  ",
        description="Indentation unit used for generated blocks",
        pattern=r"^[ \t]+$",
    )

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")


class ProviderConfig(BaseModel):
    """Machine translation provider configuration."""

    endpoint: str = Field(
        default="",
        description="Base URL of the translation API; may contain a {region} placeholder",
    )
    region: str = Field(
        default="",
        description="Provider region (TRANSLATE_REGION or AWS_REGION when unset)",
    )
    api_key: str | None = Field(
        default=None,
        description="API key (TRANSLATE_API_KEY when unset)",
        repr=False,
    )
    concurrency: Annotated[int, Field(ge=1, le=64)] = Field(
        default=5,
        description="Maximum number of parallel translation requests",
    )
    timeout: Annotated[float, Field(gt=0, le=300)] = Field(
        default=30.0,
        description="Timeout in seconds for a single translation request",
    )

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    @field_validator("endpoint")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        """Validate and normalize the endpoint URL."""
        v = v.strip()
        if v and not v.startswith(("http://", "https://")):
            raise ValueError("Provider endpoint must start with http:// or https://")
        return v.rstrip("/")

    def resolved_endpoint(self) -> str:
        """Endpoint with the region placeholder filled in."""
        return self.endpoint.replace("{region}", self.region)


class SyncConfig(BaseModel):
    """
    Configuration model for locale-sync.

    Immutable once loaded; every component receives the parts it needs.
    """

    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    locales: LocalesConfig = Field(default_factory=LocalesConfig)
    resources: ResourcesConfig = Field(default_factory=ResourcesConfig)
    provider: ProviderConfig = Field(default_factory=ProviderConfig)

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")
