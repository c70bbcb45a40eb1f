"""
Extracted-keys file and blacklist handling.

The extraction stage scans the configured sources, drops blacklisted keys
and writes a sorted JSON array that the merge stage consumes.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing_extensions import override

from ..config.schema import ExtractionConfig
from ..core.exceptions import ConfigurationError, LocaleIOError
from ..core.locale_store import write_text_atomic
from .discovery import discover_source_files
from .extractor import extract_keys_from_file

logger = logging.getLogger(__name__)


class ExtractionResult:
    """Result of an extraction run."""

    def __init__(self, keys_path: Path) -> None:
        self.keys_path: Path = keys_path
        self.keys: list[str] = []
        self.scanned_files: list[Path] = []
        self.failed_files: list[tuple[Path, Exception]] = []
        self.blacklisted: list[str] = []

    @property
    def key_count(self) -> int:
        """Number of keys written."""
        return len(self.keys)

    @override
    def __str__(self) -> str:
        return (
            f"Extracted {self.key_count} keys from {len(self.scanned_files)} file(s) "
            f"to {self.keys_path} ({len(self.blacklisted)} blacklisted, "
            f"{len(self.failed_files)} failed)"
        )


def load_blacklist(blacklist_path: Path | None) -> set[str]:
    """
    Load the set of keys that must be ignored during extraction.

    A missing file yields an empty set; an unparsable one is logged and
    ignored.
    """
    if blacklist_path is None or not blacklist_path.exists():
        return set()

    try:
        data: object = json.loads(blacklist_path.read_text(encoding="utf-8"))  # pyright: ignore[reportAny]
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning(f"Could not parse blacklist at {blacklist_path}; ignoring: {e}")
        return set()

    if not isinstance(data, list):
        logger.warning(f"Blacklist at {blacklist_path} is not a JSON array; ignoring")
        return set()

    return {item for item in data if isinstance(item, str)}  # pyright: ignore[reportUnknownVariableType]


def load_extracted_keys(keys_path: Path) -> list[str]:
    """
    Read the keys written by the extraction stage.

    Raises:
        ConfigurationError: If the file is missing or malformed
    """
    if not keys_path.exists():
        raise ConfigurationError(
            f"{keys_path} not found. Did you run the extract stage first?",
            context=keys_path,
        )

    try:
        data: object = json.loads(keys_path.read_text(encoding="utf-8"))  # pyright: ignore[reportAny]
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ConfigurationError(
            f"Could not read extracted keys from {keys_path}: {e}", context=keys_path
        ) from e

    if not isinstance(data, list) or not all(isinstance(k, str) for k in data):  # pyright: ignore[reportUnknownVariableType]
        raise ConfigurationError(
            f"{keys_path} must contain a JSON array of strings", context=keys_path
        )

    return list(data)  # pyright: ignore[reportUnknownArgumentType]


def write_keys_file(keys_path: Path, keys: list[str]) -> None:
    """
    Write the sorted key list as a 2-space indented JSON array.

    Raises:
        LocaleIOError: If the file cannot be written
    """
    content = json.dumps(sorted(keys), indent=2, ensure_ascii=False) + "\n"
    try:
        write_text_atomic(keys_path, content)
    except (OSError, UnicodeError) as e:
        raise LocaleIOError(f"Could not write {keys_path}: {e}", context=keys_path) from e


def run_extraction(config: ExtractionConfig, root: Path = Path(".")) -> ExtractionResult:
    """
    Scan sources, drop blacklisted keys and write the keys file.

    Files that cannot be read or parsed are logged and skipped.

    Raises:
        LocaleIOError: If the keys file cannot be written
    """
    result = ExtractionResult(config.keys_path)
    all_keys: set[str] = set()

    for path in discover_source_files(config.source_globs, root):
        try:
            all_keys.update(extract_keys_from_file(path, config.functions))
            result.scanned_files.append(path)
        except (OSError, UnicodeDecodeError, SyntaxError) as e:
            logger.error(f"Error processing {path}: {e}")
            result.failed_files.append((path, e))

    for bad_key in sorted(load_blacklist(config.blacklist_path)):
        if bad_key in all_keys:
            all_keys.discard(bad_key)
            result.blacklisted.append(bad_key)
            logger.info(f"Blacklisted key removed: {bad_key!r}")

    result.keys = sorted(all_keys)
    write_keys_file(config.keys_path, result.keys)
    logger.info(str(result))
    return result
