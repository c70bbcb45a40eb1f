"""
Per-language locale dictionaries and their on-disk JSON representation.

A locale file is a flat JSON object mapping the source-language text of a
string to its translation. An empty or whitespace-only value marks the key
as pending translation; any other value is final.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from pathlib import Path
from typing_extensions import override

from .exceptions import LocaleIOError, LocaleParseError

logger = logging.getLogger(__name__)

LOCALE_FILE_SUFFIX = ".json"


def is_pending(value: str | None) -> bool:
    """Return True if a locale value still awaits translation."""
    return value is None or not value.strip()


class LocaleRecord(MutableMapping[str, str]):
    """
    Ordered key -> value dictionary for one language.

    Iteration follows insertion order, so existing keys keep their position
    and merged keys are appended in the order they were added.
    """

    def __init__(
        self,
        language: str,
        entries: Mapping[str, str] | Iterable[tuple[str, str]] | None = None,
    ) -> None:
        self.language: str = language
        self._entries: dict[str, str] = dict(entries or ())

    @override
    def __getitem__(self, key: str) -> str:
        return self._entries[key]

    @override
    def __setitem__(self, key: str, value: str) -> None:
        self._entries[key] = value

    @override
    def __delitem__(self, key: str) -> None:
        del self._entries[key]

    @override
    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    @override
    def __len__(self) -> int:
        return len(self._entries)

    @override
    def __repr__(self) -> str:
        return f"LocaleRecord({self.language!r}, {self._entries!r})"

    def pending_keys(self) -> list[str]:
        """Keys whose value is empty or whitespace, in record order."""
        return [key for key, value in self._entries.items() if is_pending(value)]

    def final_items(self) -> list[tuple[str, str]]:
        """Key/value pairs that already carry a translation."""
        return [
            (key, value)
            for key, value in self._entries.items()
            if not is_pending(value)
        ]

    def to_dict(self) -> dict[str, str]:
        """Return a plain dict copy preserving order."""
        return dict(self._entries)


def language_from_path(path: Path) -> str:
    """Return the language code for a locale file such as ``locales/fr.json``."""
    return path.stem


def discover_languages(locales_dir: Path) -> list[str]:
    """
    Find the language codes of all locale files in a directory.

    Args:
        locales_dir: Directory containing ``<lang>.json`` files

    Returns:
        Language codes sorted alphabetically
    """
    return sorted(
        language_from_path(path)
        for path in locales_dir.glob(f"*{LOCALE_FILE_SUFFIX}")
        if path.is_file()
    )


def load(path: Path, language: str | None = None) -> LocaleRecord:
    """
    Load a locale file into a LocaleRecord.

    Args:
        path: Path to the locale JSON file
        language: Language code (defaults to the file stem)

    Returns:
        The loaded record; empty if the file is missing or blank

    Raises:
        LocaleIOError: If the file exists but cannot be read
        LocaleParseError: If non-empty content is not a flat string mapping
    """
    language = language or language_from_path(path)

    if not path.exists():
        logger.debug(f"Locale file not found, starting empty: {path}")
        return LocaleRecord(language)

    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise LocaleIOError(f"Could not read {path}: {e}", context=path) from e

    if not raw.strip():
        logger.debug(f"Locale file is empty, starting empty: {path}")
        return LocaleRecord(language)

    try:
        data: object = json.loads(raw)  # pyright: ignore[reportAny]
    except json.JSONDecodeError as e:
        raise LocaleParseError(f"Failed to parse {path}: {e}", context=path) from e

    if not isinstance(data, dict):
        raise LocaleParseError(
            f"{path} must contain a JSON object, got {type(data).__name__}",
            context=path,
        )

    entries: list[tuple[str, str]] = []
    for key, value in data.items():  # pyright: ignore[reportUnknownVariableType]
        if not isinstance(value, str):
            raise LocaleParseError(
                f"{path}: value for {key!r} is not a string",
                context=path,
            )
        entries.append((str(key), value))  # pyright: ignore[reportUnknownArgumentType]

    return LocaleRecord(language, entries)


def merge(record: LocaleRecord, keys: Iterable[str]) -> int:
    """
    Add every key missing from the record as a pending (empty) entry.

    Existing keys are never touched, whether pending or final.

    Args:
        record: Record to update in place
        keys: Extracted keys, in the order new entries should be appended

    Returns:
        Number of keys that were added
    """
    added = 0
    for key in keys:
        if key not in record:
            record[key] = ""
            added += 1
    return added


def dumps(record: LocaleRecord) -> str:
    """Serialize a record deterministically (2-space JSON, trailing newline)."""
    return json.dumps(record.to_dict(), indent=2, ensure_ascii=False) + "\n"


def write_text_atomic(path: Path, content: str) -> None:
    """
    Write text to a file via a temporary file and rename.

    Raises:
        OSError: If the file cannot be written
        UnicodeEncodeError: If the content is not encodable as UTF-8
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(
        dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            _ = f.write(content)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def save(path: Path, record: LocaleRecord) -> bool:
    """
    Write a record back to disk.

    Unchanged content is not rewritten.

    Args:
        path: Destination locale file
        record: Record to serialize

    Returns:
        True if the file was written, False if it was already up to date

    Raises:
        LocaleIOError: If the file cannot be written
    """
    content = dumps(record)

    try:
        if path.exists() and path.read_text(encoding="utf-8") == content:
            logger.debug(f"Locale file unchanged: {path}")
            return False
        write_text_atomic(path, content)
    except (OSError, UnicodeError) as e:
        raise LocaleIOError(f"Could not write {path}: {e}", context=path) from e

    logger.info(f"Wrote {path} ({len(record)} keys)")
    return True
