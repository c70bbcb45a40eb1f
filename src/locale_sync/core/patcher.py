"""
Structural patching of per-language blocks in a generated i18n module.

The artifact holds a top-level collection such as::

    const resources = {
      fr: {
        translation: {
          "Hello": "Bonjour",
        }
      },
    };

ResourceBlockPatcher inserts or replaces one language block in that
collection using the depth-balanced scanner, leaving all other text intact.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Literal, NamedTuple

import json5

from .exceptions import LocaleIOError, LocaleParseError, StructuralError
from .locale_store import is_pending, write_text_atomic
from .scanner import depth_at, find_matching, last_significant

logger = logging.getLogger(__name__)

DEFAULT_COLLECTION_LABEL = "resources"
DEFAULT_INDENT = "  "
TRANSLATION_LABEL = "translation"

_IDENTIFIER = re.compile(r"^[A-Za-z_$][\w$]*$")

BlockAction = Literal["inserted", "replaced"]


class BlockSpan(NamedTuple):
    """Location of a language block inside the artifact text."""

    start: int  # first character of the label
    open_index: int  # the block's "{"
    close_index: int  # the matching "}"
    end: int  # one past the block, including a trailing comma


class PatchResult(NamedTuple):
    """Outcome of patching one language block."""

    text: str
    action: BlockAction
    changed: bool
    conflicts: list[str]
    parse_warning: str | None


def _label_pattern(label: str) -> re.Pattern[str]:
    """Match ``label: {``, ``"label": {`` or ``'label': {``."""
    return re.compile(
        r"(?<![\w$])(?P<quote>[\"']?)" + re.escape(label) + r"(?P=quote)\s*:\s*\{"
    )


def _collection_pattern(label: str) -> re.Pattern[str]:
    """Match ``label = {``, ``label: Type = {`` or ``label: {``."""
    return re.compile(r"(?<![\w$.])" + re.escape(label) + r"\s*(?::[^={};]*)?[=:]\s*\{")


def _find_child_label(
    text: str, label: str, body_start: int, body_end: int
) -> re.Match[str] | None:
    """First ``label: {`` that is a direct child of the body, in code."""
    for match in _label_pattern(label).finditer(text, body_start, body_end):
        if depth_at(text, body_start, match.start()) == 0:
            return match
    return None


def _line_indent(text: str, index: int) -> str | None:
    """Whitespace before ``index`` on its line, or None if other text precedes it."""
    line_start = text.rfind("\n", 0, index) + 1
    prefix = text[line_start:index]
    return prefix if not prefix.strip() else None


def detect_newline(text: str) -> str:
    """Line ending used by the text, taken from its first line (LF by default)."""
    index = text.find("\n")
    return "\r\n" if index > 0 and text[index - 1] == "\r" else "\n"


def _leading_whitespace(text: str, index: int) -> str:
    line_start = text.rfind("\n", 0, index) + 1
    line = text[line_start:index]
    return line[: len(line) - len(line.lstrip())]


def quote_string(value: str) -> str:
    """Encode a string as a double-quoted literal, escaping quotes and backslashes."""
    return json.dumps(value, ensure_ascii=False)


def render_label(language: str) -> str:
    """Language label as written in the collection (bare when possible)."""
    return language if _IDENTIFIER.match(language) else quote_string(language)


def parse_translation_data(inner: str) -> dict[str, str]:
    """
    Parse the text between the braces of a ``translation`` sub-collection.

    Trailing commas and comments are tolerated.

    Raises:
        LocaleParseError: If the content is not a flat string mapping
    """
    try:
        data: object = json5.loads("{" + inner + "}")  # pyright: ignore[reportUnknownMemberType]
    except ValueError as e:
        raise LocaleParseError(
            f"Could not parse translation block: {e}", recoverable=True
        ) from e

    if not isinstance(data, dict):
        raise LocaleParseError("Translation block is not a mapping", recoverable=True)

    result: dict[str, str] = {}
    for key, value in data.items():  # pyright: ignore[reportUnknownVariableType]
        if not isinstance(value, str):
            raise LocaleParseError(
                f"Translation value for {key!r} is not a string", recoverable=True
            )
        result[str(key)] = value  # pyright: ignore[reportUnknownArgumentType]
    return result


def merge_translations(
    existing: Mapping[str, str], incoming: Mapping[str, str]
) -> tuple[dict[str, str], list[str]]:
    """
    Merge a locale record into the mapping already present in the artifact.

    An existing value is only replaced when it is missing or blank; blank
    incoming values are never written.

    Returns:
        The merged mapping and the keys whose non-empty existing value
        differs from the incoming one (kept as-is)
    """
    merged = dict(existing)
    conflicts: list[str] = []
    for key, value in incoming.items():
        if is_pending(value):
            continue
        current = merged.get(key)
        if is_pending(current):
            merged[key] = value
        elif current != value:
            conflicts.append(key)
    return merged, conflicts


class ResourceBlockPatcher:
    """Inserts or replaces one language block inside the resource collection."""

    def __init__(
        self,
        collection_label: str = DEFAULT_COLLECTION_LABEL,
        indent: str = DEFAULT_INDENT,
    ) -> None:
        self.collection_label: str = collection_label
        self.indent: str = indent

    def locate_collection(self, text: str) -> tuple[int, int]:
        """
        Find the braces of the top-level collection.

        Returns:
            Indexes of the opening and closing delimiters

        Raises:
            StructuralError: If the label is missing or its braces do not match
        """
        for match in _collection_pattern(self.collection_label).finditer(text):
            if depth_at(text, 0, match.start()) is None:
                continue
            open_index = match.end() - 1
            return open_index, find_matching(text, open_index)

        raise StructuralError(
            f"Could not find '{self.collection_label} = {{' in resource artifact"
        )

    def locate_block(self, text: str, language: str) -> BlockSpan | None:
        """
        Find the block for ``language`` among the collection's direct children.

        Raises:
            StructuralError: If the collection or the block is unbalanced
        """
        open_index, close_index = self.locate_collection(text)
        match = _find_child_label(text, language, open_index + 1, close_index)
        if match is None:
            return None

        block_open = match.end() - 1
        block_close = find_matching(text, block_open, close_index + 1)
        end = block_close + 1
        trailing = re.compile(r"[ \t]*,").match(text, end)
        if trailing:
            end = trailing.end()
        return BlockSpan(match.start(), block_open, block_close, end)

    def extract_translations(self, text: str, span: BlockSpan) -> dict[str, str]:
        """
        Read the existing ``translation`` mapping of a located block.

        Raises:
            LocaleParseError: If the sub-collection content cannot be parsed
            StructuralError: If the sub-collection braces do not match
        """
        match = _find_child_label(
            text, TRANSLATION_LABEL, span.open_index + 1, span.close_index
        )
        if match is None:
            return {}
        inner_open = match.end() - 1
        inner_close = find_matching(text, inner_open, span.close_index + 1)
        return parse_translation_data(text[inner_open + 1 : inner_close])

    def render_block(
        self,
        language: str,
        translations: Mapping[str, str],
        indent: str,
        newline: str = "\n",
    ) -> str:
        """
        Serialize a language block; the first line carries no indentation.
        """
        inner = indent + self.indent
        entry = inner + self.indent
        lines = [f"{render_label(language)}: {{", f"{inner}{TRANSLATION_LABEL}: {{"]
        lines.extend(
            f"{entry}{quote_string(key)}: {quote_string(value)},"
            for key, value in translations.items()
        )
        lines.append(f"{inner}}}")
        lines.append(f"{indent}}},")
        return newline.join(lines)

    def apply(
        self, text: str, language: str, translations: Mapping[str, str]
    ) -> PatchResult:
        """
        Produce artifact text with exactly one up-to-date block for ``language``.

        Args:
            text: Full artifact text
            language: Language code of the block
            translations: The language's final locale record

        Returns:
            PatchResult with the new text

        Raises:
            StructuralError: If the artifact's delimiters cannot be matched
        """
        span = self.locate_block(text, language)
        parse_warning: str | None = None
        existing: dict[str, str] = {}

        if span is not None:
            try:
                existing = self.extract_translations(text, span)
            except LocaleParseError as e:
                parse_warning = str(e)
                logger.warning(
                    f"[{language}] Could not parse existing block, starting fresh: {e}"
                )

        newline = detect_newline(text)
        merged, conflicts = merge_translations(existing, translations)
        for key in conflicts:
            logger.warning(
                f"[{language}] Keeping existing artifact value for {key!r}; "
                f"it differs from the locale file"
            )

        if span is not None:
            indent = _line_indent(text, span.start)
            if indent is None:
                indent = _leading_whitespace(text, span.start) + self.indent
            block = self.render_block(language, merged, indent, newline)
            new_text = text[: span.start] + block + text[span.end :]
            action: BlockAction = "replaced"
        else:
            new_text = self._insert(text, language, merged, newline)
            action = "inserted"

        return PatchResult(
            text=new_text,
            action=action,
            changed=new_text != text,
            conflicts=conflicts,
            parse_warning=parse_warning,
        )

    def _insert(
        self,
        text: str,
        language: str,
        translations: Mapping[str, str],
        newline: str,
    ) -> str:
        open_index, close_index = self.locate_collection(text)

        closing_indent = _line_indent(text, close_index)
        if closing_indent is not None:
            # Closing brace on its own line: add the block as new lines above it.
            indent = closing_indent + self.indent
            insert_at = text.rfind("\n", 0, close_index) + 1
            block = self.render_block(language, translations, indent, newline)
            insertion = indent + block + newline
        else:
            indent = _leading_whitespace(text, close_index) + self.indent
            insert_at = close_index
            block = self.render_block(language, translations, indent, newline)
            insertion = newline + indent + block + newline

        previous = last_significant(text, open_index + 1, close_index)
        needs_comma = previous is not None and text[previous - 1] not in "{,"

        new_text = text[:insert_at] + insertion + text[insert_at:]
        if needs_comma and previous is not None:
            new_text = new_text[:previous] + "," + new_text[previous:]
        return new_text

    def patch_file(
        self, path: Path, language: str, translations: Mapping[str, str]
    ) -> PatchResult:
        """
        Patch the artifact on disk; written once, only when it changed.

        Raises:
            LocaleIOError: If the artifact cannot be read or written
            StructuralError: If the artifact's delimiters cannot be matched
        """
        try:
            # newline="" keeps CRLF line endings intact.
            with path.open(encoding="utf-8", newline="") as f:
                original = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise LocaleIOError(f"Could not read {path}: {e}", context=path) from e

        result = self.apply(original, language, translations)

        if result.changed:
            try:
                write_text_atomic(path, result.text)
            except (OSError, UnicodeError) as e:
                raise LocaleIOError(f"Could not write {path}: {e}", context=path) from e
            logger.info(f"[{language}] {result.action.capitalize()} block in {path}")
        else:
            logger.info(f"[{language}] Block in {path} already up to date")

        return result
