"""
Depth-balanced delimiter scanning over JavaScript/TypeScript-like text.

This is a lexical scanner, not a parser: it walks the text once, skipping
string literals and comments, and counts ``{`` / ``}`` to find matching
boundaries. The resource patcher uses it to locate both language blocks
and the enclosing collection.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Literal, NamedTuple

from .exceptions import StructuralError

OPEN = "{"
CLOSE = "}"
QUOTES = frozenset({'"', "'", "`"})

TokenKind = Literal["code", "string", "comment", "jsx_text"]


class Token(NamedTuple):
    """One code character, a whole literal, a comment or a run of JSX text."""

    start: int
    stop: int
    kind: TokenKind


def _skip_string(text: str, start: int, end: int) -> int:
    quote = text[start]
    i = start + 1
    while i < end:
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if ch == quote:
            return i + 1
        if ch == "\n" and quote != "`":
            # Unterminated literal; stop at the line end.
            return i
        i += 1
    return end


def match_literal(text: str, start: int, end: int) -> Token | None:
    """
    The string literal or comment beginning at ``start``, if any.

    Args:
        text: Text being scanned
        start: Offset to look at
        end: Exclusive upper bound for the token

    Returns:
        A "string" or "comment" token, or None if ``start`` begins neither
    """
    ch = text[start]
    if ch in QUOTES:
        return Token(start, _skip_string(text, start, end), "string")
    if text.startswith("//", start):
        newline = text.find("\n", start, end)
        return Token(start, end if newline < 0 else newline, "comment")
    if text.startswith("/*", start):
        close = text.find("*/", start + 2, end)
        return Token(start, end if close < 0 else close + 2, "comment")
    return None


def iter_tokens(text: str, start: int = 0, end: int | None = None) -> Iterator[Token]:
    """
    Yield the tokens of ``text[start:end]`` in order.

    String literals (single, double or backtick quoted) and comments are
    yielded as single tokens so delimiters inside them are never counted.
    """
    end = len(text) if end is None else min(end, len(text))
    i = start
    while i < end:
        token = match_literal(text, i, end)
        if token is None:
            token = Token(i, i + 1, "code")
        yield token
        i = token.stop


def find_matching(text: str, open_index: int, end: int | None = None) -> int:
    """
    Find the delimiter that closes the one at ``open_index``.

    Args:
        text: Text to scan
        open_index: Index of an opening ``{``
        end: Optional exclusive upper bound for the scan

    Returns:
        Index of the matching ``}``

    Raises:
        StructuralError: If ``open_index`` is not an opening delimiter or no
            matching closing delimiter exists
    """
    if open_index >= len(text) or text[open_index] != OPEN:
        raise StructuralError(
            f"Expected '{OPEN}' at offset {open_index}", context=open_index
        )

    depth = 0
    for token in iter_tokens(text, open_index, end):
        if token.kind != "code":
            continue
        ch = text[token.start]
        if ch == OPEN:
            depth += 1
        elif ch == CLOSE:
            depth -= 1
            if depth == 0:
                return token.start

    line = text.count("\n", 0, open_index) + 1
    raise StructuralError(
        f"Unbalanced delimiters: no closing '{CLOSE}' for '{OPEN}' on line {line}",
        context=open_index,
    )


def depth_at(text: str, start: int, pos: int) -> int | None:
    """
    Nesting depth at ``pos`` relative to ``start``.

    Returns:
        The number of unclosed ``{`` between ``start`` and ``pos``, or None
        when ``pos`` falls inside a literal or a comment (the first quote of
        a literal counts as code)
    """
    depth = 0
    for token in iter_tokens(text, start, pos + 1):
        if token.start == pos:
            return depth if token.kind != "comment" else None
        if token.start > pos or token.stop > pos:
            return None
        if token.kind == "code":
            ch = text[token.start]
            if ch == OPEN:
                depth += 1
            elif ch == CLOSE:
                depth -= 1
    return None


def last_significant(text: str, start: int, end: int) -> int | None:
    """
    End offset of the last token in ``text[start:end]`` that is neither
    whitespace nor a comment.
    """
    last: int | None = None
    for token in iter_tokens(text, start, end):
        if token.kind == "comment":
            continue
        if token.kind == "code" and text[token.start].isspace():
            continue
        last = token.stop
    return last


def is_balanced(text: str) -> bool:
    """Check that every ``{`` outside literals and comments is closed."""
    depth = 0
    for token in iter_tokens(text):
        if token.kind != "code":
            continue
        ch = text[token.start]
        if ch == OPEN:
            depth += 1
        elif ch == CLOSE:
            depth -= 1
            if depth < 0:
                return False
    return depth == 0
