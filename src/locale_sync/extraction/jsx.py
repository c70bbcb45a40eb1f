"""
JSX-aware tokenization of JavaScript/TypeScript source.

Inside JSX children, quotes and slashes are plain text, so the generic
scanner would misread ``<p>Don't</p>`` as the start of a string literal.
This tokenizer tracks whether it is in code, in an element's tag, or in an
element's children, and yields children text as ``jsx_text`` tokens.
Everything else is tokenized exactly like ``core.scanner.iter_tokens``.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Literal

from ..core.scanner import Token, match_literal

FrameMode = Literal["code", "tag", "children"]

# Words after which "<" opens an element rather than comparing.
JSX_KEYWORDS = frozenset(
    {"return", "yield", "await", "default", "case", "else", "do", "in", "of"}
)
_JSX_PRECEDERS = frozenset("(=,?:[{;!&|")


class _Frame:
    """One level of JSX nesting."""

    def __init__(self, mode: FrameMode, container: bool = False) -> None:
        self.mode: FrameMode = mode
        # Code frames opened by "{" inside JSX close on their matching "}".
        self.container: bool = container
        self.depth: int = 0


def _is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch in "_$"


def starts_element(text: str, index: int) -> bool:
    """
    Whether the ``<`` at ``index`` opens a JSX element.

    The character after it must start a tag name (or ``>`` for a fragment),
    and the previous significant text must be somewhere an expression can
    begin: an operator, an opening bracket, ``=>`` or a keyword like
    ``return``. This keeps ``a < b`` and ``useState<string>()`` as code.
    """
    if index + 1 >= len(text):
        return False
    following = text[index + 1]
    if not (following.isalpha() or following in ">_$"):
        return False

    j = index - 1
    while j >= 0 and text[j].isspace():
        j -= 1
    if j < 0:
        return True

    ch = text[j]
    if _is_word_char(ch):
        k = j
        while k >= 0 and _is_word_char(text[k]):
            k -= 1
        return text[k + 1 : j + 1] in JSX_KEYWORDS
    if ch == ">":
        return j > 0 and text[j - 1] == "="
    return ch in _JSX_PRECEDERS


def _code_tokens(start: int, stop: int) -> Iterator[Token]:
    for i in range(start, stop):
        yield Token(i, i + 1, "code")


def iter_jsx_tokens(text: str) -> Iterator[Token]:
    """
    Yield the tokens of ``text``, recognising JSX elements.

    Text between tags is yielded as one ``jsx_text`` token per run (up to
    the next ``{`` or ``<``). Attribute strings, expression containers and
    ordinary code produce the same tokens as the generic scanner.
    """
    end = len(text)
    stack: list[_Frame] = [_Frame("code")]
    i = 0

    while i < end:
        frame = stack[-1]
        ch = text[i]

        if frame.mode == "children":
            if ch == "{":
                stack.append(_Frame("code", container=True))
                yield Token(i, i + 1, "code")
                i += 1
            elif ch == "<":
                j = i + 1
                while j < end and text[j].isspace():
                    j += 1
                if j < end and text[j] == "/":
                    close = text.find(">", j)
                    stop = end if close < 0 else close + 1
                    yield from _code_tokens(i, stop)
                    _ = stack.pop()
                    i = stop
                else:
                    stack.append(_Frame("tag"))
                    yield Token(i, i + 1, "code")
                    i += 1
            else:
                stop = i
                while stop < end and text[stop] not in "{<":
                    stop += 1
                yield Token(i, stop, "jsx_text")
                i = stop
            continue

        if frame.mode == "tag":
            if ch == "{":
                stack.append(_Frame("code", container=True))
            elif text.startswith("/>", i):
                _ = stack.pop()
                yield from _code_tokens(i, i + 2)
                i += 2
                continue
            elif ch == ">":
                frame.mode = "children"
            else:
                token = match_literal(text, i, end)
                if token is not None and token.kind == "string":
                    yield token
                    i = token.stop
                    continue
            yield Token(i, i + 1, "code")
            i += 1
            continue

        token = match_literal(text, i, end)
        if token is not None:
            yield token
            i = token.stop
            continue

        if ch == "{":
            frame.depth += 1
        elif ch == "}":
            if frame.container and frame.depth == 0:
                _ = stack.pop()
            else:
                frame.depth -= 1
        elif ch == "<" and starts_element(text, i):
            stack.append(_Frame("tag"))
        yield Token(i, i + 1, "code")
        i += 1
