"""
Extraction of translatable string literals from source files.

Python files are parsed with the ``ast`` module. JavaScript/TypeScript
files are scanned lexically for calls such as ``t("Some text")``. Files
that may contain JSX also contribute the text of their elements, as in
``<p>Some text</p>``.
"""

from __future__ import annotations

import ast
import html
import logging
import re
from collections.abc import Iterable
from pathlib import Path
from typing_extensions import override

from ..core.scanner import Token, iter_tokens
from .jsx import iter_jsx_tokens

logger = logging.getLogger(__name__)

PYTHON_SUFFIXES = {".py"}
# TypeScript proper allows "<Type>value" assertions, so no JSX there.
NON_JSX_SUFFIXES = {".ts", ".mts", ".cts"}

_CODE_POINT_ESCAPE = re.compile(r"(?<!\\)((?:\\\\)*)\\u\{([0-9A-Fa-f]{1,6})\}")


class StringExtractor(ast.NodeVisitor):
    """AST visitor to extract translatable strings from Python source code."""

    def __init__(self, functions: Iterable[str]) -> None:
        """
        Initialize the string extractor.

        Args:
            functions: Names of the translation functions to look for
        """
        self.functions: frozenset[str] = frozenset(functions)
        self.strings: list[str] = []

    @override
    def visit_Call(self, node: ast.Call) -> None:
        """Collect the first string-constant argument of translation calls."""
        func_name = self._get_function_name(node.func)

        if func_name in self.functions and node.args:
            arg = node.args[0]
            if isinstance(arg, ast.Constant) and isinstance(arg.value, str):
                self.strings.append(arg.value)
                logger.debug(
                    f"Found translatable string: {arg.value!r} at line {node.lineno}"
                )

        self.generic_visit(node)

    def _get_function_name(self, func_node: ast.AST) -> str | None:
        if isinstance(func_node, ast.Name):
            return func_node.id
        elif isinstance(func_node, ast.Attribute):
            return func_node.attr
        return None


def _is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch in "_$"


def join_surrogates(value: str) -> str:
    """
    Combine UTF-16 surrogate pairs into single code points.

    ``"\\uD83D\\uDE00"`` in JavaScript is one emoji; decoded escape by escape
    it becomes two lone surrogates that cannot be written as UTF-8.

    Raises:
        UnicodeDecodeError: If the string holds an unpaired surrogate
    """
    return value.encode("utf-16", "surrogatepass").decode("utf-16")


def _expand_code_point_escapes(literal: str) -> str:
    """Rewrite ES2015 ``\\u{1F600}`` escapes as Python ``\\U0001f600`` escapes."""
    return _CODE_POINT_ESCAPE.sub(
        lambda m: f"{m.group(1)}\\U{int(m.group(2), 16):08x}", literal
    )


def _decode_literal(literal: str) -> str | None:
    """Decode a JS string literal, or None if it is not a plain constant."""
    if len(literal) < 2 or literal[0] != literal[-1]:
        return None
    quote, body = literal[0], literal[1:-1]
    if quote == "`":
        if "${" in body:
            return None
        if "\\" not in body:
            return body
        literal = '"' + body.replace('"', '\\"') + '"'
    try:
        value: object = ast.literal_eval(_expand_code_point_escapes(literal))  # pyright: ignore[reportAny]
        if not isinstance(value, str):
            return None
        return join_surrogates(value)
    except (ValueError, SyntaxError) as e:
        # UnicodeDecodeError is a ValueError: an unpaired surrogate escape.
        logger.debug(f"Skipping literal that cannot be decoded: {literal!r} ({e})")
        return None


def extract_script_strings(
    source: str, functions: Iterable[str], jsx: bool = True
) -> list[str]:
    """
    Find string literals passed as the first argument of translation calls.

    Args:
        source: JavaScript or TypeScript source text
        functions: Names of the translation functions (e.g. ``t``)
        jsx: Recognise JSX elements, so quotes in element text are not
            taken for string literals

    Returns:
        Literals in order of appearance (may contain duplicates)
    """
    names = frozenset(functions)
    stream = iter_jsx_tokens(source) if jsx else iter_tokens(source)
    tokens: list[Token] = [token for token in stream if token.kind != "comment"]
    found: list[str] = []

    def skip_space(index: int) -> int:
        while (
            index < len(tokens)
            and tokens[index].kind == "code"
            and source[tokens[index].start].isspace()
        ):
            index += 1
        return index

    i = 0
    while i < len(tokens):
        token = tokens[i]
        if token.kind != "code" or not _is_word_char(source[token.start]):
            i += 1
            continue

        # Read a whole identifier.
        j = i
        while (
            j < len(tokens)
            and tokens[j].kind == "code"
            and _is_word_char(source[tokens[j].start])
        ):
            j += 1
        name = source[token.start : tokens[j - 1].stop]
        i = j

        if name not in names:
            continue

        k = skip_space(j)
        if k >= len(tokens) or tokens[k].kind != "code" or source[tokens[k].start] != "(":
            continue
        k = skip_space(k + 1)
        if k >= len(tokens) or tokens[k].kind != "string":
            continue

        value = _decode_literal(source[tokens[k].start : tokens[k].stop])
        if value is not None:
            found.append(value)
        i = k + 1

    return found


def extract_jsx_text(source: str) -> list[str]:
    """
    Collect the non-empty text of JSX elements, e.g. ``Hello`` in ``<p>Hello</p>``.

    Each run is trimmed and HTML entities are decoded.

    Returns:
        Text runs in order of appearance (may contain duplicates)
    """
    found: list[str] = []
    for token in iter_jsx_tokens(source):
        if token.kind != "jsx_text":
            continue
        value = html.unescape(source[token.start : token.stop]).strip()
        if value:
            found.append(value)
    return found


def extract_keys_from_file(path: Path, functions: Iterable[str]) -> list[str]:
    """
    Extract the unique translatable strings of one source file.

    Args:
        path: Source file to scan
        functions: Names of the translation functions

    Returns:
        Unique strings in order of first appearance

    Raises:
        OSError: If the file cannot be read
        SyntaxError: If a Python file contains invalid syntax
    """
    content = path.read_text(encoding="utf-8")

    if path.suffix in PYTHON_SUFFIXES:
        tree = ast.parse(content, filename=str(path))
        extractor = StringExtractor(functions)
        extractor.visit(tree)
        strings: list[str] = []
        for value in extractor.strings:
            try:
                strings.append(join_surrogates(value))
            except UnicodeDecodeError:
                logger.warning(f"Skipping string with an unpaired surrogate in {path}")
    elif path.suffix in NON_JSX_SUFFIXES:
        strings = extract_script_strings(content, functions, jsx=False)
    else:
        strings = extract_script_strings(content, functions) + extract_jsx_text(content)

    unique = list(dict.fromkeys(s for s in strings if s.strip()))
    logger.debug(f"Extracted {len(unique)} strings from {path}")
    return unique
