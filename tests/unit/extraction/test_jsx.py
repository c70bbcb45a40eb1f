"""Tests for the JSX-aware tokenizer."""

from __future__ import annotations

import pytest

from locale_sync.core.scanner import iter_tokens
from locale_sync.extraction.jsx import iter_jsx_tokens, starts_element


def _texts(source: str) -> list[str]:
    return [
        source[token.start : token.stop]
        for token in iter_jsx_tokens(source)
        if token.kind == "jsx_text"
    ]


class TestStartsElement:
    """Test starts_element."""

    @pytest.mark.parametrize(
        "source",
        [
            "<div>",
            "x = <div>",
            "return <div>",
            "f(<Item />)",
            "() => <span>",
            "ok && <p>",
            "cond ? <a> : null",
            "[<li>",
            "const f = <>",
        ],
    )
    def test_element_positions(self, source: str) -> None:
        """Places where an expression may begin open an element."""
        assert starts_element(source, source.rindex("<")) is True

    @pytest.mark.parametrize(
        "source",
        ["a < b", "a<b", "useState<string>", "x <= y", "items.length<3", "value <"],
    )
    def test_code_positions(self, source: str) -> None:
        """Comparisons and type arguments stay code."""
        assert starts_element(source, source.index("<")) is False


class TestIterJsxTokens:
    """Test iter_jsx_tokens."""

    def test_plain_code_matches_scanner(self) -> None:
        """Without elements the tokens equal the generic scanner's."""
        source = 'const a = b < c ? "x" : `y`; // done\n/* t("z") */'

        assert list(iter_jsx_tokens(source)) == list(iter_tokens(source))

    def test_quotes_in_text(self) -> None:
        """Element text is one token per run and may contain quotes."""
        assert _texts("<p>It's \"fine\"</p>") == ["It's \"fine\""]

    def test_text_split_by_expression(self) -> None:
        """Expression containers split text runs."""
        assert _texts("<p>Hi {name}, bye</p>") == ["Hi ", ", bye"]

    def test_attribute_string_is_a_literal(self) -> None:
        """Attribute values are string tokens."""
        source = '<a title="it\'s">x</a>'
        strings = [t for t in iter_jsx_tokens(source) if t.kind == "string"]

        assert [source[t.start : t.stop] for t in strings] == ['"it\'s"']

    def test_code_after_element(self) -> None:
        """Tokenizing returns to code after the closing tag."""
        source = "<b>x</b>; const s = 'after';"
        tokens = list(iter_jsx_tokens(source))

        assert tokens[-1].kind == "code"
        assert any(
            t.kind == "string" and source[t.start : t.stop] == "'after'" for t in tokens
        )

    def test_nested_object_in_container(self) -> None:
        """Braces inside an expression container are balanced."""
        source = "<C style={{ color: 'red' }}>Text</C>"

        assert _texts(source) == ["Text"]
