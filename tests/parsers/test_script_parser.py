# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the Tree-sitter backed script parser."""

from __future__ import annotations

import textwrap

import pytest

try:
    import tree_sitter  # type: ignore[attr-defined]
except ModuleNotFoundError:
    pytest.skip("tree-sitter not available", allow_module_level=True)
else:
    _ = tree_sitter

pytest.importorskip("tree_sitter_javascript")
pytest.importorskip("tree_sitter_typescript")

from i18nkeys.errors import ParseError
from i18nkeys.extraction import collect_keys_from_ast
from i18nkeys.parsers.builtin import ScriptParser
from i18nkeys.parsers.grammars import JAVASCRIPT, TSX, TYPESCRIPT
from i18nkeys.parsers.script import (
    decode_escape,
    grammar_for_path,
    number_value,
    parse_expression,
    parse_script,
)
from i18nkeys.syntax.nodes import CallExpression, Identifier, Literal, MemberExpression, Program


def _keys(source: str, *, grammar: str = JAVASCRIPT) -> list[str]:
    return collect_keys_from_ast(parse_script(textwrap.dedent(source), grammar=grammar))


def test_member_call_on_this() -> None:
    assert _keys("this.$t('hello.world')") == ["hello.world"]


def test_identifier_argument_yields_nothing() -> None:
    assert _keys("t(someVariable)") == []


def test_template_string_argument_yields_nothing() -> None:
    assert _keys("t(`nav.${section}`)") == []


def test_keys_inside_component_options() -> None:
    source = """
        // t('commented.out')
        export default {
          computed: {
            title() {
              return this.$tc('cart.items', this.count)
            },
          },
          methods: {
            notify() {
              this.$toast(i18n.global.t("toast.saved"))
            },
          },
        }
    """

    assert sorted(_keys(source)) == ["cart.items", "toast.saved"]


def test_optional_and_parenthesised_calls() -> None:
    assert sorted(_keys("(t)('a.b'); obj?.t?.('c.d'); t(('e.f'))")) == ["a.b", "c.d", "e.f"]


def test_computed_member_with_string_property_is_ignored() -> None:
    assert _keys("i18n['t']('x.y')") == []


def test_escape_sequences_are_decoded() -> None:
    assert _keys(r"t('ab\x63\'d')") == ["abc'd"]


def test_numeric_literal_keys_are_stringified() -> None:
    assert sorted(_keys("t(42); t(0x10); t(0)")) == ["16", "42"]


def test_typescript_grammar() -> None:
    source = """
        const label: string = t('typed.key')
        function greet<T>(value: T): string { return $t('generic.key') }
    """

    assert sorted(_keys(source, grammar=TYPESCRIPT)) == ["generic.key", "typed.key"]


def test_syntax_errors_raise_parse_error() -> None:
    with pytest.raises(ParseError):
        parse_script("t('unterminated")


def test_parse_script_builds_estree_shapes() -> None:
    program = parse_script("obj.t('k')")

    assert isinstance(program, Program)
    statement = program.body[0]
    call = statement.children[0]  # type: ignore[attr-defined]
    assert isinstance(call, CallExpression)
    assert call.parent is statement
    assert isinstance(call.callee, MemberExpression)
    assert isinstance(call.callee.property, Identifier)
    assert call.callee.property.name == "t"
    argument = call.arguments[0]
    assert isinstance(argument, Literal)
    assert argument.value == "k"
    assert argument.raw == "'k'"
    assert argument.range == (6, 9)


def test_parse_expression_offsets_and_failures() -> None:
    expression = parse_expression("t('x')", offset=10)

    assert isinstance(expression, CallExpression)
    assert expression.range == (10, 16)
    assert parse_expression("a b") is None
    assert parse_expression("   ") is None


def test_script_parser_selects_grammar_from_file_path() -> None:
    parser = ScriptParser()

    assert parser.grammar_for({"file_path": "src/app.ts"}) == TYPESCRIPT
    assert parser.grammar_for({"file_path": "src/App.tsx"}) == TSX
    assert parser.grammar_for({"file_path": "src/app.js"}) == JAVASCRIPT
    assert ScriptParser(TYPESCRIPT).grammar_for({"file_path": "view.tsx"}) == TSX

    result = parser.parse_for_eslint("const x: number = t('ts.only')", {"file_path": "module.ts"})
    assert collect_keys_from_ast(result.ast, result.visitor_keys) == ["ts.only"]  # type: ignore[arg-type]


@pytest.mark.parametrize(
    ("path", "expected"),
    [("a.mts", TYPESCRIPT), ("a.cts", TYPESCRIPT), ("a.jsx", JAVASCRIPT), (None, JAVASCRIPT)],
)
def test_grammar_for_path(path: str | None, expected: str) -> None:
    assert grammar_for_path(path) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("42", 42), ("0x1F", 31), ("0o17", 15), ("0b101", 5), ("1_000", 1000), ("10n", 10), ("017", 15), ("019", 19)],
)
def test_number_value_integers(raw: str, expected: int) -> None:
    assert number_value(raw) == expected


def test_number_value_floats() -> None:
    assert number_value("1e3") == 1000.0
    assert number_value(".5") == 0.5


@pytest.mark.parametrize(
    ("sequence", "expected"),
    [(r"\n", "\n"), (r"\x41", "A"), (r"\u0042", "B"), (r"\u{1F600}", "\U0001f600"), (r"\q", "q"), ("\\\n", "")],
)
def test_decode_escape(sequence: str, expected: str) -> None:
    assert decode_escape(sequence) == expected
