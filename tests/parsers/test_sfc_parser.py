# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for Vue single-file component parsing and extraction."""

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
pytest.importorskip("tree_sitter_html")

from i18nkeys.errors import ParseError
from i18nkeys.extraction import collect_keys_from_ast
from i18nkeys.parsers.builtin import ESPREE_PARSER, TYPESCRIPT_PARSER, VueParser, script_parser_name
from i18nkeys.parsers.sfc import parse_directive_key, parse_sfc
from i18nkeys.syntax.nodes import (
    VAttribute,
    VDirectiveKey,
    VElement,
    VExpressionContainer,
    VIdentifier,
    VLiteral,
    VText,
)


def _sfc_keys(source: str, **options: object) -> list[str]:
    parser = VueParser()
    result = parser.parse_for_eslint(textwrap.dedent(source), {"file_path": "Component.vue", **options})
    return collect_keys_from_ast(result.ast, result.visitor_keys)


def test_i18n_component_path_attribute() -> None:
    assert _sfc_keys('<template><i18n path="foo.bar"></i18n></template>') == ["foo.bar"]


def test_i18n_t_component_path_attribute() -> None:
    assert _sfc_keys('<template><i18n-t path="foo.baz" tag="p"></i18n-t></template>') == ["foo.baz"]


def test_path_attribute_on_other_element() -> None:
    assert _sfc_keys('<template><other path="foo.bar"></other></template>') == []


def test_v_t_directive_literal() -> None:
    assert _sfc_keys("<template><div v-t=\"'greet.hi'\"></div></template>") == ["greet.hi"]


def test_v_t_directive_with_binding_yields_nothing() -> None:
    assert _sfc_keys('<template><div v-t="path"></div></template>') == []


def test_template_expressions_and_script_block() -> None:
    source = """
        <template>
          <div :title="$t('bound.title')" @click="notify($t('event.key'))">
            <p>{{ $t('mustache.key') }} &amp; {{ count }}</p>
            <li v-for="item in $t('list.items')">{{ item }}</li>
          </div>
        </template>

        <script>
        export default {
          methods: {
            notify(message) {
              this.$toast(this.$t('script.key'))
            },
          },
        }
        </script>
    """

    assert sorted(_sfc_keys(source)) == [
        "bound.title",
        "event.key",
        "list.items",
        "mustache.key",
        "script.key",
    ]


def test_event_handler_statements() -> None:
    source = """<template><button @click="open = true; log($t('handler.key'))"></button></template>"""

    assert _sfc_keys(source) == ["handler.key"]


def test_broken_template_expression_is_tolerated() -> None:
    source = """
        <template>
          <p>{{ $t('ok.key') }}</p>
          <p :title="t('broken"></p>
        </template>
    """

    assert _sfc_keys(source) == ["ok.key"]


def test_typescript_script_block_from_lang_attribute() -> None:
    source = """
        <script lang="ts">
        const title: string = t('typed.key')
        </script>
    """

    assert _sfc_keys(source) == ["typed.key"]


def test_typescript_from_parser_option() -> None:
    source = """
        <script>
        const title: string = t('typed.option')
        </script>
    """

    assert _sfc_keys(source, parser=TYPESCRIPT_PARSER) == ["typed.option"]


def test_script_syntax_error_raises() -> None:
    with pytest.raises(ParseError):
        parse_sfc("<script>const = ;</script>")


def test_non_component_files_are_parsed_as_scripts() -> None:
    result = VueParser().parse_for_eslint("this.$t('plain.js')", {"file_path": "plain.js"})

    assert collect_keys_from_ast(result.ast, result.visitor_keys) == ["plain.js"]


def test_template_tree_shape() -> None:
    program = parse_sfc('<template><I18n path="a&amp;b" v-bind:foo.sync="x">Hi {{ name }}</I18n></template>')

    template = program.template_body
    assert isinstance(template, VElement)
    assert template.parent is program
    element = template.children[0]
    assert isinstance(element, VElement)
    assert element.name == "i18n"
    assert element.raw_name == "I18n"
    assert element.end_tag is not None

    path_attribute, bind_attribute = element.start_tag.attributes
    assert isinstance(path_attribute, VAttribute)
    assert path_attribute.directive is False
    assert isinstance(path_attribute.value, VLiteral)
    assert path_attribute.value.value == "a&b"
    assert path_attribute.parent is element.start_tag
    assert element.start_tag.parent is element

    assert bind_attribute.directive is True
    assert isinstance(bind_attribute.key, VDirectiveKey)
    assert bind_attribute.key.name.name == "bind"
    assert isinstance(bind_attribute.value, VExpressionContainer)

    text, mustache = element.children
    assert isinstance(text, VText)
    assert text.value == "Hi "
    assert isinstance(mustache, VExpressionContainer)
    assert mustache.expression is not None


def test_mustache_containing_less_than_operator() -> None:
    assert _sfc_keys("<template><p>{{ a < b ? $t('x.y') : '' }}</p></template>") == ["x.y"]


def test_mustaches_around_entities_and_comments() -> None:
    source = "<template><p>{{ $t('k.one') }} &amp; <!-- {{ $t('hidden') }} --> {{ $t('k.two') }}</p></template>"

    assert _sfc_keys(source) == ["k.one", "k.two"]


def test_per_language_parser_mapping() -> None:
    source = """
        <template><div v-t="'greet.hi'"></div></template>
        <script>
        export default { mounted() { this.$t('hello.world') } }
        </script>
    """

    keys = _sfc_keys(source, parser={"ts": TYPESCRIPT_PARSER})

    assert keys == ["greet.hi", "hello.world"]


def test_per_language_parser_mapping_for_script_files() -> None:
    options = {"file_path": "typed.ts", "parser": {"js": ESPREE_PARSER, "ts": TYPESCRIPT_PARSER}}

    result = VueParser().parse_for_eslint("const title: string = t('typed.file')", options)

    assert collect_keys_from_ast(result.ast, result.visitor_keys) == ["typed.file"]


@pytest.mark.parametrize(
    ("parser", "suffix", "expected"),
    [
        (ESPREE_PARSER, ".js", ESPREE_PARSER),
        ({"js": ESPREE_PARSER, "ts": TYPESCRIPT_PARSER}, ".ts", TYPESCRIPT_PARSER),
        ({"js": ESPREE_PARSER, "ts": TYPESCRIPT_PARSER}, ".mjs", ESPREE_PARSER),
        ({"tsx": TYPESCRIPT_PARSER}, ".tsx", TYPESCRIPT_PARSER),
        ({"ts": TYPESCRIPT_PARSER}, ".js", None),
        (42, ".js", None),
    ],
)
def test_script_parser_name(parser: object, suffix: str, expected: str | None) -> None:
    assert script_parser_name({"parser": parser}, suffix) == expected


def test_only_first_template_is_used() -> None:
    source = "<template><i18n path=\"first\"></i18n></template><template><i18n path=\"second\"></i18n></template>"

    assert _sfc_keys(source) == ["first"]


@pytest.mark.parametrize(
    ("raw_name", "name", "argument", "modifiers"),
    [
        ("v-t", "t", None, []),
        ("v-t.preserve", "t", None, ["preserve"]),
        ("v-on:click.stop.prevent", "on", "click", ["stop", "prevent"]),
        ("v-bind:title.sync", "bind", "title", ["sync"]),
        (":title", "bind", "title", []),
        (".inner-html", "bind", "inner-html", ["prop"]),
        ("@submit.prevent", "on", "submit", ["prevent"]),
        ("#default", "slot", "default", []),
    ],
)
def test_parse_directive_key(raw_name: str, name: str, argument: str | None, modifiers: list[str]) -> None:
    key = parse_directive_key(raw_name)

    assert key is not None
    assert key.name.name == name
    if argument is None:
        assert key.argument is None
    else:
        assert isinstance(key.argument, VIdentifier)
        assert key.argument.name == argument
    assert [modifier.name for modifier in key.modifiers] == modifiers


def test_plain_attribute_is_not_a_directive() -> None:
    assert parse_directive_key("class") is None
    assert parse_directive_key("path") is None
