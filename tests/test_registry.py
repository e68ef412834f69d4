# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for parser lookup, fallback and normalisation."""

from __future__ import annotations

from collections.abc import Mapping
from importlib.metadata import EntryPoint

import pytest

from i18nkeys.parsers import registry as registry_module
from i18nkeys.parsers.base import ParseResult, coerce_parse_result
from i18nkeys.parsers.builtin import ESPREE_PARSER, TYPESCRIPT_PARSER, VUE_PARSER, ScriptParser, VueParser
from i18nkeys.parsers.registry import DEFAULT_PARSER, ParserRegistry, discover_plugin_parsers, normalise_parser
from i18nkeys.syntax.nodes import Program


class EslintOnlyParser:
    def parse_for_eslint(self, text: str, options: Mapping[str, object]) -> dict[str, object]:
        return {"ast": {"type": "Program", "body": []}, "visitorKeys": {"Program": ["body"]}}


class ParseOnlyParser:
    def parse(self, text: str, options: Mapping[str, object]) -> Program:
        return Program()


def test_builtin_parsers_are_registered() -> None:
    registry = ParserRegistry(discover_plugins=False)

    assert registry.names() == tuple(sorted([VUE_PARSER, ESPREE_PARSER, TYPESCRIPT_PARSER]))
    assert registry.default == DEFAULT_PARSER == VUE_PARSER


def test_lookup_unknown_name_returns_none() -> None:
    registry = ParserRegistry(discover_plugins=False)

    assert registry.lookup("does-not-exist") is None


def test_resolve_falls_back_to_default() -> None:
    registry = ParserRegistry(discover_plugins=False)

    for name in (None, "", "does-not-exist"):
        resolved = registry.resolve(name)
        assert resolved.name == VUE_PARSER
        assert resolved.parse_for_eslint is not None


def test_resolve_survives_unregistered_default() -> None:
    registry = ParserRegistry(discover_plugins=False, default="missing-default")

    resolved = registry.resolve("also-missing")

    assert resolved.name == VUE_PARSER


def test_resolve_known_name() -> None:
    registry = ParserRegistry(discover_plugins=False)

    assert registry.resolve(TYPESCRIPT_PARSER).name == TYPESCRIPT_PARSER


def test_registered_parsers_shadow_builtins() -> None:
    custom = ParseOnlyParser()
    registry = ParserRegistry({ESPREE_PARSER: custom}, discover_plugins=False)

    resolved = registry.resolve(ESPREE_PARSER)

    assert resolved.parse_for_eslint is None
    assert isinstance(resolved.run("x", {}).ast, Program)


def test_normalise_synthesises_parse_wrapper() -> None:
    resolved = normalise_parser("eslint-only", EslintOnlyParser())

    assert resolved is not None
    assert resolved.parse_for_eslint is not None
    assert resolved.parse("x", {}) == {"type": "Program", "body": []}
    result = resolved.run("x", {})
    assert result.visitor_keys == {"Program": ["body"]}


def test_normalise_accepts_bare_callables_and_rejects_others() -> None:
    def parse(text: str, options: Mapping[str, object]) -> Program:
        return Program()

    resolved = normalise_parser("callable", parse)

    assert resolved is not None
    assert resolved.parse_for_eslint is None
    assert isinstance(resolved.run("x", {}).ast, Program)
    assert normalise_parser("object", object()) is None
    assert normalise_parser("class", ScriptParser) is None


def test_builtin_instances_normalise_with_both_entry_points() -> None:
    resolved = normalise_parser(VUE_PARSER, VueParser())

    assert resolved is not None
    assert resolved.parse_for_eslint is not None
    assert callable(resolved.parse)


def test_coerce_parse_result_shapes() -> None:
    program = Program()

    assert coerce_parse_result(ParseResult(ast=program)).ast is program
    assert coerce_parse_result({"ast": program, "visitor_keys": {"X": ("y",)}}).visitor_keys == {"X": ("y",)}
    with pytest.raises(TypeError):
        coerce_parse_result({"tree": program})  # type: ignore[arg-type]


def test_plugins_are_discovered_once_and_failures_skipped(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = {"count": 0}
    good = EntryPoint(name="custom-parser", value="tests.fake:parser", group=registry_module.PARSER_PLUGIN_GROUP)
    broken = EntryPoint(name="broken-parser", value="missing.module:parser", group=registry_module.PARSER_PLUGIN_GROUP)

    def fake_entry_points() -> dict[str, list[EntryPoint]]:
        calls["count"] += 1
        return {registry_module.PARSER_PLUGIN_GROUP: [good, broken]}

    loaded = ParseOnlyParser()

    def fake_load(self: EntryPoint) -> object:
        if self.name == "broken-parser":
            raise ImportError("missing")
        return loaded

    monkeypatch.setattr(registry_module.metadata, "entry_points", fake_entry_points)
    monkeypatch.setattr(EntryPoint, "load", fake_load)

    registry = ParserRegistry()

    assert registry.lookup("custom-parser") is not None
    assert registry.lookup("broken-parser") is None
    assert registry.lookup("another-missing") is None
    assert calls["count"] == 1
    assert "custom-parser" in registry.names()


def test_discover_plugin_parsers_without_group(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(registry_module.metadata, "entry_points", lambda: {})

    assert discover_plugin_parsers() == ()


def test_plugin_import_errors_of_any_kind_fall_back_to_default(monkeypatch: pytest.MonkeyPatch) -> None:
    broken = EntryPoint(name="some-custom-parser", value="broken.plugin:parser", group=registry_module.PARSER_PLUGIN_GROUP)

    def raise_syntax_error(self: EntryPoint) -> object:
        raise SyntaxError("broken plugin module")

    monkeypatch.setattr(registry_module.metadata, "entry_points", lambda: {registry_module.PARSER_PLUGIN_GROUP: [broken]})
    monkeypatch.setattr(EntryPoint, "load", raise_syntax_error)

    registry = ParserRegistry({VUE_PARSER: ParseOnlyParser()})

    assert registry.lookup("some-custom-parser") is None
    assert registry.resolve("some-custom-parser").name == VUE_PARSER
    assert discover_plugin_parsers() == ()
