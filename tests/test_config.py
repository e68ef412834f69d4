# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for project configuration loading and per-file resolution."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from i18nkeys.config import (
    DEFAULT_EXTENSIONS,
    ConfigOverride,
    FileConfig,
    ProjectConfig,
    ProjectConfigResolver,
    StaticConfigResolver,
)
from i18nkeys.errors import ConfigError


def _write(path: Path, content: str) -> None:
    path.write_text(textwrap.dedent(content), encoding="utf-8")


def test_defaults_without_configuration(tmp_path: Path) -> None:
    config = ProjectConfig.load(tmp_path)

    assert config.parser is None
    assert config.extensions == DEFAULT_EXTENSIONS == (".js", ".vue")
    assert config.ignore_patterns == []


def test_loads_pyproject_section(tmp_path: Path) -> None:
    _write(
        tmp_path / "pyproject.toml",
        """
        [project]
        name = "demo"

        [tool.i18nkeys]
        parser = "espree"
        extensions = ["js", ".vue", ".ts"]
        ignore-patterns = ["dist/"]

        [tool.i18nkeys.parser-options]
        ecmaVersion = 2022

        [[tool.i18nkeys.overrides]]
        files = "**/*.ts"
        parser = "@typescript-eslint/parser"
        """,
    )

    config = ProjectConfig.load(tmp_path)

    assert config.parser == "espree"
    assert config.extensions == (".js", ".vue", ".ts")
    assert config.ignore_patterns == ["dist/"]
    assert config.parser_options == {"ecmaVersion": 2022}
    assert config.overrides == [ConfigOverride(files=["**/*.ts"], parser="@typescript-eslint/parser")]


def test_pyproject_without_section_falls_back_to_standalone_file(tmp_path: Path) -> None:
    _write(tmp_path / "pyproject.toml", '[project]\nname = "demo"\n')
    _write(tmp_path / "i18nkeys.toml", 'parser = "vue-eslint-parser"\n')

    assert ProjectConfig.load(tmp_path).parser == "vue-eslint-parser"


def test_invalid_configuration_raises(tmp_path: Path) -> None:
    _write(tmp_path / "i18nkeys.toml", "overrides = [{ parser = 'espree' }]\n")

    with pytest.raises(ConfigError, match="Invalid configuration"):
        ProjectConfig.load(tmp_path)


def test_malformed_toml_raises(tmp_path: Path) -> None:
    _write(tmp_path / "i18nkeys.toml", "parser = \n")

    with pytest.raises(ConfigError, match="Failed to parse"):
        ProjectConfig.load(tmp_path)


def test_non_table_section_raises(tmp_path: Path) -> None:
    _write(tmp_path / "pyproject.toml", '[tool]\ni18nkeys = "espree"\n')

    with pytest.raises(ConfigError, match="must be a table"):
        ProjectConfig.load(tmp_path)


def test_overrides_apply_in_order(tmp_path: Path) -> None:
    config = ProjectConfig(
        parser="vue-eslint-parser",
        parser_options={"parser": "espree", "sourceType": "module"},
        overrides=[
            ConfigOverride(files=["src/**/*.ts"], parser="@typescript-eslint/parser"),
            ConfigOverride(files=["src/legacy/**"], parser_options={"sourceType": "script"}),
        ],
    )

    modern = config.config_for(tmp_path / "src" / "app" / "main.ts", tmp_path)
    legacy = config.config_for(tmp_path / "src" / "legacy" / "old.ts", tmp_path)
    plain = config.config_for(tmp_path / "src" / "App.vue", tmp_path)

    assert modern == FileConfig(
        parser="@typescript-eslint/parser",
        parser_options={"parser": "espree", "sourceType": "module"},
    )
    assert legacy.parser == "@typescript-eslint/parser"
    assert legacy.parser_options["sourceType"] == "script"
    assert plain.parser == "vue-eslint-parser"
    assert config.parser_options == {"parser": "espree", "sourceType": "module"}


def test_resolvers(tmp_path: Path) -> None:
    static = StaticConfigResolver("espree", {"ecmaVersion": 2020})
    project = ProjectConfigResolver(
        ProjectConfig(overrides=[ConfigOverride(files="*.ts", parser="@typescript-eslint/parser")]),
        tmp_path,
    )

    assert static.config_for(tmp_path / "a.js") == FileConfig(parser="espree", parser_options={"ecmaVersion": 2020})
    assert project.config_for(tmp_path / "deep" / "a.ts").parser == "@typescript-eslint/parser"
    assert project.config_for(tmp_path / "a.js").parser is None
