# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models for key collection."""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..discovery.rules import matches_any, relative_posix
from ..errors import ConfigError

LOGGER = logging.getLogger(__name__)

PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
STANDALONE_FILENAME: Final[str] = "i18nkeys.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "i18nkeys"
DEFAULT_EXTENSIONS: Final[tuple[str, ...]] = (".js", ".vue")


class FileConfig(BaseModel):
    """Parser selection effective for one file."""

    model_config = ConfigDict(frozen=True)

    parser: str | None = None
    parser_options: dict[str, Any] = Field(default_factory=dict)


class ConfigOverride(BaseModel):
    """Parser settings applied to files matching ``files`` globs."""

    model_config = ConfigDict(validate_assignment=True)

    files: list[str]
    parser: str | None = None
    parser_options: dict[str, Any] = Field(default_factory=dict)

    @field_validator("files", mode="before")
    @classmethod
    def _coerce_files(cls, value: object) -> object:
        return [value] if isinstance(value, str) else value

    def applies_to(self, relative: str) -> bool:
        """Return whether this override targets the POSIX ``relative`` path."""

        return matches_any(relative, self.files)


class ProjectConfig(BaseModel):
    """Project-wide settings read from ``[tool.i18nkeys]`` or ``i18nkeys.toml``."""

    model_config = ConfigDict(validate_assignment=True)

    parser: str | None = None
    parser_options: dict[str, Any] = Field(default_factory=dict)
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    ignore_patterns: list[str] = Field(default_factory=list)
    overrides: list[ConfigOverride] = Field(default_factory=list)

    @field_validator("extensions", mode="before")
    @classmethod
    def _normalise_extensions(cls, value: object) -> object:
        if isinstance(value, str):
            value = [value]
        if isinstance(value, (list, tuple)):
            return tuple(item if str(item).startswith(".") else f".{item}" for item in value)
        return value

    def config_for(self, path: Path, root: Path) -> FileConfig:
        """Return the parser settings effective for ``path``.

        Overrides apply in declaration order; later entries replace the parser
        and update parser options key by key.

        Args:
            path: File being parsed.
            root: Project root used to relativise ``path``.

        Returns:
            FileConfig: Effective parser name and options.
        """

        relative = relative_posix(path.absolute(), root.absolute())
        parser = self.parser
        options = dict(self.parser_options)
        for override in self.overrides:
            if not override.applies_to(relative):
                continue
            if override.parser is not None:
                parser = override.parser
            options.update(override.parser_options)
        return FileConfig(parser=parser, parser_options=options)

    @classmethod
    def load(cls, root: Path) -> ProjectConfig:
        """Load settings for the project rooted at ``root``.

        ``pyproject.toml`` is consulted first; when it lacks a
        ``[tool.i18nkeys]`` table ``i18nkeys.toml`` is read instead. Missing
        files yield defaults.

        Args:
            root: Project root directory.

        Returns:
            ProjectConfig: Validated configuration.

        Raises:
            ConfigError: If a file cannot be decoded or fails validation.
        """

        payload: Mapping[str, Any] | None = None
        pyproject = root / PYPROJECT_FILENAME
        if pyproject.is_file():
            tool_section = _read_toml(pyproject).get(PYPROJECT_TOOL_KEY, {})
            if isinstance(tool_section, Mapping) and PYPROJECT_SECTION_KEY in tool_section:
                payload = tool_section[PYPROJECT_SECTION_KEY]
                source = pyproject
        if payload is None:
            standalone = root / STANDALONE_FILENAME
            if not standalone.is_file():
                return cls()
            payload = _read_toml(standalone)
            source = standalone
        if not isinstance(payload, Mapping):
            raise ConfigError(f"Configuration in {source} must be a table")
        LOGGER.debug("loading configuration from %s", source)
        try:
            return cls.model_validate(_normalise_keys(payload))
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration in {source}: {exc}") from exc


def _read_toml(path: Path) -> Mapping[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _normalise_keys(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Accept ``kebab-case`` table keys; option payloads are left untouched."""

    normalised: dict[str, Any] = {}
    for key, value in payload.items():
        name = key.replace("-", "_")
        if name == "overrides" and isinstance(value, list):
            value = [_normalise_keys(item) if isinstance(item, Mapping) else item for item in value]
        normalised[name] = value
    return normalised


__all__ = [
    "ConfigOverride",
    "DEFAULT_EXTENSIONS",
    "FileConfig",
    "ProjectConfig",
]
