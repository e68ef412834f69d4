# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Config-resolver collaborators answering "which parser for this file"."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from .models import FileConfig, ProjectConfig


@runtime_checkable
class ConfigResolver(Protocol):
    """Return the parser configuration effective for a file."""

    def config_for(self, path: Path) -> FileConfig:
        """Return the parser name and options used for ``path``."""


class StaticConfigResolver:
    """Resolve every file to the same parser configuration."""

    def __init__(self, parser: str | None = None, parser_options: Mapping[str, Any] | None = None) -> None:
        self._config = FileConfig(parser=parser, parser_options=dict(parser_options or {}))

    def config_for(self, path: Path) -> FileConfig:
        del path
        return self._config


class ProjectConfigResolver:
    """Resolve files against a :class:`ProjectConfig` and its overrides.

    Args:
        config: Project configuration.
        root: Directory override globs are relative to.
    """

    def __init__(self, config: ProjectConfig, root: Path) -> None:
        self.config = config
        self.root = root.absolute()

    def config_for(self, path: Path) -> FileConfig:
        return self.config.config_for(path, self.root)


__all__ = ["ConfigResolver", "ProjectConfigResolver", "StaticConfigResolver"]
