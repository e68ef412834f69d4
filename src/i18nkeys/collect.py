# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Collect the translation keys used across a set of source files.

:class:`UsedKeysCache` keeps two cache levels: resolved target files per
``(patterns, extensions)`` pair, and one list of lazily evaluated
:class:`~i18nkeys.resource.ResourceLoader` objects per resolved file list.
Repeated calls with equal inputs therefore never parse a file twice until
:meth:`UsedKeysCache.reset` is called.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Final

from .cache.in_memory import memoize
from .config.models import ProjectConfig
from .config.resolver import ConfigResolver, ProjectConfigResolver
from .discovery.lister import FileLister, FilesystemLister
from .discovery.targets import TargetFileResolver
from .extraction import collect_keys_from_ast
from .parsers.builtin import FILE_PATH_OPTION
from .parsers.registry import ParserRegistry
from .resource import ResourceLoader
from .syntax.estree import ensure_node

LOGGER = logging.getLogger(__name__)

ANONYMOUS_FILENAME: Final[str] = "<text>"
EXTRACTION_PARSER_OPTIONS: Final[Mapping[str, bool]] = {
    "loc": True,
    "range": True,
    "raw": True,
    "tokens": True,
    "comment": True,
    "eslint_visitor_keys": True,
    "eslint_scope_manager": True,
}


def extraction_parser_options(parser_options: Mapping[str, object], filename: str) -> dict[str, object]:
    """Return ``parser_options`` with capture flags forced on and the file path set."""

    options: dict[str, object] = dict(parser_options)
    options.update(EXTRACTION_PARSER_OPTIONS)
    options[FILE_PATH_OPTION] = filename
    return options


def collect_keys_from_text(
    text: str,
    filename: str | Path | None,
    *,
    config_resolver: ConfigResolver,
    parsers: ParserRegistry,
) -> list[str]:
    """Return the keys referenced by ``text``.

    Args:
        text: Source code.
        filename: Path used for configuration lookup and grammar selection.
        config_resolver: Collaborator selecting the parser for ``filename``.
        parsers: Registry resolving parser names.

    Returns:
        list[str]: Distinct keys; empty when the text cannot be parsed.
    """

    effective_filename = str(filename) if filename else ANONYMOUS_FILENAME
    LOGGER.debug("collecting keys from %s", effective_filename)
    file_config = config_resolver.config_for(Path(effective_filename))
    parser = parsers.resolve(file_config.parser)
    options = extraction_parser_options(file_config.parser_options, effective_filename)
    try:
        result = parser.run(text, options)
        return collect_keys_from_ast(ensure_node(result.ast), result.visitor_keys)
    except Exception as exc:  # noqa: BLE001 - parser failures degrade to no keys
        LOGGER.debug("failed to collect keys from %s with %s: %s", effective_filename, parser.name, exc)
        return []


def collect_key_resources_from_files(
    file_names: Sequence[str | Path],
    *,
    config_resolver: ConfigResolver,
    parsers: ParserRegistry,
) -> tuple[ResourceLoader[list[str]], ...]:
    """Return one lazy resource per file; nothing is read until first access.

    Args:
        file_names: Files to collect keys from.
        config_resolver: Collaborator selecting the parser per file.
        parsers: Registry resolving parser names.

    Returns:
        tuple[ResourceLoader[list[str]], ...]: Resources in ``file_names`` order.
    """

    LOGGER.debug("creating key resources for %d files", len(file_names))
    resources: list[ResourceLoader[list[str]]] = []
    for filename in file_names:
        path = Path(filename).absolute()
        resources.append(
            ResourceLoader(
                path,
                lambda path=path, filename=filename: collect_keys_from_text(
                    path.read_text(encoding="utf-8"),
                    filename,
                    config_resolver=config_resolver,
                    parsers=parsers,
                ),
            ),
        )
    return tuple(resources)


class UsedKeysCache:
    """Aggregate used keys across files with work-avoiding caches.

    Args:
        lister: Collaborator expanding patterns into files.
        config_resolver: Collaborator selecting the parser per file.
        parsers: Registry resolving parser names; a default registry is used
            when omitted.
    """

    def __init__(
        self,
        *,
        lister: FileLister,
        config_resolver: ConfigResolver,
        parsers: ParserRegistry | None = None,
    ) -> None:
        self._config_resolver = config_resolver
        self._parsers = parsers if parsers is not None else ParserRegistry()
        self._target_files = TargetFileResolver(lister)
        self._collect_key_resources = memoize(maxsize=None)(self._build_key_resources)

    @property
    def parsers(self) -> ParserRegistry:
        """Return the registry used to resolve parser names."""

        return self._parsers

    def collect_keys_from_files(self, files: Sequence[str], extensions: Sequence[str]) -> list[str]:
        """Return the distinct keys used by files selected by ``files``.

        Args:
            files: File, directory or glob patterns.
            extensions: Accepted suffixes including the leading dot.

        Returns:
            list[str]: Distinct keys; order carries no meaning.
        """

        result: set[str] = set()
        for resource in self.get_key_resources(files, extensions):
            result.update(resource.get_resource())
        return list(result)

    def get_key_resources(
        self,
        files: Sequence[str],
        extensions: Sequence[str],
    ) -> tuple[ResourceLoader[list[str]], ...]:
        """Return the cached resources for the files selected by ``files``."""

        file_names = self._target_files.resolve(files, extensions)
        return self._collect_key_resources(file_names)

    def reset(self) -> None:
        """Drop both cache levels so the next call re-lists and re-parses."""

        LOGGER.debug("resetting used keys cache")
        self._target_files.clear()
        self._collect_key_resources.cache_clear()  # type: ignore[attr-defined]

    def _build_key_resources(self, file_names: tuple[Path, ...]) -> tuple[ResourceLoader[list[str]], ...]:
        return collect_key_resources_from_files(
            file_names,
            config_resolver=self._config_resolver,
            parsers=self._parsers,
        )


def build_used_keys_cache(
    root: Path | None = None,
    *,
    config: ProjectConfig | None = None,
    parsers: ParserRegistry | None = None,
) -> UsedKeysCache:
    """Return a :class:`UsedKeysCache` wired from project configuration.

    Args:
        root: Project root; defaults to the current directory.
        config: Explicit configuration; loaded from ``root`` when omitted.
        parsers: Registry resolving parser names.

    Returns:
        UsedKeysCache: Cache using the filesystem lister and project overrides.

    Raises:
        ConfigError: If configuration under ``root`` is invalid.
    """

    project_root = (root or Path.cwd()).absolute()
    project_config = config if config is not None else ProjectConfig.load(project_root)
    return UsedKeysCache(
        lister=FilesystemLister(project_root, ignore_patterns=project_config.ignore_patterns),
        config_resolver=ProjectConfigResolver(project_config, project_root),
        parsers=parsers,
    )


__all__ = [
    "EXTRACTION_PARSER_OPTIONS",
    "UsedKeysCache",
    "build_used_keys_cache",
    "collect_key_resources_from_files",
    "collect_keys_from_text",
    "extraction_parser_options",
]
