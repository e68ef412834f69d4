# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolve path patterns into the files whose keys should be collected."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from ..cache.in_memory import CacheInfo, CacheLoader
from .lister import FileLister

LOGGER = logging.getLogger(__name__)


class TargetFileResolver:
    """Filter lister output by ignore flag and extension, once per input pair.

    Args:
        lister: Collaborator expanding patterns into listed files.
    """

    def __init__(self, lister: FileLister) -> None:
        self._lister = lister
        self._loader: CacheLoader[[Sequence[str], Sequence[str]], tuple[Path, ...]] = CacheLoader(self._load)

    def resolve(self, patterns: Sequence[str], extensions: Sequence[str]) -> tuple[Path, ...]:
        """Return absolute paths selected by ``patterns`` and ``extensions``.

        Args:
            patterns: File, directory or glob patterns.
            extensions: Accepted suffixes including the leading dot, e.g. ``".vue"``.

        Returns:
            tuple[Path, ...]: Matching files in lister order. Duplicates produced
            by overlapping patterns are preserved.
        """

        return self._loader.get(patterns, extensions)

    def clear(self) -> None:
        """Forget every previously resolved pattern set."""

        self._loader.clear()

    def cache_metadata(self) -> CacheInfo:
        """Return metadata describing the resolved pattern sets."""

        return self._loader.cache_metadata()

    def _load(self, patterns: Sequence[str], extensions: Sequence[str]) -> tuple[Path, ...]:
        LOGGER.debug("resolving target files for %s (%s)", list(patterns), ", ".join(extensions))
        accepted = frozenset(extensions)
        return tuple(
            Path(listed.filename).absolute()
            for listed in self._lister.list_files(patterns, extensions)
            if not listed.ignored and Path(listed.filename).suffix in accepted
        )


__all__ = ["TargetFileResolver"]
