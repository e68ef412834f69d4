# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""File lister collaborator expanding patterns into candidate files."""

from __future__ import annotations

import glob
import logging
import os
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

from .rules import ALWAYS_EXCLUDE_DIRS, in_ignored_directory, is_glob, matches_any, relative_posix

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ListedFile:
    """File produced by a lister together with its ignore flag."""

    filename: Path
    ignored: bool = False


@runtime_checkable
class FileLister(Protocol):
    """Expand path and glob patterns into listed files."""

    def list_files(self, patterns: Sequence[str], extensions: Sequence[str]) -> Iterable[ListedFile]:
        """Return files selected by ``patterns``.

        Args:
            patterns: File, directory or glob patterns.
            extensions: Extensions used when enumerating directories.

        Returns:
            Iterable[ListedFile]: Candidate files in discovery order.
        """


class FilesystemLister:
    """List files from the local filesystem.

    Explicit files are listed as given, directories are walked recursively and
    filtered by extension, and glob patterns are expanded with ``**`` support.
    Files matching ``ignore_patterns`` or living under ``node_modules`` are
    flagged as ignored rather than dropped.
    """

    def __init__(
        self,
        root: Path | None = None,
        *,
        ignore_patterns: Sequence[str] = (),
        follow_symlinks: bool = False,
    ) -> None:
        self.root = (root or Path.cwd()).absolute()
        self.ignore_patterns = tuple(ignore_patterns)
        self.follow_symlinks = follow_symlinks

    def list_files(self, patterns: Sequence[str], extensions: Sequence[str]) -> Iterator[ListedFile]:
        """Yield files selected by ``patterns``; see :class:`FileLister`."""

        for pattern in patterns:
            matched = False
            for path in self._expand(pattern, extensions):
                matched = True
                yield ListedFile(filename=path, ignored=self.is_ignored(path))
            if not matched:
                LOGGER.debug("no files matched %s", pattern)

    def is_ignored(self, path: Path) -> bool:
        """Return whether ``path`` is excluded by ignore rules."""

        if in_ignored_directory(path):
            return True
        return matches_any(relative_posix(path, self.root), self.ignore_patterns)

    def _expand(self, pattern: str, extensions: Sequence[str]) -> Iterator[Path]:
        candidate = Path(pattern)
        if not candidate.is_absolute():
            candidate = self.root / candidate
        if candidate.is_file():
            yield candidate.absolute()
        elif candidate.is_dir():
            yield from self._walk(candidate, extensions)
        elif is_glob(pattern):
            for match in sorted(glob.glob(str(candidate), recursive=True)):
                path = Path(match)
                if path.is_file():
                    yield path.absolute()

    def _walk(self, base: Path, extensions: Sequence[str]) -> Iterator[Path]:
        for dirpath, dirnames, filenames in os.walk(base, followlinks=self.follow_symlinks):
            current = Path(dirpath)
            dirnames[:] = sorted(name for name in dirnames if not self._should_skip_directory(name))
            for filename in sorted(filenames):
                if os.path.splitext(filename)[1] in extensions:
                    yield (current / filename).absolute()

    @staticmethod
    def _should_skip_directory(name: str) -> bool:
        return name in ALWAYS_EXCLUDE_DIRS or name.startswith(".")


__all__ = ["FileLister", "FilesystemLister", "ListedFile"]
