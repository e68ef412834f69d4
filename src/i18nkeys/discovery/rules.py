# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Path matching rules shared by the lister and configuration overrides."""

from __future__ import annotations

from collections.abc import Iterable
from fnmatch import fnmatchcase
from pathlib import Path, PurePosixPath
from typing import Final

from ..cache.in_memory import memoize

ALWAYS_EXCLUDE_DIRS: Final[frozenset[str]] = frozenset(
    {
        ".git",
        ".hg",
        ".svn",
        "node_modules",
        ".venv",
        "venv",
        "__pycache__",
        ".pytest_cache",
        ".tox",
        ".cache",
    },
)
IGNORED_DIRECTORY: Final[str] = "node_modules"
_GLOB_CHARACTERS: Final[frozenset[str]] = frozenset("*?[")
_RECURSIVE_PREFIX: Final[str] = "**/"


def is_glob(pattern: str) -> bool:
    """Return whether ``pattern`` contains glob metacharacters."""

    return any(char in _GLOB_CHARACTERS for char in pattern)


@memoize(maxsize=1024)
def normalise_pattern(pattern: str) -> str:
    """Return ``pattern`` with forward slashes and no leading ``./``.

    Args:
        pattern: Pattern supplied by configuration or the caller.

    Returns:
        str: Normalised pattern; a trailing slash matches everything below.
    """

    cleaned = pattern.replace("\\", "/").strip()
    while cleaned.startswith("./"):
        cleaned = cleaned[2:]
    if cleaned.endswith("/"):
        cleaned = f"{cleaned}**"
    return cleaned


def matches_pattern(relative: str, pattern: str) -> bool:
    """Return whether the POSIX ``relative`` path matches ``pattern``.

    Patterns without a slash match the file name at any depth, ``**/`` matches
    zero or more leading directories, and a directory pattern matches every
    file underneath it.

    Args:
        relative: Slash-separated path relative to the project root.
        pattern: Glob pattern, e.g. ``"src/**/*.vue"`` or ``"*.spec.js"``.

    Returns:
        bool: ``True`` when the path matches.
    """

    normalised = normalise_pattern(pattern)
    if not normalised:
        return False
    if "/" not in normalised:
        return fnmatchcase(PurePosixPath(relative).name, normalised) or fnmatchcase(relative, normalised)
    if fnmatchcase(relative, normalised):
        return True
    if normalised.startswith(_RECURSIVE_PREFIX) and fnmatchcase(relative, normalised[len(_RECURSIVE_PREFIX) :]):
        return True
    if not is_glob(normalised):
        return relative.startswith(f"{normalised.rstrip('/')}/")
    return False


def matches_any(relative: str, patterns: Iterable[str]) -> bool:
    """Return whether ``relative`` matches any entry of ``patterns``."""

    return any(matches_pattern(relative, pattern) for pattern in patterns)


def relative_posix(candidate: Path, root: Path) -> str:
    """Return ``candidate`` relative to ``root`` as a POSIX string when possible."""

    try:
        return candidate.relative_to(root).as_posix()
    except ValueError:
        return candidate.as_posix()


def in_ignored_directory(candidate: Path) -> bool:
    """Return whether ``candidate`` sits inside a ``node_modules`` directory."""

    return IGNORED_DIRECTORY in candidate.parts[:-1]


__all__ = [
    "ALWAYS_EXCLUDE_DIRS",
    "in_ignored_directory",
    "is_glob",
    "matches_any",
    "matches_pattern",
    "normalise_pattern",
    "relative_posix",
]
