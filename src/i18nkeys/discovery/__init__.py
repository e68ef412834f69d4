# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""File discovery used to select sources for key collection."""

from __future__ import annotations

from .lister import FileLister, FilesystemLister, ListedFile
from .rules import ALWAYS_EXCLUDE_DIRS, matches_pattern
from .targets import TargetFileResolver

__all__ = [
    "ALWAYS_EXCLUDE_DIRS",
    "FileLister",
    "FilesystemLister",
    "ListedFile",
    "TargetFileResolver",
    "matches_pattern",
]
