# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Project configuration and per-file parser resolution."""

from __future__ import annotations

from .models import DEFAULT_EXTENSIONS, ConfigOverride, FileConfig, ProjectConfig
from .resolver import ConfigResolver, ProjectConfigResolver, StaticConfigResolver

__all__ = [
    "ConfigOverride",
    "ConfigResolver",
    "DEFAULT_EXTENSIONS",
    "FileConfig",
    "ProjectConfig",
    "ProjectConfigResolver",
    "StaticConfigResolver",
]
