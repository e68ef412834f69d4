# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Provide in-process cache utilities for the key collection pipeline."""

from __future__ import annotations

from .in_memory import CacheInfo, CacheLoader, freeze_argument, memoize

__all__ = ["CacheInfo", "CacheLoader", "freeze_argument", "memoize"]
