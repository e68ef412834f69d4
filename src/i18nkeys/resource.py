# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Lazily computed per-file resources."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from threading import Lock
from typing import Final, Generic, TypeVar, cast

T = TypeVar("T")

_UNLOADED: Final = object()


class ResourceLoader(Generic[T]):
    """Compute a value for ``path`` on first access and keep it.

    Args:
        path: File the resource describes.
        loader: Zero-argument callable producing the value.
    """

    def __init__(self, path: Path, loader: Callable[[], T]) -> None:
        self._path = path
        self._loader = loader
        self._value: object = _UNLOADED
        self._lock = Lock()

    @property
    def path(self) -> Path:
        """Return the file the resource describes."""

        return self._path

    @property
    def loaded(self) -> bool:
        """Return whether the value has been computed."""

        return self._value is not _UNLOADED

    def get_resource(self) -> T:
        """Return the value, calling the loader only on the first request."""

        with self._lock:
            if self._value is _UNLOADED:
                self._value = self._loader()
            return cast(T, self._value)

    def __repr__(self) -> str:
        return f"ResourceLoader(path={str(self._path)!r}, loaded={self.loaded})"


__all__ = ["ResourceLoader"]
