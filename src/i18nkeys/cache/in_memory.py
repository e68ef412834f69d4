# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Value-keyed in-process caches.

Entries live as long as the cache object that holds them; nothing expires on
its own. Arguments are compared by value, so two calls passing equal lists of
file names share one entry. Drop entries with ``cache_clear`` or ``clear``.
"""

from __future__ import annotations

from collections import OrderedDict
from collections.abc import Callable, Hashable, Mapping, Set
from dataclasses import dataclass
from functools import update_wrapper
from threading import Lock
from types import MethodType
from typing import Final, Generic, ParamSpec, TypeVar, cast

P = ParamSpec("P")
R = TypeVar("R")

_MISSING: Final = object()


@dataclass(frozen=True, slots=True)
class CacheInfo:
    """Snapshot of a cache's occupancy.

    Attributes:
        current_size: Entries held right now.
        hits: Lookups answered from the cache since the last clear.
        maxsize: Capacity, ``None`` when unbounded.
    """

    current_size: int
    hits: int
    maxsize: int | None


def freeze_argument(value: object, *, label: str = "argument") -> Hashable:
    """Return a hashable value equal-for-equal to ``value``.

    Lists and tuples become tuples, sets become frozensets and mappings become
    frozensets of ``(key, value)`` pairs, recursively.

    Args:
        value: Argument passed to a cached callable.
        label: Name used in the error message.

    Returns:
        Hashable: ``value`` itself when it is already hashable.

    Raises:
        TypeError: If ``value`` has no hashable equivalent.
    """

    if isinstance(value, (list, tuple)):
        return tuple(freeze_argument(item, label=label) for item in value)
    if isinstance(value, Mapping):
        return frozenset((key, freeze_argument(item, label=label)) for key, item in value.items())
    if isinstance(value, Set) and not isinstance(value, frozenset):
        return frozenset(freeze_argument(item, label=label) for item in value)
    if isinstance(value, Hashable):
        return value
    raise TypeError(f"{label} must be hashable to participate in caching")


def _argument_key(args: tuple[object, ...], kwargs: Mapping[str, object]) -> Hashable:
    positional = tuple(freeze_argument(arg, label=f"positional argument {index}") for index, arg in enumerate(args))
    if not kwargs:
        return positional
    keywords = tuple(
        sorted((name, freeze_argument(value, label=f"keyword argument '{name}'")) for name, value in kwargs.items()),
    )
    return (*positional, keywords)


class _ValueMemo(Generic[P, R]):
    """Callable wrapper holding results keyed by frozen arguments."""

    def __init__(self, func: Callable[P, R], maxsize: int | None) -> None:
        self._func = func
        self._maxsize = maxsize
        self._entries: OrderedDict[Hashable, R] = OrderedDict()
        self._lock = Lock()
        self._hits = 0
        update_wrapper(self, func)

    def __call__(self, *args: P.args, **kwargs: P.kwargs) -> R:
        key = _argument_key(args, kwargs)
        with self._lock:
            found = self._entries.get(key, _MISSING)
            if found is not _MISSING:
                self._entries.move_to_end(key)
                self._hits += 1
                return cast(R, found)
        value = self._func(*args, **kwargs)
        with self._lock:
            self._entries[key] = value
            if self._maxsize is not None and len(self._entries) > self._maxsize:
                self._entries.popitem(last=False)
        return value

    def __get__(self, instance: object | None, owner: type | None = None) -> Callable[P, R]:
        # Bound calls include the instance in the key.
        if instance is None:
            return self
        return cast(Callable[P, R], MethodType(self, instance))

    def cache_clear(self) -> None:
        """Forget every entry and reset the hit counter."""

        with self._lock:
            self._entries.clear()
            self._hits = 0

    def cache_metadata(self) -> CacheInfo:
        """Return the current :class:`CacheInfo`."""

        with self._lock:
            return CacheInfo(current_size=len(self._entries), hits=self._hits, maxsize=self._maxsize)


class CacheLoader(Generic[P, R]):
    """Compute values through ``loader`` once per distinct argument sequence.

    Args:
        loader: Callable producing the value for an argument sequence.
    """

    def __init__(self, loader: Callable[P, R]) -> None:
        self._memo: _ValueMemo[P, R] = _ValueMemo(loader, None)

    def get(self, *args: P.args, **kwargs: P.kwargs) -> R:
        """Return the value for the arguments, loading it on first use."""

        return self._memo(*args, **kwargs)

    def clear(self) -> None:
        """Drop every loaded value."""

        self._memo.cache_clear()

    def cache_metadata(self) -> CacheInfo:
        return self._memo.cache_metadata()


def memoize(maxsize: int | None = None) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Return a decorator caching results by argument value.

    The decorated callable gains ``cache_clear()`` and ``cache_metadata()``.
    ``None`` results are cached like any other value.

    Args:
        maxsize: Entries kept before the least recently used one is evicted;
            ``None`` keeps everything.

    Returns:
        Callable[[Callable[P, R]], Callable[P, R]]: The decorator.
    """

    def decorate(func: Callable[P, R]) -> Callable[P, R]:
        return cast(Callable[P, R], _ValueMemo(func, maxsize))

    return decorate


__all__: Final = ["CacheInfo", "CacheLoader", "freeze_argument", "memoize"]
