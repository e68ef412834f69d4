# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

from __future__ import annotations

import pytest

from i18nkeys.cache import CacheLoader, freeze_argument, memoize


def test_memoize_reuses_result_for_equal_list_arguments() -> None:
    calls = {"count": 0}

    @memoize()
    def compute(values: list[str]) -> list[str]:
        calls["count"] += 1
        return [value.upper() for value in values]

    first = compute(["a", "b"])
    second = compute(["a", "b"])

    assert first == ["A", "B"]
    assert second is first
    assert calls["count"] == 1
    assert compute.cache_metadata().hits == 1


def test_memoize_caches_none_results() -> None:
    calls = {"count": 0}

    @memoize()
    def lookup(name: str) -> None:
        calls["count"] += 1

    lookup("missing")
    lookup("missing")

    assert calls["count"] == 1


def test_memoize_enforces_lru_capacity() -> None:
    calls = {"count": 0}

    @memoize(maxsize=2)
    def compute(value: int) -> int:
        calls["count"] += 1
        return value * 2

    compute(1)
    compute(2)
    compute(1)
    compute(3)
    compute(2)

    assert calls["count"] == 4
    metadata = compute.cache_metadata()
    assert metadata.current_size == 2
    assert metadata.maxsize == 2


def test_memoize_cache_clear() -> None:
    calls = {"count": 0}

    @memoize()
    def compute(value: int) -> int:
        calls["count"] += 1
        return value * 2

    compute(3)
    compute(3)
    assert calls["count"] == 1
    compute.cache_clear()
    compute(3)
    assert calls["count"] == 2
    assert compute.cache_metadata().hits == 0


def test_memoize_distinguishes_keyword_arguments() -> None:
    calls = {"count": 0}

    @memoize()
    def compute(value: int, *, scale: int = 1) -> int:
        calls["count"] += 1
        return value * scale

    assert compute(2, scale=3) == 6
    assert compute(2, scale=4) == 8
    assert compute(2, scale=3) == 6
    assert calls["count"] == 2


def test_memoize_supports_methods() -> None:
    class Doubler:
        def __init__(self) -> None:
            self.calls = 0

        @memoize()
        def double(self, value: int) -> int:
            self.calls += 1
            return value * 2

    doubler = Doubler()
    assert doubler.double(4) == 8
    assert doubler.double(4) == 8
    assert doubler.calls == 1


def test_freeze_argument_handles_nested_containers() -> None:
    frozen = freeze_argument({"files": ["a.js", "b.vue"], "extensions": {".js"}})

    assert frozen == frozenset({("files", ("a.js", "b.vue")), ("extensions", frozenset({".js"}))})
    assert freeze_argument(["x"]) == freeze_argument(("x",))


def test_freeze_argument_rejects_unhashable_values() -> None:
    class Unhashable:
        __hash__ = None  # type: ignore[assignment]

    with pytest.raises(TypeError, match="must be hashable"):
        freeze_argument(Unhashable(), label="payload")


def test_cache_loader_loads_once_per_argument_pair() -> None:
    calls: list[tuple[tuple[str, ...], tuple[str, ...]]] = []

    def load(patterns: list[str], extensions: list[str]) -> list[str]:
        calls.append((tuple(patterns), tuple(extensions)))
        return [f"{pattern}{extensions[0]}" for pattern in patterns]

    loader = CacheLoader(load)

    assert loader.get(["a"], [".js"]) == ["a.js"]
    assert loader.get(["a"], [".js"]) == ["a.js"]
    assert loader.get(["a"], [".vue"]) == ["a.vue"]
    assert len(calls) == 2
    assert loader.cache_metadata().current_size == 2

    loader.clear()
    loader.get(["a"], [".js"])
    assert len(calls) == 3
