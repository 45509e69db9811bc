"""Shrinkers for common output and argument types.

A shrinker maps a value to a lazy iterator of strictly smaller candidates,
most aggressive first. Every candidate must be smaller than its input under
some well-founded order, otherwise a greedy search may not terminate.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from .pfun import Shrinker


def shrink_nothing(value: Any) -> Iterator[Any]:
    return iter(())


def shrink_bool(value: bool) -> Iterator[bool]:
    if value:
        yield False


def shrink_int(value: int) -> Iterator[int]:
    """Towards zero: ``0`` first, then the absolute value, then halfway points."""
    if value == 0:
        return
    yield 0
    if value < 0:
        yield -value
    sign = 1 if value > 0 else -1
    half = abs(value) // 2
    while half > 0:
        yield value - sign * half
        half //= 2


def shrink_list(shrink_element: Shrinker[Any]) -> Shrinker[list[Any]]:
    """Remove chunks (halves first, single elements last), then shrink elements."""

    def shrinker(value: list[Any]) -> Iterator[list[Any]]:
        n = len(value)
        if n == 0:
            return
        yield []
        chunk = n // 2
        while chunk > 0:
            for start in range(0, n - chunk + 1, chunk):
                yield value[:start] + value[start + chunk :]
            chunk //= 2
        for i, element in enumerate(value):
            for smaller in shrink_element(element):
                yield value[:i] + [smaller] + value[i + 1 :]

    return shrinker


def shrink_str(value: str) -> Iterator[str]:
    for chars in shrink_list(shrink_nothing)(list(value)):
        yield "".join(chars)


def shrink_optional(shrink_value: Shrinker[Any]) -> Shrinker[Any]:
    def shrinker(value: Any) -> Iterator[Any]:
        if value is None:
            return
        yield None
        yield from shrink_value(value)

    return shrinker


def shrink_tuple(*shrinkers: Shrinker[Any]) -> Shrinker[tuple[Any, ...]]:
    """Shrink one component at a time, leftmost component first."""

    def shrinker(value: tuple[Any, ...]) -> Iterator[tuple[Any, ...]]:
        for i, shrink_component in enumerate(shrinkers):
            for smaller in shrink_component(value[i]):
                yield value[:i] + (smaller,) + value[i + 1 :]

    return shrinker
