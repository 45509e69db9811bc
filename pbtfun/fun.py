"""Generated functions that can be shrunk and printed.

A ``Fun`` is what a test receives in place of a plain callable. It is in one
of two states:

- ``Total``: freshly generated. Wraps an opaque total function. Its domain
  cannot be enumerated, so it prints as ``<function>``.
- ``Partial``: the result of shrinking. Wraps a finite ``PFun`` plus a
  default for inputs outside the table, and prints as that table.

A ``Total`` logs the inputs it is applied to. When it is first shrunk, its
encoding is built over exactly those inputs, which keeps the table finite
whatever the size of the domain.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any, assert_never

from .argument import Argument
from .option import get_or_else
from .pfun import PFun, Shrinker, lookup, table
from .show import show

logger = logging.getLogger(__name__)


@dataclass(eq=False, repr=False)
class Total:
    """A generated total function and the default value it shrinks towards."""

    default: Any
    raw: Callable[[Any], Any]
    argument: Argument
    queried: list[Any] = field(default_factory=list)

    def __call__(self, a: Any) -> Any:
        return apply(self, a)

    def __repr__(self) -> str:
        return render(self)


@dataclass(frozen=True, repr=False)
class Partial:
    """A shrunk function: a finite table plus a fallback.

    Only produced by shrinking; never constructed by callers.
    """

    encoding: PFun
    default: Any

    def __call__(self, a: Any) -> Any:
        return apply(self, a)

    def __repr__(self) -> str:
        return render(self)


Fun = Total | Partial


def apply(fun: Fun, a: Any) -> Any:
    match fun:
        case Total(raw=raw, queried=queried):
            if a not in queried:
                queried.append(a)
            return raw(a)
        case Partial(encoding, default):
            return get_or_else(lookup(encoding, a), default)
        case _:
            assert_never(fun)


def encoding_of(fun: Fun) -> PFun:
    """The finite encoding behind ``fun``, derived on demand for a ``Total``."""
    match fun:
        case Total(raw=raw, argument=argument, queried=queried):
            logger.debug("Building encoding over %d queried inputs", len(queried))
            return argument.build(raw, tuple(queried))
        case Partial(encoding):
            return encoding
        case _:
            assert_never(fun)


def shrink(fun: Fun, shrink_output: Shrinker[Any]) -> Iterator[Partial]:
    """Lazily yield smaller versions of ``fun``.

    Domain cuts come first, since they remove the most of the search space;
    then the default value is shrunk with the domain left as it is.
    """
    encoding = encoding_of(fun)

    for candidate in encoding.shrink(shrink_output):
        yield Partial(candidate, fun.default)

    for smaller in shrink_output(fun.default):
        yield Partial(encoding, smaller)


def shrinker(shrink_output: Shrinker[Any]) -> Shrinker[Any]:
    """A shrinker for functions whose outputs shrink with ``shrink_output``.

    Callables that are not ``Fun`` instances have no candidates.
    """

    def shrink_fun(f: Any) -> Iterator[Any]:
        if isinstance(f, (Total, Partial)):
            yield from shrink(f, shrink_output)

    return shrink_fun


def render(fun: Fun) -> str:
    match fun:
        case Total():
            return "<function>"
        case Partial(encoding, default):
            entries = ", ".join(f"{show(a)} => {show(c)}" for a, c in table(encoding))
            return "{" + entries + ", _ => " + show(default) + "}"
        case _:
            assert_never(fun)
