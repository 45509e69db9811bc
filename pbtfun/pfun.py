"""Finite, shrinkable partial functions.

A partial function ``A ⇀ C`` is represented by recursion on the shape of
its domain. Domains are assumed to be algebraic: potentially recursive sums
of products. The building blocks are:

- ``unit``: the unit type, a single input ``()``
- ``product``: pairs, by currying ``(A, B) ⇀ C`` into ``A ⇀ (B ⇀ C)``
- ``left``, ``right`` and ``union``: sums, by tagging two encodings and
  joining them
- ``void``: the empty function
- ``imap``: any domain isomorphic to one of the above

Because every encoding is assembled from these pieces, a whole subdomain can
be pruned by dropping one branch: a function defined as "``f`` on the left,
``g`` on the right" shrinks to just ``f`` or just ``g``. Repeating this cuts a
total function down to the handful of inputs a failing test actually needs.

Encodings are immutable. ``table``, ``lookup`` and ``shrink`` are defined by
exhaustive case analysis over the variants below; the same operations are
also available as methods. They walk the encoding with explicit stacks
rather than recursion: lists and integers nest one level per element or
bit, so encodings of ordinary values can be thousands of levels deep.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from functools import partial
from typing import Any, assert_never

from .either import UNIT, Left, Right
from .option import Option, Some

type Shrinker[T] = Callable[[T], Iterator[T]]


class _Operations:
    """Method-style access to the module-level operations."""

    def table(self) -> tuple[tuple[Any, Any], ...]:
        return table(self)  # type: ignore[arg-type]

    def lookup(self, a: Any) -> Option[Any]:
        return lookup(self, a)  # type: ignore[arg-type]

    def shrink(self, shrink_output: Shrinker[Any]) -> Iterator[PFun]:
        return shrink(self, shrink_output)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Unit(_Operations):
    """Maps ``()`` to ``value``."""

    value: Any


@dataclass(frozen=True)
class Product(_Operations):
    """Function over pairs, stored curried: ``fun`` maps ``a`` to ``b ⇀ c``."""

    fun: PFun


@dataclass(frozen=True)
class OnLeft(_Operations):
    """Function defined only on ``Left`` inputs."""

    fun: PFun


@dataclass(frozen=True)
class OnRight(_Operations):
    """Function defined only on ``Right`` inputs."""

    fun: PFun


@dataclass(frozen=True)
class Union(_Operations):
    """Function whose domain is the union of two encodings' domains."""

    first: PFun
    second: PFun


@dataclass(frozen=True)
class Void(_Operations):
    """Function with an empty domain."""


@dataclass(frozen=True)
class IMap(_Operations):
    """Function over a domain isomorphic to the domain of ``fun``.

    ``to`` must be total on the source domain. ``from_`` only needs to be
    defined on the values ``to`` produces; this is not checked.
    """

    to: Callable[[Any], Any]
    from_: Callable[[Any], Any]
    fun: PFun


PFun = Unit | Product | OnLeft | OnRight | Union | Void | IMap


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def unit(value: Any) -> Unit:
    return Unit(value)


def product(fun: PFun) -> Product:
    return Product(fun)


def left(fun: PFun) -> OnLeft:
    return OnLeft(fun)


def right(fun: PFun) -> OnRight:
    return OnRight(fun)


def union(first: PFun, second: PFun) -> Union:
    return Union(first, second)


def void() -> Void:
    return Void()


def imap(to: Callable[[Any], Any], from_: Callable[[Any], Any], fun: PFun) -> IMap:
    return IMap(to, from_, fun)


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------


def table(p: PFun) -> tuple[tuple[Any, Any], ...]:
    """Every ``(input, output)`` mapping of ``p``, in construction order.

    Unions list their first branch before their second; products list each
    outer input with all of its inner inputs before moving on.
    """
    entries: list[tuple[Any, Any]] = []
    # (encoding, input transforms up to the nearest product, enclosing products)
    stack: list[tuple[PFun, _Path, _Path]] = [(p, None, None)]
    while stack:
        node, path, products = stack.pop()
        match node:
            case Unit(value):
                a = _input(path, UNIT)
                if products is None:
                    entries.append((a, value))
                else:
                    # ``value`` maps second components; pair them with ``a``.
                    outer, products = products
                    stack.append((value, (partial(_pair, a), outer), products))
            case Product(fun):
                stack.append((fun, None, (path, products)))
            case OnLeft(fun):
                stack.append((fun, (Left, path), products))
            case OnRight(fun):
                stack.append((fun, (Right, path), products))
            case Union(first, second):
                stack.append((second, path, products))
                stack.append((first, path, products))
            case Void():
                pass
            case IMap(_, from_, fun):
                stack.append((fun, (from_, path), products))
            case _:
                assert_never(node)
    return tuple(entries)


def lookup(p: PFun, a: Any) -> Option[Any]:
    """The output recorded for ``a``, or ``None`` when ``a`` is not covered."""
    node = p
    # Second components still to look up, innermost product first.
    seconds: _Path = None
    depth = 0
    # Second branches of unions: (encoding, input, seconds, depth).
    pending: list[tuple[PFun, Any, _Path, int]] = []
    while True:
        match node:
            case Unit(value):
                if seconds is None:
                    return Some(value)
                a, seconds = seconds
                depth -= 1
                # Unions inside a resolved product are settled.
                while pending and pending[-1][3] > depth:
                    pending.pop()
                node = value
                continue
            case Product(fun):
                first, second = a
                seconds = (second, seconds)
                depth += 1
                node, a = fun, first
                continue
            case OnLeft(fun) if isinstance(a, Left):
                node, a = fun, a.value
                continue
            case OnRight(fun) if isinstance(a, Right):
                node, a = fun, a.value
                continue
            case Union(first, second):
                pending.append((second, a, seconds, depth))
                node = first
                continue
            case IMap(to, _, fun):
                node, a = fun, to(a)
                continue
            case OnLeft() | OnRight() | Void():
                pass
            case _:
                assert_never(node)

        if not pending:
            return None
        node, a, seconds, depth = pending.pop()


def shrink(p: PFun, shrink_output: Shrinker[Any]) -> Iterator[PFun]:
    """Lazily yield smaller versions of ``p``, largest cuts first.

    ``shrink_output`` proposes smaller candidates for a single output value.
    Nothing is computed until the caller advances the iterator.

    A union yields each side on its own, then the shrinks of its first side,
    then those of its second. A product shrinks its curried function, whose
    outputs are themselves encodings: an output is shrunk by dropping it,
    then by shrinking the inner encoding in turn.
    """
    # (encoding, wrappers up to the root, enclosing products)
    tasks: list[tuple[PFun, _Path, int]] = [(p, None, 0)]
    while tasks:
        node, path, products = tasks.pop()
        match node:
            case Unit(value):
                yield _rebuild(path, Void())
                if products:
                    tasks.append((value, (Unit, path), products - 1))
                else:
                    for smaller in shrink_output(value):
                        yield _rebuild(path, Unit(smaller))
            case Product(fun):
                tasks.append((fun, (Product, path), products + 1))
            case OnLeft(fun):
                tasks.append((fun, (OnLeft, path), products))
            case OnRight(fun):
                tasks.append((fun, (OnRight, path), products))
            case Union(first, second):
                yield _rebuild(path, first)
                yield _rebuild(path, second)
                tasks.append((second, path, products))
                tasks.append((first, path, products))
            case Void():
                pass
            case IMap(to, from_, fun):
                tasks.append((fun, (partial(IMap, to, from_), path), products))
            case _:
                assert_never(node)


def size(p: PFun) -> int:
    """Number of inputs ``p`` is defined on."""
    return len(table(p))


# Linked lists of ``(item, rest)`` pairs, innermost first; ``None`` is empty.
type _Path = tuple[Any, _Path] | None


def _input(path: _Path, a: Any) -> Any:
    while path is not None:
        transform, path = path
        a = transform(a)
    return a


def _rebuild(path: _Path, p: PFun) -> PFun:
    while path is not None:
        wrap, path = path
        p = wrap(p)
    return p


def _pair(a: Any, b: Any) -> tuple[Any, Any]:
    return (a, b)
