"""Domain capabilities: turning total functions into finite encodings.

An ``Argument`` describes how a domain type decomposes into the shapes
``pbtfun.pfun`` understands. Given a total function and the inputs it was
actually queried on, ``build`` produces a ``PFun`` that reproduces the
function on exactly those inputs:

    >>> integers().build(lambda i: i > 0, [3, -2]).table()
    ((3, True), (-2, False))

Only subdomains that contain queried inputs are decomposed, so the result is
finite even for unbounded domains such as ``int`` or ``list[int]``.

Capabilities for the basic shapes (``units``, ``pairs``, ``eithers``) are
combined through ``mapped`` to cover everything else: a boolean is a sum of
two units, an integer is its two's complement bits, a list is an optional
head and tail. Recursive types refer to themselves through ``deferred`` so
that composing them never recurses eagerly.

A capability works on ``(input, output)`` entries. Its ``decompose`` method
is a generator: it yields ``(capability, entries)`` requests for the parts it
delegates, receives each part's encoding back, and returns its own. ``encode``
drives these generators from an explicit stack, so a list of a thousand
elements or a two-hundred-bit integer decomposes without deep recursion.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Generator, Sequence
from dataclasses import dataclass
from functools import cached_property
from typing import Any, Protocol

from .either import UNIT, Left, Right
from .pfun import PFun, imap, left, product, right, union, unit, void

type Entries = list[tuple[Any, Any]]
type Decomposition = Generator[tuple[Argument, Entries], PFun, PFun]


class Argument(Protocol):
    """Capability of a domain type to be the input of a ``PFun``."""

    def build(self, f: Callable[[Any], Any], queried: Sequence[Any]) -> PFun:
        """Encode ``f`` over the distinct values of ``queried``."""
        ...

    def decompose(self, entries: Entries) -> Decomposition:
        """Encode non-empty, duplicate-free ``(input, output)`` entries."""
        ...


def encode(arg: Argument, entries: Entries) -> PFun:
    """Run ``arg.decompose`` and every request it makes, depth first.

    Requests with no entries are answered with ``void()`` directly.
    """
    if not entries:
        return void()

    stack = [arg.decompose(entries)]
    result: Any = None
    while True:
        try:
            part, part_entries = stack[-1].send(result)
        except StopIteration as done:
            stack.pop()
            if not stack:
                return done.value
            result = done.value
            continue
        if part_entries:
            stack.append(part.decompose(part_entries))
            result = None
        else:
            result = void()


class _Capability:
    """``build`` in terms of ``decompose``."""

    def build(self, f: Callable[[Any], Any], queried: Sequence[Any]) -> PFun:
        return encode(self, [(a, f(a)) for a in _distinct(queried)])  # type: ignore[arg-type]


def _distinct(values: Sequence[Any]) -> list[Any]:
    # Domain values may be unhashable (lists), so compare by equality.
    seen: list[Any] = []
    for v in values:
        if v not in seen:
            seen.append(v)
    return seen


# ---------------------------------------------------------------------------
# Basic shapes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Units(_Capability):
    """The unit type ``()``."""

    def decompose(self, entries: Entries) -> Decomposition:
        yield from ()
        return unit(entries[0][1])


@dataclass(frozen=True)
class Pairs(_Capability):
    """Pairs ``(a, b)``, encoded as a function of ``a`` returning a function of ``b``."""

    first: Argument
    second: Argument

    def decompose(self, entries: Entries) -> Decomposition:
        inners: Entries = []
        for a, group in _group_by_first(entries):
            inners.append((a, (yield self.second, group)))
        return product((yield self.first, inners))


@dataclass(frozen=True)
class Eithers(_Capability):
    """Sums ``Left(a) | Right(b)``."""

    left: Argument
    right: Argument

    def decompose(self, entries: Entries) -> Decomposition:
        lefts = [(x.value, c) for x, c in entries if isinstance(x, Left)]
        rights = [(x.value, c) for x, c in entries if isinstance(x, Right)]

        if not rights:
            return left((yield self.left, lefts))
        if not lefts:
            return right((yield self.right, rights))
        first = left((yield self.left, lefts))
        return union(first, right((yield self.right, rights)))


@dataclass(frozen=True)
class Mapped(_Capability):
    """A domain isomorphic to the domain of ``target``.

    ``to`` must be total. ``from_`` must be defined on every value ``to``
    produces and undo it: ``from_(to(a)) == a``.
    """

    to: Callable[[Any], Any]
    from_: Callable[[Any], Any]
    target: Argument

    def decompose(self, entries: Entries) -> Decomposition:
        inner = yield self.target, [(self.to(a), c) for a, c in entries]
        return imap(self.to, self.from_, inner)


class Deferred(_Capability):
    """A capability computed on first use.

    Recursive capabilities mention themselves; wrapping the self-reference in
    a thunk keeps construction finite. The thunk runs at most once.
    """

    def __init__(self, thunk: Callable[[], Argument]) -> None:
        self._thunk = thunk

    @cached_property
    def forced(self) -> Argument:
        return self._thunk()

    def decompose(self, entries: Entries) -> Decomposition:
        return (yield self.forced, entries)

    def __repr__(self) -> str:
        state = "forced" if "forced" in self.__dict__ else "pending"
        return f"Deferred({state})"


def _group_by_first(entries: Entries) -> list[tuple[Any, Entries]]:
    groups: list[tuple[Any, Entries]] = []
    for (a, b), c in entries:
        for key, group in groups:
            if key == a:
                group.append((b, c))
                break
        else:
            groups.append((a, [(b, c)]))
    return groups


# ---------------------------------------------------------------------------
# Combinators
# ---------------------------------------------------------------------------


def units() -> Argument:
    return Units()


def pairs(first: Argument, second: Argument) -> Argument:
    return Pairs(first, second)


def eithers(left_arg: Argument, right_arg: Argument) -> Argument:
    return Eithers(left_arg, right_arg)


def mapped(
    to: Callable[[Any], Any], from_: Callable[[Any], Any], target: Argument
) -> Argument:
    return Mapped(to, from_, target)


def deferred(thunk: Callable[[], Argument]) -> Argument:
    return Deferred(thunk)


def tuples(*args: Argument) -> Argument:
    """Tuples of any length, as right-nested pairs."""
    if not args:
        return mapped(lambda t: UNIT, lambda u: (), units())
    head, *rest = args
    if not rest:
        return mapped(lambda t: t[0], lambda a: (a,), head)
    return mapped(
        lambda t: (t[0], t[1:]),
        lambda p: (p[0], *p[1]),
        pairs(head, tuples(*rest)),
    )


def enumeration(*values: Any) -> Argument:
    """A finite set of values, as a chain of sums of units.

    The first value is ``Left(())``, the second ``Right(Left(()))`` and so on,
    with the last value taking the innermost ``Right``.
    """
    if not values:
        raise ValueError("enumeration() needs at least one value")
    choices = tuple(values)

    def to(v: Any) -> Any:
        return _encode_index(choices.index(v), len(choices))

    def from_(e: Any) -> Any:
        return choices[_decode_index(e)]

    return mapped(to, from_, _enumeration_shape(len(choices)))


def _enumeration_shape(n: int) -> Argument:
    shape = units()
    for _ in range(n - 1):
        shape = eithers(units(), shape)
    return shape


def _encode_index(index: int, n: int) -> Any:
    e: Any = UNIT if index == n - 1 else Left(UNIT)
    for _ in range(index):
        e = Right(e)
    return e


def _decode_index(e: Any) -> int:
    # Both Left(()) and the final bare () select the current position.
    index = 0
    while isinstance(e, Right):
        e = e.value
        index += 1
    return index


def dataclasses_of(cls: type, *fields: Argument) -> Argument:
    """A dataclass, through the tuple of its fields in declaration order."""
    names = [f.name for f in dataclasses.fields(cls)]
    if len(fields) != len(names):
        raise ValueError(
            f"{cls.__name__} has {len(names)} fields, got {len(fields)} capabilities"
        )

    return mapped(
        lambda obj: tuple(getattr(obj, name) for name in names),
        lambda values: cls(*values),
        tuples(*fields),
    )


# ---------------------------------------------------------------------------
# Standard domains
# ---------------------------------------------------------------------------


def _bool_to(b: bool) -> Left[tuple[()]] | Right[tuple[()]]:
    return Left(UNIT) if b else Right(UNIT)


def _bool_from(e: Left[tuple[()]] | Right[tuple[()]]) -> bool:
    return isinstance(e, Left)


def booleans() -> Argument:
    """``True`` is ``Left(())``, ``False`` is ``Right(())``."""
    return mapped(_bool_to, _bool_from, eithers(units(), units()))


def _int_to(i: int) -> Left[tuple[bool, int]] | Right[bool]:
    match i:
        case 0:
            return Right(False)
        case -1:
            return Right(True)
    # Floor division moves every other integer strictly towards 0 or -1.
    return Left((i % 2 != 0, i // 2))


def _int_from(e: Left[tuple[bool, int]] | Right[bool]) -> int:
    if isinstance(e, Right):
        return -1 if e.value else 0
    odd, half = e.value
    return 2 * half + (1 if odd else 0)


def integers() -> Argument:
    """Integers, by their two's complement bits, least significant first.

    ``0`` and ``-1`` are the two terminal bit patterns; any other integer is
    its lowest bit paired with the encoding of ``i // 2``.
    """
    arg: Argument = deferred(
        lambda: mapped(_int_to, _int_from, eithers(pairs(booleans(), arg), booleans()))
    )
    return arg


def characters() -> Argument:
    """Single characters, by code point."""
    return mapped(ord, chr, integers())


def strings() -> Argument:
    """Strings, as lists of code points."""
    return mapped(
        lambda s: [ord(c) for c in s],
        lambda codes: "".join(chr(c) for c in codes),
        lists(integers()),
    )


def _optional_to(o: Any) -> Left[tuple[()]] | Right[Any]:
    return Left(UNIT) if o is None else Right(o)


def _optional_from(e: Left[tuple[()]] | Right[Any]) -> Any:
    return e.value if isinstance(e, Right) else None


def optionals(arg: Argument) -> Argument:
    """``None`` is ``Left(())``, any other value ``x`` is ``Right(x)``."""
    return mapped(_optional_to, _optional_from, eithers(units(), arg))


def _list_to(xs: list[Any]) -> tuple[Any, list[Any]] | None:
    if not xs:
        return None
    return (xs[0], list(xs[1:]))


def _list_from(o: tuple[Any, list[Any]] | None) -> list[Any]:
    if o is None:
        return []
    head, tail = o
    return [head, *tail]


def lists(arg: Argument) -> Argument:
    """Lists, as an optional head and tail."""
    result: Argument = deferred(
        lambda: mapped(_list_to, _list_from, optionals(pairs(arg, result)))
    )
    return result
