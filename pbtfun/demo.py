"""Sample domain types and the demonstration properties.

Every property here claims that a generated function gives the same result
on two generated inputs. They are all false, so running them shows the
shrunk function tables that the engine produces for primitive, optional,
list, product, sum and recursive domains.
"""

from __future__ import annotations

import random
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from . import gen
from .argument import (
    Argument,
    booleans,
    dataclasses_of,
    deferred,
    enumeration,
    integers,
    mapped,
    optionals,
    strings,
    tuples,
)
from .fun import shrinker
from .pfun import Shrinker
from .registry import Registry
from .search import Property
from .shrink import (
    shrink_bool,
    shrink_int,
    shrink_list,
    shrink_optional,
)

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Product type
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ProductType:
    i: int
    s: str
    b: bool


def gen_product(rng: random.Random) -> ProductType:
    # A tiny string space keeps the printed tables readable.
    return ProductType(
        gen.integers()(rng), gen.one_of("Scala", "Haskell")(rng), gen.booleans()(rng)
    )


def shrink_product(p: ProductType) -> Iterator[ProductType]:
    for i in shrink_int(p.i):
        yield ProductType(i, p.s, p.b)
    for b in shrink_bool(p.b):
        yield ProductType(p.i, p.s, b)


# ---------------------------------------------------------------------------
# Sum type
# ---------------------------------------------------------------------------


class SumType(Enum):
    BRANCH1 = 1
    BRANCH2 = 2
    BRANCH3 = 3


def shrink_sum(s: SumType) -> Iterator[SumType]:
    for smaller in reversed(list(SumType)):
        if smaller.value < s.value:
            yield smaller


# ---------------------------------------------------------------------------
# Recursive type
# ---------------------------------------------------------------------------


class Tree(Generic[T]):
    """A binary tree: either a ``Leaf`` or a ``Node``."""


@dataclass(frozen=True)
class Leaf(Tree[Any]):
    pass


@dataclass(frozen=True)
class Node(Tree[T]):
    left: Tree[T]
    value: T
    right: Tree[T]


LEAF = Leaf()


def _tree_to(t: Tree[Any]) -> tuple[Tree[Any], Any, Tree[Any]] | None:
    match t:
        case Node(l, v, r):
            return (l, v, r)
    return None


def _tree_from(o: tuple[Tree[Any], Any, Tree[Any]] | None) -> Tree[Any]:
    if o is None:
        return LEAF
    return Node(*o)


def trees(arg: Argument) -> Argument:
    """Trees, as an optional (left, value, right) triple."""
    result: Argument = deferred(
        lambda: mapped(_tree_to, _tree_from, optionals(tuples(result, arg, result)))
    )
    return result


def gen_tree(value: gen.Gen[Any], depth: int = 4) -> gen.Gen[Tree[Any]]:
    def g(rng: random.Random) -> Tree[Any]:
        if depth <= 0 or rng.random() < 0.5:
            return LEAF
        sub = gen_tree(value, depth - 1)
        return Node(sub(rng), value(rng), sub(rng))

    return g


def shrink_tree(shrink_value: Shrinker[Any]) -> Shrinker[Tree[Any]]:
    def shrinker_(t: Tree[Any]) -> Iterator[Tree[Any]]:
        match t:
            case Node(l, v, r):
                yield l
                yield r
                for smaller in shrinker_(l):
                    yield Node(smaller, v, r)
                for smaller in shrinker_(r):
                    yield Node(l, v, smaller)
                for smaller in shrink_value(v):
                    yield Node(l, smaller, r)

    return shrinker_


# ---------------------------------------------------------------------------
# Capabilities
# ---------------------------------------------------------------------------

DEMO_REGISTRY = Registry()
DEMO_REGISTRY.register(ProductType, dataclasses_of(ProductType, integers(), strings(), booleans()))
DEMO_REGISTRY.register(SumType, enumeration(*SumType))
DEMO_REGISTRY.register_generic(Tree, trees)


# ---------------------------------------------------------------------------
# Sample properties
# ---------------------------------------------------------------------------


def _same_result(f: Callable[[Any], Any], x: Any, y: Any) -> bool:
    return f(x) == f(y)


def _pair_property(
    name: str,
    domain: Any,
    values: gen.Gen[Any],
    shrink_value: Shrinker[Any],
    outputs: gen.Gen[Any] = gen.booleans(),
    shrink_output: Shrinker[Any] = shrink_bool,
) -> Property:
    return Property(
        name=name,
        generators=(values, values, gen.functions(DEMO_REGISTRY.resolve(domain), outputs)),
        shrinkers=(shrink_value, shrink_value, shrinker(shrink_output)),
        predicate=lambda x, y, f: _same_result(f, x, y),
    )


SAMPLE_PROPERTIES: tuple[Property, ...] = (
    _pair_property(
        "booleans",
        bool,
        gen.booleans(),
        shrink_bool,
        outputs=gen.integers(),
        shrink_output=shrink_int,
    ),
    _pair_property("ints", int, gen.integers(), shrink_int),
    Property(
        name="strings",
        generators=(gen.functions(DEMO_REGISTRY.resolve(str), gen.booleans()),),
        shrinkers=(shrinker(shrink_bool),),
        predicate=lambda f: _same_result(f, "Scala", "Haskell"),
    ),
    _pair_property(
        "options",
        int | None,
        gen.optionals(gen.integers()),
        shrink_optional(shrink_int),
    ),
    _pair_property("lists", list[int], gen.lists(gen.integers()), shrink_list(shrink_int)),
    _pair_property("product types", ProductType, gen_product, shrink_product),
    _pair_property("sum types", SumType, gen.one_of(*SumType), shrink_sum),
    _pair_property(
        "recursive types",
        Tree[int],
        gen_tree(gen.integers()),
        shrink_tree(shrink_int),
    ),
)


def find_property(name: str) -> Property | None:
    for prop in SAMPLE_PROPERTIES:
        if prop.name == name:
            return prop
    return None

