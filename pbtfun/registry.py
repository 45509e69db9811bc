"""Resolving capabilities from type annotations.

Capabilities can always be passed around explicitly. A ``Registry`` adds a
lookup keyed by type, so that callers can ask for ``resolve(list[int])``
instead of spelling out ``lists(integers())``:

    registry = Registry()
    registry.register(Point, dataclasses_of(Point, integers(), integers()))
    registry.register_generic(Tree, trees)
    registry.resolve(Tree[Point])

Built-in resolution covers ``NoneType``, ``bool``, ``int``, ``str``,
``tuple[...]``, ``list[X]``, ``X | None`` and ``Left[X] | Right[Y]``.
"""

from __future__ import annotations

import types
import typing
from collections.abc import Callable
from typing import Any, get_args, get_origin

from .argument import (
    Argument,
    booleans,
    eithers,
    integers,
    lists,
    mapped,
    optionals,
    strings,
    tuples,
    units,
)
from .either import UNIT, Left, Right

type Factory = Callable[..., Argument]


class Registry:
    def __init__(self) -> None:
        self._exact: dict[Any, Argument] = {}
        self._generic: dict[Any, Factory] = {}

    def register(self, tp: Any, arg: Argument) -> None:
        """Use ``arg`` whenever exactly ``tp`` is resolved."""
        self._exact[tp] = arg

    def register_generic(self, origin: Any, factory: Factory) -> None:
        """Use ``factory`` for ``origin[X, ...]``, called with the capabilities of ``X, ...``."""
        self._generic[origin] = factory

    def __contains__(self, tp: Any) -> bool:
        return tp in self._exact or get_origin(tp) in self._generic

    def resolve(self, tp: Any) -> Argument:
        """Capability for the annotation ``tp``.

        Raises TypeError if ``tp`` is neither registered nor built in.
        """
        if tp in self._exact:
            return self._exact[tp]

        origin = get_origin(tp)
        params = get_args(tp)

        if origin is not None and origin in self._generic:
            return self._generic[origin](*(self.resolve(p) for p in params))

        if tp is type(None) or tp is None:
            return mapped(lambda _: UNIT, lambda _: None, units())
        if tp is bool:
            return booleans()
        if tp is int:
            return integers()
        if tp is str:
            return strings()
        if origin is list and len(params) == 1:
            return lists(self.resolve(params[0]))
        if origin is tuple:
            if params in ((), ((),)):
                return tuples()
            if Ellipsis in params:
                raise TypeError(f"Variable-length tuples are not supported: {tp!r}")
            return tuples(*(self.resolve(p) for p in params))
        if origin in (types.UnionType, typing.Union):
            return self._resolve_union(tp, params)

        raise TypeError(f"No capability registered for {tp!r}")

    def _resolve_union(self, tp: Any, params: tuple[Any, ...]) -> Argument:
        others = tuple(p for p in params if p is not type(None))
        if len(others) < len(params):
            inner = others[0] if len(others) == 1 else typing.Union[others]
            return optionals(self.resolve(inner))

        match params:
            case (lhs, rhs) if get_origin(lhs) is Left and get_origin(rhs) is Right:
                (left_param,) = get_args(lhs)
                (right_param,) = get_args(rhs)
                return eithers(self.resolve(left_param), self.resolve(right_param))
        raise TypeError(f"Only optionals and Left | Right unions are supported: {tp!r}")


DEFAULT_REGISTRY = Registry()


def resolve(tp: Any) -> Argument:
    return DEFAULT_REGISTRY.resolve(tp)
