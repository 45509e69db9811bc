"""Tagged values for sum-shaped domains.

Every domain the encoding understands is built from three shapes:

- unit: the empty tuple ``()``
- product: a pair ``(a, b)``
- sum: ``Left(a)`` or ``Right(b)``

Richer types (booleans, integers, lists, user records) reach these shapes
through an isomorphism; see ``pbtfun.argument``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

A = TypeVar("A")
B = TypeVar("B")

# The unit value.
UNIT: tuple[()] = ()


@dataclass(frozen=True)
class Left(Generic[A]):
    """The left alternative of a sum."""

    value: A


@dataclass(frozen=True)
class Right(Generic[B]):
    """The right alternative of a sum."""

    value: B


type Either[A, B] = Left[A] | Right[B]
