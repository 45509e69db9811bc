"""Optional lookup results.

A partial function may legitimately map an input to ``None``, so "no entry"
cannot be modelled as a bare ``None`` return. Lookups return ``Some(value)``
for a covered input and ``None`` for an uncovered one.
"""

from dataclasses import dataclass
from typing import TypeVar, Generic

T = TypeVar("T")

@dataclass(frozen=True)
class Some(Generic[T]):
    value: T

type Option[T] = Some[T] | None


def get_or_else(found: Option[T], default: T) -> T:
    return default if found is None else found.value
