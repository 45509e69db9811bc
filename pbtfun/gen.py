"""Random generation of arguments and functions.

A generator is any callable taking a ``random.Random`` and returning a value.
Generators are plain functions so they compose with ``lambda`` as easily as
with the combinators below.

``functions`` produces ``Total`` wrappers whose outputs are derived from a
hash of the input, so a generated function is deterministic: the same input
always yields the same output.
"""

from __future__ import annotations

import hashlib
import random
from collections.abc import Callable, Sequence
from typing import Any

from .argument import Argument
from .fun import Total
from .show import show

type Gen[T] = Callable[[random.Random], T]


def constant(value: Any) -> Gen[Any]:
    return lambda rng: value


def booleans() -> Gen[bool]:
    return lambda rng: rng.random() < 0.5


def integers(low: int = -100, high: int = 100) -> Gen[int]:
    return lambda rng: rng.randint(low, high)


def one_of(*values: Any) -> Gen[Any]:
    choices = tuple(values)
    return lambda rng: rng.choice(choices)


def lists(element: Gen[Any], max_size: int = 5) -> Gen[list[Any]]:
    def gen(rng: random.Random) -> list[Any]:
        return [element(rng) for _ in range(rng.randint(0, max_size))]

    return gen


def strings(alphabet: str = "abc", max_size: int = 5) -> Gen[str]:
    def gen(rng: random.Random) -> str:
        return "".join(rng.choice(alphabet) for _ in range(rng.randint(0, max_size)))

    return gen


def optionals(inner: Gen[Any]) -> Gen[Any]:
    return lambda rng: None if rng.random() < 0.25 else inner(rng)


def tuples(*gens: Gen[Any]) -> Gen[tuple[Any, ...]]:
    return lambda rng: tuple(g(rng) for g in gens)


def functions(argument: Argument, output: Gen[Any]) -> Gen[Total]:
    """Arbitrary total functions over the domain described by ``argument``."""

    def gen(rng: random.Random) -> Total:
        seed = rng.getrandbits(64)
        default = output(rng)

        def raw(a: Any) -> Any:
            return output(random.Random(_perturb(seed, a)))

        return Total(default, raw, argument)

    return gen


def _perturb(seed: int, a: Any) -> int:
    digest = hashlib.sha256(f"{seed}:{show(a)}".encode()).digest()
    return int.from_bytes(digest[:8], "big")


def sample(gen: Gen[Any], count: int = 10, seed: int | None = None) -> Sequence[Any]:
    rng = random.Random(seed)
    return [gen(rng) for _ in range(count)]
