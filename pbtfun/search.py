"""Greedy shrink search and a minimal property runner.

``minimize`` walks a shrink sequence: it takes the first candidate that still
fails, then starts again from that candidate's own shrinks, until no
candidate fails or the step budget runs out. Candidates are consumed one at
a time, so only as much of each (possibly unbounded) sequence is computed as
the search needs.

``check`` generates arguments for a ``Property``, and on the first failure
minimizes the whole argument tuple, one argument at a time.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from .config import DEFAULT_MAX_SHRINKS, Settings
from .gen import Gen
from .pfun import Shrinker
from .shrink import shrink_tuple
from .show import show

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Shrunk:
    value: Any
    steps: int


def minimize(
    value: Any,
    shrinker: Shrinker[Any],
    fails: Callable[[Any], bool],
    *,
    max_shrinks: int = DEFAULT_MAX_SHRINKS,
) -> Shrunk:
    """Smallest failing value reachable from ``value`` by greedy descent."""
    current = value
    steps = 0
    while steps < max_shrinks:
        for candidate in shrinker(current):
            if fails(candidate):
                current = candidate
                steps += 1
                logger.debug("Shrink step %d: %s", steps, show(current))
                break
        else:
            break
    return Shrunk(current, steps)


@dataclass(frozen=True)
class Property:
    """A named predicate over generated arguments.

    ``generators`` and ``shrinkers`` are positional, one per argument of
    ``predicate``.
    """

    name: str
    generators: tuple[Gen[Any], ...]
    shrinkers: tuple[Shrinker[Any], ...]
    predicate: Callable[..., bool]

    def holds(self, args: Sequence[Any]) -> bool:
        """Whether the predicate holds; an exception counts as a failure."""
        try:
            return bool(self.predicate(*args))
        except Exception as e:
            logger.debug("Property %r raised %s: %s", self.name, type(e).__name__, e)
            return False


@dataclass(frozen=True)
class CheckResult:
    name: str
    passed: bool
    tests_run: int
    seed: int
    counterexample: tuple[str, ...] | None = None
    shrunk: tuple[str, ...] | None = None
    shrink_steps: int = 0
    error: str | None = None


def check(prop: Property, settings: Settings = Settings()) -> CheckResult:
    seed = settings.seed if settings.seed is not None else random.randrange(2**32)
    rng = random.Random(seed)

    for test_number in range(1, settings.test_count + 1):
        args = tuple(g(rng) for g in prop.generators)
        if prop.holds(args):
            continue

        original = tuple(show(a) for a in args)
        logger.info("Property %r failed at test %d with %s", prop.name, test_number, original)
        shrunk = minimize(
            args,
            shrink_tuple(*prop.shrinkers),
            lambda candidate: not prop.holds(candidate),
            max_shrinks=settings.max_shrinks,
        )
        rendered = tuple(show(a) for a in shrunk.value)
        logger.info(
            "Property %r shrunk in %d steps to %s", prop.name, shrunk.steps, rendered
        )
        return CheckResult(
            name=prop.name,
            passed=False,
            tests_run=test_number,
            seed=seed,
            counterexample=original,
            shrunk=rendered,
            shrink_steps=shrunk.steps,
            error=_error_of(prop, shrunk.value),
        )

    return CheckResult(
        name=prop.name, passed=True, tests_run=settings.test_count, seed=seed
    )


def _error_of(prop: Property, args: Sequence[Any]) -> str | None:
    try:
        prop.predicate(*args)
    except Exception as e:
        return f"{type(e).__name__}: {e}"
    return None
