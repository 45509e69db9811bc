"""Run settings for the property runner, read from the environment.

Recognised variables (also read from a ``.env`` file):

- ``PBTFUN_SEED``: integer seed; unset means a fresh random seed per run
- ``PBTFUN_TEST_COUNT``: number of generated cases per property (default 100)
- ``PBTFUN_MAX_SHRINKS``: cap on accepted shrink steps (default 1000)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace

from dotenv import find_dotenv, load_dotenv

from .result import Err, Ok, Result

DEFAULT_TEST_COUNT = 100
DEFAULT_MAX_SHRINKS = 1000


@dataclass(frozen=True)
class Settings:
    seed: int | None = None
    test_count: int = DEFAULT_TEST_COUNT
    max_shrinks: int = DEFAULT_MAX_SHRINKS

    @classmethod
    def from_env(cls) -> Result[Settings, Exception]:
        """Settings from ``PBTFUN_*`` environment variables, after loading ``.env``."""
        load_dotenv(find_dotenv(usecwd=True))

        try:
            seed = _read_int("PBTFUN_SEED", None)
            test_count = _read_int("PBTFUN_TEST_COUNT", DEFAULT_TEST_COUNT)
            max_shrinks = _read_int("PBTFUN_MAX_SHRINKS", DEFAULT_MAX_SHRINKS)
        except ValueError as e:
            return Err(e)

        if test_count is None or test_count < 1:
            return Err(ValueError("PBTFUN_TEST_COUNT must be a positive integer."))
        if max_shrinks is None or max_shrinks < 0:
            return Err(ValueError("PBTFUN_MAX_SHRINKS must not be negative."))

        return Ok(cls(seed=seed, test_count=test_count, max_shrinks=max_shrinks))

    def override(
        self,
        *,
        seed: int | None = None,
        test_count: int | None = None,
        max_shrinks: int | None = None,
    ) -> Settings:
        """A copy with every non-None argument replacing the stored value."""
        changes = {
            name: value
            for name, value in (
                ("seed", seed),
                ("test_count", test_count),
                ("max_shrinks", max_shrinks),
            )
            if value is not None
        }
        return replace(self, **changes)


def _read_int(name: str, default: int | None) -> int | None:
    raw = os.getenv(name)
    match raw:
        case str(value) if value.strip():
            try:
                return int(value.strip())
            except ValueError:
                raise ValueError(f"{name} must be an integer, got {value!r}.") from None
        case _:
            return default
