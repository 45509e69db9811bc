"""Result type for configuration and loading steps that can fail."""

from dataclasses import dataclass
from typing import TypeVar, Generic

T = TypeVar("T")
E = TypeVar("E", bound=Exception)

@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

@dataclass(frozen=True)
class Err(Generic[E]):
    error: E

    @property
    def message(self) -> str:
        return str(self.error)

type Result[T, E] = Ok[T] | Err[E]
