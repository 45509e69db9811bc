"""Rendering domain and range values for counterexample reports.

The format is meant for people reading test output, and mirrors the
notation used for function tables: ``true``/``false`` for booleans,
``[a, b]`` for lists and ``"text"`` for strings.
"""

from __future__ import annotations

import dataclasses
import json
from enum import Enum
from typing import Any

from .either import Left, Right


def show(value: Any) -> str:
    match value:
        case bool():
            return "true" if value else "false"
        case str():
            return json.dumps(value, ensure_ascii=False)
        case None:
            return "None"
        case list():
            return "[" + ", ".join(show(v) for v in value) + "]"
        case tuple():
            return "(" + ", ".join(show(v) for v in value) + ")"
        case Left(inner):
            return f"Left({show(inner)})"
        case Right(inner):
            return f"Right({show(inner)})"
        case Enum():
            return value.name
        case _ if _has_generated_repr(value):
            fields = ", ".join(
                f"{f.name}={show(getattr(value, f.name))}"
                for f in dataclasses.fields(value)
            )
            return f"{type(value).__name__}({fields})"
        case _:
            return repr(value)


def _has_generated_repr(value: Any) -> bool:
    """True for dataclass instances that rely on the dataclass-generated repr.

    Dataclasses that opt out (``repr=False``) render with their own repr.
    """
    if isinstance(value, type) or not dataclasses.is_dataclass(value):
        return False
    return bool(type(value).__dataclass_params__.repr)  # type: ignore[attr-defined]
