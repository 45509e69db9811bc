"""Text and JSON reports for property check results."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

import jinja2

from .search import CheckResult

TEMPLATE_DIR = Path(__file__).parent / "templates"

_env = jinja2.Environment(
    loader=jinja2.FileSystemLoader(TEMPLATE_DIR),
    keep_trailing_newline=True,
    trim_blocks=True,
    lstrip_blocks=True,
)


def format_report(
    results: Sequence[CheckResult], *, seed: int | None = None, summary: bool = True
) -> str:
    """Human-readable report for terminal output."""
    return _env.get_template("report.txt.j2").render(
        results=results,
        failed=sum(1 for r in results if not r.passed),
        seed=seed,
        summary=summary,
    )


def report_json(results: Sequence[CheckResult]) -> list[dict[str, Any]]:
    """Machine-readable report for pipeline integration."""
    return [
        {
            "name": r.name,
            "passed": r.passed,
            "tests_run": r.tests_run,
            "seed": r.seed,
            "counterexample": list(r.counterexample) if r.counterexample else None,
            "shrunk": list(r.shrunk) if r.shrunk else None,
            "shrink_steps": r.shrink_steps,
            "error": r.error,
        }
        for r in results
    ]
