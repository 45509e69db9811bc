"""Tests for text and JSON reports."""

from pbtfun.report import format_report, report_json
from pbtfun.search import CheckResult

PASSED = CheckResult(name="reverse twice", passed=True, tests_run=100, seed=4)
FAILED = CheckResult(
    name="lists",
    passed=False,
    tests_run=3,
    seed=4,
    counterexample=("[-1]", "[5, 2]", "<function>"),
    shrunk=("[-1]", "[]", "{[-1] => true, _ => false}"),
    shrink_steps=5,
)
RAISED = CheckResult(
    name="div",
    passed=False,
    tests_run=1,
    seed=4,
    counterexample=("-4",),
    shrunk=("-1",),
    shrink_steps=2,
    error="ZeroDivisionError: integer division or modulo by zero",
)


def test_passed_property_line() -> None:
    assert format_report([PASSED], summary=False) == "+ reverse twice: OK, passed 100 tests.\n"


def test_falsified_property_lists_arguments() -> None:
    assert format_report([FAILED], summary=False).splitlines() == [
        "! lists: Falsified after 2 passed tests.",
        "> ARG_0: [-1]",
        "> ARG_1: []",
        "> ARG_2: {[-1] => true, _ => false}",
        "> ARG_0_ORIGINAL: [-1]",
        "> ARG_1_ORIGINAL: [5, 2]",
        "> ARG_2_ORIGINAL: <function>",
        "> Shrink steps: 5",
    ]


def test_exception_is_reported() -> None:
    text = format_report([RAISED], summary=False)
    assert "> Exception: ZeroDivisionError" in text


def test_summary_line() -> None:
    text = format_report([PASSED, FAILED, RAISED], seed=4)
    assert text.endswith("\n2 of 3 properties falsified (seed 4).\n")


def test_json_report() -> None:
    data = report_json([PASSED, FAILED])
    assert data[0] == {
        "name": "reverse twice",
        "passed": True,
        "tests_run": 100,
        "seed": 4,
        "counterexample": None,
        "shrunk": None,
        "shrink_steps": 0,
        "error": None,
    }
    assert data[1]["shrunk"] == ["[-1]", "[]", "{[-1] => true, _ => false}"]
    assert data[1]["counterexample"][1] == "[5, 2]"
