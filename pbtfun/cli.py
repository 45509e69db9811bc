import argparse
import json
import logging
import random
import sys
from collections.abc import Sequence

from pbtfun.config import Settings
from pbtfun.demo import SAMPLE_PROPERTIES, find_property
from pbtfun.report import format_report, report_json
from pbtfun.result import Err, Ok
from pbtfun.search import CheckResult, Property, check


def handle_list() -> int:
    for prop in SAMPLE_PROPERTIES:
        print(prop.name)
    return 0


def handle_demo(
    names: Sequence[str],
    *,
    seed: int | None,
    tests: int | None,
    max_shrinks: int | None,
    as_json: bool,
) -> int:
    """Run the selected sample properties and print their counterexamples."""
    match Settings.from_env():
        case Ok(settings):
            pass
        case Err(e):
            print(f"Error reading settings: {e}", file=sys.stderr)
            return 1

    settings = settings.override(seed=seed, test_count=tests, max_shrinks=max_shrinks)
    if settings.seed is None:
        settings = settings.override(seed=random.randrange(2**32))

    selected: list[Property] = []
    for name in names:
        prop = find_property(name)
        if prop is None:
            print(f"Unknown property: {name!r}", file=sys.stderr)
            print("Run 'pbtfun list' to see the available properties.", file=sys.stderr)
            return 1
        selected.append(prop)
    if not selected:
        selected = list(SAMPLE_PROPERTIES)

    results: list[CheckResult] = [check(prop, settings) for prop in selected]

    if as_json:
        print(json.dumps(report_json(results), indent=2))
    else:
        print(format_report(results, seed=settings.seed), end="")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="pbtfun",
        description="Shrink and print generated functions in property-based tests.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        default=False,
        help="Log every shrink step.",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Command: list
    subparsers.add_parser("list", help="List the sample properties.")

    # Command: demo
    demo_parser = subparsers.add_parser(
        "demo",
        help="Run sample properties and print their minimal counterexamples.",
    )
    demo_parser.add_argument(
        "names",
        nargs="*",
        metavar="NAME",
        help="Properties to run (default: all). See 'pbtfun list'.",
    )
    demo_parser.add_argument(
        "--seed",
        type=int,
        help="Random seed (default: PBTFUN_SEED, or a fresh seed).",
    )
    demo_parser.add_argument(
        "--tests",
        type=int,
        help="Generated cases per property (default: PBTFUN_TEST_COUNT or 100).",
    )
    demo_parser.add_argument(
        "--max-shrinks",
        type=int,
        help="Cap on accepted shrink steps (default: PBTFUN_MAX_SHRINKS or 1000).",
    )
    demo_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Print results as JSON.",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    match args.command:
        case "list":
            return handle_list()
        case "demo":
            return handle_demo(
                args.names,
                seed=args.seed,
                tests=args.tests,
                max_shrinks=args.max_shrinks,
                as_json=args.json,
            )
        case None:
            parser.print_help()
            return 1
        case _:
            print(f"Unknown command: {args.command}", file=sys.stderr)
            parser.print_help()
            return 1


if __name__ == "__main__":
    sys.exit(main())
