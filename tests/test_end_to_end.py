"""Shrinking generated functions all the way down to printable counterexamples."""

import pytest

from pbtfun import gen
from pbtfun.argument import integers, lists
from pbtfun.config import Settings
from pbtfun.demo import SAMPLE_PROPERTIES
from pbtfun.fun import Partial, Total, render, shrinker
from pbtfun.search import Property, check, minimize
from pbtfun.shrink import shrink_bool, shrink_int, shrink_list


def test_function_shrinks_to_single_entry() -> None:
    l1, l2 = [-1], []
    f = Total(False, lambda l: l == [-1], lists(integers()))
    assert f(l1) != f(l2)

    shrunk = minimize(f, shrinker(shrink_bool), lambda g: g(l1) != g(l2))

    assert isinstance(shrunk.value, Partial)
    assert render(shrunk.value) == "{[-1] => true, _ => false}"


def test_arguments_and_function_shrink_together() -> None:
    f = Total(False, lambda l: l == [-1], lists(integers()))
    prop = Property(
        name="lists",
        generators=(gen.constant([-1]), gen.constant([5, 2]), gen.constant(f)),
        shrinkers=(shrink_list(shrink_int), shrink_list(shrink_int), shrinker(shrink_bool)),
        predicate=lambda x, y, g: g(x) == g(y),
    )

    result = check(prop, Settings(seed=0, test_count=1))

    assert not result.passed
    assert result.counterexample == ("[-1]", "[5, 2]", "<function>")
    assert result.shrunk == ("[-1]", "[]", "{[-1] => true, _ => false}")


def test_table_stays_finite_on_unbounded_domain() -> None:
    f = Total(0, len, lists(integers()))
    queried = [[], [1], [1, 2], [1, 2], list(range(30))]
    for q in queried:
        f(q)
    first = next(shrinker(shrink_int)(f))
    # The first domain cut keeps one side of the outermost sum.
    assert render(first) == "{[] => 0, _ => 0}"


@pytest.mark.parametrize("prop", SAMPLE_PROPERTIES, ids=lambda p: p.name)
def test_sample_properties_are_falsified_and_printed(prop) -> None:
    result = check(prop, Settings(seed=42))
    assert not result.passed
    assert result.shrunk is not None
    rendered_fun = result.shrunk[-1]
    assert rendered_fun.startswith("{")
    assert rendered_fun.endswith("}")
    assert ", _ => " in rendered_fun
