"""Tests for the partial-function encoding primitives."""

import itertools

import pytest

from pbtfun import Left, Right, Some
from pbtfun.pfun import (
    IMap,
    Product,
    Unit,
    Void,
    imap,
    left,
    lookup,
    product,
    right,
    shrink,
    size,
    table,
    union,
    unit,
    void,
)
from pbtfun.shrink import shrink_bool, shrink_int


def _bool_to(b: bool):
    return Left(()) if b else Right(())


def _bool_from(e) -> bool:
    return isinstance(e, Left)


def bool_fun(on_true, on_false):
    return imap(_bool_to, _bool_from, union(left(unit(on_true)), right(unit(on_false))))


# ---------------------------------------------------------------------------
# unit / void
# ---------------------------------------------------------------------------


def test_unit_table_and_lookup() -> None:
    p = unit(42)
    assert table(p) == (((), 42),)
    assert lookup(p, ()) == Some(42)


def test_unit_covers_none_as_an_output() -> None:
    assert lookup(unit(None), ()) == Some(None)


def test_unit_shrinks_to_void_then_smaller_values() -> None:
    assert list(shrink(unit(True), shrink_bool)) == [Void(), Unit(False)]


def test_void_is_empty() -> None:
    p = void()
    assert table(p) == ()
    assert lookup(p, ()) is None
    assert list(shrink(p, shrink_int)) == []


# ---------------------------------------------------------------------------
# left / right / union
# ---------------------------------------------------------------------------


def test_left_and_right_only_match_their_tag() -> None:
    lf = left(unit("l"))
    rf = right(unit("r"))
    assert lookup(lf, Left(())) == Some("l")
    assert lookup(lf, Right(())) is None
    assert lookup(rf, Right(())) == Some("r")
    assert lookup(rf, Left(())) is None
    assert table(lf) == ((Left(()), "l"),)
    assert table(rf) == ((Right(()), "r"),)


def test_union_table_is_concatenation() -> None:
    p = union(left(unit(1)), right(unit(2)))
    assert table(p) == ((Left(()), 1), (Right(()), 2))


@pytest.mark.parametrize("a", [Left(()), Right(()), ()])
def test_union_lookup_prefers_first(a) -> None:
    f1 = union(left(unit("first")), void())
    f2 = union(unit("second"), right(unit("third")))
    combined = union(f1, f2)
    expected = lookup(f1, a) if lookup(f1, a) is not None else lookup(f2, a)
    assert lookup(combined, a) == expected


def test_union_of_overlapping_domains_uses_first() -> None:
    assert lookup(union(unit(1), unit(2)), ()) == Some(1)


def test_union_shrinks_to_each_side_first() -> None:
    f1 = left(unit(True))
    f2 = right(unit(True))
    candidates = list(shrink(union(f1, f2), shrink_bool))
    assert candidates[:2] == [f1, f2]
    assert candidates[2:] == [
        left(void()),
        left(unit(False)),
        right(void()),
        right(unit(False)),
    ]


# ---------------------------------------------------------------------------
# product
# ---------------------------------------------------------------------------


def test_product_table_flattens_outer_then_inner() -> None:
    p = product(
        union(
            left(unit(left(unit("LL")))),
            right(unit(union(left(unit("RL")), right(unit("RR"))))),
        )
    )
    assert table(p) == (
        ((Left(()), Left(())), "LL"),
        ((Right(()), Left(())), "RL"),
        ((Right(()), Right(())), "RR"),
    )
    assert lookup(p, (Right(()), Right(()))) == Some("RR")
    assert lookup(p, (Left(()), Right(()))) is None


def test_product_shrinks_through_inner_functions() -> None:
    p = product(unit(unit(True)))
    assert list(shrink(p, shrink_bool)) == [
        Product(Void()),
        Product(Unit(Void())),
        Product(Unit(Unit(False))),
    ]


# ---------------------------------------------------------------------------
# imap
# ---------------------------------------------------------------------------


def test_imap_translates_inputs() -> None:
    p = bool_fun("yes", "no")
    assert table(p) == ((True, "yes"), (False, "no"))
    assert lookup(p, True) == Some("yes")
    assert lookup(p, False) == Some("no")


@pytest.mark.parametrize("a", [True, False])
def test_imap_lookup_goes_through_to(a: bool) -> None:
    inner = union(left(unit("yes")), right(unit("no")))
    assert lookup(imap(_bool_to, _bool_from, inner), a) == lookup(inner, _bool_to(a))


def test_imap_shrinks_keep_the_mapping() -> None:
    candidates = list(shrink(bool_fun(1, 2), shrink_int))
    assert all(isinstance(c, IMap) for c in candidates)
    assert table(candidates[0]) == ((True, 1),)
    assert table(candidates[1]) == ((False, 2),)


# ---------------------------------------------------------------------------
# Laziness and helpers
# ---------------------------------------------------------------------------


def test_shrink_is_lazy_over_unbounded_outputs() -> None:
    def endless(value: int):
        return itertools.count(value + 1)

    candidates = shrink(union(unit(0), unit(0)), endless)
    first = list(itertools.islice(candidates, 5))
    assert first == [Unit(0), Unit(0), Void(), Unit(1), Unit(2)]


def test_size_counts_table_entries() -> None:
    assert size(void()) == 0
    assert size(bool_fun(1, 2)) == 2


def test_method_forms_match_functions() -> None:
    p = bool_fun(1, 2)
    assert p.table() == table(p)
    assert p.lookup(True) == lookup(p, True)
    assert list(p.shrink(shrink_int)) == list(shrink(p, shrink_int))


def _deep_counter(depth: int):
    # Domain {depth}: each layer maps n to n - 1, down to the unit at 0.
    p = imap(lambda n: (), lambda u: 0, unit(0))
    for _ in range(depth):
        p = imap(lambda n: n - 1, lambda n: n + 1, p)
    return p


def test_deep_encodings_do_not_recurse() -> None:
    p = _deep_counter(20_000)
    assert table(p) == ((20_000, 0),)
    assert lookup(p, 20_000) == Some(0)
    candidates = list(shrink(p, shrink_int))
    assert len(candidates) == 1
    assert table(candidates[0]) == ()


def test_lookup_does_not_retry_unions_inside_a_resolved_product() -> None:
    # The outer function maps Left(()) twice; only the first match counts.
    p = product(union(left(unit(left(unit("a")))), left(unit(right(unit("b"))))))
    assert lookup(p, (Left(()), Left(()))) == Some("a")
    assert lookup(p, (Left(()), Right(()))) is None
