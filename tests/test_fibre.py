import pytest

from freesteel.fibre import Bound, Fibre
from freesteel.geometry import Interval


def make_fibre(*ranges):
    fib = Fibre(0.5, Interval(0.0, 10.0), 1)
    for lo, hi in ranges:
        fib.merge(lo, hi)
    return fib


def spans(fib):
    return [(r.lo, r.hi) for r in fib.intervals()]


def test_merge_into_empty():
    fib = make_fibre((1.0, 2.0))
    assert spans(fib) == [(1.0, 2.0)]
    assert fib[0].lower and not fib[1].lower
    assert fib.check()


def test_merge_disjoint_keeps_order():
    fib = make_fibre((5.0, 6.0), (1.0, 2.0))
    assert spans(fib) == [(1.0, 2.0), (5.0, 6.0)]


def test_merge_into_gap():
    fib = make_fibre((1.0, 2.0), (5.0, 6.0), (3.0, 4.0))
    assert spans(fib) == [(1.0, 2.0), (3.0, 4.0), (5.0, 6.0)]
    assert fib.check()


def test_merge_overlapping_unions():
    fib = make_fibre((1.0, 3.0), (2.0, 5.0))
    assert spans(fib) == [(1.0, 5.0)]


def test_merge_covering_swallows_ranges():
    fib = make_fibre((1.0, 2.0), (4.0, 5.0), (0.0, 10.0))
    assert spans(fib) == [(0.0, 10.0)]


def test_merge_inside_leaves_unchanged():
    fib = make_fibre((1.0, 5.0), (2.0, 3.0))
    assert spans(fib) == [(1.0, 5.0)]


def test_merge_records_intern_flags():
    fib = Fibre(0.0, Interval(0.0, 10.0), 2)
    fib.merge(1.0, 2.0, True, False)
    assert fib[0].intern is True
    assert fib[1].intern is False


def test_minus_middle_splits():
    fib = make_fibre((1.0, 5.0))
    fib.minus(2.0, 3.0)
    assert spans(fib) == [(1.0, 2.0), (3.0, 5.0)]
    assert fib.check()


def test_minus_everything_empties():
    fib = make_fibre((1.0, 5.0))
    fib.minus(0.0, 10.0)
    assert len(fib) == 0


def test_minus_trims_ends():
    fib = make_fibre((1.0, 5.0))
    fib.minus(3.0, 10.0)
    assert spans(fib) == [(1.0, 3.0)]
    fib.minus(0.0, 2.0)
    assert spans(fib) == [(2.0, 3.0)]


def test_minus_outside_does_nothing():
    fib = make_fibre((1.0, 2.0))
    fib.minus(5.0, 6.0)
    assert spans(fib) == [(1.0, 2.0)]


def test_invert_empty_gives_whole_range():
    fib = Fibre(1.0, Interval(-2.0, 3.0), 2)
    fib.invert()
    assert spans(fib) == [(-2.0, 3.0)]


def test_invert_round_trip():
    fib = make_fibre((2.0, 5.0), (6.0, 7.0))
    fib.invert()
    assert spans(fib) == [(0.0, 2.0), (5.0, 6.0), (7.0, 10.0)]
    fib.invert()
    assert spans(fib) == [(2.0, 5.0), (6.0, 7.0)]


def test_invert_full_range_is_empty():
    fib = make_fibre((0.0, 10.0))
    fib.invert()
    assert len(fib) == 0


def test_contains_and_containing_range():
    fib = make_fibre((1.0, 2.0), (4.0, 5.0))
    assert fib.contains(4.0)
    assert fib.contains(2.0)
    assert not fib.contains(3.0)
    assert fib.containing_range(4.5) == Interval(4.0, 5.0)


def test_containing_range_missing_raises():
    fib = make_fibre((1.0, 2.0))
    with pytest.raises(ValueError):
        fib.containing_range(3.0)


def test_locate():
    fib = make_fibre((1.0, 2.0), (4.0, 5.0))
    assert fib.locate(Interval(1.5, 4.5)) == (1, 2)
    assert fib.locate(Interval(6.0, 7.0)) == (4, 3)
    assert fib.locate(Interval(2.5, 3.5)) == (2, 1)


def test_check_detects_bad_bounds():
    fib = make_fibre((1.0, 2.0))
    fib.minus(1.0, 1.0)
    assert fib.check()
    odd = make_fibre((1.0, 2.0))
    odd._bounds.append(Bound(3.0, True))
    assert not odd.check()


def test_reset_clears():
    fib = make_fibre((1.0, 2.0))
    fib.reset(4.0, Interval(1.0, 2.0), 2)
    assert len(fib) == 0
    assert fib.wp == 4.0
    assert fib.ftype == 2
    assert fib.wrg == Interval(1.0, 2.0)


def test_set_all_cut_codes():
    fib = make_fibre((1.0, 2.0), (4.0, 5.0))
    fib.set_all_cut_codes(7)
    assert [b.cut_code for b in fib] == [7, 7, 7, 7]


def test_bound_ordering():
    assert sorted([Bound(3.0, True), Bound(1.0, False)])[0].w == 1.0


@pytest.mark.parametrize(
    "ranges",
    [
        [(1.0, 2.0), (1.5, 3.0), (6.0, 8.0), (2.5, 6.5)],
        [(0.0, 1.0), (9.0, 10.0), (4.0, 5.0), (3.0, 3.5)],
        [(2.0, 8.0), (3.0, 4.0), (1.0, 9.0)],
    ],
)
def test_merge_matches_union_membership(ranges):
    fib = make_fibre(*ranges)
    assert fib.check()
    for k in range(101):
        x = k / 10.0
        assert fib.contains(x) == any(lo <= x <= hi for lo, hi in ranges)