import pytest

from freesteel.fibre import Fibre
from freesteel.geometry import P2, Interval
from freesteel.weave import Weave, WeaveIter, find_inwards

LO, HI = 3.0, 7.0


def square_weave():
    wve = Weave(Interval(0.0, 10.0), Interval(0.0, 10.0), 1.0)
    for fib in (*wve.ufibs, *wve.vfibs):
        if LO <= fib.wp <= HI:
            fib.merge(LO, HI)
    return wve


def start_iter(wve):
    i0 = next(i for i, f in enumerate(wve.ufibs) if len(f))
    return i0, WeaveIter(ftype=1, lower=True, w=LO, wp=wve.ufibs[i0].wp, ixwp=i0)


def test_shape_covers_ranges():
    wve = Weave(Interval(0.0, 10.0), Interval(-1.0, 4.0), 1.0)
    assert wve.ufibs[0].wp == 0.0
    assert wve.ufibs[-1].wp == pytest.approx(10.0)
    assert wve.vfibs[0].wp == -1.0
    assert wve.vfibs[-1].wp == pytest.approx(4.0)
    for fibs in (wve.ufibs, wve.vfibs):
        gaps = [b.wp - a.wp for a, b in zip(fibs, fibs[1:])]
        assert all(0 < g <= 1.0 for g in gaps)
    assert all(f.ftype == 1 and f.wrg == Interval(-1.0, 4.0) for f in wve.ufibs)
    assert all(f.ftype == 2 and f.wrg == Interval(0.0, 10.0) for f in wve.vfibs)
    assert wve.last_contour_number == wve.first_contour_number - 1


def test_iter_point():
    assert WeaveIter(1, True, 2.0, 5.0, 0).point() == P2(5.0, 2.0)
    assert WeaveIter(2, True, 2.0, 5.0, 0).point() == P2(2.0, 5.0)


def test_find_inwards_both_directions():
    fibs = []
    for wp in (0.0, 1.0, 2.0, 3.0):
        f = Fibre(wp, Interval(0.0, 10.0), 2)
        f.merge(4.0, 6.0)
        fibs.append(f)
    assert find_inwards(fibs, 5.0, True, 1.0, 3.0, True) == 1
    assert find_inwards(fibs, 5.0, True, 1.0, 3.0, False) == 2
    assert find_inwards(fibs, 5.0, False, 2.0, 0.0, False) == 1
    assert find_inwards(fibs, 8.0, True, 0.0, 3.0, True) is None
    assert find_inwards(fibs, 5.0, True, 1.5, 1.8, False) is None


def test_advance_moves_along_bottom_edge():
    wve = square_weave()
    i0, it = start_iter(wve)
    wve.advance(it)
    assert it.ftype == 1
    assert it.ixwp == i0 + 1
    assert it.w == LO
    assert it.lower is True


def test_track_contour_closes_on_boundary():
    wve = square_weave()
    _, it = start_iter(wve)
    start = it.point()
    path = wve.track_contour(it)
    assert path[0] == start
    assert path[-1] == start
    assert it.point() == start
    for p in path:
        on_u = p.u in (LO, HI)
        on_v = p.v in (LO, HI)
        assert on_u or on_v
        assert LO <= p.u <= HI and LO <= p.v <= HI
    assert wve.last_contour_number == 0
    for fib in (*wve.ufibs, *wve.vfibs):
        assert all(b.contour_number == 0 for b in fib)


def test_track_contour_again_is_single_point():
    wve = square_weave()
    _, it = start_iter(wve)
    wve.track_contour(it)
    again = wve.track_contour(it)
    assert again == [it.point()]
    assert wve.last_contour_number == 1


def test_contour_number_set_and_get():
    wve = square_weave()
    _, it = start_iter(wve)
    assert wve.contour_number(it) == -1
    wve.set_contour_number(it, 5)
    assert wve.contour_number(it) == 5


def test_contour_number_missing_bound_raises():
    wve = square_weave()
    i0, _ = start_iter(wve)
    bad = WeaveIter(ftype=1, lower=True, w=5.0, wp=wve.ufibs[i0].wp, ixwp=i0)
    with pytest.raises(LookupError):
        wve.contour_number(bad)


def test_invert_complements_every_fibre():
    wve = square_weave()
    wve.invert()
    for fib in wve.ufibs:
        if LO <= fib.wp <= HI:
            assert fib.intervals() == [Interval(0.0, LO), Interval(HI, 10.0)]
        else:
            assert fib.intervals() == [Interval(0.0, 10.0)]
        assert fib.check()


def test_set_all_cut_codes():
    wve = square_weave()
    wve.set_all_cut_codes(3)
    codes = {b.cut_code for fib in (*wve.ufibs, *wve.vfibs) for b in fib}
    assert codes == {3}