import math

import pytest

from freesteel.geometry import (
    P2,
    P3,
    Interval,
    along,
    aperp,
    box_distance,
    convert_cz,
    convert_gz,
    convert_lz,
    cperp,
    dot,
    dot_lz,
    equal3,
    equal_or,
    half,
    inv_along,
    pos_sqrt,
    square,
)


def test_unit_interval():
    u = Interval.unit()
    assert u == Interval(0.0, 1.0)
    assert u.contains(0.5)
    assert not u.contains(1.5)


def test_combined_orders_values():
    assert Interval.combined(3.0, 1.0) == Interval(1.0, 3.0)
    assert Interval.combined(1.0, 3.0) == Interval(1.0, 3.0)
    assert Interval.combined(1.0, 3.0, 5.0) == Interval(1.0, 5.0)
    assert Interval.combined(2.0, 3.0, -1.0) == Interval(-1.0, 3.0)


def test_combined_wrong_arity():
    with pytest.raises(TypeError):
        Interval.combined(1.0)


def test_absorb_first_resets():
    i = Interval(-5.0, 5.0)
    assert i.absorb(2.0, True) is False
    assert i == Interval(2.0, 2.0)
    i.absorb(7.0, False)
    i.absorb(-1.0, False)
    assert i == Interval(-1.0, 7.0)


def test_absorb_interval_without_flag_moves_one_end():
    i = Interval(0.0, 1.0)
    i.absorb(Interval(-1.0, 2.0))
    assert i.lo == -1.0
    assert i.hi == 1.0


def test_absorb_interval_with_flag_moves_both_ends():
    i = Interval(0.0, 1.0)
    i.absorb(Interval(-1.0, 2.0), False)
    assert i == Interval(-1.0, 2.0)


def test_intersect():
    i = Interval(0.0, 4.0)
    assert i.intersect(Interval(2.0, 6.0))
    assert i == Interval(2.0, 4.0)
    j = Interval(0.0, 1.0)
    assert not j.intersect(Interval(2.0, 3.0))


def test_inflate_and_contains():
    i = Interval(1.0, 2.0)
    big = i.inflate(0.5)
    assert big.contains(i)
    assert not i.contains(big)
    assert i.contains_within(2.4, 0.5)
    assert not i.contains_within(2.6, 0.5)


def test_along_and_inv_along_round_trip():
    i = Interval(-3.0, 7.0)
    for lam in (0.0, 0.25, 0.5, 0.9, 1.0):
        assert i.inv_along(i.along(lam)) == pytest.approx(lam)
    assert i.half() == pytest.approx(i.along(0.5))
    assert i.length() == i.hi - i.lo


@pytest.mark.parametrize("x", [-4.0, -1.0, 0.0, 0.5, 1.0, 2.5, 10.0])
def test_distance_matches_push_into(x):
    i = Interval(0.0, 1.0)
    pushed = i.push_into(x)
    assert i.contains(pushed)
    assert i.distance(pushed) == 0.0
    assert i.distance(x) == pytest.approx(abs(x - pushed))
    assert i.push_into_small(x) == pushed


def test_arithmetic():
    i = Interval(1.0, 2.0)
    assert (i + 3.0) - 3.0 == i
    neg = i * -1.0
    assert neg.lo <= neg.hi
    assert neg * -1.0 == i
    assert (i / 2.0) * 2.0 == i


def test_p2_operations():
    a = P2(1.0, 2.0)
    b = P2(3.0, -1.0)
    assert (a + b) - b == a
    assert (a * 2.0) / 2.0 == a
    assert a.lensq() == pytest.approx(a.length() ** 2)


def test_darg_quadrant_axes():
    assert P2(1.0, 0.0).darg() == 0.0
    assert P2(0.0, 1.0).darg() == 1.0
    assert P2(-1.0, 0.0).darg() == 2.0


@pytest.mark.parametrize("a", [0.0, 0.3, 1.0, 1.7, 2.0, 2.5, 3.0, 3.9])
def test_inv_darg_round_trip(a):
    assert P2.inv_darg(a).darg() == pytest.approx(a)


def test_inv_darg_wraps_four():
    assert P2.inv_darg(4.0) == P2.inv_darg(0.0)


def test_darg_is_monotone_in_angle():
    values = [P2(math.cos(t), math.sin(t)).darg() for t in [k * 0.3 for k in range(21)]]
    assert values == sorted(values)
    assert all(0.0 <= d < 4.0 for d in values)


def test_darg_scale_invariant():
    p = P2(-2.0, 3.0)
    assert (p * 5.0).darg() == pytest.approx(p.darg())


def test_arg():
    p = P2(1.0, 1.0)
    assert p.arg() == pytest.approx(math.atan2(1.0, 1.0))
    assert P2(1.0, -1.0).arg() >= 0.0


def test_p3_operations():
    a = P3(1.0, 2.0, 3.0)
    b = P3(-2.0, 0.5, 4.0)
    assert (a + b) - b == a
    assert -(-a) == a
    assert (a * 3.0) / 3.0 == a
    assert a.lensq() == pytest.approx(a.length() ** 2)


def test_cross_product_is_perpendicular():
    a = P3(1.0, 2.0, 3.0)
    b = P3(-2.0, 0.5, 4.0)
    c = P3.cross(a, b)
    assert dot(c, a) == pytest.approx(0.0)
    assert dot(c, b) == pytest.approx(0.0)
    assert P3.cross(b, a) == -c


def test_perpendiculars():
    a = P2(2.0, 5.0)
    assert dot(cperp(a), a) == 0.0
    assert dot(aperp(a), a) == 0.0
    assert cperp(a) == aperp(a) * -1.0
    assert aperp(cperp(a)) == a


def test_conversions():
    p = P2(1.5, -2.5)
    q = convert_gz(p, 7.0)
    assert q.z == 7.0
    assert convert_lz(q) == p
    assert convert_cz(q, 1.0) == P3(1.5, -2.5, 1.0)
    assert dot_lz(p, q) == dot(p, p)


def test_along_and_half():
    a = P2(0.0, 0.0)
    b = P2(4.0, 2.0)
    assert along(0.0, a, b) == a
    assert along(1.0, a, b) == b
    assert half(a, b) == along(0.5, a, b)
    assert along(0.5, 2.0, 6.0) == half(2.0, 6.0)
    c = P3(1.0, 1.0, 1.0)
    d = P3(3.0, 5.0, 7.0)
    assert half(c, d) == along(0.5, c, d)


def test_inv_along_scalar_and_point():
    assert inv_along(along(0.3, 2.0, 8.0), 2.0, 8.0) == pytest.approx(0.3)
    a = P2(1.0, 1.0)
    b = P2(5.0, 4.0)
    assert inv_along(along(0.6, a, b), a, b) == pytest.approx(0.6)


def test_square_and_pos_sqrt():
    assert pos_sqrt(square(3.0)) == pytest.approx(3.0)
    assert pos_sqrt(-1.0) == 0.0
    assert pos_sqrt(0.0) == 0.0


def test_box_distance():
    urg = Interval(0.0, 2.0)
    vrg = Interval(0.0, 2.0)
    assert box_distance(P2(1.0, 1.0), urg, vrg) == 0.0
    assert box_distance(P2(2.0 + 3.0, 2.0 + 4.0), urg, vrg) == pytest.approx(
        P2(3.0, 4.0).length()
    )


def test_equal_helpers():
    assert equal3(1, 1, 1)
    assert not equal3(1, 1, 2)
    assert equal_or(2, 1, 2)
    assert not equal_or(3, 1, 2)