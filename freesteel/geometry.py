"""Basic geometric primitives: intervals, 2D and 3D points and small helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

MPI = 3.14159265358979
M2PI = 2 * MPI


@dataclass
class Interval:
    """A closed range of real numbers, ``lo`` to ``hi``."""

    lo: float
    hi: float

    @staticmethod
    def unit() -> "Interval":
        """The interval from 0 to 1."""
        return Interval(0.0, 1.0)

    @staticmethod
    def combined(*args: float) -> "Interval":
        """The smallest interval holding two or three values."""
        if len(args) not in (2, 3):
            raise TypeError("combined() takes two or three values")
        a, b = args[0], args[1]
        res = Interval(a, b) if a < b else Interval(b, a)
        if len(args) == 3:
            res.absorb(args[2])
        return res

    def absorb(self, value: Union[float, "Interval"], first: bool | None = None) -> bool:
        """Grow to take in a value or interval.

        With ``first`` true the interval is reset to the value. Without a
        ``first`` flag at all, only one end is ever moved per call.
        Returns False so callers can reset a "first" variable with it.
        """
        if isinstance(value, Interval):
            vlo, vhi = value.lo, value.hi
        else:
            vlo = vhi = value
        if first is None:
            if vlo < self.lo:
                self.lo = vlo
            elif vhi > self.hi:
                self.hi = vhi
            return False
        if first or vlo < self.lo:
            self.lo = vlo
        if first or vhi > self.hi:
            self.hi = vhi
        return False

    def inflate(self, x: float) -> "Interval":
        return Interval(self.lo - x, self.hi + x)

    def intersect(self, other: "Interval") -> bool:
        """Shrink to the overlap with ``other``; True if it is not empty."""
        if other.lo > self.lo:
            self.lo = other.lo
        if other.hi < self.hi:
            self.hi = other.hi
        return self.lo <= self.hi

    def contains(self, x: Union[float, "Interval"]) -> bool:
        if isinstance(x, Interval):
            return self.lo <= x.lo and x.hi <= self.hi
        return self.lo <= x <= self.hi

    def contains_within(self, x: float, e: float) -> bool:
        return self.lo - e <= x <= self.hi + e

    def length(self) -> float:
        return self.hi - self.lo

    def along(self, lam: float) -> float:
        return self.lo * (1.0 - lam) + self.hi * lam

    def half(self) -> float:
        return (self.lo + self.hi) * 0.5

    def inv_along(self, x: float) -> float:
        return (x - self.lo) / self.length()

    def distance(self, x: float) -> float:
        if x > self.lo:
            return 0.0 if x < self.hi else x - self.hi
        return self.lo - x

    def push_into(self, x: float) -> float:
        if x < self.lo:
            return self.lo
        if x > self.hi:
            return self.hi
        return x

    def push_into_small(self, x: float) -> float:
        """Clamp a value expected to lie within tolerance of the interval."""
        return self.push_into(x)

    def __add__(self, d: float) -> "Interval":
        return Interval(self.lo + d, self.hi + d)

    def __sub__(self, d: float) -> "Interval":
        return Interval(self.lo - d, self.hi - d)

    def __mul__(self, d: float) -> "Interval":
        if d > 0:
            return Interval(self.lo * d, self.hi * d)
        return Interval(self.hi * d, self.lo * d)

    def __truediv__(self, d: float) -> "Interval":
        return self * (1 / d)


@dataclass(frozen=True)
class P2:
    """A 2D point or vector."""

    u: float
    v: float

    def __add__(self, other: "P2") -> "P2":
        return P2(self.u + other.u, self.v + other.v)

    def __sub__(self, other: "P2") -> "P2":
        return P2(self.u - other.u, self.v - other.v)

    def __mul__(self, f: float) -> "P2":
        return P2(self.u * f, self.v * f)

    def __truediv__(self, f: float) -> "P2":
        return P2(self.u / f, self.v / f)

    def lensq(self) -> float:
        return self.u * self.u + self.v * self.v

    def length(self) -> float:
        return math.sqrt(self.lensq())

    def darg(self) -> float:
        """A cheap monotone angle measure in [0, 4) going anticlockwise."""
        u, v = self.u, self.v
        if u == 0.0 and v == 0.0:
            return 0.0
        if v >= 0.0:
            if u >= 0.0:
                return v / (u + v)
            return 1.0 - u / (-u + v)
        if u < 0.0:
            return 2.0 - v / (-u - v)
        res = 3.0 + u / (u - v)
        return 0.0 if res == 4.0 else res

    def arg(self) -> float:
        res = math.atan2(self.v, self.u)
        if res < 0.0:
            res += 2 * M2PI
        return res

    @staticmethod
    def inv_darg(a: float) -> "P2":
        """A vector whose ``darg`` is ``a``."""
        if a == 4.0:
            a = 0.0
        u = (1.0 - a) if a < 2.0 else (a - 3.0)
        if a < 3.0:
            v = (2.0 - a) if a > 1.0 else a
        else:
            v = a - 4.0
        return P2(u, v)


@dataclass(frozen=True)
class P3:
    """A 3D point or vector."""

    x: float
    y: float
    z: float

    def __add__(self, other: "P3") -> "P3":
        return P3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "P3") -> "P3":
        return P3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> "P3":
        return P3(-self.x, -self.y, -self.z)

    def __mul__(self, f: float) -> "P3":
        return P3(self.x * f, self.y * f, self.z * f)

    def __truediv__(self, f: float) -> "P3":
        return P3(self.x / f, self.y / f, self.z / f)

    def lensq(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def length(self) -> float:
        return math.sqrt(self.lensq())

    @staticmethod
    def cross(a: "P3", b: "P3") -> "P3":
        return P3(
            a.y * b.z - a.z * b.y,
            -(a.x * b.z - a.z * b.x),
            a.x * b.y - a.y * b.x,
        )


def cperp(a: P2) -> P2:
    """Clockwise perpendicular."""
    return P2(a.v, -a.u)


def aperp(a: P2) -> P2:
    """Anticlockwise perpendicular."""
    return P2(-a.v, a.u)


def convert_gz(a: P2, z: float) -> P3:
    return P3(a.u, a.v, z)


def convert_cz(a: P3, z: float) -> P3:
    return P3(a.x, a.y, z)


def convert_lz(a: P3) -> P2:
    return P2(a.x, a.y)


def square(a: float) -> float:
    return a * a


def half(a, b):
    """Midpoint of two numbers or two points."""
    return (a + b) / 2


def along(lam: float, a, b):
    """Linear interpolation between numbers or points."""
    return a * (1.0 - lam) + b * lam


def dot(a, b) -> float:
    if isinstance(a, P3):
        return a.x * b.x + a.y * b.y + a.z * b.z
    return a.u * b.u + a.v * b.v


def dot_lz(a: P2, b: P3) -> float:
    return a.u * b.x + a.v * b.y


def inv_along(x, a, b) -> float:
    """The fraction of the way from ``a`` to ``b`` that ``x`` lies."""
    if isinstance(x, P2):
        return (x - a).length() / (b - a).length()
    return (x - a) / (b - a)


def pos_sqrt(a: float) -> float:
    return math.sqrt(a) if a > 0.0 else 0.0


def box_distance(p: P2, urg: Interval, vrg: Interval) -> float:
    """Distance from a point to the rectangle ``urg`` by ``vrg``."""
    return P2(urg.distance(p.u), vrg.distance(p.v)).length()


def equal3(a1, a2, a3) -> bool:
    return a1 == a2 and a1 == a3


def equal_or(a, b1, b2) -> bool:
    return a == b1 or a == b2