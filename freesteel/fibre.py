"""Fibres: sorted sets of disjoint closed ranges along one grid line."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from .geometry import Interval


@dataclass
class Bound:
    """One end of a range on a fibre."""

    w: float
    lower: bool
    intern: bool = False
    contour_number: int = -1
    cut_code: int = 0

    def __lt__(self, other: "Bound") -> bool:
        return self.w < other.w


class Fibre:
    """A line at perpendicular position ``wp`` holding ranges within ``wrg``.

    The bounds alternate lower, upper, lower, upper... in increasing order.
    ``ftype`` is 1 for a u-fibre and 2 for a v-fibre.
    """

    def __init__(self, wp: float, wrg: Interval, ftype: int) -> None:
        self._bounds: list[Bound] = []
        self.reset(wp, wrg, ftype)

    def reset(self, wp: float, wrg: Interval, ftype: int) -> None:
        """Move the fibre and drop all its ranges."""
        self.wp = wp
        self.wrg = Interval(wrg.lo, wrg.hi)
        self.ftype = ftype
        self._bounds.clear()

    def __len__(self) -> int:
        return len(self._bounds)

    def __iter__(self) -> Iterator[Bound]:
        return iter(self._bounds)

    def __getitem__(self, i: int) -> Bound:
        return self._bounds[i]

    def __repr__(self) -> str:
        spans = ", ".join(f"({r.lo}, {r.hi})" for r in self.intervals())
        return f"Fibre(wp={self.wp}, ftype={self.ftype}, [{spans}])"

    def locate(self, rg: Interval) -> tuple[int, int]:
        """First bound at or above ``rg.lo`` and last bound at or below ``rg.hi``."""
        bounds = self._bounds
        size = len(bounds)
        first = next((i for i, b in enumerate(bounds) if b.w >= rg.lo), size)
        if first < size:
            second = next(
                (i for i in range(size - 1, first - 1, -1) if bounds[i].w <= rg.hi),
                first - 1,
            )
        else:
            second = first - 1
        return first, second

    def merge(
        self, lo: float, hi: float, intern_lo: bool = False, intern_hi: bool = False
    ) -> None:
        """Add the range ``lo``..``hi`` to the fibre."""
        bounds = self._bounds
        il, ir = self.locate(Interval(lo, hi))

        if il == len(bounds):
            bounds.append(Bound(lo, True, intern_lo))
            bounds.append(Bound(hi, False, intern_hi))
            return

        if il > ir:
            if bounds[il].lower:
                bounds[il:il] = [Bound(lo, True, intern_lo), Bound(hi, False, intern_hi)]
            return

        if not bounds[ir].lower:
            bounds[ir] = Bound(hi, False, intern_hi)
            ir -= 1
        if bounds[il].lower:
            bounds[il] = Bound(lo, True, intern_lo)
            il += 1
        if il <= ir:
            del bounds[il : ir + 1]

    def minus(
        self, lo: float, hi: float, intern_lo: bool = False, intern_hi: bool = False
    ) -> None:
        """Remove the range ``lo``..``hi`` from the fibre."""
        bounds = self._bounds
        il, ir = self.locate(Interval(lo, hi))

        if il == len(bounds):
            return

        if ir < il:
            if bounds[il].lower:
                return
            bounds[il:il] = [Bound(lo, False, intern_lo), Bound(hi, True, intern_hi)]
            return

        if not bounds[il].lower:
            bounds[il] = Bound(lo, False, intern_lo)
            il += 1
        if bounds[ir].lower:
            bounds[ir] = Bound(hi, True, intern_lo)
            ir -= 1
        if il <= ir:
            del bounds[il : ir + 1]

    def invert(self) -> None:
        """Replace the ranges by their complement within ``wrg``."""
        bounds = self._bounds
        if not bounds:
            bounds.append(Bound(self.wrg.lo, True))
            bounds.append(Bound(self.wrg.hi, False))
            return

        for b in bounds:
            b.lower = not b.lower

        if bounds[0].w == self.wrg.lo:
            del bounds[0]
        else:
            bounds.insert(0, Bound(self.wrg.lo, True))

        if bounds and bounds[-1].w == self.wrg.hi:
            bounds.pop()
        else:
            bounds.append(Bound(self.wrg.hi, False))

    def check(self) -> bool:
        """True if the bounds pair up, ascend and alternate lower/upper."""
        bounds = self._bounds
        if len(bounds) % 2 != 0:
            return False
        if any(a.w > b.w for a, b in zip(bounds, bounds[1:])):
            return False
        return all(lo.lower and not hi.lower for lo, hi in zip(bounds[::2], bounds[1::2]))

    def _pairs(self) -> Iterator[tuple[Bound, Bound]]:
        return zip(self._bounds[0::2], self._bounds[1::2])

    def contains(self, w: float) -> bool:
        return any(lo.w <= w <= hi.w for lo, hi in self._pairs())

    def containing_range(self, w: float) -> Interval:
        """The range holding ``w``; ValueError if there is none."""
        for lo, hi in self._pairs():
            if lo.w <= w <= hi.w:
                return Interval(lo.w, hi.w)
        raise ValueError(f"no range on the fibre contains {w}")

    def intervals(self) -> list[Interval]:
        return [Interval(lo.w, hi.w) for lo, hi in self._pairs()]

    def set_all_cut_codes(self, code: int) -> None:
        for b in self._bounds:
            b.cut_code = code