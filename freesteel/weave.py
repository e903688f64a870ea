"""A weave of perpendicular fibres modelling a 2D area, with contour tracking."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Optional, Sequence

from .fibre import Bound, Fibre
from .geometry import P2, Interval


@dataclass
class WeaveIter:
    """A position on a fibre of the weave."""

    ftype: int
    lower: bool
    w: float
    wp: float
    ixwp: int

    def point(self) -> P2:
        return P2(self.wp, self.w) if self.ftype == 1 else P2(self.w, self.wp)


def find_inwards(
    fibres: Sequence[Fibre], w: float, lower: bool, wp: float, wpend: float, edge: bool
) -> Optional[int]:
    """Index of the first fibre past ``wp`` (up to ``wpend``) that contains ``w``.

    Searches upwards when ``lower`` is true and downwards otherwise; with
    ``edge`` a fibre exactly at ``wp`` counts. Returns None if there is none.
    """
    if lower:
        for i, fib in enumerate(fibres):
            if fib.wp > wpend:
                break
            if (fib.wp >= wp if edge else fib.wp > wp) and fib.contains(w):
                return i
        return None
    for i in range(len(fibres) - 1, -1, -1):
        fib = fibres[i]
        if fib.wp < wpend:
            break
        if (fib.wp <= wp if edge else fib.wp < wp) and fib.contains(w):
            return i
    return None


class Weave:
    """A grid of u-fibres and v-fibres covering ``urg`` by ``vrg``."""

    def __init__(self, urg: Interval, vrg: Interval, res: float) -> None:
        self.urg = Interval(urg.lo, urg.hi)
        self.vrg = Interval(vrg.lo, vrg.hi)
        nufib = int(self.urg.length() / res + 2)
        nvfib = int(self.vrg.length() / res + 2)
        self.ufibs = [Fibre(self.urg.along(i / nufib), self.vrg, 1) for i in range(nufib + 1)]
        self.vfibs = [Fibre(self.vrg.along(j / nvfib), self.urg, 2) for j in range(nvfib + 1)]
        # contour numbers below the first one count as unvisited
        self.first_contour_number = 0
        self.last_contour_number = self.first_contour_number - 1

    def _fibres(self, ftype: int) -> list[Fibre]:
        return self.ufibs if ftype == 1 else self.vfibs

    def advance(self, it: WeaveIter) -> None:
        """Move ``it`` in place to the next boundary point of the area."""
        edge = True
        while True:
            frg = self._fibres(it.ftype)[it.ixwp].containing_range(it.w)
            wend = frg.hi if it.lower else frg.lo
            other = self.vfibs if it.ftype == 1 else self.ufibs
            ix = find_inwards(other, it.wp, it.lower, it.w, wend, edge)
            if ix is None:
                break

            # always turn perpendicular
            it.w = it.wp
            it.ftype = 2 if it.ftype == 1 else 1
            it.ixwp = ix
            it.wp = self._fibres(it.ftype)[ix].wp
            if it.ftype == 1:
                it.lower = not it.lower
            edge = False

        # reached an endpoint: stand on it and reverse
        it.w = wend
        it.lower = not it.lower

    def _bound(self, it: WeaveIter) -> Bound:
        fib = self._fibres(it.ftype)[it.ixwp]
        for i in range(0 if it.lower else 1, len(fib), 2):
            if fib[i].w == it.w:
                return fib[i]
        raise LookupError(f"no {'lower' if it.lower else 'upper'} bound at {it.w}")

    def contour_number(self, it: WeaveIter) -> int:
        """The contour number of the bound under ``it``."""
        return self._bound(it).contour_number

    def set_contour_number(self, it: WeaveIter, number: int) -> None:
        self._bound(it).contour_number = number

    def track_contour(self, it: WeaveIter) -> list[P2]:
        """Follow and number the contour through ``it``; return its points."""
        it = dataclasses.replace(it)
        self.last_contour_number += 1
        pth: list[P2] = []
        while self.contour_number(it) < self.first_contour_number:
            self.set_contour_number(it, self.last_contour_number)
            pth.append(it.point())
            self.advance(it)
        pth.append(it.point())
        return pth

    def set_all_cut_codes(self, code: int) -> None:
        for fib in (*self.ufibs, *self.vfibs):
            fib.set_all_cut_codes(code)

    def invert(self) -> None:
        for fib in (*self.ufibs, *self.vfibs):
            fib.invert()