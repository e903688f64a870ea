"""Cutting the area swept by a disc along a path into the fibres of a weave."""

from __future__ import annotations

import math
from typing import Iterator, Optional

from .fibre import Bound, Fibre
from .geometry import P2, along, square
from .pathxseries import PathXSeries
from .weave import Weave


class RayGen2:
    """Applies line crossings and disc-swept segments to one fibre at a time."""

    def __init__(self, raddisc: float) -> None:
        self.raddisc = raddisc
        self.raddiscsq = square(raddisc)
        self.pfib: Optional[Fibre] = None
        self.scuts: list[Bound] = []

    def _transform(self, p: P2) -> P2:
        """Map a point so the held fibre lies on ``u = 0`` running along v."""
        fib = self.pfib
        if fib.ftype == 1:
            return P2(p.u - fib.wp, p.v)
        return P2(p.v - fib.wp, p.u)

    def hold_fibre(self, fibre: Fibre) -> None:
        self.pfib = fibre
        self.scuts.clear()

    def release_fibre(self) -> None:
        """Merge the paired line crossings into the fibre and let it go."""
        if self.scuts:
            self.scuts.sort(key=lambda b: b.w)
            for lo, hi in zip(self.scuts[0::2], self.scuts[1::2]):
                self.pfib.merge(lo.w, hi.w, True, True)
            self.scuts.clear()
        self.pfib = None

    def line_cut(self, a: P2, b: P2) -> None:
        """Record where segment ``a``-``b`` crosses the fibre (paths anticlockwise)."""
        if (a.u < 0.0) != (b.u < 0.0):
            al = a.u / (a.u - b.u)
            lw = along(al, a.v, b.v)
            # account for the reflection of v-fibres
            lower = (a.u < 0.0) != (self.pfib.ftype == 1)
            self.scuts.append(Bound(lw, not lower))

    def disc_slice_cap_n(self, a: P2, b: P2) -> None:
        """Merge the slice of a disc swept from ``a`` to ``b``, capped at ``b``."""
        raddisc = self.raddisc
        d = b - a
        dlen = d.length()

        if d.u != 0.0:
            lamm = -a.u / d.u
            lamd = raddisc * d.v / (dlen * d.u)
        else:
            if abs(a.u) >= raddisc:
                return
            lamm = 0.5
            lamd = 1.0
        lamdp = abs(lamd)
        sign = -1.0 if lamd < 0.0 else 1.0

        if lamm + lamdp < 0.0:
            return

        lvlo = 0.0
        intern_lo = False
        llamlo = lamm - lamdp
        if llamlo < 0.0:
            if d.u != 0.0:
                mu = -a.u / d.v
                lvlo = a.v - d.u * mu
            else:
                lvlo = a.v
            intern_lo = True
        elif llamlo <= 1.0:
            lvlo = a.v + d.v * llamlo - d.u * raddisc / dlen * sign

        llamhi = lamm + lamdp
        if llamhi > 1.0:
            bdsq = self.raddiscsq - square(b.u)
            if bdsq <= 0.0:
                return
            bd = math.sqrt(bdsq) * (1.0 if d.v > 0.0 else -1.0)
            lvhi = b.v + bd
            if llamlo >= 1.0:
                lvlo = b.v - bd
        else:
            lvhi = a.v + d.v * llamhi + d.u * raddisc / dlen * sign

        if lvlo <= lvhi:
            self.pfib.merge(lvlo, lvhi, intern_lo, False)
        else:
            self.pfib.merge(lvhi, lvlo, False, intern_lo)


def _segments(rgen: RayGen2, paths: PathXSeries, count: int) -> Iterator[tuple[P2, P2]]:
    """Transformed consecutive point pairs among the first ``count`` points.

    A break index restarts the run, and the point after it starts afresh too.
    """
    brks = paths.brks
    j = 0
    tb: Optional[P2] = None
    first_point = True
    for i in range(count):
        ta = tb
        tb = rgen._transform(paths.pths[i])
        if j == len(brks) or i < brks[j]:
            if not first_point:
                yield ta, tb
            else:
                first_point = False
        else:
            while j < len(brks) and i == brks[j]:
                j += 1
            first_point = True


def _each_fibre(weave: Weave) -> Iterator[Fibre]:
    yield from weave.ufibs
    yield from weave.vfibs


def hack_area_offset(weave: Weave, paths: PathXSeries, rad: float) -> None:
    """Merge the area of an anticlockwise path offset by ``rad`` into the weave."""
    rgen = RayGen2(rad)
    for fib in _each_fibre(weave):
        rgen.hold_fibre(fib)
        for ta, tb in _segments(rgen, paths, len(paths.pths)):
            rgen.line_cut(ta, tb)
            rgen.disc_slice_cap_n(ta, tb)
        rgen.release_fibre()


def hack_toolpath(
    weave: Weave, paths: PathXSeries, iseg: int, ptpath: P2, rad: float
) -> None:
    """Merge the area swept by a tool of radius ``rad`` along the path so far.

    The path is followed up to point ``iseg`` and then on to ``ptpath``.
    """
    rgen = RayGen2(rad)
    for fib in _each_fibre(weave):
        rgen.hold_fibre(fib)
        tb: Optional[P2] = None
        for ta, tb in _segments(rgen, paths, iseg):
            rgen.disc_slice_cap_n(ta, tb)
        if iseg < len(paths.pths):
            last = rgen._transform(paths.pths[iseg - 1]) if iseg > 0 else None
            if last is not None:
                rgen.disc_slice_cap_n(last, rgen._transform(ptpath))
        rgen.release_fibre()