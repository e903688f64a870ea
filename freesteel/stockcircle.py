"""Which parts of a circle still touch stock, given a boundary and a toolpath.

Positions on the circle are measured with ``P2.darg``: a monotone angle
parameter running from 0 to 4 anticlockwise.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .fibre import Fibre
from .geometry import P2, Interval, along, aperp, dot, pos_sqrt, square
from .pathxseries import PathXBoxed, PathXSeries

_FULL_LO = 0.0
_FULL_HI = 4.0


@dataclass
class CircPara:
    """A crossing point on the circle, relative to its centre.

    ``clockwise_in`` is true where going clockwise round the circle leads
    into the region that was crossed.
    """

    rpt: P2
    darg: float
    clockwise_in: bool


def _unit() -> Interval:
    return Interval.unit()


@dataclass
class CircCrossing:
    """A circle at ``cpt`` of radius ``crad`` and the ranges of it marked as stock."""

    cpt: P2
    crad: float
    cradsq: float = field(init=False)
    prad: float = field(init=False, default=0.0)
    pradsq: float = field(init=False, default=0.0)
    cradpprad: float = field(init=False, default=0.0)
    cradppradsq: float = field(init=False, default=0.0)
    cradmpradsq: float = field(init=False, default=0.0)
    circrange: Fibre = field(init=False)
    cpara: list[CircPara] = field(init=False, default_factory=list)

    def __init__(self, cpt: P2, crad: float) -> None:
        self.cpt = cpt
        self.crad = crad
        self.cradsq = square(crad)
        self.cpara = []
        self.circrange = Fibre(0.0, Interval(_FULL_LO, _FULL_HI), 3)
        self.set_prad(0.0)

    def _crossings(self, lamz: float, lamp: float, a: P2, b: P2, in_a: bool, in_b: bool) -> None:
        """Record where the segment ``a``-``b`` enters and leaves the circle."""
        unit = _unit()
        if not in_a:
            rpt = along(unit.push_into_small(lamz - lamp), a, b)
            self.cpara.append(CircPara(rpt, rpt.darg(), True))
        if not in_b:
            rpt = along(unit.push_into_small(lamz + lamp), a, b)
            self.cpara.append(CircPara(rpt, rpt.darg(), False))

    def chop_out_boundary(self, bound: list[P2]) -> None:
        """Mark the parts of the circle inside the closed anticlockwise ``bound``."""
        self.circrange.reset(0.0, Interval(_FULL_LO, _FULL_HI), 3)

        # an empty boundary means stock everywhere
        if not bound:
            self.circrange.merge(_FULL_LO, _FULL_HI)
            return

        hraypara: list[tuple[float, bool]] = []
        cradsq = self.cradsq
        p1 = bound[0] - self.cpt
        rad1sq = p1.lensq()
        bradfirstin = rad1sq < cradsq
        brad1in = bradfirstin
        last = len(bound) - 1

        for i, pt in enumerate(bound[1:], start=1):
            p0, rad0sq, brad0in = p1, rad1sq, brad1in
            p1 = pt - self.cpt
            rad1sq = p1.lensq()
            # the closing point must agree with the first one
            brad1in = (rad1sq < cradsq) if i != last else bradfirstin

            # crossings of the horizontal ray out of the centre
            if (p0.v < 0.0) != (p1.v < 0.0):
                lam = p0.v / (p0.v - p1.v)
                cu = along(lam, p0.u, p1.u)
                if cu >= 0.0:
                    hraypara.append((cu, p1.v >= 0.0))

            # wholly inside by convexity
            if brad0in and brad1in:
                continue

            v = p1 - p0
            vsq = v.lensq()
            if vsq == 0.0:
                continue

            cdsq = square(dot(p0, aperp(v))) / vsq
            if cdsq >= cradsq and rad0sq >= cradsq and rad1sq >= cradsq:
                continue

            lamz = -dot(p0, v) / vsq
            if not brad0in and not brad1in and not _unit().contains(lamz):
                continue

            lamp = pos_sqrt((cradsq - cdsq) / vsq)
            self._crossings(lamz, lamp, p0, p1, brad0in, brad1in)

        self.cpara.sort(key=lambda c: c.darg)
        hraypara.sort()

        # how far the circle radius lies from the nearest crossing of the ray
        hrayinvaldist = 1.0
        while hraypara:
            hrayinhi = hraypara.pop()[0]
            hrayinlo = hraypara.pop()[0] if hraypara else 0.0
            lo = hrayinlo - self.crad
            hi = hrayinhi - self.crad
            if lo >= 0.0:
                if hrayinvaldist > lo:
                    hrayinvaldist = lo
            elif hi >= 0.0:
                hrayinvaldist = min(lo, -hi)
                break
            else:
                if hrayinvaldist < -hi:
                    hrayinvaldist = -hi
                break

        cpara = self.cpara
        if not cpara:
            if not hrayinvaldist > 0.0:
                self.circrange.merge(_FULL_LO, _FULL_HI)
            return

        kcp = 1
        if cpara[0].clockwise_in:
            self.circrange.merge(_FULL_LO, cpara[0].darg)
            kcp += 1
        while kcp < len(cpara):
            self.circrange.merge(cpara[kcp - 1].darg, cpara[kcp].darg)
            kcp += 2
        if not cpara[-1].clockwise_in:
            self.circrange.merge(cpara[-1].darg, _FULL_HI)
        cpara.clear()

    def set_prad(self, prad: float) -> None:
        """Set the radius of the tool that cuts the stock away."""
        self.prad = prad
        self.pradsq = square(prad)
        self.cradpprad = self.crad + prad
        self.cradppradsq = square(self.cradpprad)
        self.cradmpradsq = square(self.crad - prad)

    def hack_tool_circle(self, tpt: P2) -> None:
        """Remove the part of the circle cut by the tool at ``tpt`` (relative to the centre)."""
        vsq = tpt.lensq()
        if vsq >= self.cradppradsq:
            return
        if vsq <= self.cradmpradsq:
            if self.prad > self.crad:
                self.circrange.minus(_FULL_LO, _FULL_HI)
            return

        # the crossing points are lam * tpt +- mu * aperp(tpt)
        if self.crad != self.prad:
            lam = ((self.cradsq - self.pradsq) / vsq + 1) / 2
        else:
            lam = 0.5
        mu = pos_sqrt(self.cradsq / vsq - square(lam))
        vl = tpt * lam
        vm = aperp(tpt) * mu
        dc2 = (vl + vm).darg()
        dc1 = (vl - vm).darg()

        if dc1 <= dc2:
            self.circrange.minus(dc1, dc2)
        else:
            self.circrange.minus(_FULL_LO, dc2)
            self.circrange.minus(dc1, _FULL_HI)

    def hack_tool_rectangle(self, p0: P2, p1: P2) -> None:
        """Remove the part of the circle cut by the tool sweeping ``p0`` to ``p1``.

        Only the straight-sided rectangle of the sweep is taken; the end discs
        are handled by ``hack_tool_circle``.
        """
        v = p1 - p0
        vsq = v.lensq()
        if vsq == 0.0:
            return
        cradsq = self.cradsq
        prad = self.prad

        dp0cpv = dot(p0, aperp(v))
        cdsq = square(dp0cpv) / vsq
        if cdsq >= self.cradppradsq:
            return

        vlen = vsq ** 0.5

        dp0pv = dot(p0, v)
        cdp0sq = square(dp0pv) / vsq
        if dp0pv > 0.0 and cdp0sq >= cradsq:
            return
        dp1pv = dp0pv + vsq
        cdp1sq = square(dp1pv) / vsq
        if dp1pv < 0.0 and cdp1sq >= cradsq:
            return

        perpvfac = prad / vlen
        vpcr = aperp(v) * perpvfac
        p0l, p0r = p0 + vpcr, p0 - vpcr
        p1l, p1r = p1 + vpcr, p1 - vpcr

        b0l = p0l.lensq() < cradsq
        b0r = p0r.lensq() < cradsq
        b1l = p1l.lensq() < cradsq
        b1r = p1r.lensq() < cradsq

        if b0l and b0r and b1l and b1r:
            self.circrange.minus(_FULL_LO, _FULL_HI)
            return

        unit = _unit()
        perprg = Interval(-perpvfac, perpvfac)
        lamz = -dot(p0, v) / vsq
        lamz_p = -dot(p0, aperp(v)) / vsq

        if not (b0l or b0r or b1l or b1r):
            if not unit.contains(lamz) and not perprg.contains(lamz_p):
                return

        cdmd = (2 * dp0cpv * prad) / vlen

        # right side, p0r to p1r
        cdrsq = cdsq - cdmd + self.pradsq
        if (b0r != b1r) or (not b0r and not b1r and cdrsq < cradsq and unit.contains(lamz)):
            lamrp = pos_sqrt((cradsq - cdrsq) / vsq)
            self._crossings(lamz, lamrp, p0r, p1r, b0r, b1r)

        # far end, p1r to p1l
        if (b1r != b1l) or (not b1r and not b1l and cdp1sq < cradsq and perprg.contains(lamz_p)):
            lam1p = pos_sqrt((cradsq - cdp1sq) / vsq)
            if not b1r:
                lam = unit.push_into_small(((lamz_p - lam1p) / perpvfac + 1) / 2)
                rpt = along(lam, p1r, p1l)
                self.cpara.append(CircPara(rpt, rpt.darg(), True))
            if not b1l:
                lam = unit.push_into_small(((lamz_p + lam1p) / perpvfac + 1) / 2)
                rpt = along(lam, p1r, p1l)
                self.cpara.append(CircPara(rpt, rpt.darg(), False))

        # left side, p1l to p0l
        cdlsq = cdsq + cdmd + self.pradsq
        if (b1l != b0l) or (not b1l and not b0l and cdlsq < cradsq and unit.contains(lamz)):
            lamlp = -pos_sqrt((cradsq - cdlsq) / vsq)
            if not b1l:
                lam = unit.push_into_small(lamz - lamlp)
                rpt = along(lam, p0l, p1l)
                self.cpara.append(CircPara(rpt, rpt.darg(), True))
            if not b0l:
                lam = unit.push_into_small(lamz + lamlp)
                rpt = along(lam, p0l, p1l)
                self.cpara.append(CircPara(rpt, rpt.darg(), False))

        # near end, p0l to p0r
        if (b0l != b0r) or (not b0l and not b0r and cdp0sq < cradsq and perprg.contains(lamz_p)):
            lam0p = -pos_sqrt((cradsq - cdp0sq) / vsq)
            if not b0l:
                lam = unit.push_into_small(((lamz_p - lam0p) / perpvfac + 1) / 2)
                rpt = along(lam, p0r, p0l)
                self.cpara.append(CircPara(rpt, rpt.darg(), True))
            if not b0r:
                lam = unit.push_into_small(((lamz_p + lam0p) / perpvfac + 1) / 2)
                rpt = along(lam, p0r, p0l)
                self.cpara.append(CircPara(rpt, rpt.darg(), False))

        cpara = self.cpara
        if not cpara:
            return
        cpara.sort(key=lambda c: c.darg)

        k = 1
        if cpara[0].clockwise_in:
            self.circrange.minus(_FULL_LO, cpara[0].darg)
            k += 1
        while k < len(cpara):
            self.circrange.minus(cpara[k - 1].darg, cpara[k].darg)
            k += 2
        if not cpara[-1].clockwise_in:
            self.circrange.minus(cpara[-1].darg, _FULL_HI)
        cpara.clear()


def hack_path(ccs: CircCrossing, paths: PathXSeries) -> None:
    """Cut the circle with the tool swept along every segment of ``paths``.

    The tool disc at the very first point is left out.
    """
    pths, brks = paths.pths, paths.brks
    if not pths:
        return
    j = 0
    p1 = pths[0] - ccs.cpt
    for i in range(1, len(pths)):
        if len(ccs.circrange) == 0:
            break
        p0 = p1
        p1 = pths[i] - ccs.cpt
        if j == len(brks) or i < brks[j]:
            ccs.hack_tool_rectangle(p0, p1)
        else:
            while j < len(brks) and i == brks[j]:
                j += 1
        ccs.hack_tool_circle(p1)


def hack_boxed_path(ccs: CircCrossing, boxed: PathXBoxed) -> None:
    """Cut the circle with the segments of a boxed path near it."""
    urg = Interval(ccs.cpt.u - ccs.cradpprad, ccs.cpt.u + ccs.cradpprad)
    if (
        not boxed.puckets
        or (boxed.geo_out_left and urg.lo < boxed.gburg.lo)
        or (boxed.geo_out_right and urg.hi > boxed.gburg.hi)
    ):
        hack_path(ccs, boxed.path)
        return
    if not urg.intersect(boxed.gburg):
        return

    boxed.maxidup += 1
    pths = boxed.path.pths
    ifirst, ilast = boxed.upart.find_part_range(urg)
    for pucket in boxed.puckets[ifirst : ilast + 1]:
        for line in pucket.cklines:
            if line.idup != -1 or line.idup != boxed.maxidup:
                p0 = pths[line.iseg - 1] - ccs.cpt
                p1 = pths[line.iseg] - ccs.cpt
                ccs.hack_tool_rectangle(p0, p1)
                ccs.hack_tool_circle(p0)
                if line.idup != -1:
                    line.idup = boxed.maxidup


def circle_intersect(
    cpt: P2, crad: float, bound: PathXSeries, boxed: PathXBoxed, prad: float
) -> list[Interval]:
    """The darg ranges of the circle that still meet stock.

    Stock is what lies inside the anticlockwise ``bound`` and has not been cut
    by a tool of radius ``prad`` travelling along the boxed path.
    """
    ccs = CircCrossing(cpt, crad)
    ccs.chop_out_boundary(bound.pths)
    ccs.set_prad(prad)
    hack_boxed_path(ccs, boxed)
    return ccs.circrange.intervals()