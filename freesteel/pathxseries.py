"""Toolpath series with breaks and link paths, and their u-strip bucketing."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .geometry import P2, P3, Interval, along, half, inv_along
from .partition import Partition


@dataclass
class PathXSeries:
    """A series of 2D toolpath points at height ``z``.

    ``brks`` holds indices into ``pths`` where the path is not continuous;
    ``linkpths`` runs parallel to it with the 3D paths linking across breaks.
    """

    z: float = 0.0
    pths: list[P2] = field(default_factory=list)
    brks: list[int] = field(default_factory=list)
    linkpths: list[list[P3]] = field(default_factory=list)

    def add(self, pt: P2) -> None:
        self.pths.append(pt)

    def append(self, pts) -> None:
        """Add a run of points and close it with a break."""
        self.pths.extend(pts)
        self.break_path()

    def break_path(self) -> None:
        self.brks.append(len(self.pths))
        self.linkpths.append([])

    def pop_back(self) -> None:
        """Drop the last point unless it would cross the last break."""
        if not self.brks or len(self.pths) != self.brks[-1]:
            self.pths.pop()


@dataclass
class CkPLine:
    """A path segment registered in a strip; its v range is ``vmid +- vrad``."""

    iseg: int
    idup: int
    vmid: float
    vrad: float


@dataclass
class Pucket:
    """The points and segments falling in one u-strip."""

    ckpoints: list[int] = field(default_factory=list)
    cklines: list[CkPLine] = field(default_factory=list)


def pt_cross_u(lu: float, p0: P2, p1: P2) -> float:
    """The v value where segment ``p0``-``p1`` (increasing u) crosses ``u = lu``, clamped."""
    if lu <= p0.u:
        return p0.v
    if lu >= p1.u:
        return p1.v
    lam = inv_along(lu, p0.u, p1.u)
    return along(lam, p0.v, p1.v)


class PathXBoxed:
    """A path that is grown point by point while being sorted into u-strips."""

    def __init__(self, path: Optional[PathXSeries] = None) -> None:
        self.path = path if path is not None else PathXSeries()
        self.gburg = Interval(0.0, 0.0)
        self.geo_out_left = False
        self.geo_out_right = False
        self.upart: Optional[Partition] = None
        self.puckets: list[Pucket] = []
        self.tsbound = PathXSeries()
        self.idups: list[int] = []
        self.maxidup = 0

    def build_boxes(self, gburg: Interval, boxwidth: float) -> None:
        """Set up empty strips across ``gburg`` no wider than ``boxwidth``."""
        self.gburg = Interval(gburg.lo, gburg.hi)
        self.geo_out_left = False
        self.geo_out_right = False
        self.upart = Partition(self.gburg, boxwidth)
        self.puckets = [Pucket() for _ in range(self.upart.num_parts())]
        self.maxidup = 0

    def put_segment(self, iseg: int, first: bool, remove: bool) -> None:
        """Register point ``iseg`` and, unless ``first``, the segment ending there.

        With ``remove`` the segment is taken back out of its strips instead.
        """
        pths = self.path.pths
        pp = pths[iseg]
        if pp.u < self.gburg.lo:
            self.geo_out_left = True
        elif pp.u > self.gburg.hi:
            self.geo_out_right = True
        else:
            self.puckets[self.upart.find_part(pp.u)].ckpoints.append(iseg)

        if first:
            return

        prev = pths[iseg - 1]
        p0, p1 = (prev, pp) if prev.u <= pp.u else (pp, prev)
        urg = Interval(p0.u, p1.u)
        if not urg.intersect(self.gburg):
            return

        ifirst, ilast = self.upart.find_part_range(urg)

        if remove:
            for pucket in self.puckets[ifirst : ilast + 1]:
                if pucket.cklines and pucket.cklines[-1].iseg == iseg:
                    pucket.cklines.pop()
            return

        idup = -1
        if ifirst != ilast:
            idup = len(self.idups)
            self.idups.append(0)

        v1 = pt_cross_u(self.upart.part(ifirst).lo, p0, p1)
        for iu in range(ifirst, ilast + 1):
            v0 = v1
            v1 = pt_cross_u(self.upart.part(iu).hi, p0, p1)
            self.puckets[iu].cklines.append(CkPLine(iseg, idup, half(v0, v1), abs(v1 - v0) / 2))

    def add(self, p: P2) -> None:
        """Append a point to the path and sort it into the strips."""
        pths = self.path.pths
        brks = self.path.brks
        first = not pths or (bool(brks) and brks[-1] == len(pths))
        pths.append(p)
        self.put_segment(len(pths) - 1, first, False)

    def break_path(self) -> None:
        self.path.break_path()