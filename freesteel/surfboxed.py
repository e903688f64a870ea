"""Sorting the points, edges and triangles of a surface into a grid of boxes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .geometry import P2, P3, Interval, along, inv_along
from .partition import Partition
from .surface import EdgeX, SurfX, TriangX


@dataclass
class CkEdge:
    """An edge in a box; ``zh`` is its highest z there, ``idup`` its duplicate slot or -1."""

    zh: float
    edx: EdgeX
    idup: int


@dataclass
class CkTri:
    """A triangle in a box; ``zh`` is its highest z there, ``idup`` its duplicate slot or -1."""

    zh: float
    trx: TriangX
    idup: int


@dataclass
class Bucket:
    ckpoints: list[P3] = field(default_factory=list)
    ckedges: list[CkEdge] = field(default_factory=list)
    cktriangs: list[CkTri] = field(default_factory=list)


def tcross_x(lx: float, p0: P3, p1: P3) -> P2:
    """The (z, y) where segment ``p0``-``p1`` (increasing x) crosses ``x = lx``, clamped."""
    fp0 = P2(p0.z, p0.y)
    fp1 = P2(p1.z, p1.y)
    if lx <= p0.x:
        return fp0
    if lx >= p1.x:
        return fp1
    return along(inv_along(lx, p0.x, p1.x), fp0, fp1)


def tcross_x3(lx: float, p0: P3, p1: P3, p2: P3) -> tuple[P2, P2]:
    """The (z, y) pair where a triangle with corners in increasing x crosses ``x = lx``.

    The first point lies on the long side ``p0``-``p2``, the second on the
    side through ``p1``.
    """
    fp0 = P2(p0.z, p0.y)
    fp1 = P2(p1.z, p1.y)
    fp2 = P2(p2.z, p2.y)
    if lx <= p0.x:
        return fp0, fp0
    if lx >= p2.x:
        return fp2, fp2
    first = along(inv_along(lx, p0.x, p2.x), fp0, fp2)
    if lx <= p1.x:
        second = along(inv_along(lx, p0.x, p1.x), fp0, fp1)
    else:
        second = along(inv_along(lx, p1.x, p2.x), fp1, fp2)
    return first, second


def tcross_y(ly: float, fp: tuple[P2, P2]) -> float:
    """The z height at ``y = ly`` on the (z, y) segment ``fp``, clamped to its ends."""
    a, b = fp
    if a.v <= b.v:
        if ly <= a.v:
            return a.u
        if ly >= b.v:
            return b.u
    else:
        if ly <= b.v:
            return b.u
        if ly >= a.v:
            return a.u
    return along(inv_along(ly, a.v, b.v), a.u, b.u)


class SurfXBoxed:
    """A surface whose geometry is sorted into x strips split into y cells."""

    def __init__(self, surface: SurfX) -> None:
        self.surface = surface
        self.gbxrg: Optional[Interval] = None
        self.gbyrg: Optional[Interval] = None
        self.geo_out_left = False
        self.geo_out_up = False
        self.geo_out_right = False
        self.geo_out_down = False
        self.xpart: Optional[Partition] = None
        self.yparts: list[Partition] = []
        self.buckets: list[list[Bucket]] = []
        self.idups: list[int] = []
        self.maxidup = 0
        self.searchbox_epsilon = 1e-4

    def add_point_bucket(self, p: P3) -> None:
        xspan = self.xpart.span()
        if p.x < xspan.lo:
            self.geo_out_left = True
        elif p.x > xspan.hi:
            self.geo_out_right = True
        else:
            ix = self.xpart.find_part(p.x)
            ypart = self.yparts[ix]
            yspan = ypart.span()
            if p.y < yspan.lo:
                self.geo_out_down = True
            elif p.y > yspan.hi:
                self.geo_out_up = True
            else:
                self.buckets[ix][ypart.find_part(p.y)].ckpoints.append(p)

    def _clip_x(self, xrg: Interval) -> bool:
        if xrg.lo < self.gbxrg.lo:
            self.geo_out_left = True
            xrg.lo = self.gbxrg.lo
        if xrg.hi > self.gbxrg.hi:
            self.geo_out_right = True
            xrg.hi = self.gbxrg.hi
        return xrg.lo <= xrg.hi

    def _clip_y(self, yrg: Interval) -> bool:
        if yrg.lo < self.gbyrg.lo:
            self.geo_out_down = True
            yrg.lo = self.gbyrg.lo
        if yrg.hi > self.gbyrg.hi:
            self.geo_out_up = True
            yrg.hi = self.gbyrg.hi
        return yrg.lo <= yrg.hi

    def _dup_index(self, current: int, spans_many: bool) -> int:
        """A fresh duplicate slot for geometry spanning several boxes."""
        if current == -1 and spans_many:
            self.idups.append(0)
            return len(self.idups) - 1
        return current

    def add_edge_bucket(self, edge: EdgeX) -> None:
        p0, p1 = (edge.p0, edge.p1) if edge.p0.x <= edge.p1.x else (edge.p1, edge.p0)
        xrg = Interval(p0.x, p1.x)
        if not self._clip_x(xrg):
            return

        ipfck = -1
        seen = False
        ixf, ixl = self.xpart.find_part_range(xrg)
        rzr = tcross_x(self.xpart.part(ixf).lo, p0, p1)
        for ix in range(ixf, ixl + 1):
            rzl = rzr
            rzr = tcross_x(self.xpart.part(ix).hi, p0, p1)
            yrg = Interval.combined(rzl.v, rzr.v)
            if not self._clip_y(yrg):
                continue
            ypart = self.yparts[ix]
            iyf, iyl = ypart.find_part_range(yrg)
            for iy in range(iyf, iyl + 1):
                cell = ypart.part(iy)
                zh = max(tcross_y(cell.lo, (rzl, rzr)), tcross_y(cell.hi, (rzl, rzr)))
                if not seen:
                    ipfck = self._dup_index(ipfck, ixf != ixl or iyf != iyl)
                    seen = True
                self.buckets[ix][iy].ckedges.append(CkEdge(zh, edge, ipfck))

    def add_triang_bucket(self, tri: TriangX) -> None:
        p0, p1, p2 = sorted(
            (tri.b12.p0, tri.b12.p1, tri.third_point()), key=lambda p: p.x
        )
        xrg = Interval(p0.x, p2.x)
        if not self._clip_x(xrg):
            return

        ipfck = -1
        seen = False
        ixf, ixl = self.xpart.find_part_range(xrg)
        fpr = tcross_x3(self.xpart.part(ixf).lo, p0, p1, p2)
        for ix in range(ixf, ixl + 1):
            strip = self.xpart.part(ix)
            fpl = fpr
            fpr = tcross_x3(strip.hi, p0, p1, p2)
            ys = (fpl[0].v, fpl[1].v, fpr[0].v, fpr[1].v)
            yrg = Interval(min(ys), max(ys))
            apex = strip.contains(p1.x)
            if apex:
                yrg.absorb(p1.y, False)
            if not self._clip_y(yrg):
                continue

            ypart = self.yparts[ix]
            iyf, iyl = ypart.find_part_range(yrg)
            for iy in range(iyf, iyl + 1):
                cell = ypart.part(iy)
                zh = max(
                    tcross_y(cell.lo, fpl),
                    tcross_y(cell.lo, fpr),
                    tcross_y(cell.hi, fpl),
                    tcross_y(cell.hi, fpr),
                )
                if apex and p1.z > zh:
                    zh = p1.z
                if not seen:
                    ipfck = self._dup_index(ipfck, ixf != ixl or iyf != iyl)
                    seen = True
                self.buckets[ix][iy].cktriangs.append(CkTri(zh, tri, ipfck))

    def build_boxes(self, boxwidth: float) -> None:
        """Partition the surface's x-y box and sort all its geometry into it."""
        surface = self.surface
        if surface.gxrg is None or surface.gyrg is None:
            raise ValueError("the surface has no ranges to box")
        self.gbxrg = Interval(surface.gxrg.lo, surface.gxrg.hi)
        self.gbyrg = Interval(surface.gyrg.lo, surface.gyrg.hi)
        self.geo_out_left = False
        self.geo_out_up = False
        self.geo_out_right = False
        self.geo_out_down = False

        self.xpart = Partition(self.gbxrg, boxwidth)
        self.yparts = [Partition(self.gbyrg, boxwidth) for _ in range(self.xpart.num_parts())]
        self.buckets = [[Bucket() for _ in range(yp.num_parts())] for yp in self.yparts]
        self.idups = []

        for p in surface.vertices:
            self.add_point_bucket(p)
        for edge in surface.edges:
            self.add_edge_bucket(edge)
        for tri in surface.triangles:
            self.add_triang_bucket(tri)

        self.maxidup = 0
        self.searchbox_epsilon = 1e-4

    def sort_buckets(self) -> None:
        """Order each box's contents by increasing height."""
        for row in self.buckets:
            for bucket in row:
                bucket.ckpoints.sort(key=lambda p: p.z)
                bucket.ckedges.sort(key=lambda c: c.zh)
                bucket.cktriangs.sort(key=lambda c: c.zh)