"""Triangulated surfaces built from shared vertices, edges and triangles."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .geometry import P3, Interval


@dataclass(eq=False)
class EdgeX:
    """An edge between two shared vertices with the triangles on either side.

    ``rd_r`` and ``rd_l`` hold where the tool hits the triangle on the right
    and on the left, measured along the edge's perpendicular.
    """

    p0: P3
    p1: P3
    tp_r: Optional["TriangX"] = None
    tp_l: Optional["TriangX"] = None
    rd_r: float = 0.0
    rd_l: float = 0.0
    sidecheck4: int = 0


@dataclass(eq=False)
class TriangX:
    """A triangle given by three edges.

    ``b12`` joins the first and second corners; ``ab1`` and ``ab2`` join the
    third corner to them. Corners are shared objects and are compared by
    identity.
    """

    tnorm: P3
    ab1: Optional[EdgeX] = None
    ab2: Optional[EdgeX] = None
    b12: Optional[EdgeX] = None
    tp: float = 0.0

    def first_point(self) -> P3:
        return self.b12.p0

    def second_point(self) -> P3:
        return self.b12.p1

    def third_point(self, edge: Optional[EdgeX] = None) -> P3:
        """The corner not on ``edge`` (by default, not on ``b12``)."""
        b12 = self.b12
        if edge is None or edge is b12:
            ab1 = self.ab1
            if ab1.p0 is not b12.p0 and ab1.p0 is not b12.p1:
                return ab1.p0
            return ab1.p1
        if edge is not self.ab1 and edge is not self.ab2:
            raise ValueError("edge does not belong to this triangle")
        if b12.p0 is not edge.p0 and b12.p0 is not edge.p1:
            return b12.p0
        return b12.p1


class SurfX:
    """A surface of triangles together with the box it covers.

    ``rangestate`` is 0 when no ranges are set and 2 when they were given.
    """

    def __init__(
        self,
        xrg: Optional[Interval] = None,
        yrg: Optional[Interval] = None,
        zrg: Optional[Interval] = None,
    ) -> None:
        ranges = (xrg, yrg, zrg)
        if all(r is None for r in ranges):
            self.gxrg: Optional[Interval] = None
            self.gyrg: Optional[Interval] = None
            self.gzrg: Optional[Interval] = None
            self.rangestate = 0
        elif any(r is None for r in ranges):
            raise ValueError("give all three ranges or none")
        else:
            self.gxrg = Interval(xrg.lo, xrg.hi)
            self.gyrg = Interval(yrg.lo, yrg.hi)
            self.gzrg = Interval(zrg.lo, zrg.hi)
            self.rangestate = 2

        # raw loaded points and triangle corner indices
        self.lvd: list[P3] = []
        self.ltd: list[int] = []

        # the built components
        self.vertices: list[P3] = []
        self.edges: list[EdgeX] = []
        self.triangles: list[TriangX] = []