"""Division of an interval into equal consecutive parts."""

from __future__ import annotations

from .geometry import Interval


class Partition:
    """An interval split into regular parts no wider than a given width."""

    def __init__(self, rg: Interval, width: float) -> None:
        n = int(rg.length() / width) + 1
        self._bounds = [rg.along(i / n) for i in range(n + 1)]

    @property
    def bounds(self) -> tuple[float, ...]:
        return tuple(self._bounds)

    def num_parts(self) -> int:
        return len(self._bounds) - 1

    def part(self, i: int) -> Interval:
        return Interval(self._bounds[i], self._bounds[i + 1])

    def span(self) -> Interval:
        return Interval(self._bounds[0], self._bounds[-1])

    def find_part(self, x: float) -> int:
        """Index of the part containing ``x``, clamped to the ends."""
        n = self.num_parts()
        i = int(self.span().inv_along(x) * (n + 1))
        if i > n - 1:
            i = n - 1
        elif i < 0:
            i = 0
        elif self._bounds[i] > x:
            i -= 1
        elif self._bounds[i + 1] <= x:
            i += 1
        return i

    def find_part_range(self, rg: Interval) -> tuple[int, int]:
        """Indices of the parts holding the two ends of ``rg``."""
        return self.find_part(rg.lo), self.find_part(rg.hi)