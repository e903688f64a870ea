"""Measuring and walking a distance along toolpaths, including their link paths."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from .geometry import P2, P3, along
from .pathxseries import PathXSeries


@dataclass
class AnimatedPos:
    """A place reached along a series of toolpaths.

    ``on_path`` tells whether the place is on a 2D path segment (ending at
    ``iseg_on_path``) or on link path ``ilink`` (segment ``iseg_on_link``).
    """

    ipathx: int = 0
    ilink: int = -1
    iseg_on_path: int = 0
    iseg_on_link: int = 0
    pt_on_path: Optional[P2] = None
    pt_on_link: Optional[P3] = None
    on_path: bool = False


def _lam(adv: float, lenseg: float) -> float:
    return adv / lenseg if lenseg != 0.0 else 0.0


def _walk_link(pos: AnimatedPos, link: Sequence[P3], adv: float) -> tuple[bool, float, float]:
    """Walk along one link path; return (stopped, distance walked, distance left)."""
    walked = 0.0
    for il in range(1, len(link)):
        a, b = link[il - 1], link[il]
        lenseg = (b - a).length()
        if adv >= 0 and adv - lenseg <= 0.0:
            walked += adv
            pos.iseg_on_link = il
            pos.pt_on_link = along(_lam(adv, lenseg), a, b)
            pos.on_path = False
            return True, walked, adv
        walked += lenseg
        adv -= lenseg
        pos.pt_on_link = b
        pos.iseg_on_link = il
    pos.iseg_on_link = len(link)
    if link:
        pos.pt_on_link = link[-1]
    return False, walked, adv


def advance(pos: AnimatedPos, path: PathXSeries, adv: float) -> tuple[bool, float]:
    """Walk ``adv`` along ``path`` and its links, updating ``pos``.

    A negative ``adv`` walks the whole path. Returns ``(finished, advanced)``:
    whether the end of the path was reached and the distance covered.
    """
    advanced = 0.0
    pos.ilink = -1
    pths, brks, links = path.pths, path.brks, path.linkpths

    j = 0
    i = 1
    for i in range(1, max(len(pths), 1)):
        if j == len(brks) or i < brks[j]:
            a, b = pths[i - 1], pths[i]
            lenseg = (b - a).length()
            if adv >= 0 and adv - lenseg <= 0.0:
                advanced += adv
                pos.ilink = j
                pos.iseg_on_link = 0
                pos.iseg_on_path = i
                pos.pt_on_path = along(_lam(adv, lenseg), a, b)
                pos.on_path = True
                return False, advanced
            advanced += lenseg
            adv -= lenseg
            pos.pt_on_path = b
            pos.iseg_on_path = i
        else:
            # pass through every link marked at this break
            while True:
                pos.ilink = j
                stopped, walked, adv = _walk_link(pos, links[j], adv)
                advanced += walked
                if stopped:
                    return False, advanced
                j += 1
                if not (j < len(brks) and i == brks[j]):
                    break
    else:
        i = max(len(pths), 1)

    first = True
    while j < len(links) and (first or (j < len(brks) and i == brks[j])):
        first = False
        pos.ilink = j
        stopped, walked, adv = _walk_link(pos, links[j], adv)
        advanced += walked
        if stopped:
            return False, advanced
        j += 1

    return True, advanced


def total_length(paths: Sequence[PathXSeries]) -> float:
    """The length of all the paths and their links together."""
    return sum(advance(AnimatedPos(), path, -1.0)[1] for path in paths)


def position_at(paths: Sequence[PathXSeries], fraction: float) -> AnimatedPos:
    """The place reached after ``fraction`` of the total length of ``paths``."""
    if not paths:
        raise ValueError("no paths to walk along")
    remaining = total_length(paths) * fraction
    pos = AnimatedPos()
    ip = 0
    for ip, path in enumerate(paths):
        finished, advanced = advance(pos, path, remaining)
        remaining -= advanced
        if not finished:
            break
    else:
        ip = len(paths)
    pos.ipathx = min(ip, len(paths) - 1)
    return pos