# freesteel

Geometry building blocks for computer aided manufacture (CAM) toolpath
work. The package uses only the standard library.

## Modules

- `freesteel.geometry`: `Interval` is a closed range `[lo, hi]` with
  `absorb`, `intersect`, `contains`, `along`, `distance`, `push_into` and
  arithmetic. `P2` and `P3` are immutable 2D and 3D points and vectors.
  `P2.darg` gives a cheap, monotonic angle measure in `[0, 4)`, and
  `P2.inv_darg` gives a vector for one. Helpers include `along`, `dot`,
  `half`, `aperp`, `cperp`, `inv_along`, `pos_sqrt` and `box_distance`.
- `freesteel.partition`: `Partition` splits an interval into equal parts no
  wider than a given width. `find_part` and `find_part_range` find the
  parts that hold values.
- `freesteel.fibre`: `Fibre` is a line of material held as sorted `Bound`
  endpoints. It has `merge`, `minus`, `invert`, `contains`,
  `containing_range`, `intervals` and `check`.
- `freesteel.weave`: `Weave` models a 2D area as a grid of u and v fibres.
  `advance` moves a `WeaveIter` along the boundary of the area, and
  `track_contour` follows and numbers a whole contour and returns its
  points.
- `freesteel.pathxseries`: `PathXSeries` is a toolpath at one z level. It
  holds 2D points (`pths`), break indices (`brks`) and 3D link paths
  (`linkpths`). `PathXBoxed` grows a path point by point and sorts its
  points and segments into u strips (`Pucket`, `CkPLine`).
- `freesteel.raygen`: `RayGen2` cuts line crossings and disc-swept segments
  into one fibre. `hack_area_offset` merges the offset area of an
  anticlockwise path into a weave. `hack_toolpath` merges the area swept by
  a tool along a path up to a given point.
- `freesteel.stockcircle`: `CircCrossing` and `circle_intersect` find which
  darg ranges of a circle still meet stock. Stock is what lies inside a
  boundary and has not been cut by a tool along a boxed path.
- `freesteel.progress`: `advance`, `total_length` and `position_at` walk a
  distance, or a fraction of the total length, along toolpaths and their
  link paths. They report the position reached as an `AnimatedPos`.
- `freesteel.surface`: `SurfX`, `EdgeX` and `TriangX` hold a triangulated
  surface as shared vertices, edges and triangles.
- `freesteel.surfboxed`: `SurfXBoxed` sorts a surface's vertices, edges and
  triangles into a grid of x strips and y cells (`Bucket`, `CkEdge`,
  `CkTri`). `sort_buckets` orders each cell's contents by height.

## Examples

```python
from freesteel.geometry import Interval
from freesteel.fibre import Fibre

fibre = Fibre(0.0, Interval(0.0, 10.0), 1)
fibre.merge(1.0, 3.0)
fibre.merge(2.0, 5.0)
print(fibre.intervals())   # [Interval(lo=1.0, hi=5.0)]
fibre.invert()
print(fibre.intervals())   # [Interval(lo=0.0, hi=1.0), Interval(lo=5.0, hi=10.0)]
```

```python
from freesteel.geometry import Interval, P2
from freesteel.weave import Weave
from freesteel.pathxseries import PathXSeries
from freesteel.raygen import hack_area_offset

path = PathXSeries(0.0)
for p in [P2(0, 0), P2(10, 0), P2(10, 10), P2(0, 10), P2(0, 0)]:
    path.add(p)
path.break_path()

weave = Weave(Interval(-5, 15), Interval(-5, 15), 1.0)
hack_area_offset(weave, path, 2.0)
print([f.intervals() for f in weave.ufibs][:3])
```

## What it does not do

- There is no command-line program. The package is a library only.
- It does not read STL files. It does not build the vertices, edges and
  triangles of a `SurfX` from raw triangles either; fill
  `vertices`, `edges` and `triangles` yourself before boxing.
- It does not generate roughing toolpaths, and it has no machine parameter
  set.
- It has no display or animation window. `freesteel.progress` only
  computes positions along paths.

## Tests

```
pip install -e .[test]
pytest
```