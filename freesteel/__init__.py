"""Geometry for CAM: intervals, fibres, weaves, toolpath series, stock circles and surface boxing."""

__version__ = "0.1.0"

__all__ = [
    "geometry",
    "partition",
    "fibre",
    "weave",
    "pathxseries",
    "raygen",
    "progress",
    "stockcircle",
    "surface",
    "surfboxed",
]