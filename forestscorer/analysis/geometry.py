"""Axis-aligned box overlap helpers."""

from typing import Literal

from forestscorer.models.detection import Box

Axis = Literal["x", "y"]


def overlap_axis(a: Box, b: Box, axis: Axis) -> float:
    """Length of the 1-D intersection of two boxes on one axis, floored at 0."""
    if axis == "x":
        return max(0.0, min(a.x2, b.x2) - max(a.x1, b.x1))
    return max(0.0, min(a.y2, b.y2) - max(a.y1, b.y1))


def overlap_h(a: Box, b: Box) -> float:
    """Horizontal overlap."""
    return overlap_axis(a, b, "x")


def overlap_v(a: Box, b: Box) -> float:
    """Vertical overlap."""
    return overlap_axis(a, b, "y")
