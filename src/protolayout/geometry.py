# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Shared geometry helpers.

"""
Convex hulls for group outlines plus centering and fitting of layouts.

Hull points are (x, y) tuples. Position maps may hold Position objects
or (x, y) tuples; the returned maps always hold Position objects.
"""

import math
from collections.abc import Mapping
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .models import Bounds, Position

Point = Tuple[float, float]


def _xy(pos) -> Point:
    if isinstance(pos, Position):
        return (pos.x, pos.y)
    return (float(pos[0]), float(pos[1]))


def _cross(o: Point, a: Point, b: Point) -> float:
    return (a[0] - o[0]) * (b[1] - o[1]) - (a[1] - o[1]) * (b[0] - o[0])


def convex_hull(points: Iterable[Point]) -> List[Point]:
    """
    Convex hull by Andrew's monotone chain, counter-clockwise.

    Fewer than three points are returned unchanged. Collinear points on
    the hull boundary are dropped.
    """
    pts = [_xy(p) for p in points]
    if len(pts) < 3:
        return pts

    pts = sorted(set(pts))
    if len(pts) < 3:
        return pts

    lower: List[Point] = []
    for p in pts:
        while len(lower) >= 2 and _cross(lower[-2], lower[-1], p) <= 0:
            lower.pop()
        lower.append(p)

    upper: List[Point] = []
    for p in reversed(pts):
        while len(upper) >= 2 and _cross(upper[-2], upper[-1], p) <= 0:
            upper.pop()
        upper.append(p)

    return lower[:-1] + upper[:-1]


def expand_hull(hull: Sequence[Point], margin: float) -> List[Point]:
    """Push each hull vertex outward along its averaged edge normal."""
    n = len(hull)
    if n < 3:
        return list(hull)

    expanded = []
    for i in range(n):
        px, py = hull[i - 1]
        cx, cy = hull[i]
        nx_, ny_ = hull[(i + 1) % n]

        ex1, ey1 = cx - px, cy - py
        ex2, ey2 = nx_ - cx, ny_ - cy
        len1 = math.hypot(ex1, ey1) or 1.0
        len2 = math.hypot(ex2, ey2) or 1.0

        # outward normals of a counter-clockwise polygon
        norm_x = (ey1 / len1 + ey2 / len2) / 2
        norm_y = (-ex1 / len1 - ex2 / len2) / 2
        length = math.hypot(norm_x, norm_y)
        if length > 0:
            norm_x /= length
            norm_y /= length

        expanded.append((cx + norm_x * margin, cy + norm_y * margin))
    return expanded


def centroid(points: Iterable[Point]) -> Point:
    pts = [_xy(p) for p in points]
    if not pts:
        return (0.0, 0.0)
    return (sum(p[0] for p in pts) / len(pts), sum(p[1] for p in pts) / len(pts))


def bounding_box(positions: Mapping) -> Optional[Tuple[float, float, float, float]]:
    """(min_x, min_y, max_x, max_y) of a position map, or None when empty."""
    if not positions:
        return None
    xs, ys = zip(*(_xy(p) for p in positions.values()))
    return (min(xs), min(ys), max(xs), max(ys))


def center_positions(positions: Mapping, bounds: Bounds) -> Dict[str, Position]:
    """Translate a layout so its bounding box is centred on the canvas."""
    box = bounding_box(positions)
    if box is None:
        return {}
    min_x, min_y, max_x, max_y = box
    target_x, target_y = bounds.center
    offset_x = target_x - (min_x + max_x) / 2
    offset_y = target_y - (min_y + max_y) / 2
    return {
        nid: Position(x + offset_x, y + offset_y)
        for nid, (x, y) in ((nid, _xy(p)) for nid, p in positions.items())
    }


def fit_to_bounds(
    positions: Mapping,
    bounds: Bounds,
    padding: float = 50.0,
    max_scale: float = 2.0,
) -> Dict[str, Position]:
    """Scale and centre a layout into the canvas minus ``padding``."""
    box = bounding_box(positions)
    if box is None:
        return {}
    min_x, min_y, max_x, max_y = box

    graph_width = (max_x - min_x) or 1.0
    graph_height = (max_y - min_y) or 1.0
    scale = min(
        (bounds.width - 2 * padding) / graph_width,
        (bounds.height - 2 * padding) / graph_height,
        max_scale,
    )

    cur_x = (min_x + max_x) / 2
    cur_y = (min_y + max_y) / 2
    target_x, target_y = bounds.center
    fitted = {}
    for nid, p in positions.items():
        x, y = _xy(p)
        fitted[nid] = Position(target_x + (x - cur_x) * scale, target_y + (y - cur_y) * scale)
    return fitted


def group_hulls(
    positions: Mapping,
    groups: Mapping,
    margin: float = 30.0,
) -> Dict[str, List[Point]]:
    """
    Expanded convex hull per group.

    Args:
        positions: node id -> Position or (x, y).
        groups: group label -> iterable of node ids. Ids without a
                position are ignored.
        margin: Outward expansion applied to each hull.
    """
    hulls = {}
    for label, members in groups.items():
        pts = [_xy(positions[nid]) for nid in members if nid in positions]
        if not pts:
            continue
        hulls[label] = expand_hull(convex_hull(pts), margin)
    return hulls
