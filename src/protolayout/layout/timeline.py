# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Timeline layout with optional swimlanes.

"""
Timeline layout placing nodes on the X axis by timestamp.

Timestamped nodes span the canvas between 50 px margins, either in
proportion to their time ("relative") or evenly in time order ("equal").
An optional attribute groups nodes into horizontal swimlanes; without
one, nodes get a deterministic per-id vertical jitter around the middle
of the canvas. Nodes without a timestamp go to the right edge, after
all timestamped nodes. Stub nodes sit next to the node that references
them.
"""

import math
import zlib
from typing import Any, Dict, List, Optional, Tuple

from ..models import Bounds, Edge, Node, Position
from ..topology import build_directed
from .base import MARGIN, LayoutAlgorithm

UNKNOWN_LANE = 'unknown'
UNTIMED_STEP = 40.0


def swimlane_key(node: Node, attribute: str) -> str:
    """Lane label for a node: arrays use their first element, empty values are 'unknown'."""
    value = node.attributes.get(attribute)
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if value is None or value == '':
        return UNKNOWN_LANE
    return str(value)


def _jitter_y(node_id: str, height: float) -> float:
    fraction = (zlib.crc32(node_id.encode('utf-8')) % 10000) / 10000.0
    return height / 2 + (fraction - 0.5) * (height / 3)


def _in_window(ts: float, start: Optional[float], end: Optional[float]) -> bool:
    if start is not None and ts < start:
        return False
    if end is not None and ts > end:
        return False
    return True


class TimelineLayout(LayoutAlgorithm):
    """
    Timeline layout.

    Options:
        - swimlane_attribute: Attribute used to group nodes into lanes (default: None)
        - swimlane_sort: 'alphabetical', 'count' (descending) or 'custom'
          (encounter order) (default: 'alphabetical')
        - vertical_spacing: Minimum lane height (default: 120)
        - spacing: 'relative' or 'equal' (default: 'relative')
        - start_time / end_time: Optional time window; nodes outside it
          are treated as untimed
        - stub_offset: Distance of a stub from its parent (default: 40)

    Auxiliary output:
        - swimlanes: lane label -> y coordinate
    """

    name = 'timeline'
    default_options = {
        'swimlane_attribute': None,
        'swimlane_sort': 'alphabetical',
        'vertical_spacing': 120,
        'spacing': 'relative',
        'start_time': None,
        'end_time': None,
        'stub_offset': 40,
    }

    def _layout(
        self,
        nodes: List[Node],
        edges: List[Edge],
        options: Dict[str, Any],
        bounds: Bounds,
    ) -> Tuple[Dict[str, Position], Dict[str, Any]]:
        width, height = bounds.width, bounds.height
        attribute = options['swimlane_attribute']
        start, end = options['start_time'], options['end_time']

        stubs = [n for n in nodes if n.is_stub]
        regular = [n for n in nodes if not n.is_stub]
        timed = [
            n for n in regular
            if n.timestamp is not None and _in_window(n.timestamp, start, end)
        ]
        timed_ids = {n.id for n in timed}
        untimed = [n for n in regular if n.id not in timed_ids]

        if not timed:
            return self._circle_fallback(nodes, bounds), {'swimlanes': {}}

        order = {n.id: i for i, n in enumerate(timed)}
        timed.sort(key=lambda n: (n.timestamp, order[n.id]))
        min_time = timed[0].timestamp
        time_range = (timed[-1].timestamp - min_time) or 1
        usable = width - 2 * MARGIN

        xs: Dict[str, float] = {}
        if options['spacing'] == 'equal':
            last = max(1, len(timed) - 1)
            for i, node in enumerate(timed):
                xs[node.id] = MARGIN + (i / last) * usable
        else:
            for node in timed:
                xs[node.id] = MARGIN + ((node.timestamp - min_time) / time_range) * usable

        positions: Dict[str, Position] = {}
        swimlanes: Dict[str, float] = {}

        if attribute:
            swimlanes = self._swimlanes(timed, attribute, options, height)
            for node in timed:
                positions[node.id] = Position(xs[node.id], swimlanes[swimlane_key(node, attribute)])
        else:
            for node in timed:
                positions[node.id] = Position(xs[node.id], _jitter_y(node.id, height))

        stacked = 0
        lane_fill: Dict[str, int] = {}

        def place_untimed(node: Node) -> None:
            nonlocal stacked
            x = width - MARGIN
            if attribute:
                key = swimlane_key(node, attribute)
                lane = swimlanes.get(key)
                if lane is None:
                    y = MARGIN + stacked * UNTIMED_STEP
                    stacked += 1
                else:
                    # fan out below the lane line
                    k = lane_fill.get(key, 0)
                    lane_fill[key] = k + 1
                    y = lane + k * UNTIMED_STEP
                positions[node.id] = Position(x, y)
            else:
                positions[node.id] = Position(x, _jitter_y(node.id, height))

        for node in untimed:
            place_untimed(node)

        directed = build_directed(nodes, edges)
        offset = float(options['stub_offset'])
        stub_counts: Dict[str, int] = {}
        for stub in stubs:
            # parents reference the stub; fall back to anything it links to
            candidates = directed.parents.get(stub.id, []) + directed.children.get(stub.id, [])
            parent_id = next((c for c in candidates if c in positions), None)
            if parent_id is None:
                place_untimed(stub)
                continue
            k = stub_counts.get(parent_id, 0)
            stub_counts[parent_id] = k + 1
            parent = positions[parent_id]
            positions[stub.id] = Position(parent.x + offset, parent.y + k * offset)

        return positions, {'swimlanes': swimlanes}

    @staticmethod
    def _swimlanes(
        timed: List[Node],
        attribute: str,
        options: Dict[str, Any],
        height: float,
    ) -> Dict[str, float]:
        counts: Dict[str, int] = {}
        for node in timed:
            key = swimlane_key(node, attribute)
            counts[key] = counts.get(key, 0) + 1

        groups = list(counts)
        sort = options['swimlane_sort']
        if sort == 'alphabetical':
            groups.sort()
        elif sort == 'count':
            groups.sort(key=lambda g: -counts[g])
        # 'custom' keeps encounter order

        lane_height = max(float(options['vertical_spacing']), (height - 2 * MARGIN) / len(groups))
        return {
            group: MARGIN + i * lane_height + lane_height / 2
            for i, group in enumerate(groups)
        }

    @staticmethod
    def _circle_fallback(nodes: List[Node], bounds: Bounds) -> Dict[str, Position]:
        cx, cy = bounds.center
        radius = min(bounds.width, bounds.height) / 3
        n = len(nodes)
        return {
            node.id: Position(
                cx + math.cos(2 * math.pi * i / n) * radius,
                cy + math.sin(2 * math.pi * i / n) * radius,
            )
            for i, node in enumerate(nodes)
        }


def compute(nodes, edges=(), bounds=None, **options):
    """Compute layout with keyword options."""
    return TimelineLayout().compute(nodes, edges, options, bounds)
