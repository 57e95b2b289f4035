# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Radial layout algorithm.

"""
Radial layout placing hub nodes at the centre with rings radiating out.

The top fifth of nodes by degree form ring 0. Each following ring holds
the unplaced nodes adjacent to the previous ring; when none are, the
lowest-degree unplaced node seeds the ring. After ``max_rings`` rings any
remaining nodes share one outermost ring.
"""

import math
from typing import Any, Dict, List, Tuple

from ..models import Bounds, Edge, Node, Position
from ..topology import build_adjacency
from .base import LayoutAlgorithm


class RadialLayout(LayoutAlgorithm):
    """
    Radial layout.

    Options:
        - inner_radius: Radius offset of the first ring (default: 100)
        - radius_step: Distance between rings (default: 120)
        - hub_fraction: Share of nodes placed on the centre ring (default: 0.2)
        - max_rings: Rings built by adjacency before the overflow ring (default: 10)
        - start_angle: Angle of the first node on each ring (default: 0)

    Auxiliary output:
        - rings: node id -> ring index
    """

    name = 'radial'
    default_options = {
        'inner_radius': 100,
        'radius_step': 120,
        'hub_fraction': 0.2,
        'max_rings': 10,
        'start_angle': 0.0,
    }

    def _layout(
        self,
        nodes: List[Node],
        edges: List[Edge],
        options: Dict[str, Any],
        bounds: Bounds,
    ) -> Tuple[Dict[str, Position], Dict[str, Any]]:
        view = build_adjacency(nodes, edges)
        node_ids = view.node_ids

        by_degree = sorted(node_ids, key=lambda nid: -view.degree(nid))
        hub_count = max(1, math.ceil(len(node_ids) * float(options['hub_fraction'])))

        rings: Dict[str, int] = {nid: 0 for nid in by_degree[:hub_count]}
        remaining = [nid for nid in node_ids if nid not in rings]

        ring = 1
        while remaining and ring < int(options['max_rings']):
            current = [
                nid for nid in remaining
                if any(rings.get(nbr) == ring - 1 for nbr in view.neighbors(nid))
            ]
            if not current:
                current = [min(remaining, key=view.degree)]
            for nid in current:
                rings[nid] = ring
            placed = set(current)
            remaining = [nid for nid in remaining if nid not in placed]
            ring += 1

        for nid in remaining:
            rings[nid] = ring

        groups: Dict[int, List[str]] = {}
        for nid in node_ids:
            groups.setdefault(rings[nid], []).append(nid)

        cx, cy = bounds.center
        inner = float(options['inner_radius'])
        step = float(options['radius_step'])
        start = float(options['start_angle'])

        positions: Dict[str, Position] = {}
        for ring_index, members in groups.items():
            if ring_index == 0 and len(members) == 1:
                positions[members[0]] = Position(cx, cy)
                continue
            radius = inner + ring_index * step
            count = len(members)
            for i, nid in enumerate(members):
                angle = start + 2 * math.pi * i / count
                positions[nid] = Position(cx + math.cos(angle) * radius, cy + math.sin(angle) * radius)

        return positions, {'rings': rings}


def compute(nodes, edges=(), bounds=None, **options):
    """Compute layout with keyword options."""
    return RadialLayout().compute(nodes, edges, options, bounds)
