# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Hierarchical level layout.

"""
Hierarchical layout spreading tree levels across the whole canvas.

Levels come from a depth-first spanning forest grown from the roots
(nodes without incoming edges, or the minimum in-degree nodes when the
graph is cyclic). Levels are spread evenly between the 50 px margins
along the main axis, and nodes within a level are spread evenly across
the other axis; a lone node on a level sits on the centre line.
"""

from typing import Any, Dict, List, Tuple

from ..models import Bounds, Edge, Node, Position
from ..topology import DirectedView, build_directed
from .base import MARGIN, LayoutAlgorithm
from .tree import preorder, build_forest


def min_in_degree_roots(directed: DirectedView) -> List[str]:
    roots = directed.roots()
    if roots:
        return roots
    lowest = min(directed.in_degree(nid) for nid in directed.node_ids)
    return [nid for nid in directed.node_ids if directed.in_degree(nid) == lowest]


class HierarchicalLayout(LayoutAlgorithm):
    """
    Hierarchical layout.

    Options:
        - direction: 'top-bottom', 'bottom-top', 'left-right' or
          'right-left' (default: 'top-bottom')

    Auxiliary output:
        - levels: node id -> level
    """

    name = 'hierarchical'
    default_options = {
        'direction': 'top-bottom',
    }

    def _layout(
        self,
        nodes: List[Node],
        edges: List[Edge],
        options: Dict[str, Any],
        bounds: Bounds,
    ) -> Tuple[Dict[str, Position], Dict[str, Any]]:
        directed = build_directed(nodes, edges)
        forest = build_forest(directed, min_in_degree_roots(directed))

        level_nodes: Dict[int, List[str]] = {}
        levels: Dict[str, int] = {}
        for tree in forest:
            for node in preorder(tree):
                level_nodes.setdefault(node.level, []).append(node.id)
                levels[node.id] = node.level

        max_level = max(level_nodes)
        direction = options['direction']
        horizontal = direction in ('left-right', 'right-left')
        reversed_axis = direction in ('bottom-top', 'right-left')
        width, height = bounds.width, bounds.height
        level_span = max(max_level, 1)

        positions: Dict[str, Position] = {}
        for level, members in level_nodes.items():
            primary = (max_level - level) if reversed_axis else level
            count = len(members)
            for index, nid in enumerate(members):
                if horizontal:
                    x = (primary / level_span) * (width - 2 * MARGIN) + MARGIN
                    y = (index / (count - 1)) * (height - 2 * MARGIN) + MARGIN if count > 1 else height / 2
                else:
                    x = (index / (count - 1)) * (width - 2 * MARGIN) + MARGIN if count > 1 else width / 2
                    y = (primary / level_span) * (height - 2 * MARGIN) + MARGIN
                positions[nid] = Position(x, y)

        return positions, {'levels': levels}


def compute(nodes, edges=(), bounds=None, **options):
    """Compute layout with keyword options."""
    return HierarchicalLayout().compute(nodes, edges, options, bounds)
