# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Layered (Sugiyama-style) layout.

"""
Layered layout for directed graphs.

Each node goes to the layer equal to the longest path reaching it from
any root (node without incoming edges). Layers come from frontier
propagation that keeps the maximum over all incoming paths; on cyclic
input the depth is capped at n - 1 so propagation terminates. Nodes no
root reaches stay on layer 0. Within a layer nodes keep input order and
are evenly spaced; layers are evenly spaced along the other axis, with
the whole drawing centred on the canvas.
"""

from typing import Any, Dict, List, Tuple

from ..models import Bounds, Edge, Node, Position
from ..topology import DirectedView, build_directed
from .base import LayoutAlgorithm

DIRECTIONS = {
    'TB': 'TB', 'top-bottom': 'TB', 'top-down': 'TB',
    'BT': 'BT', 'bottom-top': 'BT', 'bottom-up': 'BT',
    'LR': 'LR', 'left-right': 'LR',
    'RL': 'RL', 'right-left': 'RL',
}


def longest_path_layers(directed: DirectedView) -> Dict[str, int]:
    """Layer index per node by longest path from the roots."""
    n = len(directed.node_ids)
    cap = max(0, n - 1)
    layer: Dict[str, int] = {nid: 0 for nid in directed.roots()}
    frontier = list(layer)

    while frontier:
        next_frontier = []
        queued = set()
        for nid in frontier:
            depth = layer[nid] + 1
            if depth > cap:
                continue
            for child in directed.children[nid]:
                if depth > layer.get(child, -1):
                    layer[child] = depth
                    if child not in queued:
                        queued.add(child)
                        next_frontier.append(child)
        frontier = next_frontier

    for nid in directed.node_ids:
        layer.setdefault(nid, 0)
    return layer


class SugiyamaLayout(LayoutAlgorithm):
    """
    Layered layout.

    Options:
        - direction: 'TB', 'BT', 'LR' or 'RL' (long names such as
          'top-bottom' are accepted) (default: 'TB')
        - rank_separation: Distance between layers (default: 100)
        - node_separation: Distance between nodes in a layer (default: 80)

    Auxiliary output:
        - layers: node id -> layer index
    """

    name = 'sugiyama'
    default_options = {
        'direction': 'TB',
        'rank_separation': 100,
        'node_separation': 80,
    }

    def _layout(
        self,
        nodes: List[Node],
        edges: List[Edge],
        options: Dict[str, Any],
        bounds: Bounds,
    ) -> Tuple[Dict[str, Position], Dict[str, Any]]:
        directed = build_directed(nodes, edges)
        node_layer = longest_path_layers(directed)

        layers: List[List[str]] = [[] for _ in range(max(node_layer.values()) + 1)]
        for nid in directed.node_ids:
            layers[node_layer[nid]].append(nid)

        direction = DIRECTIONS.get(options['direction'], 'TB')
        rank_sep = float(options['rank_separation'])
        node_sep = float(options['node_separation'])
        width, height = bounds.width, bounds.height
        rank_span = (len(layers) - 1) * rank_sep

        positions: Dict[str, Position] = {}
        for layer_index, members in enumerate(layers):
            node_span = (len(members) - 1) * node_sep
            for i, nid in enumerate(members):
                if direction in ('TB', 'BT'):
                    x = (width - node_span) / 2 + i * node_sep
                    y = (height - rank_span) / 2 + layer_index * rank_sep
                    if direction == 'BT':
                        y = height - y
                else:
                    x = (width - rank_span) / 2 + layer_index * rank_sep
                    y = (height - node_span) / 2 + i * node_sep
                    if direction == 'RL':
                        x = width - x
                positions[nid] = Position(x, y)

        return positions, {'layers': node_layer}


def compute(nodes, edges=(), bounds=None, **options):
    """Compute layout with keyword options."""
    return SugiyamaLayout().compute(nodes, edges, options, bounds)
