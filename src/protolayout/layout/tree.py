# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Tree layout (simplified Reingold-Tilford).

"""
Tree layout arranging nodes as a forest by edge direction.

Roots are nodes without incoming edges, or, when every node has a
parent, the top tenth of nodes by out-degree. Leaves take consecutive
slots left to right in visitation order and each parent is centred over
the span of its children. Unreached nodes become single-node trees,
trees sit side by side with a gap, and the whole forest is centred on
the canvas.
"""

from typing import Any, Dict, Iterator, List, Tuple

from ..geometry import center_positions
from ..models import Bounds, Edge, Node, Position
from ..topology import DirectedView, build_directed
from .base import MARGIN, LayoutAlgorithm


class _TreeNode:
    __slots__ = ('id', 'level', 'children', 'slot')

    def __init__(self, node_id: str, level: int):
        self.id = node_id
        self.level = level
        self.children: List['_TreeNode'] = []
        self.slot = 0.0


def select_roots(directed: DirectedView) -> List[str]:
    """Zero in-degree nodes, else the top max(1, n // 10) by out-degree."""
    roots = directed.roots()
    if roots:
        return roots
    count = max(1, len(directed.node_ids) // 10)
    ranked = sorted(directed.node_ids, key=lambda nid: -directed.out_degree(nid))
    return ranked[:count]


def build_forest(directed: DirectedView, roots: List[str]) -> List[_TreeNode]:
    """Depth-first spanning forest; a node joins the first tree that reaches it."""
    visited = set()
    forest = []

    def grow(root_id: str) -> _TreeNode:
        root = _TreeNode(root_id, 0)
        visited.add(root_id)
        stack: List[Tuple[_TreeNode, Iterator[str]]] = [(root, iter(directed.children[root_id]))]
        while stack:
            node, pending = stack[-1]
            for child_id in pending:
                if child_id not in visited:
                    visited.add(child_id)
                    child = _TreeNode(child_id, node.level + 1)
                    node.children.append(child)
                    stack.append((child, iter(directed.children[child_id])))
                    break
            else:
                stack.pop()
        return root

    for root_id in roots:
        if root_id not in visited:
            forest.append(grow(root_id))
    for nid in directed.node_ids:
        if nid not in visited:
            visited.add(nid)
            forest.append(_TreeNode(nid, 0))
    return forest


def preorder(root: _TreeNode) -> List[_TreeNode]:
    order = []
    stack = [root]
    while stack:
        node = stack.pop()
        order.append(node)
        stack.extend(reversed(node.children))
    return order


def assign_slots(forest: List[_TreeNode], tree_gap: float) -> List[_TreeNode]:
    """Give every tree node a horizontal slot; returns all nodes in preorder."""
    everything = []
    offset = 0.0
    for tree in forest:
        order = preorder(tree)
        leaves = 0
        for node in order:
            if not node.children:
                node.slot = offset + leaves
                leaves += 1
        for node in reversed(order):
            if node.children:
                node.slot = (node.children[0].slot + node.children[-1].slot) / 2
        offset += leaves + tree_gap
        everything.extend(order)
    return everything


class TreeLayout(LayoutAlgorithm):
    """
    Tree layout.

    Options:
        - direction: 'vertical' (top-down) or 'horizontal' (left-right)
          (default: 'vertical')
        - level_spacing: Distance between levels (default: 150)
        - node_spacing: Distance between adjacent slots (default: 120)
        - tree_gap: Empty slots between trees of a forest (default: 2)

    Auxiliary output:
        - levels: node id -> depth
    """

    name = 'tree'
    default_options = {
        'direction': 'vertical',
        'level_spacing': 150,
        'node_spacing': 120,
        'tree_gap': 2,
    }

    def _layout(
        self,
        nodes: List[Node],
        edges: List[Edge],
        options: Dict[str, Any],
        bounds: Bounds,
    ) -> Tuple[Dict[str, Position], Dict[str, Any]]:
        directed = build_directed(nodes, edges)
        forest = build_forest(directed, select_roots(directed))
        placed = assign_slots(forest, float(options['tree_gap']))

        level_spacing = float(options['level_spacing'])
        node_spacing = float(options['node_spacing'])
        horizontal = options['direction'] == 'horizontal'

        raw: Dict[str, Position] = {}
        for node in placed:
            along = MARGIN + node.slot * node_spacing
            depth = MARGIN + node.level * level_spacing
            raw[node.id] = Position(depth, along) if horizontal else Position(along, depth)

        positions = center_positions(raw, bounds)
        return positions, {'levels': {node.id: node.level for node in placed}}


def compute(nodes, edges=(), bounds=None, **options):
    """Compute layout with keyword options."""
    return TreeLayout().compute(nodes, edges, options, bounds)
