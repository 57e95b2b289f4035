# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Preset layout: keep stored positions.

"""
Preset layout.

Nodes that arrive with a position keep it. Nodes without one are placed
on the canvas-centred grid, in input order.
"""

from typing import Any, Dict, List, Tuple

from ..models import Bounds, Edge, Node, Position
from .base import LayoutAlgorithm
from .grid import grid_positions


class PresetLayout(LayoutAlgorithm):
    """
    Preset layout.

    Options:
        - cell_width: Grid cell width for unplaced nodes (default: 120)
        - cell_height: Grid cell height for unplaced nodes (default: 80)
    """

    name = 'preset'
    keeps_preset_positions = True
    default_options = {
        'cell_width': 120,
        'cell_height': 80,
    }

    def _layout(
        self,
        nodes: List[Node],
        edges: List[Edge],
        options: Dict[str, Any],
        bounds: Bounds,
    ) -> Tuple[Dict[str, Position], Dict[str, Any]]:
        positions: Dict[str, Position] = {}
        unplaced = []
        for node in nodes:
            if node.position is not None:
                positions[node.id] = Position(float(node.position[0]), float(node.position[1]))
            else:
                unplaced.append(node.id)

        positions.update(grid_positions(
            unplaced,
            bounds,
            cell_width=float(options['cell_width']),
            cell_height=float(options['cell_height']),
        ))
        return positions, {'unplaced': unplaced}


def compute(nodes, edges=(), bounds=None, **options):
    """Compute layout with keyword options."""
    return PresetLayout().compute(nodes, edges, options, bounds)
