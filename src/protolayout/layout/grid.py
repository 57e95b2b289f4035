# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Grid layout algorithm.

"""
Grid layout placing nodes in a regular grid pattern.

Simple layout useful for debugging, as the fallback for the preset
layout, or as initial positions for the iterative simulator. The grid
is centred on the canvas.
"""

import math
from typing import Any, Dict, List, Tuple

from ..models import Bounds, Edge, Node, Position
from .base import LayoutAlgorithm


def grid_positions(
    node_ids: List[str],
    bounds: Bounds,
    cell_width: float = 120,
    cell_height: float = 80,
    columns: int = 0,
) -> Dict[str, Position]:
    """Row-major grid of ``node_ids`` centred on the canvas."""
    n = len(node_ids)
    if n == 0:
        return {}

    # Auto-calculate columns if not specified
    if columns <= 0:
        columns = math.ceil(math.sqrt(n))
    rows = math.ceil(n / columns)

    origin_x = bounds.width / 2 - (min(columns, n) - 1) * cell_width / 2
    origin_y = bounds.height / 2 - (rows - 1) * cell_height / 2

    positions: Dict[str, Position] = {}
    for i, nid in enumerate(node_ids):
        row = i // columns
        col = i % columns
        positions[nid] = Position(origin_x + col * cell_width, origin_y + row * cell_height)
    return positions


class GridLayout(LayoutAlgorithm):
    """
    Grid layout.

    Options:
        - cell_width: Width of each grid cell (default: 120)
        - cell_height: Height of each grid cell (default: 80)
        - columns: Number of columns (default: auto based on sqrt(n))
    """

    name = 'grid'
    default_options = {
        'cell_width': 120,
        'cell_height': 80,
        'columns': 0,
    }

    def _layout(
        self,
        nodes: List[Node],
        edges: List[Edge],
        options: Dict[str, Any],
        bounds: Bounds,
    ) -> Tuple[Dict[str, Position], Dict[str, Any]]:
        positions = grid_positions(
            [node.id for node in nodes],
            bounds,
            cell_width=float(options['cell_width']),
            cell_height=float(options['cell_height']),
            columns=int(options['columns'] or 0),
        )
        return positions, {}


def compute(nodes, edges=(), bounds=None, **options):
    """Compute layout with keyword options."""
    return GridLayout().compute(nodes, edges, options, bounds)
