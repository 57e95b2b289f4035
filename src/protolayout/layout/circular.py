# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Circular layout algorithm.

"""
Circular layout placing all nodes on a circle.

Nodes are evenly distributed around the circumference in input order,
which can help visualize cyclic relationships.
"""

import math
from typing import Any, Dict, List, Tuple

from ..models import Bounds, Edge, Node, Position
from .base import LayoutAlgorithm


class CircularLayout(LayoutAlgorithm):
    """
    Circular layout.

    Options:
        - radius: Circle radius (default: None, meaning min(width, height) / 3)
        - start_angle: Starting angle in radians (default: -pi/2, top)
        - clockwise: Direction of layout (default: False)
    """

    name = 'circle'
    default_options = {
        'radius': None,
        'start_angle': -math.pi / 2,
        'clockwise': False,
    }

    def _layout(
        self,
        nodes: List[Node],
        edges: List[Edge],
        options: Dict[str, Any],
        bounds: Bounds,
    ) -> Tuple[Dict[str, Position], Dict[str, Any]]:
        center_x, center_y = bounds.center
        radius = options['radius']
        if radius is None:
            radius = min(bounds.width, bounds.height) / 3
        start_angle = float(options['start_angle'])
        direction = -1 if options['clockwise'] else 1

        n = len(nodes)
        positions: Dict[str, Position] = {}
        for i, node in enumerate(nodes):
            angle = start_angle + direction * (2 * math.pi * i / n)
            positions[node.id] = Position(
                center_x + radius * math.cos(angle),
                center_y + radius * math.sin(angle),
            )
        return positions, {}


def compute(nodes, edges=(), bounds=None, **options):
    """Compute layout with keyword options."""
    return CircularLayout().compute(nodes, edges, options, bounds)
