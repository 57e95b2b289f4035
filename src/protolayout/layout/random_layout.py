# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Seeded random layout.

"""Uniform random scatter inside the canvas margin, reproducible by seed."""

from typing import Any, Dict, List, Tuple

from ..models import Bounds, Edge, Node, Position
from .base import LayoutAlgorithm
from .fruchterman import seeded_scatter


class RandomLayout(LayoutAlgorithm):
    """
    Random layout.

    Options:
        - seed: RNG seed (default: 0)
    """

    name = 'random'
    default_options = {'seed': 0}

    def _layout(
        self,
        nodes: List[Node],
        edges: List[Edge],
        options: Dict[str, Any],
        bounds: Bounds,
    ) -> Tuple[Dict[str, Position], Dict[str, Any]]:
        points = seeded_scatter(len(nodes), bounds, int(options['seed']))
        return {
            node.id: Position(float(x), float(y)) for node, (x, y) in zip(nodes, points)
        }, {}


def compute(nodes, edges=(), bounds=None, **options):
    """Compute layout with keyword options."""
    return RandomLayout().compute(nodes, edges, options, bounds)
