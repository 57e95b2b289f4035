# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Kamada-Kawai style spring layout.

"""
Spring layout minimizing stress against graph-theoretic distances.

Every pair of nodes is joined by a spring whose rest length is the
shortest-path distance times ``spring_length``. Nodes start on a circle
and are moved one at a time against their energy gradient, with steps
capped at 10 px, until the largest step drops below ``epsilon`` or the
iteration budget runs out. Pairs in different components use one more
than the largest finite distance.
"""

from typing import Any, Dict, List, Tuple

import numpy as np
from scipy.sparse import csr_matrix
from scipy.sparse.csgraph import shortest_path

from ..models import Bounds, Edge, Node, Position
from .base import LayoutAlgorithm, inner_box
from .fruchterman import MIN_DISTANCE, edge_index_arrays

MAX_STEP = 10.0


def graph_distances(n: int, src: np.ndarray, tgt: np.ndarray) -> np.ndarray:
    """All-pairs hop distances; unreachable pairs become max_finite + 1."""
    if len(src):
        data = np.ones(len(src))
        adjacency = csr_matrix((data, (src, tgt)), shape=(n, n))
        dist = shortest_path(adjacency, method='D', directed=False, unweighted=True)
    else:
        dist = np.full((n, n), np.inf)
        np.fill_diagonal(dist, 0.0)

    finite = dist[np.isfinite(dist)]
    fill = (finite.max() if finite.size else 0.0) + 1.0
    dist[~np.isfinite(dist)] = fill
    return dist


class KamadaKawaiLayout(LayoutAlgorithm):
    """
    Kamada-Kawai layout.

    Options:
        - spring_constant: Spring constant (default: 1.0)
        - spring_length: Rest length per hop (default: 50)
        - max_iterations: Maximum sweeps over all nodes (default: 100)
        - epsilon: Convergence threshold on the largest step (default: 0.1)
    """

    name = 'kamada_kawai'
    default_options = {
        'spring_constant': 1.0,
        'spring_length': 50.0,
        'max_iterations': 100,
        'epsilon': 0.1,
    }

    def _layout(
        self,
        nodes: List[Node],
        edges: List[Edge],
        options: Dict[str, Any],
        bounds: Bounds,
    ) -> Tuple[Dict[str, Position], Dict[str, Any]]:
        spring_constant = float(options['spring_constant'])
        spring_length = float(options['spring_length'])
        epsilon = float(options['epsilon'])
        node_ids = [node.id for node in nodes]
        n = len(node_ids)

        # Initialize positions in a circle
        cx, cy = bounds.center
        radius = min(bounds.width, bounds.height) / 3
        angles = 2 * np.pi * np.arange(n) / n
        positions = np.column_stack([cx + np.cos(angles) * radius, cy + np.sin(angles) * radius])

        src, tgt = edge_index_arrays(node_ids, edges)
        ideal = graph_distances(n, src, tgt) * spring_length
        np.fill_diagonal(ideal, 1.0)
        stiffness = spring_constant / (ideal * ideal)
        np.fill_diagonal(stiffness, 0.0)

        min_x, max_x, min_y, max_y = inner_box(bounds)
        sweeps = 0
        for sweeps in range(1, int(options['max_iterations']) + 1):
            max_delta = 0.0
            for i in range(n):
                delta = positions[i] - positions
                dist = np.maximum(np.linalg.norm(delta, axis=1), MIN_DISTANCE)
                force = stiffness[i] * (dist - ideal[i])
                gradient = np.sum(delta / dist[:, np.newaxis] * force[:, np.newaxis], axis=0)
                magnitude = float(np.hypot(gradient[0], gradient[1]))
                if magnitude > epsilon:
                    step = min(MAX_STEP, magnitude * 0.1)
                    positions[i] -= gradient / magnitude * step
                    positions[i, 0] = min(max(positions[i, 0], min_x), max_x)
                    positions[i, 1] = min(max(positions[i, 1], min_y), max_y)
                    max_delta = max(max_delta, step)
            if max_delta < epsilon:
                break

        return {
            node_ids[i]: Position(float(positions[i, 0]), float(positions[i, 1]))
            for i in range(n)
        }, {'sweeps': sweeps}


def compute(nodes, edges=(), bounds=None, **options):
    """Compute layout with keyword options."""
    return KamadaKawaiLayout().compute(nodes, edges, options, bounds)
