# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Fruchterman-Reingold layout with NumPy acceleration.

"""
Single-shot force-directed layout (Fruchterman-Reingold).

Uses vectorized NumPy operations for the O(n^2) repulsion step. Unlike
the phased simulator there are no leaf or hub heuristics: all pairs repel
with k^2 / d, edges attract with d^2 / k, and the step size cools
linearly over a fixed iteration count. Initial positions come from a
seeded RNG, so the result is deterministic.
"""

import math
from typing import Any, Dict, List, Tuple

import numpy as np

from ..models import Bounds, Edge, Node, Position
from .base import LayoutAlgorithm, inner_box

MIN_DISTANCE = 0.01


def edge_index_arrays(node_ids: List[str], edges: List[Edge]) -> Tuple[np.ndarray, np.ndarray]:
    """Source/target index arrays for edges whose endpoints are known."""
    id_to_idx = {nid: i for i, nid in enumerate(node_ids)}
    src, tgt = [], []
    for edge in edges:
        i = id_to_idx.get(edge.source)
        j = id_to_idx.get(edge.target)
        if i is None or j is None or i == j:
            continue
        src.append(i)
        tgt.append(j)
    return np.array(src, dtype=int), np.array(tgt, dtype=int)


def seeded_scatter(n: int, bounds: Bounds, seed: int) -> np.ndarray:
    """(n, 2) uniform positions inside the canvas margin."""
    min_x, max_x, min_y, max_y = inner_box(bounds)
    rng = np.random.default_rng(seed)
    return np.column_stack([
        rng.uniform(min_x, max_x, size=n),
        rng.uniform(min_y, max_y, size=n),
    ])


class FruchtermanLayout(LayoutAlgorithm):
    """
    Fruchterman-Reingold layout.

    Options:
        - iterations: Number of iterations (default: 50)
        - temperature: Initial maximum step in pixels (default: 100)
        - seed: RNG seed for the initial scatter (default: 0)
    """

    name = 'fruchterman'
    default_options = {
        'iterations': 50,
        'temperature': 100.0,
        'seed': 0,
    }

    def _layout(
        self,
        nodes: List[Node],
        edges: List[Edge],
        options: Dict[str, Any],
        bounds: Bounds,
    ) -> Tuple[Dict[str, Position], Dict[str, Any]]:
        iterations = int(options['iterations'])
        initial_temperature = float(options['temperature'])
        node_ids = [node.id for node in nodes]
        n = len(node_ids)

        positions = seeded_scatter(n, bounds, int(options['seed']))
        src, tgt = edge_index_arrays(node_ids, edges)
        k = math.sqrt(max(bounds.area, 1.0) / n)
        min_x, max_x, min_y, max_y = inner_box(bounds)

        for iteration in range(iterations):
            diff = positions[:, np.newaxis, :] - positions[np.newaxis, :, :]  # (n, n, 2)
            dist = np.sqrt(np.sum(diff ** 2, axis=2))
            dist = np.maximum(dist, MIN_DISTANCE)

            repulsion = (k * k) / dist
            np.fill_diagonal(repulsion, 0.0)
            displacement = np.sum(diff / dist[:, :, np.newaxis] * repulsion[:, :, np.newaxis], axis=1)

            if len(src):
                delta = positions[src] - positions[tgt]
                edge_dist = np.maximum(np.linalg.norm(delta, axis=1), MIN_DISTANCE)
                attraction = (edge_dist * edge_dist) / k
                pull = delta / edge_dist[:, np.newaxis] * attraction[:, np.newaxis]
                np.subtract.at(displacement, src, pull)
                np.add.at(displacement, tgt, pull)

            temperature = initial_temperature * (1 - iteration / iterations)
            length = np.maximum(np.linalg.norm(displacement, axis=1), MIN_DISTANCE)
            step = np.minimum(length, temperature)
            positions += displacement / length[:, np.newaxis] * step[:, np.newaxis]

            # Keep within bounds
            positions[:, 0] = np.clip(positions[:, 0], min_x, max_x)
            positions[:, 1] = np.clip(positions[:, 1], min_y, max_y)

        return {
            node_ids[i]: Position(float(positions[i, 0]), float(positions[i, 1]))
            for i in range(n)
        }, {}


def compute(nodes, edges=(), bounds=None, **options):
    """Compute layout with keyword options."""
    return FruchtermanLayout().compute(nodes, edges, options, bounds)
