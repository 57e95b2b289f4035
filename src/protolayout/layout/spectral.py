# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Spectral layout from graph Laplacian eigenvectors.

"""
Spectral layout.

Builds the undirected Laplacian L = D - A and uses the eigenvectors of
the second and third smallest eigenvalues as x and y coordinates, scaled
into the canvas margin. Eigenvector signs are arbitrary, so each vector
is flipped until its largest-magnitude component is positive.
"""

from typing import Any, Dict, List, Tuple

import numpy as np
from scipy.linalg import eigh

from ..models import Bounds, Edge, Node, Position
from .base import LayoutAlgorithm, inner_box
from .fruchterman import edge_index_arrays


def laplacian(n: int, src: np.ndarray, tgt: np.ndarray) -> np.ndarray:
    """Dense unweighted Laplacian; parallel edges count once."""
    adjacency = np.zeros((n, n))
    adjacency[src, tgt] = 1.0
    adjacency[tgt, src] = 1.0
    return np.diag(adjacency.sum(axis=1)) - adjacency


def _normalise_sign(vector: np.ndarray) -> np.ndarray:
    pivot = int(np.argmax(np.abs(vector)))
    return -vector if vector[pivot] < 0 else vector


def _scale(vector: np.ndarray, low: float, high: float) -> np.ndarray:
    span = float(vector.max() - vector.min())
    if span < 1e-12:
        span = 1.0
    return low + (vector - vector.min()) / span * (high - low)


class SpectralLayout(LayoutAlgorithm):
    """Spectral layout. Takes no options."""

    name = 'spectral'

    def _layout(
        self,
        nodes: List[Node],
        edges: List[Edge],
        options: Dict[str, Any],
        bounds: Bounds,
    ) -> Tuple[Dict[str, Position], Dict[str, Any]]:
        node_ids = [node.id for node in nodes]
        n = len(node_ids)
        src, tgt = edge_index_arrays(node_ids, edges)

        eigenvalues, vectors = eigh(laplacian(n, src, tgt))
        min_x, max_x, min_y, max_y = inner_box(bounds)

        xs = _scale(_normalise_sign(vectors[:, 1]), min_x, max_x)
        if n > 2:
            ys = _scale(_normalise_sign(vectors[:, 2]), min_y, max_y)
        else:
            ys = np.full(n, bounds.height / 2)

        positions = {
            nid: Position(float(x), float(y)) for nid, x, y in zip(node_ids, xs, ys)
        }
        return positions, {'eigenvalues': [float(v) for v in eigenvalues[1:3]]}


def compute(nodes, edges=(), bounds=None, **options):
    """Compute layout with keyword options."""
    return SpectralLayout().compute(nodes, edges, options, bounds)
