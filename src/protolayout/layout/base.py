# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)

"""Base layout algorithm contract.

Defines the interface every layout algorithm implements.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..models import (
    Bounds,
    Edge,
    EdgeLike,
    LayoutResult,
    Node,
    NodeLike,
    Position,
    coerce_edges,
    coerce_nodes,
)

logger = logging.getLogger(__name__)

# Canvas margin shared by the canvas-filling layouts
MARGIN = 50.0


class LayoutAlgorithm(ABC):
    """Abstract base class for layout algorithms.

    Subclasses implement ``_layout``; ``compute`` handles input coercion,
    option defaults, and the empty and single-node cases so every
    algorithm honours the same contract:

    - every input node id appears exactly once in the output
    - identical inputs give identical outputs
    - zero nodes -> empty result, one node -> canvas centre, unless the
      algorithm keeps preset positions and the node carries one
    """

    name: str = ""
    iterative: bool = False
    keeps_preset_positions: bool = False
    default_options: Dict[str, Any] = {}

    def compute(
        self,
        nodes: Iterable[NodeLike],
        edges: Iterable[EdgeLike] = (),
        options: Optional[Dict[str, Any]] = None,
        bounds=None,
    ) -> LayoutResult:
        """Compute positions for a graph.

        Args:
            nodes: Nodes (dataclasses or dicts)
            edges: Edges (dataclasses or dicts); dangling ids are tolerated
            options: Algorithm-specific options, merged over the defaults
            bounds: Canvas Bounds, {'width', 'height'} mapping or (w, h)

        Returns:
            LayoutResult mapping node id to Position
        """
        bounds = Bounds.from_value(bounds)
        opts = dict(self.default_options)
        opts.update(options or {})

        node_list = _dedupe(coerce_nodes(nodes))
        edge_list = coerce_edges(edges)

        if not node_list:
            return LayoutResult({}, name=self.name)
        if len(node_list) == 1:
            node = node_list[0]
            if self.keeps_preset_positions and node.position is not None:
                x, y = node.position
            else:
                x, y = bounds.center
            return LayoutResult({node.id: Position(float(x), float(y))}, name=self.name)

        started = time.perf_counter()
        positions, auxiliary = self._layout(node_list, edge_list, opts, bounds)
        logger.debug(
            "%s layout: %d nodes in %.1f ms",
            self.name, len(node_list), (time.perf_counter() - started) * 1000,
        )
        return LayoutResult(positions, auxiliary, name=self.name)

    @abstractmethod
    def _layout(
        self,
        nodes: List[Node],
        edges: List[Edge],
        options: Dict[str, Any],
        bounds: Bounds,
    ) -> Tuple[Dict[str, Position], Dict[str, Any]]:
        """Return (positions, auxiliary) for two or more nodes."""
        ...


def _dedupe(nodes: List[Node]) -> List[Node]:
    """Drop repeated ids, keeping the first occurrence."""
    seen = set()
    unique = []
    for node in nodes:
        if node.id not in seen:
            seen.add(node.id)
            unique.append(node)
    return unique


def inner_box(bounds: Bounds, margin: float = MARGIN) -> Tuple[float, float, float, float]:
    """(min_x, max_x, min_y, max_y) of the canvas minus ``margin``, never inverted."""
    mx = min(margin, max(bounds.width, 0.0) / 2)
    my = min(margin, max(bounds.height, 0.0) / 2)
    return (mx, max(mx, bounds.width - mx), my, max(my, bounds.height - my))
