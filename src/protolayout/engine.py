# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Layout engine entry points.

"""
Engine entry points.

A ``LayoutRequest`` names an algorithm, its options and the canvas. The
UI layer passes it to ``run_layout`` for a one-shot result, or to a
``LayoutSession`` when it wants to animate the iterative layout one frame
per tick and keep control of when to stop.

Example:
    session = LayoutSession(LayoutRequest('force'), nodes, edges)
    while not session.finished:
        positions = session.step(dragged_node_id=held)
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional

from .config import EngineConfig
from .models import Bounds, EdgeLike, LayoutResult, NodeLike, Position, coerce_edges, coerce_nodes
from .layout import get_layout

logger = logging.getLogger(__name__)


@dataclass
class LayoutRequest:
    """Explicit command to lay out a graph."""
    algorithm: str
    options: Dict[str, Any] = field(default_factory=dict)
    bounds: Bounds = field(default_factory=Bounds)

    @classmethod
    def from_config(cls, algorithm: str, config: EngineConfig) -> 'LayoutRequest':
        """Request seeded with the configured options, bounds and physics."""
        options = config.layout_options(algorithm)
        if get_layout(algorithm).iterative:
            options.setdefault('physics', config.physics)
            options.setdefault('iterations', config.max_iterations)
        return cls(algorithm, options, config.bounds)


def run_layout(
    request: LayoutRequest,
    nodes: Iterable[NodeLike],
    edges: Iterable[EdgeLike] = (),
) -> LayoutResult:
    """Run the requested layout to completion."""
    layout = get_layout(request.algorithm)
    return layout.compute(nodes, edges, request.options, request.bounds)


class LayoutSession:
    """
    Frame-by-frame driver for a layout request.

    Iterative layouts advance one simulator frame per ``step``. Deterministic
    layouts compute their result on the first ``step`` and are finished
    from then on.
    """

    def __init__(
        self,
        request: LayoutRequest,
        nodes: Iterable[NodeLike],
        edges: Iterable[EdgeLike] = (),
        positions: Optional[Dict[str, Position]] = None,
    ):
        self.request = request
        self.layout = get_layout(request.algorithm)
        self.nodes = coerce_nodes(nodes)
        self.edges = coerce_edges(edges)
        self._simulator = None
        self._done = False

        if self.layout.iterative and self.nodes:
            self._simulator = self.layout.simulator_for(
                self.nodes, self.edges, request.options, request.bounds
            )
            self._positions = dict(positions) if positions else self._simulator.initial_positions()
        else:
            self._positions = dict(positions or {})

    @property
    def positions(self) -> Dict[str, Position]:
        """Positions of the last completed frame."""
        return dict(self._positions)

    @property
    def finished(self) -> bool:
        if self._simulator is not None:
            return self._simulator.finished
        return self._done

    @property
    def iteration(self) -> int:
        if self._simulator is not None:
            return self._simulator.iteration
        return 1 if self._done else 0

    def step(self, dragged_node_id: Optional[str] = None) -> Dict[str, Position]:
        """Advance one frame; stepping a finished session is a no-op."""
        if self.finished:
            return self.positions

        if self._simulator is None:
            result = self.layout.compute(
                self.nodes, self.edges, self.request.options, self.request.bounds
            )
            self._positions = result.positions
            self._done = True
        else:
            self._positions = self._simulator.step(self._positions, dragged_node_id)
            if self._simulator.finished:
                logger.info(
                    "%s session finished after %d frame(s)",
                    self.layout.name, self._simulator.iteration,
                )
        return self.positions

    def extend(self, frames: int) -> None:
        """Allow ``frames`` more steps of an iterative layout."""
        if self._simulator is not None:
            self._simulator.extend(frames)
