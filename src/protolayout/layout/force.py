# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Iterative four-phase force layout.

"""
Registry adapter for the phased force simulator.

``compute`` plays the whole iteration budget in one call. Interactive
callers use ``simulator_for`` (via ``engine.LayoutSession``) to step the
same simulation one frame at a time.
"""

from typing import Any, Dict, List, Tuple

from ..config import PhysicsParams
from ..models import Bounds, Edge, Node, Position
from ..physics import ForceSimulator
from .base import LayoutAlgorithm


def physics_from_options(options: Dict[str, Any]) -> PhysicsParams:
    """Accept a PhysicsParams, a (camelCase or snake_case) dict, or None."""
    physics = options.get('physics')
    if isinstance(physics, PhysicsParams):
        return physics
    return PhysicsParams.from_dict(physics)


class ForceLayout(LayoutAlgorithm):
    """
    Four-phase force-directed layout (explosion, retraction, spacing, snap).

    Options:
        - iterations: Frame budget (default: 300)
        - seed: Seed for chaos factors and the initial scatter (default: 0)
        - physics: PhysicsParams or parameter dict (default: None)
    """

    name = 'force'
    iterative = True
    keeps_preset_positions = True
    default_options = {
        'iterations': 300,
        'seed': 0,
        'physics': None,
    }

    def simulator_for(
        self,
        nodes: List[Node],
        edges: List[Edge],
        options: Dict[str, Any],
        bounds: Bounds,
    ) -> ForceSimulator:
        opts = dict(self.default_options)
        opts.update(options or {})
        return ForceSimulator(
            nodes,
            edges,
            params=physics_from_options(opts),
            bounds=bounds,
            max_iterations=int(opts['iterations']),
            seed=int(opts['seed']),
        )

    def _layout(
        self,
        nodes: List[Node],
        edges: List[Edge],
        options: Dict[str, Any],
        bounds: Bounds,
    ) -> Tuple[Dict[str, Position], Dict[str, Any]]:
        simulator = self.simulator_for(nodes, edges, options, bounds)
        positions = simulator.run()
        return positions, {'iterations': simulator.iteration}


def compute(nodes, edges=(), bounds=None, **options):
    """Compute layout with keyword options."""
    return ForceLayout().compute(nodes, edges, options, bounds)
