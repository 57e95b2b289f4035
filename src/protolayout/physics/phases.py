# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)

"""
Simulation phases and their force tables.

The phase is a pure function of iteration progress. Each phase occupies
the same fraction of the iteration budget and only changes the
parameters fed to the force step.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict


class Phase(Enum):
    """
    Stage of the four-phase force simulation.

    EXPLOSION: strong leaf springs hold children near parents while the
               graph spreads.
    RETRACTION: leaves start getting pulled toward their parent.
    SPACING: leaf collisions are enforced, springs tighten.
    SNAP: very strong leaf attraction for the final settle.
    """
    EXPLOSION = 1
    RETRACTION = 2
    SPACING = 3
    SNAP = 4


@dataclass(frozen=True)
class SpringSpec:
    ideal_length: float
    stiffness: float


# Leaf stiffness is further multiplied by PhysicsParams.leaf_spring_strength
LEAF_SPRINGS: Dict[Phase, SpringSpec] = {
    Phase.EXPLOSION: SpringSpec(30.0, 2.0),
    Phase.RETRACTION: SpringSpec(40.0, 2.0),
    Phase.SPACING: SpringSpec(20.0, 8.0),
    Phase.SNAP: SpringSpec(5.0, 20.0),
}

# Hub-to-hub springs stay long and weak so hubs pay out instead of clumping
HUB_IDEAL_LENGTH = 500.0

# Extra leaf -> parent pull, proportional to distance
LEAF_ATTRACTION: Dict[Phase, float] = {
    Phase.EXPLOSION: 0.0,
    Phase.RETRACTION: 1.5,
    Phase.SPACING: 5.0,
    Phase.SNAP: 10.0,
}

MIN_REPULSION = 1000.0
MAX_REPULSION = 30000.0
LEAF_REPULSION_DAMPENING = 0.15
HUB_BOOST_DEGREE_THRESHOLD = 3.0
MAGNETIC_CRITICAL_DISTANCE = 300.0
MAGNETIC_PROXIMITY_GAIN = 2.0


def phase_for(iteration: int, max_iterations: int, fraction: float = 0.25) -> Phase:
    """
    Phase for a given iteration.

    Phase lengths are floor(max_iterations * fraction); anything past the
    first three phases (including iterations beyond the budget) is SNAP.
    """
    span = math.floor(max(0, max_iterations) * fraction)
    if iteration < span:
        return Phase.EXPLOSION
    if iteration < 2 * span:
        return Phase.RETRACTION
    if iteration < 3 * span:
        return Phase.SPACING
    return Phase.SNAP


def temperature(k: float, iteration: int, max_iterations: int) -> float:
    """Annealing temperature ``k * (1 - progress)^2``, floored at zero."""
    if max_iterations <= 0:
        return 0.0
    progress = min(1.0, max(0.0, iteration / max_iterations))
    return k * (1.0 - progress) ** 2
