# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Iterative force simulation.

"""
Four-phase force-directed simulator.

Phases run explosion -> retraction -> spacing -> snap, each taking an
equal share of the iteration budget. ``calculate_physics_frame`` is the
pure per-frame function; ``ForceSimulator`` keeps the frame counter and
seeded chaos factors for a caller-owned animation loop.
"""

from .phases import Phase, phase_for, temperature
from .simulator import (
    ForceSimulator,
    FrameResult,
    FrameStats,
    calculate_physics_frame,
    resolve_collisions,
)

__all__ = [
    'Phase',
    'phase_for',
    'temperature',
    'ForceSimulator',
    'FrameResult',
    'FrameStats',
    'calculate_physics_frame',
    'resolve_collisions',
]
