# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Four-phase force-directed simulator.

"""
Phased force-directed simulation with leaf/hub-aware heuristics.

One call to ``calculate_physics_frame`` advances every node by one frame:

1. Hooke springs along each edge, with rest length and stiffness chosen by
   connection type (leaf, hub-to-hub, other) and phase.
2. From RETRACTION on, an extra distance-proportional pull of each leaf
   toward its only neighbour.
3. Coulomb repulsion against nodes found through a SpatialIndex bounded by
   ``repulsion_radius``. Siblings (nodes sharing a neighbour) do not repel.
   Strength is modulated by a per-pair hash jitter, the chaos factor, leaf
   dampening, a hub boost and the leaf-parent magnetic term.
4. Weak gravity toward the highest-degree neighbour.
5. Optional uniform gravity toward the canvas centre.
6. Annealed integration: displacement capped at ``k * (1 - progress)^2``,
   then scaled by ``damping``.
7. Hard collision resolution; leaf pairs are exempt before SPACING.

Frames read the previous position map and return a new one. Nothing in
the inputs is mutated, so a caller may keep reading frame N while frame
N+1 is computed.
"""

import logging
import math
import zlib
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from ..config import PhysicsParams
from ..errors import PositionMapError
from ..models import Bounds, EdgeLike, NodeLike, Position, coerce_nodes
from ..spatial import SpatialIndex
from ..topology import AdjacencyView, build_adjacency
from . import phases
from .phases import Phase, phase_for, temperature

logger = logging.getLogger(__name__)

# Stand-in distance for coincident nodes
EPSILON = 0.01


@dataclass(frozen=True)
class FrameStats:
    """Summary of one completed frame."""
    iteration: int
    phase: Phase
    temperature: float
    max_displacement: float


@dataclass
class FrameResult:
    positions: Dict[str, Position]
    stats: FrameStats


def _pair_hash(a: str, b: str) -> int:
    lo, hi = (a, b) if a <= b else (b, a)
    return zlib.crc32(f"{lo}\x00{hi}".encode('utf-8'))


def _pair_jitter(a: str, b: str) -> float:
    """Symmetric repulsion multiplier in [0.5, 1.5)."""
    return 0.5 + (_pair_hash(a, b) % 100) / 100.0


def _separation_direction(a: str, b: str) -> Tuple[float, float]:
    """Unit vector pointing from b to a for coincident nodes; opposite for (b, a)."""
    angle = 2 * math.pi * (_pair_hash(a, b) % 3600) / 3600.0
    if a > b:
        angle += math.pi
    return (math.cos(angle), math.sin(angle))


def _spring(view: AdjacencyView, params: PhysicsParams, phase: Phase,
            node_id: str, neighbor_id: str) -> Tuple[float, float]:
    """(ideal_length, stiffness) for the edge node_id -- neighbor_id."""
    node_leaf = view.is_leaf(node_id)
    neighbor_leaf = view.is_leaf(neighbor_id)
    if node_leaf or neighbor_leaf:
        spec = phases.LEAF_SPRINGS[phase]
        return spec.ideal_length, spec.stiffness * params.leaf_spring_strength
    return phases.HUB_IDEAL_LENGTH, params.hub_edge_strength * params.attraction_strength


def _repulsion_strength(
    view: AdjacencyView,
    params: PhysicsParams,
    node_id: str,
    other_id: str,
    distance: float,
    deviation_factors: Dict[str, float],
) -> float:
    strength = params.repulsion_strength * _pair_jitter(node_id, other_id)

    avg_random = (deviation_factors.get(node_id, 0.0) + deviation_factors.get(other_id, 0.0)) / 2
    chaos = avg_random * (params.node_chaos_factor / 100.0) * phases.MAX_REPULSION
    strength = max(phases.MIN_REPULSION, strength + chaos)

    node_leaf = view.is_leaf(node_id)
    other_leaf = view.is_leaf(other_id)

    # Keep repulsion from fighting the leaf springs
    if view.are_adjacent(node_id, other_id):
        if node_leaf:
            strength *= phases.LEAF_REPULSION_DAMPENING
        if other_leaf:
            strength *= phases.LEAF_REPULSION_DAMPENING

    if node_leaf or other_leaf:
        return strength

    if params.hub_repulsion_boost > 0:
        avg_degree = (view.degree(node_id) + view.degree(other_id)) / 2
        if avg_degree > phases.HUB_BOOST_DEGREE_THRESHOLD:
            threshold = phases.HUB_BOOST_DEGREE_THRESHOLD
            strength *= 1.0 + math.sqrt((avg_degree - threshold) / threshold) * params.hub_repulsion_boost

    # Magnetic repulsion between leaf-bearing hubs keeps their halos apart
    my_leaves = view.leaf_child_count(node_id)
    other_leaves = view.leaf_child_count(other_id)
    if my_leaves > 0 and other_leaves > 0:
        strength *= 1.0 + math.sqrt(my_leaves * other_leaves)
        critical = phases.MAGNETIC_CRITICAL_DISTANCE
        if distance < critical:
            strength *= 1.0 + (critical - distance) / critical * phases.MAGNETIC_PROXIMITY_GAIN

    return strength


def _node_force(
    node_id: str,
    view: AdjacencyView,
    positions: Dict[str, Position],
    params: PhysicsParams,
    phase: Phase,
    bounds: Bounds,
    index: SpatialIndex,
    deviation_factors: Dict[str, float],
) -> Tuple[float, float]:
    pos = positions[node_id]
    fx = fy = 0.0
    neighbors = view.neighbors(node_id)

    # Springs
    for neighbor_id in neighbors:
        other = positions[neighbor_id]
        dx = other.x - pos.x
        dy = other.y - pos.y
        distance = math.hypot(dx, dy)
        if distance > 0:
            ideal, stiffness = _spring(view, params, phase, node_id, neighbor_id)
            force = stiffness * (distance - ideal)
            fx += dx / distance * force
            fy += dy / distance * force

    # Leaf -> parent attraction, uncapped
    pull = phases.LEAF_ATTRACTION[phase]
    if pull > 0 and len(neighbors) == 1:
        parent = positions[neighbors[0]]
        fx += (parent.x - pos.x) * pull
        fy += (parent.y - pos.y) * pull

    # Repulsion within the spatial neighbourhood
    radius = params.repulsion_radius
    for other_id in index.query_radius(pos.x, pos.y, radius):
        if other_id == node_id:
            continue
        if view.shares_neighbor(node_id, other_id):
            continue
        other = positions[other_id]
        dx = pos.x - other.x
        dy = pos.y - other.y
        distance = math.hypot(dx, dy)
        if distance > radius:
            continue
        if distance > 0:
            ux, uy = dx / distance, dy / distance
        else:
            ux, uy = _separation_direction(node_id, other_id)
            distance = EPSILON
        force = _repulsion_strength(view, params, node_id, other_id, distance, deviation_factors) / distance
        fx += ux * force
        fy += uy * force

    # Hub gravity
    hub_id = view.highest_degree_neighbor(node_id)
    if hub_id is not None:
        hub = positions[hub_id]
        fx += (hub.x - pos.x) * params.hub_gravity
        fy += (hub.y - pos.y) * params.hub_gravity

    # Centre gravity
    if params.center_gravity > 0:
        cx, cy = bounds.center
        fx += (cx - pos.x) * params.center_gravity
        fy += (cy - pos.y) * params.center_gravity

    return fx, fy


def resolve_collisions(
    positions: Dict[str, Position],
    view: AdjacencyView,
    min_separation: float,
    enforce_leaf: bool,
    dragged_node_id: Optional[str] = None,
    passes: int = 8,
) -> int:
    """
    Push overlapping node pairs apart in place.

    Each overlapping pair is separated along the line between centres,
    half the overlap per side. A dragged node never moves; its partner
    takes the full overlap. Sweeps repeat until nothing overlaps or
    ``passes`` sweeps have run.

    Returns:
        Number of sweeps that moved at least one node.
    """
    if min_separation <= 0 or len(positions) < 2:
        return 0

    order = {nid: i for i, nid in enumerate(positions)}
    grid = SpatialIndex(min_separation)
    active_sweeps = 0

    for _ in range(max(1, passes)):
        grid.build(positions)
        moved = False
        for id1, i in order.items():
            p1 = positions[id1]
            leaf1 = view.is_leaf(id1)
            for id2 in grid.query_radius(p1.x, p1.y, min_separation):
                if order[id2] <= i:
                    continue
                if not enforce_leaf and (leaf1 or view.is_leaf(id2)):
                    continue
                p2 = positions[id2]
                dx = p2.x - p1.x
                dy = p2.y - p1.y
                distance = math.hypot(dx, dy)
                overlap = min_separation - distance
                if overlap <= 1e-9:
                    continue
                if distance > 0:
                    ux, uy = dx / distance, dy / distance
                else:
                    ux, uy = _separation_direction(id2, id1)

                if id1 == dragged_node_id:
                    p2.x += ux * overlap
                    p2.y += uy * overlap
                elif id2 == dragged_node_id:
                    p1.x -= ux * overlap
                    p1.y -= uy * overlap
                else:
                    push = overlap / 2
                    p1.x -= ux * push
                    p1.y -= uy * push
                    p2.x += ux * push
                    p2.y += uy * push
                moved = True
        if not moved:
            break
        active_sweeps += 1

    return active_sweeps


def calculate_physics_frame(
    view: AdjacencyView,
    positions: Dict[str, Position],
    params: PhysicsParams,
    iteration: int,
    max_iterations: int,
    bounds: Bounds,
    dragged_node_id: Optional[str] = None,
    deviation_factors: Optional[Dict[str, float]] = None,
    index: Optional[SpatialIndex] = None,
) -> FrameResult:
    """
    Compute the next frame of the phased simulation.

    Args:
        view: Adjacency of the topology snapshot.
        positions: Previous frame, one Position per node in ``view``.
        params: Physics parameters.
        iteration: Index of the frame being computed.
        max_iterations: Iteration budget; drives phase and temperature.
        bounds: Canvas bounds (temperature scale and centre gravity).
        dragged_node_id: Node held by the user, if any.
        deviation_factors: Per-node chaos factors in [-1, 1].
        index: Optional SpatialIndex to reuse; it is rebuilt here.

    Returns:
        FrameResult with a new position map and frame statistics.

    Raises:
        PositionMapError: If a topology node has no previous position.
    """
    missing = [nid for nid in view.node_ids if nid not in positions]
    if missing:
        raise PositionMapError(missing)

    phase = phase_for(iteration, max_iterations, params.phase_fraction)
    n = len(view)
    if n == 0:
        return FrameResult({}, FrameStats(iteration, phase, 0.0, 0.0))

    k = math.sqrt(max(bounds.area, 0.0) / n)
    temp = temperature(k, iteration, max_iterations)
    deviation_factors = deviation_factors or {}

    if index is None or index.cell_size != params.cell_size:
        index = SpatialIndex(params.cell_size)
    index.build((nid, positions[nid].x, positions[nid].y) for nid in view.node_ids)

    updated: Dict[str, Position] = {}
    max_displacement = 0.0

    for nid in view.node_ids:
        pos = positions[nid]
        if nid == dragged_node_id:
            updated[nid] = Position(pos.x, pos.y, 0.0, 0.0)
            continue

        fx, fy = _node_force(nid, view, positions, params, phase, bounds, index, deviation_factors)
        length = math.hypot(fx, fy)
        if length > 0 and math.isfinite(length):
            step = min(length, temp) * params.damping
            vx = fx / length * step
            vy = fy / length * step
            updated[nid] = Position(pos.x + vx, pos.y + vy, vx, vy)
            max_displacement = max(max_displacement, abs(step))
        else:
            updated[nid] = Position(pos.x, pos.y, 0.0, 0.0)

    resolve_collisions(
        updated,
        view,
        params.min_separation,
        enforce_leaf=phase.value >= Phase.SPACING.value,
        dragged_node_id=dragged_node_id,
        passes=params.collision_passes,
    )

    return FrameResult(updated, FrameStats(iteration, phase, temp, max_displacement))


class ForceSimulator:
    """
    Stateful driver around ``calculate_physics_frame``.

    Holds the topology, the seeded per-node chaos factors and the frame
    counter. Callers own termination: call ``step`` once per animation
    tick, or ``run`` to play out the remaining budget.

    Example:
        sim = ForceSimulator(nodes, edges, max_iterations=300)
        positions = sim.initial_positions()
        while not sim.finished:
            positions = sim.step(positions)
    """

    LOG_EVERY = 50

    def __init__(
        self,
        nodes: Iterable[NodeLike],
        edges: Iterable[EdgeLike],
        params: Optional[PhysicsParams] = None,
        bounds=None,
        max_iterations: int = 300,
        seed: int = 0,
    ):
        self.nodes = coerce_nodes(nodes)
        self.view = build_adjacency(self.nodes, edges)
        self.params = params or PhysicsParams()
        self.bounds = Bounds.from_value(bounds)
        self.max_iterations = max_iterations
        self.seed = seed
        self.iteration = 0
        self.history: List[FrameStats] = []

        rng = np.random.default_rng(seed)
        factors = rng.uniform(-1.0, 1.0, size=len(self.view))
        self.deviation_factors = {
            nid: float(f) for nid, f in zip(self.view.node_ids, factors)
        }
        self._index = SpatialIndex(self.params.cell_size)

    @property
    def finished(self) -> bool:
        return self.iteration >= self.max_iterations

    @property
    def phase(self) -> Phase:
        return phase_for(self.iteration, self.max_iterations, self.params.phase_fraction)

    def initial_positions(self) -> Dict[str, Position]:
        """Preset node positions where given, else a seeded scatter inside the canvas margin."""
        rng = np.random.default_rng(self.seed + 1)
        margin_x = 50.0 if self.bounds.width > 100 else 0.0
        margin_y = 50.0 if self.bounds.height > 100 else 0.0
        xs = rng.uniform(margin_x, self.bounds.width - margin_x, size=len(self.nodes))
        ys = rng.uniform(margin_y, self.bounds.height - margin_y, size=len(self.nodes))

        positions: Dict[str, Position] = {}
        for node, x, y in zip(self.nodes, xs, ys):
            if node.id in positions:
                continue
            if node.position is not None:
                positions[node.id] = Position(float(node.position[0]), float(node.position[1]))
            else:
                positions[node.id] = Position(float(x), float(y))
        return positions

    def step(
        self,
        positions: Dict[str, Position],
        dragged_node_id: Optional[str] = None,
    ) -> Dict[str, Position]:
        """Compute one frame from ``positions`` and advance the counter."""
        frame = calculate_physics_frame(
            self.view,
            positions,
            self.params,
            self.iteration,
            self.max_iterations,
            self.bounds,
            dragged_node_id=dragged_node_id,
            deviation_factors=self.deviation_factors,
            index=self._index,
        )
        self.history.append(frame.stats)
        if self.iteration % self.LOG_EVERY == 0:
            logger.debug(
                "Frame %d/%d phase=%s temperature=%.3f max_step=%.3f",
                self.iteration, self.max_iterations, frame.stats.phase.name,
                frame.stats.temperature, frame.stats.max_displacement,
            )
        self.iteration += 1
        return frame.positions

    def run(
        self,
        positions: Optional[Dict[str, Position]] = None,
        iterations: Optional[int] = None,
    ) -> Dict[str, Position]:
        """Play ``iterations`` frames (default: the rest of the budget)."""
        if positions is None:
            positions = self.initial_positions()
        frames = iterations if iterations is not None else self.max_iterations - self.iteration
        for _ in range(max(0, frames)):
            positions = self.step(positions)
        logger.info(
            "Force simulation ran %d frame(s) for %d node(s)", max(0, frames), len(self.view)
        )
        return positions

    def extend(self, frames: int) -> None:
        """Grow the budget so an interactive run can continue."""
        self.max_iterations += max(0, frames)

    def reset(self) -> None:
        self.iteration = 0
        self.history = []
