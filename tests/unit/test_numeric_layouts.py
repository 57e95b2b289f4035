# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)

"""Tests for the NumPy/SciPy backed layouts."""

import numpy as np
import pytest

from protolayout.config import PhysicsParams
from protolayout.layout import force, fruchterman, kamada_kawai, random_layout, spectral
from protolayout.layout.kamada_kawai import graph_distances
from protolayout.layout.spectral import laplacian
from protolayout.models import Bounds, Edge, Node

BOUNDS = Bounds(800, 600)


def _ring(n):
    nodes = [Node(f'v{i}') for i in range(n)]
    edges = [Edge(f'v{i}', f'v{(i + 1) % n}') for i in range(n)]
    return nodes, edges


def _inside_margin(result, bounds=BOUNDS, margin=50):
    return all(
        margin - 1e-9 <= p.x <= bounds.width - margin + 1e-9
        and margin - 1e-9 <= p.y <= bounds.height - margin + 1e-9
        for p in result.values()
    )


class TestFruchterman:
    """Tests for the Fruchterman-Reingold layout."""

    def test_stays_inside_margin(self):
        result = fruchterman.compute(*_ring(10), bounds=BOUNDS)
        assert _inside_margin(result)

    def test_seed_changes_result(self):
        nodes, edges = _ring(6)
        a = fruchterman.compute(nodes, edges, seed=1).as_tuples()
        b = fruchterman.compute(nodes, edges, seed=2).as_tuples()
        assert a != b


class TestKamadaKawai:
    """Tests for the Kamada-Kawai layout."""

    def test_graph_distances_fill_disconnected(self):
        src = np.array([0, 1])
        tgt = np.array([1, 2])
        dist = graph_distances(4, src, tgt)
        assert dist[0, 2] == 2
        assert dist[2, 0] == 2
        # max finite distance + 1
        assert dist[0, 3] == 3
        assert dist[3, 3] == 0

    def test_graph_distances_without_edges(self):
        dist = graph_distances(3, np.array([], dtype=int), np.array([], dtype=int))
        assert dist[0, 1] == 1
        assert dist[1, 1] == 0

    def test_stays_inside_margin(self):
        result = kamada_kawai.compute(*_ring(8), bounds=BOUNDS)
        assert _inside_margin(result)
        assert 1 <= result.auxiliary['sweeps'] <= 100


class TestSpectral:
    """Tests for the spectral layout."""

    def test_laplacian_rows_sum_to_zero(self):
        lap = laplacian(3, np.array([0, 1, 0]), np.array([1, 2, 1]))
        np.testing.assert_allclose(lap.sum(axis=1), 0)
        assert lap[0, 0] == 1
        assert lap[1, 1] == 2

    def test_fills_margin_box(self):
        result = spectral.compute(*_ring(8), bounds=BOUNDS)
        xs = [p.x for p in result.values()]
        ys = [p.y for p in result.values()]
        assert min(xs) == pytest.approx(50)
        assert max(xs) == pytest.approx(750)
        assert min(ys) == pytest.approx(50)
        assert max(ys) == pytest.approx(550)

    def test_two_nodes_on_centre_line(self):
        result = spectral.compute([Node('a'), Node('b')], [Edge('a', 'b')], bounds=BOUNDS)
        assert result['a'].y == result['b'].y == 300
        assert {result['a'].x, result['b'].x} == {50, 750}


class TestRandom:
    """Tests for the seeded random layout."""

    def test_seeded(self):
        nodes = [Node(f'n{i}') for i in range(20)]
        assert random_layout.compute(nodes, seed=7).as_tuples() == random_layout.compute(nodes, seed=7).as_tuples()
        assert random_layout.compute(nodes, seed=7).as_tuples() != random_layout.compute(nodes, seed=8).as_tuples()

    def test_inside_margin(self):
        nodes = [Node(f'n{i}') for i in range(50)]
        assert _inside_margin(random_layout.compute(nodes, bounds=BOUNDS))


class TestForceLayout:
    """Tests for the iterative force layout adapter."""

    def test_runs_requested_iterations(self):
        result = force.compute(*_ring(5), iterations=20)
        assert result.auxiliary['iterations'] == 20
        assert len(result) == 5

    def test_accepts_camel_case_physics(self):
        layout = force.ForceLayout()
        sim = layout.simulator_for([Node('a'), Node('b')], [], {'physics': {'repulsionStrength': 5000}}, BOUNDS)
        assert sim.params.repulsion_strength == 5000
        assert sim.max_iterations == 300

    def test_accepts_params_object(self):
        params = PhysicsParams(damping=0.5)
        sim = force.ForceLayout().simulator_for([Node('a')], [], {'physics': params}, BOUNDS)
        assert sim.params is params

    def test_single_node_keeps_position(self):
        result = force.compute([Node('a', position=(10.0, 20.0))], bounds=BOUNDS)
        assert result['a'].as_tuple() == (10.0, 20.0)
