# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)

"""Unit tests for layout requests and frame sessions."""

import unittest

from protolayout import (
    Bounds,
    EngineConfig,
    LayoutRequest,
    LayoutSession,
    PhysicsParams,
    UnknownLayoutError,
    run_layout,
)
from protolayout.models import Edge, Node, Position


def _graph():
    nodes = [Node('root'), Node('a'), Node('b'), Node('c')]
    edges = [Edge('root', 'a'), Edge('root', 'b'), Edge('b', 'c')]
    return nodes, edges


class TestRunLayout(unittest.TestCase):
    """Tests for run_layout."""

    def test_deterministic_layout(self):
        nodes, edges = _graph()
        result = run_layout(LayoutRequest('tree', bounds=Bounds(1000, 800)), nodes, edges)
        self.assertEqual(set(result), {'root', 'a', 'b', 'c'})
        self.assertEqual(result.name, 'tree')

    def test_iterative_layout_runs_budget(self):
        nodes, edges = _graph()
        result = run_layout(LayoutRequest('force', {'iterations': 15}), nodes, edges)
        self.assertEqual(result.auxiliary['iterations'], 15)

    def test_unknown_algorithm(self):
        with self.assertRaises(UnknownLayoutError):
            run_layout(LayoutRequest('nope'), [], [])


class TestLayoutSession(unittest.TestCase):
    """Tests for LayoutSession."""

    def test_deterministic_layout_finishes_in_one_step(self):
        nodes, edges = _graph()
        session = LayoutSession(LayoutRequest('grid'), nodes, edges)
        self.assertFalse(session.finished)
        positions = session.step()
        self.assertTrue(session.finished)
        self.assertEqual(set(positions), {'root', 'a', 'b', 'c'})
        self.assertEqual(session.step(), positions)

    def test_iterative_session_steps_to_budget(self):
        nodes, edges = _graph()
        session = LayoutSession(LayoutRequest('force', {'iterations': 5}), nodes, edges)
        frames = 0
        while not session.finished:
            session.step()
            frames += 1
        self.assertEqual(frames, 5)
        self.assertEqual(session.iteration, 5)

    def test_extend_continues(self):
        nodes, edges = _graph()
        session = LayoutSession(LayoutRequest('force', {'iterations': 2}), nodes, edges)
        session.step()
        session.step()
        self.assertTrue(session.finished)
        session.extend(3)
        self.assertFalse(session.finished)
        session.step()
        self.assertEqual(session.iteration, 3)

    def test_dragged_node_stays_put(self):
        nodes, edges = _graph()
        start = {
            'root': Position(400, 300), 'a': Position(200, 300),
            'b': Position(600, 300), 'c': Position(600, 500),
        }
        session = LayoutSession(LayoutRequest('force', {'iterations': 10}), nodes, edges, positions=start)
        for _ in range(4):
            positions = session.step(dragged_node_id='root')
        self.assertEqual(positions['root'].as_tuple(), (400, 300))

    def test_positions_are_copies(self):
        nodes, edges = _graph()
        session = LayoutSession(LayoutRequest('force', {'iterations': 3}), nodes, edges)
        snapshot = session.positions
        snapshot.clear()
        self.assertEqual(len(session.positions), 4)


class TestFromConfig(unittest.TestCase):
    """Tests for LayoutRequest.from_config."""

    def test_iterative_request_gets_physics(self):
        config = EngineConfig(physics=PhysicsParams(damping=0.7), max_iterations=42)
        request = LayoutRequest.from_config('force', config)
        self.assertEqual(request.options['iterations'], 42)
        self.assertEqual(request.options['physics'].damping, 0.7)

    def test_layout_options_passed_through(self):
        config = EngineConfig.from_dict({'layouts': {'tree': {'direction': 'horizontal'}},
                                         'bounds': {'width': 300, 'height': 200}})
        request = LayoutRequest.from_config('tree', config)
        self.assertEqual(request.options, {'direction': 'horizontal'})
        self.assertEqual(request.bounds, Bounds(300, 200))


if __name__ == '__main__':
    unittest.main()
