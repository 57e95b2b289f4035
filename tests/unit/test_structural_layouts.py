# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)

"""Tests for tree, layered, radial, circle, grid and preset layouts."""

import math

import pytest

from protolayout.layout import circular, grid, hierarchical, preset, radial, sugiyama, tree
from protolayout.layout.sugiyama import longest_path_layers
from protolayout.layout.tree import assign_slots, build_forest, select_roots
from protolayout.models import Bounds, Edge, Node
from protolayout.topology import build_directed

BOUNDS = Bounds(800, 600)


def _nodes(ids):
    return [Node(i) for i in ids]


class TestTreeLayout:
    """Tests for the tree layout."""

    def test_parent_centred_over_children(self):
        """A -> B, A -> C."""
        result = tree.compute(_nodes('ABC'), [Edge('A', 'B'), Edge('A', 'C')], bounds=BOUNDS)
        a, b, c = result['A'], result['B'], result['C']

        assert a.x == pytest.approx((b.x + c.x) / 2)
        assert b.y == c.y
        assert b.y - a.y == pytest.approx(150)
        assert c.x - b.x == pytest.approx(120)
        assert result.auxiliary['levels'] == {'A': 0, 'B': 1, 'C': 1}

    def test_layout_centred_on_canvas(self):
        result = tree.compute(_nodes('ABC'), [Edge('A', 'B'), Edge('A', 'C')], bounds=BOUNDS)
        xs = [p.x for p in result.values()]
        ys = [p.y for p in result.values()]
        assert (min(xs) + max(xs)) / 2 == pytest.approx(400)
        assert (min(ys) + max(ys)) / 2 == pytest.approx(300)

    def test_horizontal_direction(self):
        result = tree.compute(_nodes('ABC'), [Edge('A', 'B'), Edge('A', 'C')],
                              direction='horizontal', bounds=BOUNDS)
        assert result['B'].x - result['A'].x == pytest.approx(150)
        assert result['B'].x == result['C'].x

    def test_forest_gap(self):
        result = tree.compute(_nodes(['R1', 'a', 'R2']), [Edge('R1', 'a')], bounds=BOUNDS)
        # one leaf slot plus two empty slots between the trees
        assert result['R2'].x - result['R1'].x == pytest.approx(3 * 120)

    def test_cyclic_graph_picks_highest_out_degree_root(self):
        directed = build_directed(_nodes('xyz'), [Edge('x', 'y'), Edge('y', 'z'), Edge('z', 'x'), Edge('y', 'x')])
        assert select_roots(directed) == ['y']

    def test_node_joins_first_tree(self):
        directed = build_directed(_nodes(['r1', 'r2', 'shared']), [Edge('r1', 'shared'), Edge('r2', 'shared')])
        forest = build_forest(directed, ['r1', 'r2'])
        assert [child.id for child in forest[0].children] == ['shared']
        assert forest[1].children == []

    def test_slots(self):
        directed = build_directed(_nodes('abcd'), [Edge('a', 'b'), Edge('a', 'c'), Edge('c', 'd')])
        placed = {n.id: n.slot for n in assign_slots(build_forest(directed, ['a']), 2)}
        assert placed == {'a': 0.5, 'b': 0.0, 'c': 1.0, 'd': 1.0}


class TestSugiyamaLayout:
    """Tests for the layered layout."""

    def test_longest_path_layers(self):
        directed = build_directed(_nodes('abc'), [Edge('a', 'b'), Edge('b', 'c'), Edge('a', 'c')])
        assert longest_path_layers(directed) == {'a': 0, 'b': 1, 'c': 2}

    def test_cycle_layers_capped(self):
        directed = build_directed(_nodes('rab'), [Edge('r', 'a'), Edge('a', 'b'), Edge('b', 'a')])
        layers = longest_path_layers(directed)
        assert set(layers) == {'r', 'a', 'b'}
        assert max(layers.values()) <= 2

    def test_unreachable_cycle_sits_on_layer_zero(self):
        directed = build_directed(_nodes('ab'), [Edge('a', 'b'), Edge('b', 'a')])
        assert longest_path_layers(directed) == {'a': 0, 'b': 0}

    def test_top_bottom_positions(self):
        result = sugiyama.compute(_nodes('abc'), [Edge('a', 'b'), Edge('a', 'c')], bounds=BOUNDS)
        assert result['a'].as_tuple() == pytest.approx((400, 250))
        assert result['b'].as_tuple() == pytest.approx((360, 350))
        assert result['c'].as_tuple() == pytest.approx((440, 350))
        assert result.auxiliary['layers'] == {'a': 0, 'b': 1, 'c': 1}

    def test_directions(self):
        nodes, edges = _nodes('ab'), [Edge('a', 'b')]
        bt = sugiyama.compute(nodes, edges, direction='BT', bounds=BOUNDS)
        assert bt['a'].y > bt['b'].y
        lr = sugiyama.compute(nodes, edges, direction='left-right', bounds=BOUNDS)
        assert lr['a'].x < lr['b'].x
        rl = sugiyama.compute(nodes, edges, direction='RL', bounds=BOUNDS)
        assert rl['a'].x > rl['b'].x


class TestHierarchicalLayout:
    """Tests for the canvas-filling hierarchical layout."""

    def test_chain_fills_height(self):
        result = hierarchical.compute(_nodes('abc'), [Edge('a', 'b'), Edge('b', 'c')], bounds=BOUNDS)
        assert [result[n].y for n in 'abc'] == pytest.approx([50, 300, 550])
        assert all(result[n].x == 400 for n in 'abc')

    def test_bottom_top(self):
        result = hierarchical.compute(_nodes('ab'), [Edge('a', 'b')], direction='bottom-top', bounds=BOUNDS)
        assert result['a'].y == pytest.approx(550)
        assert result['b'].y == pytest.approx(50)

    def test_level_spread_across_width(self):
        result = hierarchical.compute(_nodes('rxy'), [Edge('r', 'x'), Edge('r', 'y')],
                                      direction='left-right', bounds=BOUNDS)
        assert result['r'].as_tuple() == pytest.approx((50, 300))
        assert result['x'].as_tuple() == pytest.approx((750, 50))
        assert result['y'].as_tuple() == pytest.approx((750, 550))

    def test_cycle_uses_min_in_degree_roots(self):
        result = hierarchical.compute(_nodes('ab'), [Edge('a', 'b'), Edge('b', 'a')], bounds=BOUNDS)
        assert result.auxiliary['levels'] == {'a': 0, 'b': 1}


class TestRadialLayout:
    """Tests for the radial layout."""

    def test_star(self):
        nodes = _nodes(['hub', 'a', 'b', 'c', 'd'])
        edges = [Edge('hub', leaf) for leaf in 'abcd']
        result = radial.compute(nodes, edges, bounds=BOUNDS)

        assert result['hub'].as_tuple() == (400, 300)
        for leaf in 'abcd':
            assert math.hypot(result[leaf].x - 400, result[leaf].y - 300) == pytest.approx(220)
        assert result.auxiliary['rings'] == {'hub': 0, 'a': 1, 'b': 1, 'c': 1, 'd': 1}

    def test_disconnected_nodes_get_rings(self):
        nodes = _nodes(['hub', 'a', 'b', 'lonely'])
        edges = [Edge('hub', 'a'), Edge('hub', 'b')]
        result = radial.compute(nodes, edges, bounds=BOUNDS)
        assert result.auxiliary['rings']['lonely'] == 2

    def test_overflow_ring(self):
        nodes = _nodes([f'n{i}' for i in range(6)])
        result = radial.compute(nodes, [], max_rings=2, bounds=BOUNDS)
        rings = result.auxiliary['rings']
        assert max(rings.values()) == 2
        assert sorted(rings.values()).count(2) == 3


class TestSimpleLayouts:
    """Tests for circle, grid and preset layouts."""

    def test_circle_radius(self):
        result = circular.compute(_nodes('abcd'), bounds=BOUNDS)
        for pos in result.values():
            assert math.hypot(pos.x - 400, pos.y - 300) == pytest.approx(200)
        # first node at the top
        assert result['a'].as_tuple() == pytest.approx((400, 100))

    def test_grid_centred(self):
        result = grid.compute(_nodes('abcd'), bounds=BOUNDS)
        assert result['a'].as_tuple() == pytest.approx((340, 260))
        assert result['d'].as_tuple() == pytest.approx((460, 340))

    def test_grid_columns_option(self):
        result = grid.compute(_nodes('abc'), columns=1, bounds=BOUNDS)
        assert len({p.x for p in result.values()}) == 1

    def test_preset_keeps_positions(self):
        nodes = [Node('a', position=(1.0, 2.0)), Node('b'), Node('c')]
        result = preset.compute(nodes, bounds=BOUNDS)
        assert result['a'].as_tuple() == (1.0, 2.0)
        assert result.auxiliary['unplaced'] == ['b', 'c']
        assert result['b'].y == result['c'].y == 300

    def test_single_preset_node_keeps_position(self):
        result = preset.compute([Node('a', position=(10.0, 20.0))], bounds=BOUNDS)
        assert result['a'].as_tuple() == (10.0, 20.0)
