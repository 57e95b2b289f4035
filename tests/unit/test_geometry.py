# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)

"""Tests for hull and centering helpers."""

import pytest

from protolayout.geometry import (
    bounding_box,
    center_positions,
    centroid,
    convex_hull,
    expand_hull,
    fit_to_bounds,
    group_hulls,
)
from protolayout.models import Bounds, Position


class TestConvexHull:
    """Tests for convex_hull and expand_hull."""

    def test_interior_point_dropped(self):
        hull = convex_hull([(0, 0), (10, 0), (10, 10), (0, 10), (5, 5)])
        assert set(hull) == {(0, 0), (10, 0), (10, 10), (0, 10)}
        assert len(hull) == 4

    def test_counter_clockwise(self):
        hull = convex_hull([(0, 0), (10, 0), (10, 10), (0, 10)])
        area2 = sum(
            hull[i][0] * hull[(i + 1) % len(hull)][1] - hull[(i + 1) % len(hull)][0] * hull[i][1]
            for i in range(len(hull))
        )
        assert area2 > 0

    def test_fewer_than_three_points_unchanged(self):
        assert convex_hull([(1, 2), (3, 4)]) == [(1, 2), (3, 4)]
        assert convex_hull([]) == []

    def test_expand_moves_vertices_outward(self):
        square = [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0)]
        expanded = expand_hull(square, 5)
        x, y = expanded[0]
        assert x < 0 and y < 0
        x, y = expanded[2]
        assert x > 10 and y > 10

    def test_group_hulls(self):
        positions = {'a': Position(0, 0), 'b': Position(10, 0), 'c': Position(0, 10)}
        hulls = group_hulls(positions, {'g': ['a', 'b', 'c', 'missing'], 'empty': ['zzz']}, margin=0)
        assert set(hulls) == {'g'}
        assert set(hulls['g']) == {(0, 0), (10, 0), (0, 10)}


class TestCentering:
    """Tests for centroid, bounding box and fitting."""

    def test_centroid(self):
        assert centroid([(0, 0), (4, 0), (4, 4), (0, 4)]) == (2, 2)
        assert centroid([]) == (0.0, 0.0)

    def test_bounding_box(self):
        assert bounding_box({'a': (1, 5), 'b': Position(-2, 3)}) == (-2, 3, 1, 5)
        assert bounding_box({}) is None

    def test_center_positions(self):
        centred = center_positions({'a': (0, 0), 'b': (100, 50)}, Bounds(800, 600))
        assert centred['a'].x == pytest.approx(350)
        assert centred['b'].y == pytest.approx(325)

    def test_fit_to_bounds_respects_padding(self):
        fitted = fit_to_bounds({'a': (0, 0), 'b': (1000, 1000)}, Bounds(800, 600), padding=50)
        xs = [p.x for p in fitted.values()]
        ys = [p.y for p in fitted.values()]
        assert min(ys) == pytest.approx(50)
        assert max(ys) == pytest.approx(550)
        assert (min(xs) + max(xs)) / 2 == pytest.approx(400)

    def test_fit_to_bounds_caps_scale(self):
        fitted = fit_to_bounds({'a': (0, 0), 'b': (10, 0)}, Bounds(800, 600), max_scale=2.0)
        assert fitted['b'].x - fitted['a'].x == pytest.approx(20)
