# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Uniform-grid spatial hash for neighbour queries.

"""
Spatial hash over node positions.

Space is cut into square cells keyed by (floor(x / cell), floor(y / cell)).
A radius query only visits the ceil(radius / cell) ring of cells around
the query point, which turns all-pairs repulsion from O(n^2) into
O(n * k) for an average cell occupancy k.

The index is rebuilt from scratch every simulation frame; node
displacement per frame is bounded by the annealing temperature, so
incremental maintenance would not pay for itself.
"""

import math
from collections import defaultdict
from collections.abc import Mapping
from typing import Dict, Iterable, List, Tuple, Union

from .models import Position

Cell = Tuple[int, int]


class SpatialIndex:
    """Uniform-grid spatial hash storing (id, x, y) entries."""

    def __init__(self, cell_size: float = 2000.0):
        if cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {cell_size}")
        self.cell_size = float(cell_size)
        self._cells: Dict[Cell, List[Tuple[str, float, float]]] = defaultdict(list)
        self._count = 0

    def _cell(self, x: float, y: float) -> Cell:
        return (math.floor(x / self.cell_size), math.floor(y / self.cell_size))

    def __len__(self) -> int:
        return self._count

    def clear(self) -> None:
        self._cells.clear()
        self._count = 0

    def insert(self, node_id: str, x: float, y: float) -> None:
        self._cells[self._cell(x, y)].append((node_id, x, y))
        self._count += 1

    def build(
        self,
        items: Union[Mapping, Iterable[Tuple[str, float, float]]],
    ) -> 'SpatialIndex':
        """
        Replace the contents with ``items``.

        Args:
            items: Either a mapping of id -> Position / (x, y), or an
                   iterable of (id, x, y) triples.
        """
        self.clear()
        if isinstance(items, Mapping):
            for node_id, pos in items.items():
                if isinstance(pos, Position):
                    self.insert(node_id, pos.x, pos.y)
                else:
                    self.insert(node_id, pos[0], pos[1])
        else:
            for node_id, x, y in items:
                self.insert(node_id, x, y)
        return self

    def _candidates(self, x: float, y: float, radius: float):
        reach = max(0, math.ceil(radius / self.cell_size))
        cx, cy = self._cell(x, y)
        for dx in range(-reach, reach + 1):
            for dy in range(-reach, reach + 1):
                bucket = self._cells.get((cx + dx, cy + dy))
                if bucket:
                    yield from bucket

    def query_radius(self, x: float, y: float, radius: float) -> List[str]:
        """
        Ids stored in the cells covering a circle of ``radius`` around (x, y).

        This is a superset of the exact match; callers re-check distance.
        """
        return [node_id for node_id, _, _ in self._candidates(x, y, radius)]

    def within_radius(self, x: float, y: float, radius: float) -> List[str]:
        """Ids whose stored position is within ``radius`` of (x, y)."""
        r2 = radius * radius
        return [
            node_id for node_id, px, py in self._candidates(x, y, radius)
            if (px - x) ** 2 + (py - y) ** 2 <= r2
        ]
