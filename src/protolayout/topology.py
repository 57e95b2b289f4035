# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Graph topology utilities for the layout core.

"""
Adjacency views, degree classification and path queries.

The undirected ``AdjacencyView`` backs the force simulator and the
degree-driven layouts; ``DirectedView`` keeps edge direction for the
tree and layered layouts. Both are derived, read-only structures built
in O(N + E). Edges that reference unknown node ids are skipped, since
partially loaded data is expected input.
"""

import logging
from collections import deque
from typing import Dict, FrozenSet, Iterable, List, Optional, Set, Tuple

from .models import EdgeLike, NodeLike, coerce_edges, coerce_nodes

logger = logging.getLogger(__name__)


class AdjacencyView:
    """
    Symmetric node id -> neighbour ids map.

    Neighbour lists keep first-seen order so iteration (and therefore
    floating point summation order) is deterministic.
    """

    def __init__(
        self,
        node_ids: List[str],
        neighbors: Dict[str, List[str]],
        incident: Dict[str, List[Tuple[str, str]]],
    ):
        self._node_ids = node_ids
        self._neighbors = neighbors
        self._neighbor_sets: Dict[str, FrozenSet[str]] = {
            nid: frozenset(nbrs) for nid, nbrs in neighbors.items()
        }
        # node id -> [(neighbour id, edge id)] for path reconstruction
        self._incident = incident
        self._leaf_children: Dict[str, int] = {}

    @property
    def node_ids(self) -> List[str]:
        return list(self._node_ids)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._neighbors

    def __len__(self) -> int:
        return len(self._node_ids)

    def neighbors(self, node_id: str) -> List[str]:
        return self._neighbors.get(node_id, [])

    def neighbor_set(self, node_id: str) -> FrozenSet[str]:
        return self._neighbor_sets.get(node_id, frozenset())

    def incident_edges(self, node_id: str) -> List[Tuple[str, str]]:
        return self._incident.get(node_id, [])

    def degree(self, node_id: str) -> int:
        return len(self._neighbors.get(node_id, ()))

    def is_leaf(self, node_id: str) -> bool:
        return self.degree(node_id) == 1

    def are_adjacent(self, a: str, b: str) -> bool:
        return b in self.neighbor_set(a)

    def shares_neighbor(self, a: str, b: str) -> bool:
        """True when a and b have at least one common neighbour (siblings)."""
        return not self.neighbor_set(a).isdisjoint(self.neighbor_set(b))

    def leaf_child_count(self, node_id: str) -> int:
        """Number of degree-1 neighbours."""
        count = self._leaf_children.get(node_id)
        if count is None:
            count = sum(1 for n in self.neighbors(node_id) if self.degree(n) == 1)
            self._leaf_children[node_id] = count
        return count

    def highest_degree_neighbor(self, node_id: str) -> Optional[str]:
        """Neighbour with the strictly highest degree; first one wins ties."""
        best = None
        best_degree = 0
        for neighbor in self.neighbors(node_id):
            d = self.degree(neighbor)
            if d > best_degree:
                best_degree = d
                best = neighbor
        return best

    def average_degree(self) -> float:
        if not self._node_ids:
            return 0.0
        return sum(self.degree(n) for n in self._node_ids) / len(self._node_ids)


class DirectedView:
    """Ordered children/parents maps that respect edge direction."""

    def __init__(self, node_ids: List[str]):
        self.node_ids = node_ids
        self.children: Dict[str, List[str]] = {nid: [] for nid in node_ids}
        self.parents: Dict[str, List[str]] = {nid: [] for nid in node_ids}

    def in_degree(self, node_id: str) -> int:
        return len(self.parents.get(node_id, ()))

    def out_degree(self, node_id: str) -> int:
        return len(self.children.get(node_id, ()))

    def roots(self) -> List[str]:
        """Nodes with no incoming edges, in input order."""
        return [nid for nid in self.node_ids if not self.parents[nid]]


def build_adjacency(
    nodes: Iterable[NodeLike],
    edges: Iterable[EdgeLike],
) -> AdjacencyView:
    """
    Build the undirected adjacency view for a topology snapshot.

    Args:
        nodes: Nodes (dataclasses or dicts with an 'id').
        edges: Edges (dataclasses or dicts with 'source'/'target').

    Returns:
        AdjacencyView. Dangling edges and self-loops are ignored.
    """
    node_list = coerce_nodes(nodes)
    node_ids = []
    neighbors: Dict[str, List[str]] = {}
    for node in node_list:
        if node.id not in neighbors:
            node_ids.append(node.id)
            neighbors[node.id] = []
    seen: Dict[str, Set[str]] = {nid: set() for nid in node_ids}
    incident: Dict[str, List[Tuple[str, str]]] = {nid: [] for nid in node_ids}

    skipped = 0
    for edge in coerce_edges(edges):
        src, tgt = edge.source, edge.target
        if src not in neighbors or tgt not in neighbors:
            skipped += 1
            continue
        if src == tgt:
            continue
        incident[src].append((tgt, edge.edge_id))
        incident[tgt].append((src, edge.edge_id))
        if tgt not in seen[src]:
            seen[src].add(tgt)
            neighbors[src].append(tgt)
        if src not in seen[tgt]:
            seen[tgt].add(src)
            neighbors[tgt].append(src)

    if skipped:
        logger.debug("Skipped %d edge(s) referencing unknown nodes", skipped)

    return AdjacencyView(node_ids, neighbors, incident)


def build_directed(
    nodes: Iterable[NodeLike],
    edges: Iterable[EdgeLike],
) -> DirectedView:
    """Build ordered children/parents maps; dangling edges and self-loops are ignored."""
    node_ids = []
    known: Set[str] = set()
    for node in coerce_nodes(nodes):
        if node.id not in known:
            known.add(node.id)
            node_ids.append(node.id)

    view = DirectedView(node_ids)
    for edge in coerce_edges(edges):
        src, tgt = edge.source, edge.target
        if src not in known or tgt not in known or src == tgt:
            continue
        if tgt not in view.children[src]:
            view.children[src].append(tgt)
            view.parents[tgt].append(src)
    return view


def degree(node_id: str, view: AdjacencyView) -> int:
    return view.degree(node_id)


def is_leaf(node_id: str, view: AdjacencyView) -> bool:
    return view.is_leaf(node_id)


def shortest_path(from_id: str, to_id: str, view: AdjacencyView) -> List[str]:
    """
    Unweighted BFS shortest path.

    Returns:
        Ordered edge ids from ``from_id`` to ``to_id``; empty when the
        nodes are equal, unknown, or not connected.
    """
    if from_id == to_id or from_id not in view or to_id not in view:
        return []

    predecessor: Dict[str, Tuple[str, str]] = {}
    visited = {from_id}
    queue = deque([from_id])

    while queue:
        current = queue.popleft()
        if current == to_id:
            path = []
            node = to_id
            while node != from_id:
                prev, edge_id = predecessor[node]
                path.append(edge_id)
                node = prev
            path.reverse()
            return path
        for neighbor, edge_id in view.incident_edges(current):
            if neighbor not in visited:
                visited.add(neighbor)
                predecessor[neighbor] = (current, edge_id)
                queue.append(neighbor)

    return []


def connected_component(node_id: str, view: AdjacencyView) -> Set[str]:
    """All node ids reachable from ``node_id`` (empty for an unknown id)."""
    if node_id not in view:
        return set()
    component = {node_id}
    queue = deque([node_id])
    while queue:
        current = queue.popleft()
        for neighbor in view.neighbors(current):
            if neighbor not in component:
                component.add(neighbor)
                queue.append(neighbor)
    return component


def connected_components(view: AdjacencyView) -> List[Set[str]]:
    """Components ordered by the first node of each in input order."""
    assigned: Set[str] = set()
    components = []
    for nid in view.node_ids:
        if nid in assigned:
            continue
        component = connected_component(nid, view)
        assigned |= component
        components.append(component)
    return components
