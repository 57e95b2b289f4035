# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Data classes shared by the positioning engine.

"""
Node, edge and position data classes.

Nodes and edges arrive from the import pipeline either as these
dataclasses or as plain dicts (decoded JSON); ``coerce_nodes`` and
``coerce_edges`` normalise both shapes. Layout code treats them as
read-only snapshots.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, Union


@dataclass
class Node:
    """A graph node as seen by the layout core."""
    id: str
    attributes: Dict[str, Any] = field(default_factory=dict)
    timestamp: Optional[float] = None
    position: Optional[Tuple[float, float]] = None
    is_stub: bool = False
    label: Optional[str] = None

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'Node':
        """Create from a JSON-style dict."""
        position = d.get('position')
        if position is None and 'x' in d and 'y' in d:
            position = (d['x'], d['y'])
        if isinstance(position, Mapping):
            position = (position['x'], position['y'])
        return cls(
            id=str(d['id']),
            attributes=dict(d.get('attributes') or {}),
            timestamp=d.get('timestamp'),
            position=tuple(position) if position is not None else None,
            is_stub=bool(d.get('is_stub', d.get('isStub', False))),
            label=d.get('label'),
        )


@dataclass
class Edge:
    """A directed edge between two node ids."""
    source: str
    target: str
    id: Optional[str] = None
    label: Optional[str] = None

    @property
    def edge_id(self) -> str:
        return self.id if self.id is not None else f"{self.source}->{self.target}"

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'Edge':
        """Create from a JSON-style dict ('source'/'target' or 'from'/'to')."""
        source = d['source'] if 'source' in d else d['from']
        target = d['target'] if 'target' in d else d['to']
        return cls(
            source=str(source),
            target=str(target),
            id=d.get('id'),
            label=d.get('label'),
        )


@dataclass
class Position:
    """A 2D point plus the velocity used by the iterative simulator."""
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def to_dict(self) -> Dict[str, float]:
        return {'x': self.x, 'y': self.y}


@dataclass(frozen=True)
class Bounds:
    """Canvas size used for scaling and centering."""
    width: float = 800.0
    height: float = 600.0

    @property
    def center(self) -> Tuple[float, float]:
        return (self.width / 2, self.height / 2)

    @property
    def area(self) -> float:
        return self.width * self.height

    @classmethod
    def from_value(cls, value: Union['Bounds', Mapping, Tuple, None]) -> 'Bounds':
        """Accept a Bounds, a {'width', 'height'} mapping, a (w, h) pair or None."""
        if value is None:
            return cls()
        if isinstance(value, Bounds):
            return value
        if isinstance(value, Mapping):
            return cls(
                width=float(value.get('width', value.get('w', 800.0))),
                height=float(value.get('height', value.get('h', 600.0))),
            )
        width, height = value
        return cls(width=float(width), height=float(height))


class LayoutResult(Mapping):
    """
    Read-only mapping of node id to Position produced by one layout call.

    ``auxiliary`` carries derived grouping metadata some algorithms emit,
    e.g. swimlane label -> y for the timeline or node id -> layer index for
    the layered layout.
    """

    def __init__(
        self,
        positions: Dict[str, Position],
        auxiliary: Optional[Dict[str, Any]] = None,
        name: str = "",
    ):
        self._positions = positions
        self.auxiliary: Dict[str, Any] = auxiliary or {}
        self.name = name

    def __getitem__(self, node_id: str) -> Position:
        return self._positions[node_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._positions)

    def __len__(self) -> int:
        return len(self._positions)

    @property
    def positions(self) -> Dict[str, Position]:
        return dict(self._positions)

    def as_tuples(self) -> Dict[str, Tuple[float, float]]:
        return {nid: (p.x, p.y) for nid, p in self._positions.items()}

    def __repr__(self) -> str:
        return f"LayoutResult(name={self.name!r}, nodes={len(self._positions)})"


NodeLike = Union[Node, Dict[str, Any]]
EdgeLike = Union[Edge, Dict[str, Any]]


def coerce_nodes(nodes: Optional[Iterable[NodeLike]]) -> List[Node]:
    """Normalise an iterable of Node or dict into a list of Node."""
    result = []
    for node in nodes or []:
        result.append(node if isinstance(node, Node) else Node.from_dict(node))
    return result


def coerce_edges(edges: Optional[Iterable[EdgeLike]]) -> List[Edge]:
    """Normalise an iterable of Edge or dict into a list of Edge."""
    result = []
    for edge in edges or []:
        result.append(edge if isinstance(edge, Edge) else Edge.from_dict(edge))
    return result
