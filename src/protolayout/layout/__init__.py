# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Layout algorithm registry.

"""
Layout algorithms for graph visualization.

Provides deterministic implementations of:
- Timeline layout (time on x, swimlanes on y)
- Tree layout (Reingold-Tilford style slots)
- Sugiyama layout (longest-path layering)
- Hierarchical layout (tree levels filling the canvas)
- Radial layout (hub rings)
- Circular and grid layouts
- Fruchterman-Reingold and Kamada-Kawai spring layouts (NumPy/SciPy)
- Spectral layout (Laplacian eigenvectors)
- Random and preset layouts
- Force layout (the iterative four-phase simulator)

Algorithms are looked up by name:

    from protolayout.layout import compute_layout
    result = compute_layout('tree', nodes, edges, {'direction': 'horizontal'})
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Type, Union

from ..errors import UnknownLayoutError
from ..models import EdgeLike, LayoutResult, NodeLike
from .base import LayoutAlgorithm
from .circular import CircularLayout
from .force import ForceLayout
from .fruchterman import FruchtermanLayout
from .grid import GridLayout
from .hierarchical import HierarchicalLayout
from .kamada_kawai import KamadaKawaiLayout
from .preset import PresetLayout
from .radial import RadialLayout
from .random_layout import RandomLayout
from .spectral import SpectralLayout
from .sugiyama import SugiyamaLayout
from .timeline import TimelineLayout
from .tree import TreeLayout

logger = logging.getLogger(__name__)

LAYOUTS: Dict[str, LayoutAlgorithm] = {}


def register_layout(layout: Union[LayoutAlgorithm, Type[LayoutAlgorithm]]) -> LayoutAlgorithm:
    """Register a layout instance (or class) under its ``name``; later wins."""
    if isinstance(layout, type):
        layout = layout()
    if not layout.name:
        raise ValueError(f"{type(layout).__name__} has no name")
    if layout.name in LAYOUTS:
        logger.debug("Replacing registered layout %r", layout.name)
    LAYOUTS[layout.name] = layout
    return layout


for _cls in (
    TimelineLayout,
    TreeLayout,
    SugiyamaLayout,
    HierarchicalLayout,
    RadialLayout,
    CircularLayout,
    GridLayout,
    FruchtermanLayout,
    KamadaKawaiLayout,
    SpectralLayout,
    RandomLayout,
    PresetLayout,
    ForceLayout,
):
    register_layout(_cls)


def get_layout(name: str) -> LayoutAlgorithm:
    """Get a layout algorithm by name.

    Raises:
        UnknownLayoutError: if no algorithm is registered under ``name``
    """
    try:
        return LAYOUTS[name]
    except KeyError:
        raise UnknownLayoutError(name, available_layouts()) from None


def available_layouts() -> List[str]:
    return sorted(LAYOUTS)


def compute_layout(
    name: str,
    nodes: Iterable[NodeLike],
    edges: Iterable[EdgeLike] = (),
    options: Optional[Dict[str, Any]] = None,
    bounds=None,
) -> LayoutResult:
    """Run the named layout once and return its positions."""
    return get_layout(name).compute(nodes, edges, options, bounds)


__all__ = [
    'LAYOUTS',
    'LayoutAlgorithm',
    'register_layout',
    'get_layout',
    'available_layouts',
    'compute_layout',
    'TimelineLayout',
    'TreeLayout',
    'SugiyamaLayout',
    'HierarchicalLayout',
    'RadialLayout',
    'CircularLayout',
    'GridLayout',
    'FruchtermanLayout',
    'KamadaKawaiLayout',
    'SpectralLayout',
    'RandomLayout',
    'PresetLayout',
    'ForceLayout',
]
