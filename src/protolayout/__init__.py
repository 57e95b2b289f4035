# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Positioning engine for relational-data visualization.

"""
Graph positioning engine.

Turns nodes and edges into 2D coordinates: a registry of deterministic
layout algorithms, an iterative four-phase force simulator, and the
graph topology, spatial index and hull geometry helpers they share.
Built on NumPy/SciPy; configuration loads from YAML.
"""

__version__ = "0.1.0"

from . import geometry
from . import layout
from . import physics
from .config import EngineConfig, PhysicsParams, load_config
from .engine import LayoutRequest, LayoutSession, run_layout
from .errors import ConfigError, LayoutError, PositionMapError, UnknownLayoutError
from .layout import available_layouts, compute_layout, get_layout, register_layout
from .models import Bounds, Edge, LayoutResult, Node, Position
from .physics import ForceSimulator, calculate_physics_frame
from .spatial import SpatialIndex
from .topology import (
    AdjacencyView,
    build_adjacency,
    build_directed,
    connected_component,
    connected_components,
    shortest_path,
)

__all__ = [
    'geometry',
    'layout',
    'physics',
    'EngineConfig',
    'PhysicsParams',
    'load_config',
    'LayoutRequest',
    'LayoutSession',
    'run_layout',
    'ConfigError',
    'LayoutError',
    'PositionMapError',
    'UnknownLayoutError',
    'available_layouts',
    'compute_layout',
    'get_layout',
    'register_layout',
    'Bounds',
    'Edge',
    'LayoutResult',
    'Node',
    'Position',
    'ForceSimulator',
    'calculate_physics_frame',
    'SpatialIndex',
    'AdjacencyView',
    'build_adjacency',
    'build_directed',
    'connected_component',
    'connected_components',
    'shortest_path',
]
