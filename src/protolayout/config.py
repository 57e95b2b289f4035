# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
"""
Engine configuration - physics parameters and per-layout defaults.

Usage:
    from protolayout.config import PhysicsParams, load_config

    params = PhysicsParams(repulsion_strength=30000)
    params = PhysicsParams.from_dict({'repulsionStrength': 30000})

    # YAML file with physics:, bounds:, layouts: and max_iterations keys
    config = load_config('layout.yaml')
    config.physics.damping
    config.layout_options('timeline')
"""

import dataclasses
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .errors import ConfigError
from .models import Bounds

logger = logging.getLogger(__name__)


def _snake_case(name: str) -> str:
    return re.sub(r'(?<!^)(?=[A-Z])', '_', name).lower()


@dataclass(frozen=True)
class PhysicsParams:
    """Tunable force-simulation parameters. Never mutated by the engine."""
    repulsion_strength: float = 25000.0    # Coulomb numerator
    attraction_strength: float = 0.1       # scales hub springs
    leaf_spring_strength: float = 0.8      # scales leaf springs
    damping: float = 0.85                  # applied after the temperature cap
    center_gravity: float = 0.0001         # 0 disables the centre pull
    node_chaos_factor: float = 0.0         # 0-100
    repulsion_radius: float = 2000.0
    hub_edge_strength: float = 0.001       # 0 = pay-out, 1 = normal spring
    hub_repulsion_boost: float = 0.5
    hub_gravity: float = 0.05
    node_radius: float = 10.0
    collision_factor: float = 4.0          # min separation = radius * factor
    collision_passes: int = 8
    phase_fraction: float = 0.25
    spatial_cell_size: Optional[float] = None  # defaults to repulsion_radius

    @property
    def min_separation(self) -> float:
        return self.node_radius * self.collision_factor

    @property
    def cell_size(self) -> float:
        if self.spatial_cell_size and self.spatial_cell_size > 0:
            return self.spatial_cell_size
        return self.repulsion_radius

    @classmethod
    def from_dict(cls, d: Optional[Dict[str, Any]]) -> 'PhysicsParams':
        """Build from snake_case or camelCase keys; unknown keys are ignored."""
        known = {f.name for f in dataclasses.fields(cls)}
        values = {}
        for key, value in (d or {}).items():
            name = _snake_case(key)
            if name in known:
                values[name] = value
            else:
                logger.debug("Ignoring unknown physics parameter %r", key)
        return cls(**values)

    def replace(self, **changes: Any) -> 'PhysicsParams':
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)


@dataclass
class EngineConfig:
    """Top-level engine configuration as loaded from YAML."""
    physics: PhysicsParams = field(default_factory=PhysicsParams)
    bounds: Bounds = field(default_factory=Bounds)
    max_iterations: int = 300
    layouts: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    def layout_options(self, name: str) -> Dict[str, Any]:
        return dict(self.layouts.get(name, {}))

    @classmethod
    def from_dict(cls, d: Optional[Dict[str, Any]]) -> 'EngineConfig':
        d = d or {}
        layouts = d.get('layouts') or {}
        if not isinstance(layouts, dict):
            raise ConfigError("'layouts' must be a mapping of layout name to options")
        return cls(
            physics=PhysicsParams.from_dict(d.get('physics')),
            bounds=Bounds.from_value(d.get('bounds')),
            max_iterations=int(d.get('max_iterations', 300)),
            layouts={name: dict(opts or {}) for name, opts in layouts.items()},
        )


def load_config(path: Union[str, Path]) -> EngineConfig:
    """Load an EngineConfig from a YAML file."""
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is not None and not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping at the top of {path}")

    config = EngineConfig.from_dict(data)
    logger.debug("Loaded engine config from %s", path)
    return config
