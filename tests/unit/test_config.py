# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)

"""Tests for physics parameters and YAML config loading."""

import pytest

from protolayout.config import EngineConfig, PhysicsParams, load_config
from protolayout.errors import ConfigError
from protolayout.models import Bounds


class TestPhysicsParams:
    """Tests for PhysicsParams defaults and parsing."""

    def test_defaults(self):
        params = PhysicsParams()
        assert params.repulsion_strength == 25000
        assert params.damping == 0.85
        assert params.min_separation == 40
        assert params.cell_size == params.repulsion_radius

    def test_from_dict_accepts_camel_case(self):
        params = PhysicsParams.from_dict({
            'repulsionStrength': 1000,
            'hub_gravity': 0.2,
            'nodeChaosFactor': 50,
            'somethingElse': True,
        })
        assert params.repulsion_strength == 1000
        assert params.hub_gravity == 0.2
        assert params.node_chaos_factor == 50

    def test_replace_returns_copy(self):
        params = PhysicsParams()
        changed = params.replace(damping=0.5)
        assert changed.damping == 0.5
        assert params.damping == 0.85

    def test_frozen(self):
        with pytest.raises(Exception):
            PhysicsParams().damping = 0.1

    def test_explicit_cell_size(self):
        assert PhysicsParams(spatial_cell_size=250).cell_size == 250


class TestLoadConfig:
    """Tests for load_config."""

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "layout.yaml"
        path.write_text(
            "physics:\n"
            "  repulsionStrength: 12000\n"
            "  damping: 0.9\n"
            "bounds:\n"
            "  width: 1024\n"
            "  height: 768\n"
            "max_iterations: 120\n"
            "layouts:\n"
            "  tree:\n"
            "    direction: horizontal\n"
        )
        config = load_config(path)
        assert config.physics.repulsion_strength == 12000
        assert config.physics.damping == 0.9
        assert config.bounds == Bounds(1024, 768)
        assert config.max_iterations == 120
        assert config.layout_options('tree') == {'direction': 'horizontal'}
        assert config.layout_options('grid') == {}

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        config = load_config(path)
        assert config.physics == PhysicsParams()
        assert config.bounds == Bounds()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(tmp_path / "nope.yaml")

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("physics: [unclosed\n")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_top_level_must_be_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_layouts_must_be_mapping(self):
        with pytest.raises(ConfigError):
            EngineConfig.from_dict({'layouts': ['tree']})
