# -*- coding: utf-8 -*-
"""
Warp Configuration Tests - Defaults, validation and copies.

Dependencies
------------
pytest

Author
------
scanwarp contributors

License
-------
MIT License
Copyright (c) 2026 scanwarp contributors
See LICENSE file for full text.

Created
-------
2026-10-17

Modified
--------
2026-10-17
"""

import sys
from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from scanwarp.exceptions import ValidationError
from scanwarp.warp.config import DEFAULT_CONFIG, WarpConfig, resolve_config


class TestWarpConfig:

    def test_defaults(self):
        config = WarpConfig()
        assert config.km_per_segment == 3000.0
        assert config.cut_distance_km == 2000.0
        assert config.pole_distance_km == 1000.0
        assert config.memory_budget_bytes == 4_000_000_000
        assert config.shrink_factor == 0.9
        assert config.max_overlap_passes == 2

    def test_frozen(self):
        with pytest.raises(FrozenInstanceError):
            DEFAULT_CONFIG.km_per_segment = 1.0

    def test_replace_returns_new(self):
        config = DEFAULT_CONFIG.replace(max_workers=2)
        assert config.max_workers == 2
        assert DEFAULT_CONFIG.max_workers is None

    def test_replace_revalidates(self):
        with pytest.raises(ValidationError):
            DEFAULT_CONFIG.replace(shrink_factor=1.0)

    @pytest.mark.parametrize('field,value', [
        ('km_per_segment', 0.0),
        ('cut_distance_km', -1.0),
        ('pole_distance_km', 0.0),
        ('memory_budget_bytes', 0),
        ('shrink_factor', 0.0),
        ('min_output_dimension', 0),
        ('max_overlap_passes', 0),
        ('max_workers', 0),
        ('lattice_step', 0),
        ('crop_margin_deg', -0.5),
        ('min_tps_points', 2),
        ('tps_smoothing', -1.0),
    ])
    def test_invalid_values(self, field, value):
        with pytest.raises(ValidationError):
            WarpConfig(**{field: value})

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            WarpConfig(lattice_step=0)

    def test_resolve_config(self):
        custom = WarpConfig(lattice_step=1)
        assert resolve_config(None) is DEFAULT_CONFIG
        assert resolve_config(custom) is custom
