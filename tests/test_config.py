"""
tests/test_config.py - Tests for SimulationConfig validation
"""

import pytest

from corelife.core import SimulationConfig
from corelife.exceptions import ConfigurationError


class TestSimulationConfig:
    def test_defaults(self):
        config = SimulationConfig()
        assert config.core_size == 100_000
        assert config.mutation_probability == 1
        assert config.swap_probability == 0
        assert config.lifetime == 1000
        assert config.bomb_range == 100
        assert config.swap_range == 100
        assert config.placement_attempts == 10
        assert config.seed is None

    @pytest.mark.parametrize(
        "values",
        [
            {"core_size": 0},
            {"mutation_probability": -1},
            {"mutation_probability": 101},
            {"swap_probability": 150},
            {"bomb_before_bias": 1.5},
            {"lifetime": 0},
            {"mutation_probability": "5"},
            {"unknown_option": 1},
        ],
    )
    def test_invalid_values_are_rejected(self, values):
        """Out-of-range values raise instead of being clamped."""
        with pytest.raises(ConfigurationError):
            SimulationConfig.build(**values)

    def test_frozen(self):
        config = SimulationConfig.build(core_size=10)
        with pytest.raises(Exception):
            config.core_size = 20
