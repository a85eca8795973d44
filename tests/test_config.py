import math

import pytest

from threebody.config import ConfigError, SimulationConfig


def test_defaults_match_reference_constants():
    config = SimulationConfig()
    assert config.g == 1.0
    assert config.dt == 0.01
    assert config.min_distance == 0.1
    assert config.max_trail_length == 100


@pytest.mark.parametrize("changes", [
    {"dt": 0.0},
    {"dt": -0.1},
    {"min_distance": 0.0},
    {"max_trail_length": 0},
    {"g": math.nan},
    {"dt": "fast"},
])
def test_rejects_invalid_values(changes):
    with pytest.raises(ConfigError):
        SimulationConfig(**changes)


def test_config_error_is_a_value_error():
    assert issubclass(ConfigError, ValueError)


def test_from_dict_accepts_preset_and_field_names():
    config = SimulationConfig.from_dict({"G": 2, "minDistance": 0.5, "max_trail_length": 7, "fps": 60})
    assert config.g == 2.0
    assert config.min_distance == 0.5
    assert config.max_trail_length == 7
    assert config.dt == 0.01


def test_from_dict_uses_base_for_missing_keys():
    base = SimulationConfig(dt=0.5)
    config = SimulationConfig.from_dict({"G": 3}, base=base)
    assert config.dt == 0.5
    assert config.g == 3.0


def test_with_overrides_validates():
    config = SimulationConfig()
    assert config.with_overrides(dt=0.02).dt == 0.02
    with pytest.raises(ConfigError):
        config.with_overrides(dt=0)


def test_to_dict_round_trips():
    config = SimulationConfig(g=2.0, dt=0.05, min_distance=0.2, max_trail_length=10)
    assert SimulationConfig.from_dict(config.to_dict()) == config


@pytest.mark.parametrize("value", [2.7, "3.5", math.inf, None])
def test_trail_length_must_be_whole(value):
    with pytest.raises(ConfigError):
        SimulationConfig(max_trail_length=value)


def test_whole_float_trail_length_is_accepted():
    assert SimulationConfig(max_trail_length=5.0).max_trail_length == 5
    assert SimulationConfig(max_trail_length="7").max_trail_length == 7
