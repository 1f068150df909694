import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from src.dashboard import apply_overrides, config_from_dict, config_to_dict, get_config


def test_apply_overrides_rejects_unknown_key():
    base = config_to_dict(get_config("fast"))
    with pytest.raises(ValueError):
        apply_overrides(base, {"unknown_key": 1})


def test_apply_overrides_enforces_bounds():
    base = config_to_dict(get_config("fast"))
    with pytest.raises(ValueError):
        apply_overrides(base, {"trend_capacity": 0})
    with pytest.raises(ValueError):
        apply_overrides(base, {"update_interval_ms": -5})
    with pytest.raises(ValueError):
        apply_overrides(base, {"lattice_x": [10, -10]})
    with pytest.raises(ValueError):
        apply_overrides(base, {"container_palette": []})


def test_apply_overrides_type_check():
    base = config_to_dict(get_config("fast"))
    with pytest.raises(ValueError):
        apply_overrides(base, {"trend_capacity": "24"})
    with pytest.raises(ValueError):
        apply_overrides(base, {"animation_enabled": 1})
    with pytest.raises(ValueError):
        apply_overrides(base, {"camera_default_position": [1, 2]})


def test_apply_overrides_round_trips_into_config():
    base = config_to_dict(get_config("default"))
    merged = apply_overrides(base, {"update_interval_ms": 1000, "crane_offsets": [-8, 8], "carbon_target": 9000})
    config = config_from_dict(merged)
    assert config.update_interval_ms == 1000
    assert config.crane_offsets == (-8, 8)
    assert config.carbon_target == 9000
    assert base["update_interval_ms"] == 3000.0


def test_unknown_profile():
    with pytest.raises(ValueError):
        get_config("turbo")
