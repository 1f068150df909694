from __future__ import annotations

from typing import Any, Dict

from .config import CONFIG_KEYS, TUPLE_KEYS


ALLOWED_OVERRIDE_KEYS = set(CONFIG_KEYS)
POSITIVE_INT_KEYS = {
    "trend_capacity",
    "carbon_target",
    "viewport_width",
    "viewport_height",
}
POSITIVE_FLOAT_KEYS = {
    "update_interval_ms",
    "frame_interval_ms",
    "lattice_stride",
    "camera_orbit_radius",
}
FIXED_LENGTH_KEYS = {
    "lattice_x": 2,
    "lattice_z": 2,
    "camera_default_position": 3,
}


def _validate_type(key: str, value: Any, expected: Any) -> None:
    if isinstance(expected, bool):
        if not isinstance(value, bool):
            raise ValueError(f"Override '{key}' must be bool.")
        return
    if isinstance(expected, int) and not isinstance(expected, bool):
        if not isinstance(value, int) or isinstance(value, bool):
            raise ValueError(f"Override '{key}' must be int.")
        return
    if isinstance(expected, float):
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            raise ValueError(f"Override '{key}' must be float.")
        return
    if isinstance(expected, str):
        if not isinstance(value, str):
            raise ValueError(f"Override '{key}' must be str.")
        return
    if isinstance(expected, (list, tuple)):
        if not isinstance(value, (list, tuple)):
            raise ValueError(f"Override '{key}' must be list.")
        return


def validate_config_dict(config: Dict[str, Any]) -> None:
    for key in POSITIVE_INT_KEYS:
        if key in config:
            value = config[key]
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                raise ValueError(f"{key} must be an int >= 1.")

    for key in POSITIVE_FLOAT_KEYS:
        if key in config:
            value = config[key]
            if not isinstance(value, (int, float)) or isinstance(value, bool) or value <= 0:
                raise ValueError(f"{key} must be > 0.")

    for key, length in FIXED_LENGTH_KEYS.items():
        if key in config and len(config[key]) != length:
            raise ValueError(f"{key} must have {length} values.")

    for key in ("lattice_x", "lattice_z"):
        if key in config:
            low, high = config[key]
            if high < low:
                raise ValueError(f"{key} must be (min, max) with min <= max.")

    if "container_palette" in config and not config["container_palette"]:
        raise ValueError("container_palette must not be empty.")


def apply_overrides(config: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    if not isinstance(config, dict) or not config:
        raise ValueError("Config must be a non-empty dict.")
    if not overrides:
        return dict(config)

    unknown = [key for key in overrides if key not in ALLOWED_OVERRIDE_KEYS]
    if unknown:
        raise ValueError(f"Unknown override keys: {', '.join(sorted(unknown))}")

    merged = dict(config)
    for key, value in overrides.items():
        if key not in merged:
            raise ValueError(f"Override key not in base config: {key}")
        _validate_type(key, value, merged[key])
        if key in TUPLE_KEYS:
            value = tuple(value)
        merged[key] = value

    validate_config_dict(merged)
    return merged
