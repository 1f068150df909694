# ====================================================================================================
# Dashboard configuration profiles
#
# `DashboardConfig` is the dashboard's single knob panel: tick cadence, carbon target, trend history
# length, yard layout and camera orbit. It is frozen, so a running dashboard never sees its settings
# change underneath it; overrides produce a new dict (see `src/dashboard/overrides.py`) which is turned
# back into a config with `config_from_dict`.
#
# All durations are milliseconds of simpy time.
# ====================================================================================================

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Tuple

from src.scene import layout_params as lp
from src.scene.model import SceneLayout
from src.telemetry.generators import DEFAULT_CARBON_TARGET


@dataclass(frozen=True)
class DashboardConfig:
    # Identity (ends up in metadata.json / run.log).
    name: str
    description: str

    # Update scheduler cadence and trend history.
    update_interval_ms: float
    trend_capacity: int
    prefill_trend: bool

    # Carbon panel.
    carbon_target: int

    # Yard layout for the digital twin.
    crane_offsets: Tuple[float, ...]
    dock_line_z: float
    container_palette: Tuple[str, ...]
    lattice_x: Tuple[float, float]
    lattice_z: Tuple[float, float]
    lattice_stride: float
    scene_seed: int

    # Camera / animation driver.
    camera_orbit_radius: float
    camera_orbit_rate: float
    camera_height: float
    camera_default_position: Tuple[float, float, float]
    frame_interval_ms: float
    animation_enabled: bool

    # Viewport size in pixels.
    viewport_width: int
    viewport_height: int

    def scene_layout(self) -> SceneLayout:
        return SceneLayout(
            crane_offsets=tuple(self.crane_offsets),
            dock_line_z=self.dock_line_z,
            container_palette=tuple(self.container_palette),
            lattice_x=tuple(self.lattice_x),
            lattice_z=tuple(self.lattice_z),
            lattice_stride=self.lattice_stride,
        )


CONFIG_KEYS = tuple(DashboardConfig.__dataclass_fields__.keys())  # pylint: disable=no-member

# Fields stored as tuples; JSON hands them back as lists.
TUPLE_KEYS = {
    "crane_offsets",
    "container_palette",
    "lattice_x",
    "lattice_z",
    "camera_default_position",
}


def config_to_dict(config: DashboardConfig) -> dict:
    return asdict(config)


def config_from_dict(data: dict) -> DashboardConfig:
    values = dict(data)
    for key in TUPLE_KEYS:
        if key in values and isinstance(values[key], list):
            values[key] = tuple(values[key])
    return DashboardConfig(**values)


def _default() -> DashboardConfig:
    return DashboardConfig(
        name="default",
        description="Live port operations dashboard with synthetic telemetry refreshed every 3 seconds.",
        update_interval_ms=3000.0,
        trend_capacity=24,
        prefill_trend=True,
        carbon_target=DEFAULT_CARBON_TARGET,
        crane_offsets=lp.CRANE_OFFSETS,
        dock_line_z=lp.DOCK_LINE_Z,
        container_palette=lp.CONTAINER_PALETTE,
        lattice_x=lp.LATTICE_X,
        lattice_z=lp.LATTICE_Z,
        lattice_stride=lp.LATTICE_STRIDE,
        scene_seed=7,
        camera_orbit_radius=lp.CAMERA_ORBIT_RADIUS,
        camera_orbit_rate=lp.CAMERA_ORBIT_RATE,
        camera_height=lp.CAMERA_DEFAULT_POSITION[1],
        camera_default_position=lp.CAMERA_DEFAULT_POSITION,
        frame_interval_ms=1000.0 / 60.0,
        animation_enabled=True,
        viewport_width=960,
        viewport_height=540,
    )


def get_config(name: str = "default") -> DashboardConfig:
    name = name.lower().strip()
    if name not in {"default", "fast"}:
        raise ValueError(f"Unknown dashboard profile: {name}")
    base = _default()
    if name == "default":
        return base
    # Short cadence for demos and smoke runs; the camera still orbits but at a modest frame rate.
    return replace(
        base,
        name="fast",
        description="Demo profile: 500 ms ticks and a 4 fps camera.",
        update_interval_ms=500.0,
        frame_interval_ms=250.0,
    )
