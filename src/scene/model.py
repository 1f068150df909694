from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from . import layout_params as lp


NODE_KINDS = ("ground", "dock", "crane-base", "crane-pole", "crane-beam", "container")

Vec3 = Tuple[float, float, float]


@dataclass(frozen=True)
class SceneNode:
    """
    Renderer-independent description of one box (or plane) in the yard.

    `position` is the centre of the box and `size` its full width/height/depth.
    """

    kind: str
    position: Vec3
    size: Vec3
    color: str
    cast_shadow: bool
    receive_shadow: bool = False


@dataclass(frozen=True)
class SceneLayout:
    crane_offsets: Tuple[float, ...] = lp.CRANE_OFFSETS
    dock_line_z: float = lp.DOCK_LINE_Z
    container_palette: Tuple[str, ...] = lp.CONTAINER_PALETTE
    lattice_x: Tuple[float, float] = lp.LATTICE_X
    lattice_z: Tuple[float, float] = lp.LATTICE_Z
    lattice_stride: float = lp.LATTICE_STRIDE
    stack_height_range: Tuple[int, int] = lp.STACK_HEIGHT_RANGE


@dataclass(frozen=True)
class Light:
    kind: str
    color: str
    intensity: float
    position: Optional[Vec3] = None
    cast_shadow: bool = False


@dataclass(frozen=True)
class SceneEnvironment:
    background: str
    fog_color: str
    fog_near: float
    fog_far: float
    lights: Tuple[Light, ...] = field(default_factory=tuple)
    grid_size: float = lp.GRID_SIZE
    grid_divisions: int = lp.GRID_DIVISIONS
    grid_colors: Tuple[str, str] = lp.GRID_COLORS


def _validate_layout(layout: SceneLayout) -> None:
    if layout.lattice_stride <= 0:
        raise ValueError("lattice_stride must be > 0.")
    if not layout.container_palette:
        raise ValueError("container_palette must not be empty.")
    low, high = layout.stack_height_range
    if low < 1 or high < low:
        raise ValueError("stack_height_range must satisfy 1 <= min <= max.")
    for name, bounds in (("lattice_x", layout.lattice_x), ("lattice_z", layout.lattice_z)):
        if len(bounds) != 2 or bounds[1] < bounds[0]:
            raise ValueError(f"{name} must be (min, max) with min <= max.")


def lattice_axis(bounds: Tuple[float, float], stride: float) -> np.ndarray:
    start, stop = float(bounds[0]), float(bounds[1])
    values = np.arange(start, stop + stride * 0.5, stride)
    return values[values <= stop + 1e-9]


def lattice_cells(layout: SceneLayout) -> List[Tuple[float, float]]:
    """Stack positions in build order: x outer, z inner."""
    xs = lattice_axis(layout.lattice_x, layout.lattice_stride)
    zs = lattice_axis(layout.lattice_z, layout.lattice_stride)
    return [(float(x), float(z)) for x in xs for z in zs]


def fixed_node_count(layout: SceneLayout) -> int:
    return 2 + lp.CRANE_PARTS * len(layout.crane_offsets)


def node_count_bounds(layout: SceneLayout) -> Tuple[int, int]:
    cells = len(lattice_cells(layout))
    low, high = layout.stack_height_range
    fixed = fixed_node_count(layout)
    return fixed + cells * low, fixed + cells * high


def _ground() -> SceneNode:
    return SceneNode(
        kind="ground",
        position=(0.0, 0.0, 0.0),
        size=lp.GROUND_SIZE,
        color=lp.GROUND_COLOR,
        cast_shadow=False,
        receive_shadow=True,
    )


def _dock(layout: SceneLayout) -> SceneNode:
    return SceneNode(
        kind="dock",
        position=(0.0, lp.DOCK_CENTER_Y, float(layout.dock_line_z)),
        size=lp.DOCK_SIZE,
        color=lp.DOCK_COLOR,
        cast_shadow=True,
        receive_shadow=True,
    )


def _crane(x: float, z: float) -> List[SceneNode]:
    parts = (
        ("crane-base", lp.CRANE_BASE_Y, lp.CRANE_BASE_SIZE, lp.CRANE_BASE_COLOR),
        ("crane-pole", lp.CRANE_POLE_Y, lp.CRANE_POLE_SIZE, lp.CRANE_POLE_COLOR),
        ("crane-beam", lp.CRANE_BEAM_Y, lp.CRANE_BEAM_SIZE, lp.CRANE_BEAM_COLOR),
    )
    return [
        SceneNode(kind=kind, position=(x, y, z), size=size, color=color, cast_shadow=True)
        for kind, y, size, color in parts
    ]


def _container_stacks(layout: SceneLayout, rng: random.Random) -> List[SceneNode]:
    nodes: List[SceneNode] = []
    _, height, _ = lp.CONTAINER_SIZE
    low, high = layout.stack_height_range
    for x, z in lattice_cells(layout):
        stack_height = rng.randint(low, high)
        for level in range(stack_height):
            nodes.append(
                SceneNode(
                    kind="container",
                    position=(x, height / 2 + level * height, z),
                    size=lp.CONTAINER_SIZE,
                    color=rng.choice(layout.container_palette),
                    cast_shadow=True,
                    receive_shadow=True,
                )
            )
    return nodes


def build_scene(layout: Optional[SceneLayout] = None, seed: Optional[int] = None) -> Tuple[SceneNode, ...]:
    """
    Build the yard as a flat, immutable node list.

    Order is fixed: ground, dock, three parts per crane, then the container
    stacks. With the same layout and seed the result is identical; the seed
    only drives stack heights and container colours.
    """
    layout = layout or SceneLayout()
    _validate_layout(layout)
    rng = random.Random(seed)

    nodes: List[SceneNode] = [_ground(), _dock(layout)]
    for offset in layout.crane_offsets:
        nodes.extend(_crane(float(offset), float(layout.dock_line_z)))
    nodes.extend(_container_stacks(layout, rng))
    return tuple(nodes)


def build_environment() -> SceneEnvironment:
    ambient_color, ambient_intensity = lp.AMBIENT_LIGHT
    sun_color, sun_intensity, sun_position = lp.DIRECTIONAL_LIGHT
    return SceneEnvironment(
        background=lp.BACKGROUND_COLOR,
        fog_color=lp.BACKGROUND_COLOR,
        fog_near=lp.FOG_NEAR,
        fog_far=lp.FOG_FAR,
        lights=(
            Light(kind="ambient", color=ambient_color, intensity=ambient_intensity),
            Light(
                kind="directional",
                color=sun_color,
                intensity=sun_intensity,
                position=sun_position,
                cast_shadow=True,
            ),
        ),
    )


def count_by_kind(nodes: Tuple[SceneNode, ...]) -> dict:
    counts = {kind: 0 for kind in NODE_KINDS}
    for node in nodes:
        counts[node.kind] = counts.get(node.kind, 0) + 1
    return counts
