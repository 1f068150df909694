from .camera import CameraDriver, CameraPose, SceneFrame, orbit_position
from .model import (
    NODE_KINDS,
    SceneEnvironment,
    SceneLayout,
    SceneNode,
    build_environment,
    build_scene,
    lattice_cells,
    node_count_bounds,
)

__all__ = [
    "NODE_KINDS",
    "CameraDriver",
    "CameraPose",
    "SceneEnvironment",
    "SceneFrame",
    "SceneLayout",
    "SceneNode",
    "build_environment",
    "build_scene",
    "lattice_cells",
    "node_count_bounds",
    "orbit_position",
]
