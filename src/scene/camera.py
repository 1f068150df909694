"""
Camera / animation driver for the digital-twin viewport.

Runs as its own simpy process, one iteration per display frame, and is
independent of the update scheduler. When animation is on, the camera orbits
the origin on a fixed radius, parameterized by wall-clock time.
"""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass, replace
from typing import Callable, Optional, Tuple

import simpy

from . import layout_params as lp
from .model import SceneNode, Vec3


logger = logging.getLogger(__name__)

ORIGIN: Vec3 = (0.0, 0.0, 0.0)
DEFAULT_FRAME_INTERVAL_MS = 1000.0 / 60.0


@dataclass(frozen=True)
class CameraPose:
    position: Vec3
    target: Vec3 = ORIGIN
    fov_deg: float = lp.CAMERA_FOV_DEG
    aspect: float = 16.0 / 9.0
    near: float = lp.CAMERA_NEAR
    far: float = lp.CAMERA_FAR

    def distance(self) -> float:
        return math.dist(self.position, self.target)


@dataclass(frozen=True)
class SceneFrame:
    """What the viewport adapter receives each frame."""

    nodes: Tuple[SceneNode, ...]
    camera: CameraPose


def wall_clock_ms() -> float:
    return time.time() * 1000.0


def orbit_position(t_ms: float, radius: float, rate: float, height: float) -> Vec3:
    angle = t_ms * rate
    return (math.cos(angle) * radius, height, math.sin(angle) * radius)


class CameraDriver:
    def __init__(
        self,
        env: simpy.Environment,
        viewport,
        scene: Tuple[SceneNode, ...],
        radius: float = lp.CAMERA_ORBIT_RADIUS,
        rate: float = lp.CAMERA_ORBIT_RATE,
        height: Optional[float] = None,
        default_position: Vec3 = lp.CAMERA_DEFAULT_POSITION,
        frame_interval_ms: float = DEFAULT_FRAME_INTERVAL_MS,
        clock: Optional[Callable[[], float]] = None,
        animation_enabled: bool = True,
    ) -> None:
        if frame_interval_ms <= 0:
            raise ValueError("frame_interval_ms must be > 0.")
        if radius <= 0:
            raise ValueError("Orbit radius must be > 0.")
        self.env = env
        self.viewport = viewport
        self.scene = scene
        self.radius = float(radius)
        self.rate = float(rate)
        self.default_position = tuple(float(v) for v in default_position)
        self.height = float(height) if height is not None else self.default_position[1]
        self.frame_interval_ms = float(frame_interval_ms)
        self.clock = clock or wall_clock_ms
        self.animation_enabled = animation_enabled
        self.pose = CameraPose(position=self.default_position)
        self.frames_rendered = 0
        self._process: Optional[simpy.Process] = None
        self._generation = 0

    @property
    def running(self) -> bool:
        return self._process is not None and self._process.is_alive

    def start(self) -> None:
        self._cancel()
        self._generation += 1
        self._process = self.env.process(self._run(self._generation))

    def dispose(self) -> None:
        self._cancel()
        self._process = None

    def _cancel(self) -> None:
        self._generation += 1
        process = self._process
        if process is not None and process.is_alive and process is not self.env.active_process:
            process.interrupt("camera disposed")

    def toggle_animation(self) -> bool:
        self.animation_enabled = not self.animation_enabled
        logger.debug("Camera animation %s", "on" if self.animation_enabled else "off")
        return self.animation_enabled

    def reset(self) -> CameraPose:
        self.pose = replace(self.pose, position=self.default_position, target=ORIGIN)
        return self.pose

    def resize(self, width: int, height: int) -> bool:
        if width <= 0 or height <= 0:
            logger.debug("Ignoring resize to degenerate viewport %sx%s", width, height)
            return False
        self.pose = replace(self.pose, aspect=width / height)
        self.viewport.resize(width, height)
        return True

    def step(self) -> CameraPose:
        if self.animation_enabled:
            position = orbit_position(self.clock(), self.radius, self.rate, self.height)
            self.pose = replace(self.pose, position=position, target=ORIGIN)
        return self.pose

    def frame(self) -> None:
        pose = self.step()
        try:
            self.viewport.render(SceneFrame(nodes=self.scene, camera=pose))
        except Exception:
            logger.exception("Viewport render failed at t=%s", self.env.now)
        self.frames_rendered += 1

    def _run(self, generation: int):
        try:
            while generation == self._generation:
                self.frame()
                yield self.env.timeout(self.frame_interval_ms)
        except simpy.Interrupt:
            return
