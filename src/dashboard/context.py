"""
Dashboard context: the one object that owns panels, adapters, the trend
buffer, the scene, the update scheduler and the camera driver.

`build_dashboard(...)` wires everything from a `DashboardConfig`,
`start()` primes the panels and arms both drivers, and `teardown()` cancels
both drivers and closes every surface.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, List, Optional, Tuple

import simpy
import simpy.rt

from src.scene.camera import CameraDriver, wall_clock_ms
from src.scene.model import SceneEnvironment, SceneNode, build_environment, build_scene
from src.telemetry import generators as gen
from src.telemetry.buffer import TimeSeriesBuffer
from src.telemetry.feed import SyntheticFeed, TelemetryFeed
from src.telemetry.snapshots import TrendSeries

from .adapters import (
    AlertListAdapter,
    CarbonPanelAdapter,
    CarbonSourceAdapter,
    CarbonTrendAdapter,
    EquipmentChartAdapter,
    EquipmentListAdapter,
    KpiCardsAdapter,
    SceneViewportAdapter,
    ShipTableAdapter,
    TrendChartAdapter,
    ViewAdapter,
)
from .config import DashboardConfig
from .scheduler import TickAdapters, UpdateScheduler
from .surfaces import PanelRegistry, default_panels, mount_all


logger = logging.getLogger(__name__)

# simpy time is in milliseconds; a real-time environment needs seconds per unit.
REALTIME_FACTOR = 0.001


@dataclass
class DashboardContext:
    config: DashboardConfig
    env: simpy.Environment
    registry: PanelRegistry
    feed: TelemetryFeed
    buffer: TimeSeriesBuffer
    trend_labels: Tuple[str, ...]
    scene: Tuple[SceneNode, ...]
    environment: SceneEnvironment
    adapters: Dict[str, ViewAdapter]
    scheduler: UpdateScheduler
    camera: CameraDriver
    rng: random.Random
    clock: Callable[[], datetime]
    started: bool = False
    torn_down: bool = False

    def prime(self) -> Dict[str, bool]:
        """Initial render of every panel, including the static ones the scheduler never touches."""
        now = self.clock()
        results = {
            "kpis": self.adapters["kpis"].render(self.feed.kpis(now)),
            "ships": self.adapters["ships"].render(self.feed.ships(now)),
            "throughput": self.adapters["trend"].render(
                TrendSeries(labels=self.trend_labels, values=self.buffer.values())
            ),
            "carbon": self.adapters["carbon"].render(self.feed.carbon(now)),
            "alerts": self.adapters["alerts"].render(self.feed.alerts(now)),
            "equipment": self.adapters["equipment"].render(gen.equipment_fleet()),
            "equipment_units": self.adapters["equipment_units"].render(gen.equipment_units()),
            "carbon_sources": self.adapters["carbon_sources"].render(gen.carbon_source_mix()),
            "carbon_history": self.adapters["carbon_history"].render(
                gen.generate_carbon_history(self.rng, now)
            ),
        }
        missing = sorted(name for name, ok in results.items() if not ok)
        if missing:
            logger.info("Panels not mounted: %s", ", ".join(missing))
        return results

    def start(self) -> None:
        if self.torn_down:
            raise RuntimeError("Dashboard context has been torn down.")
        self.prime()
        self.camera.resize(self.config.viewport_width, self.config.viewport_height)
        self.scheduler.start()
        self.camera.start()
        self.started = True
        logger.info(
            "Dashboard '%s' started: %s scene nodes, tick every %sms",
            self.config.name,
            len(self.scene),
            self.config.update_interval_ms,
        )

    def run_ticks(self, ticks: int) -> None:
        if ticks < 0:
            raise ValueError("ticks must be >= 0.")
        if not self.started:
            self.start()
        # Stop just after the last tick so both drivers have settled for that instant.
        self.env.run(until=self.env.now + ticks * self.config.update_interval_ms + 1)

    def teardown(self) -> None:
        if self.torn_down:
            return
        self.scheduler.stop()
        self.camera.dispose()
        self.registry.close()
        self.torn_down = True
        logger.info("Dashboard '%s' torn down after %s ticks", self.config.name, self.scheduler.tick_count)


def build_dashboard(
    config: DashboardConfig,
    seed: int,
    env: Optional[simpy.Environment] = None,
    realtime: bool = False,
    feed: Optional[TelemetryFeed] = None,
    panels: Optional[Dict[str, object]] = None,
    skip_panels: Optional[List[str]] = None,
    clock: Optional[Callable[[], datetime]] = None,
    camera_clock: Optional[Callable[[], float]] = None,
) -> DashboardContext:
    if env is None:
        env = simpy.rt.RealtimeEnvironment(factor=REALTIME_FACTOR, strict=False) if realtime else simpy.Environment()

    rng = random.Random(seed)
    feed = feed or SyntheticFeed(rng=rng, carbon_target=config.carbon_target)

    initial = gen.generate_throughput_history(rng, config.trend_capacity) if config.prefill_trend else ()
    buffer = TimeSeriesBuffer(config.trend_capacity, initial=initial)
    trend_labels = gen.hourly_labels(config.trend_capacity)

    scene = build_scene(config.scene_layout(), seed=config.scene_seed)
    environment = build_environment()

    registry = PanelRegistry()
    if panels is None:
        panels = default_panels((config.viewport_width, config.viewport_height), background=environment.background)
    mount_all(registry, panels, skip=skip_panels)

    adapters: Dict[str, ViewAdapter] = {
        "kpis": KpiCardsAdapter(registry),
        "ships": ShipTableAdapter(registry),
        "trend": TrendChartAdapter(registry),
        "carbon": CarbonPanelAdapter(registry),
        "alerts": AlertListAdapter(registry),
        "viewport": SceneViewportAdapter(registry),
        "equipment": EquipmentChartAdapter(registry),
        "equipment_units": EquipmentListAdapter(registry),
        "carbon_sources": CarbonSourceAdapter(registry),
        "carbon_history": CarbonTrendAdapter(registry),
    }

    clock = clock or datetime.now
    scheduler = UpdateScheduler(
        env,
        feed,
        TickAdapters(
            kpis=adapters["kpis"],
            ships=adapters["ships"],
            trend=adapters["trend"],
            carbon=adapters["carbon"],
            alerts=adapters["alerts"],
        ),
        buffer,
        interval_ms=config.update_interval_ms,
        trend_labels=trend_labels,
        clock=clock,
    )

    if camera_clock is None:
        camera_clock = wall_clock_ms if realtime else (lambda: env.now)
    camera = CameraDriver(
        env,
        adapters["viewport"],
        scene,
        radius=config.camera_orbit_radius,
        rate=config.camera_orbit_rate,
        height=config.camera_height,
        default_position=config.camera_default_position,
        frame_interval_ms=config.frame_interval_ms,
        clock=camera_clock,
        animation_enabled=config.animation_enabled,
    )

    return DashboardContext(
        config=config,
        env=env,
        registry=registry,
        feed=feed,
        buffer=buffer,
        trend_labels=trend_labels,
        scene=scene,
        environment=environment,
        adapters=adapters,
        scheduler=scheduler,
        camera=camera,
        rng=rng,
        clock=clock,
    )
